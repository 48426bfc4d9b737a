"""Program derived addresses used by the LUMI program."""

from __future__ import annotations

import typing

from solders.pubkey import Pubkey

from .errors import DerivationExhausted, InvalidInput
from .program_id import PROGRAM_ID

MAX_SEEDS = 16
MAX_SEED_LEN = 32

MINT_AUTHORITY_SEED = b"mint_authority"
ISSUER_SEED = b"issuer"


def derive(
    seeds: typing.Sequence[bytes], program_id: Pubkey = PROGRAM_ID
) -> typing.Tuple[Pubkey, int]:
    """Find the off-curve address and bump for ``seeds`` under ``program_id``.

    Bumps are tried from 255 downwards, so the result matches
    ``Pubkey.find_program_address``.
    """
    seeds = [bytes(seed) for seed in seeds]
    # the bump byte takes the last seed slot
    if len(seeds) > MAX_SEEDS - 1:
        raise InvalidInput(f"Too many seeds: {len(seeds)} (max {MAX_SEEDS - 1})")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise InvalidInput(f"Seed longer than {MAX_SEED_LEN} bytes: {seed!r}")

    for bump in range(255, -1, -1):
        try:
            return Pubkey.create_program_address([*seeds, bytes([bump])], program_id), bump
        except Exception:
            # solders raises PubkeyError when the candidate lands on the curve
            continue
    raise DerivationExhausted(
        f"No viable bump seed for {len(seeds)} seeds under program {program_id}"
    )


def mint_authority_pda(
    config: Pubkey, program_id: Pubkey = PROGRAM_ID
) -> typing.Tuple[Pubkey, int]:
    return derive([MINT_AUTHORITY_SEED, bytes(config)], program_id)


def issuer_pda(
    config: Pubkey, wallet: Pubkey, program_id: Pubkey = PROGRAM_ID
) -> typing.Tuple[Pubkey, int]:
    return derive([ISSUER_SEED, bytes(config), bytes(wallet)], program_id)
