"""Recipient token accounts and mint metadata lookups."""

from __future__ import annotations

import logging
import typing

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.exceptions import SolanaRpcException
from solana.rpc.core import RPCException
from spl.token.constants import TOKEN_PROGRAM_ID
from spl.token.instructions import (
    create_idempotent_associated_token_account,
    get_associated_token_address,
)

from .errors import PrerequisiteAccountMissing, SubmissionFailed

logger = logging.getLogger(__name__)


def recipient_token_account(
    recipient: Pubkey, mint: Pubkey, token_program: Pubkey = TOKEN_PROGRAM_ID
) -> Pubkey:
    return get_associated_token_address(recipient, mint, token_program_id=token_program)


def create_token_account_instruction(
    payer: Pubkey, recipient: Pubkey, mint: Pubkey, token_program: Pubkey = TOKEN_PROGRAM_ID
) -> Instruction:
    """Idempotent associated token account creation for ``recipient``.

    Succeeds even if another transaction created the account after our
    existence check.
    """
    return create_idempotent_associated_token_account(
        payer=payer, owner=recipient, mint=mint, token_program_id=token_program
    )


async def ensure_token_account(
    client: AsyncClient,
    payer: Pubkey,
    recipient: Pubkey,
    mint: Pubkey,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
    create_missing: bool = True,
) -> typing.Optional[Instruction]:
    """Return a creation instruction if the recipient's token account is absent.

    Nothing is submitted here. With ``create_missing=False`` an absent
    account raises :class:`PrerequisiteAccountMissing` instead.
    """
    ata = recipient_token_account(recipient, mint, token_program)
    try:
        resp = await client.get_account_info(ata, commitment=Confirmed)
    except (RPCException, SolanaRpcException) as exc:
        raise SubmissionFailed(f"Couldn't look up token account {ata}", exc) from exc
    if resp.value is not None:
        logger.info(f"Recipient token account exists: {ata}")
        return None
    if not create_missing:
        raise PrerequisiteAccountMissing(
            f"No token account for recipient {recipient} and mint {mint} "
            f"under program {token_program}. Create one first: "
            f"spl-token create-account {mint} --owner {recipient}",
            address=ata,
        )
    logger.info(f"Recipient token account missing, adding create instruction: {ata}")
    return create_token_account_instruction(payer, recipient, mint, token_program)


async def resolve_decimals(client: AsyncClient, mint: Pubkey) -> int:
    try:
        resp = await client.get_token_supply(mint, commitment=Confirmed)
    except (RPCException, SolanaRpcException) as exc:
        raise SubmissionFailed(f"Unable to read mint decimals for {mint}", exc) from exc
    return resp.value.decimals
