"""Token balance lookups for an owner."""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass, field

from solders.pubkey import Pubkey
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException
from solana.rpc.types import TokenAccountOpts

from .amount import format_base_units
from .errors import SubmissionFailed

logger = logging.getLogger(__name__)


@dataclass
class Balance:
    owner: Pubkey
    raw: int = 0
    decimals: int = 0
    accounts: typing.List[typing.Tuple[Pubkey, int]] = field(default_factory=list)

    @property
    def display(self) -> str:
        return format_base_units(self.raw, self.decimals)


async def fetch_balance(
    client: AsyncClient, owner: Pubkey, mint: Pubkey, token_program: Pubkey
) -> Balance:
    """Sum every token account ``owner`` holds for ``mint``."""
    try:
        resp = await client.get_token_accounts_by_owner_json_parsed(
            owner,
            TokenAccountOpts(mint=mint, program_id=token_program),
            commitment=Confirmed,
        )
    except (RPCException, SolanaRpcException) as exc:
        raise SubmissionFailed(f"Couldn't fetch token accounts for {owner}", exc) from exc

    balance = Balance(owner=owner)
    for keyed in resp.value:
        token_amount = keyed.account.data.parsed["info"]["tokenAmount"]
        amount = int(token_amount["amount"])
        balance.decimals = int(token_amount["decimals"])
        balance.raw += amount
        balance.accounts.append((keyed.pubkey, amount))
        logger.info(f"Token account {keyed.pubkey}: {amount} (raw)")
    return balance
