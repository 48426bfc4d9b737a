from __future__ import annotations
import typing
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.instruction import Instruction, AccountMeta
from ..program_id import PROGRAM_ID
from .common import assemble, sighash


class AddIssuerAccounts(typing.TypedDict):
    admin: Pubkey
    config: Pubkey
    issuer: Pubkey
    issuer_wallet: Pubkey


def add_issuer(
    accounts: AddIssuerAccounts,
    program_id: Pubkey = PROGRAM_ID,
    remaining_accounts: typing.Optional[typing.List[AccountMeta]] = None,
) -> Instruction:
    keys = assemble(
        "add_issuer",
        {**accounts, "system_program": SYS_PROGRAM_ID},
        remaining_accounts,
    )
    identifier = sighash("add_issuer")
    encoded_args = b""
    data = identifier + encoded_args
    return Instruction(program_id, data, keys)
