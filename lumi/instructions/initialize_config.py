from __future__ import annotations
import typing
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.instruction import Instruction, AccountMeta
from spl.token.constants import TOKEN_PROGRAM_ID
import borsh_construct as borsh
from ..program_id import PROGRAM_ID
from .common import assemble, sighash


class InitializeConfigArgs(typing.TypedDict):
    daily_cap_per_issuer: int


layout = borsh.CStruct("daily_cap_per_issuer" / borsh.U64)


class InitializeConfigAccounts(typing.TypedDict):
    admin: Pubkey
    mint_authority: Pubkey
    lumi_mint: Pubkey
    config: Pubkey


def initialize_config(
    args: InitializeConfigArgs,
    accounts: InitializeConfigAccounts,
    program_id: Pubkey = PROGRAM_ID,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
    remaining_accounts: typing.Optional[typing.List[AccountMeta]] = None,
) -> Instruction:
    keys = assemble(
        "initialize_config",
        {
            **accounts,
            "system_program": SYS_PROGRAM_ID,
            "token_program": token_program,
        },
        remaining_accounts,
    )
    identifier = sighash("initialize_config")
    encoded_args = layout.build(
        {
            "daily_cap_per_issuer": args["daily_cap_per_issuer"],
        }
    )
    data = identifier + encoded_args
    return Instruction(program_id, data, keys)
