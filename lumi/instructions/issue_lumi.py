from __future__ import annotations
import typing
from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from solders.instruction import Instruction, AccountMeta
from spl.token.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID
import borsh_construct as borsh
from ..program_id import PROGRAM_ID
from .common import assemble, sighash


class IssueLumiArgs(typing.TypedDict):
    amount: int
    reason_code: bytes
    ipfs_cid: str


layout = borsh.CStruct(
    "amount" / borsh.U64,
    "reason_code" / borsh.U8[8],
    "ipfs_cid" / borsh.String,
)


class IssueLumiAccounts(typing.TypedDict):
    wallet: Pubkey
    config: Pubkey
    mint_authority: Pubkey
    issuer: Pubkey
    to: Pubkey
    lumi_mint: Pubkey
    to_ata: Pubkey


def encode_issue_args(args: IssueLumiArgs) -> bytes:
    return layout.build(
        {
            "amount": args["amount"],
            "reason_code": list(args["reason_code"]),
            "ipfs_cid": args["ipfs_cid"],
        }
    )


def issue_lumi(
    args: IssueLumiArgs,
    accounts: IssueLumiAccounts,
    program_id: Pubkey = PROGRAM_ID,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
    remaining_accounts: typing.Optional[typing.List[AccountMeta]] = None,
    name: str = "issue_lumi",
) -> Instruction:
    keys = assemble(
        name,
        {
            **accounts,
            "token_program": token_program,
            "system_program": SYS_PROGRAM_ID,
            "associated_token_program": ASSOCIATED_TOKEN_PROGRAM_ID,
        },
        remaining_accounts,
    )
    identifier = sighash(name)
    encoded_args = encode_issue_args(args)
    data = identifier + encoded_args
    return Instruction(program_id, data, keys)
