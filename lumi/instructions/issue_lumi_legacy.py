from __future__ import annotations
import typing
from solders.pubkey import Pubkey
from solders.instruction import Instruction, AccountMeta
from spl.token.constants import TOKEN_PROGRAM_ID
from ..program_id import PROGRAM_ID
from .issue_lumi import IssueLumiArgs, IssueLumiAccounts, issue_lumi


def issue_lumi_legacy(
    args: IssueLumiArgs,
    accounts: IssueLumiAccounts,
    program_id: Pubkey = PROGRAM_ID,
    token_program: Pubkey = TOKEN_PROGRAM_ID,
    remaining_accounts: typing.Optional[typing.List[AccountMeta]] = None,
) -> Instruction:
    """Same arguments and accounts as ``issue_lumi``; mints through legacy SPL Token."""
    return issue_lumi(
        args,
        accounts,
        program_id=program_id,
        token_program=token_program,
        remaining_accounts=remaining_accounts,
        name="issue_lumi_legacy",
    )
