"""Selectors and account templates shared by every LUMI instruction.

The account order of each template is part of the program's binary
contract. Instruction builders never write their own key lists; they go
through :func:`assemble` so every caller produces the same order.
"""

from __future__ import annotations

import hashlib
import typing

from solders.instruction import AccountMeta
from solders.pubkey import Pubkey

from ..errors import InvalidInput


class AccountRole(typing.NamedTuple):
    name: str
    is_signer: bool
    is_writable: bool


def sighash(name: str) -> bytes:
    return hashlib.sha256(f"global:{name}".encode()).digest()[:8]


def account_discriminator(name: str) -> bytes:
    return hashlib.sha256(f"account:{name}".encode()).digest()[:8]


_ISSUE_ROLES = (
    AccountRole("wallet", True, True),
    AccountRole("config", False, True),
    AccountRole("mint_authority", False, False),
    AccountRole("issuer", False, True),
    AccountRole("to", False, False),
    AccountRole("lumi_mint", False, True),
    AccountRole("to_ata", False, True),
    AccountRole("token_program", False, False),
    AccountRole("system_program", False, False),
    AccountRole("associated_token_program", False, False),
)

ACCOUNT_TEMPLATES: dict[str, typing.Tuple[AccountRole, ...]] = {
    "initialize_config": (
        AccountRole("admin", True, True),
        AccountRole("mint_authority", False, False),
        AccountRole("lumi_mint", False, True),
        AccountRole("config", True, True),
        AccountRole("system_program", False, False),
        AccountRole("token_program", False, False),
    ),
    "add_issuer": (
        AccountRole("admin", True, True),
        AccountRole("config", False, True),
        AccountRole("issuer", False, True),
        AccountRole("issuer_wallet", False, False),
        AccountRole("system_program", False, False),
    ),
    "issue_lumi": _ISSUE_ROLES,
    "issue_lumi_legacy": _ISSUE_ROLES,
}

INSTRUCTION_NAMES: typing.Tuple[str, ...] = tuple(ACCOUNT_TEMPLATES)


def assemble(
    instruction_name: str,
    accounts: typing.Mapping[str, Pubkey],
    remaining_accounts: typing.Optional[typing.List[AccountMeta]] = None,
) -> list[AccountMeta]:
    try:
        template = ACCOUNT_TEMPLATES[instruction_name]
    except KeyError:
        raise InvalidInput(f"Unknown instruction: {instruction_name}") from None
    missing = [role.name for role in template if role.name not in accounts]
    if missing:
        raise InvalidInput(
            f"{instruction_name} is missing accounts: {', '.join(missing)}"
        )
    keys: list[AccountMeta] = [
        AccountMeta(
            pubkey=accounts[role.name],
            is_signer=role.is_signer,
            is_writable=role.is_writable,
        )
        for role in template
    ]
    if remaining_accounts is not None:
        keys += remaining_accounts
    return keys
