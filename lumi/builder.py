"""Assembly of complete LUMI instructions.

One builder serves both front ends, so the CLI and the dashboard handler
produce identical payloads and account lists for the same request.
"""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solana.rpc.async_api import AsyncClient

from .amount import check_amount_format, raw_base_units, to_base_units
from .config import ClientConfig, parse_pubkey
from .errors import IncompleteInput, InvalidInput
from .instructions import add_issuer, initialize_config, issue_lumi
from .pda import issuer_pda, mint_authority_pda
from .reason import check_reason
from .token_account import ensure_token_account, recipient_token_account, resolve_decimals

logger = logging.getLogger(__name__)

ELISION_MARKERS = ("...", "…")


@dataclass(frozen=True)
class IssuanceRequest:
    recipient: str
    amount: str
    reason_code: bytes
    note: str = ""
    base_units: bool = False


@dataclass(frozen=True)
class ValidatedRequest:
    recipient: Pubkey
    amount: str
    reason_code: bytes
    note: str
    base_units: bool


def validate_request(request: IssuanceRequest) -> ValidatedRequest:
    """Check a request without touching the network."""
    for label, value in (("recipient", request.recipient), ("amount", request.amount)):
        if isinstance(value, str) and any(marker in value for marker in ELISION_MARKERS):
            raise IncompleteInput(
                f"Paste the full {label}; {value!r} looks shortened for display."
            )
    recipient = parse_pubkey(request.recipient, "recipient")
    if request.base_units:
        raw_base_units(request.amount)
    else:
        check_amount_format(request.amount)
    reason_code = check_reason(request.reason_code)
    if request.note is not None and not isinstance(request.note, str):
        raise InvalidInput(f"note must be text, got {type(request.note).__name__}")
    return ValidatedRequest(
        recipient=recipient,
        amount=request.amount,
        reason_code=reason_code,
        note=request.note or "",
        base_units=request.base_units,
    )


class InstructionBuilder:
    def __init__(self, config: ClientConfig, client: AsyncClient, issuer: Pubkey) -> None:
        self.config = config
        self.client = client
        self.issuer = issuer

    async def decimals(self) -> int:
        if self.config.decimals is not None:
            return self.config.decimals
        return await resolve_decimals(self.client, self.config.mint)

    async def build(
        self, request: IssuanceRequest, create_missing: bool = True
    ) -> list[Instruction]:
        validated = validate_request(request)
        config_address = self.config.require_config_address()
        return await self.build_validated(validated, config_address, create_missing)

    async def build_validated(
        self,
        validated: ValidatedRequest,
        config_address: Pubkey,
        create_missing: bool = True,
    ) -> list[Instruction]:
        if validated.base_units:
            amount = raw_base_units(validated.amount)
        else:
            amount = to_base_units(validated.amount, await self.decimals())
        logger.info(f"Issuing {amount} base units to {validated.recipient}")

        instructions: list[Instruction] = []
        create_ix = await ensure_token_account(
            self.client,
            self.issuer,
            validated.recipient,
            self.config.mint,
            self.config.token_program,
            create_missing=create_missing,
        )
        if create_ix is not None:
            instructions.append(create_ix)
        instructions.append(
            self.issue_instruction(config_address, validated.recipient, amount, validated.reason_code, validated.note)
        )
        return instructions

    def issue_instruction(
        self,
        config_address: Pubkey,
        recipient: Pubkey,
        amount: int,
        reason_code: bytes,
        note: str = "",
    ) -> Instruction:
        program_id = self.config.program_id
        mint_authority, _ = mint_authority_pda(config_address, program_id)
        issuer_record, _ = issuer_pda(config_address, self.issuer, program_id)
        return issue_lumi(
            {"amount": amount, "reason_code": reason_code, "ipfs_cid": note},
            {
                "wallet": self.issuer,
                "config": config_address,
                "mint_authority": mint_authority,
                "issuer": issuer_record,
                "to": recipient,
                "lumi_mint": self.config.mint,
                "to_ata": recipient_token_account(recipient, self.config.mint, self.config.token_program),
            },
            program_id=program_id,
            token_program=self.config.token_program,
        )

    def build_initialize_config(
        self, config_address: Pubkey, daily_cap_per_issuer: int
    ) -> Instruction:
        mint_authority, bump = mint_authority_pda(config_address, self.config.program_id)
        logger.info(f"mint_authority PDA: {mint_authority} bump: {bump}")
        return initialize_config(
            {"daily_cap_per_issuer": daily_cap_per_issuer},
            {
                "admin": self.issuer,
                "mint_authority": mint_authority,
                "lumi_mint": self.config.mint,
                "config": config_address,
            },
            program_id=self.config.program_id,
            token_program=self.config.token_program,
        )

    def build_add_issuer(
        self, config_address: Pubkey, issuer_wallet: typing.Optional[Pubkey] = None
    ) -> Instruction:
        wallet = issuer_wallet or self.issuer
        issuer_record, _ = issuer_pda(config_address, wallet, self.config.program_id)
        logger.info(f"issuer PDA: {issuer_record}")
        return add_issuer(
            {
                "admin": self.issuer,
                "config": config_address,
                "issuer": issuer_record,
                "issuer_wallet": wallet,
            },
            program_id=self.config.program_id,
        )
