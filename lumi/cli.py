"""Operator command line for the LUMI program.

Examples::

    lumi --init
    lumi --add-issuer
    lumi --issue <recipient> 12.5 --reason 0000000000000001 --cid bafy...
    lumi --balance <owner>
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import typing

from anchorpy import Wallet
from anchorpy.error import AccountInvalidDiscriminator
from solders.keypair import Keypair
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Confirmed
from solana.rpc.core import RPCException

from .accounts import Config, Issuer
from .amount import U64_MAX
from .balance import fetch_balance
from .builder import InstructionBuilder, IssuanceRequest
from .config import ClientConfig, parse_pubkey
from .errors import InvalidInput, LumiClientError, MissingConfiguration, SubmissionFailed
from .gateway import SubmissionGateway
from .issuance import Issuance
from .pda import issuer_pda, mint_authority_pda
from .reason import DEFAULT_REASON_HEX, reason_from_hex
from .state import load_config_address, save_config_address

logger = logging.getLogger("lumi")

DEFAULT_DAILY_CAP = 1_000_000_000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lumi", description="Administer and issue LUMI rewards.")
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("--init", action="store_true", help="create a new Config account")
    actions.add_argument(
        "--add-issuer",
        nargs="?",
        const="",
        metavar="WALLET",
        help="register WALLET (default: this wallet) as an issuer",
    )
    actions.add_argument("--issue", nargs=2, metavar=("RECIPIENT", "AMOUNT"), help="issue LUMI")
    actions.add_argument("--balance", metavar="OWNER", help="show LUMI balance of OWNER")
    parser.add_argument("--daily-cap", type=int, default=DEFAULT_DAILY_CAP, help="base units per issuer per day")
    parser.add_argument("--reason", default=DEFAULT_REASON_HEX, help="8-byte reason code as 16 hex chars")
    parser.add_argument("--cid", default="", help="IPFS CID or note attached to the issuance")
    parser.add_argument("--base-units", action="store_true", help="AMOUNT is raw u64 base units")
    parser.add_argument(
        "--no-create-ata",
        action="store_true",
        help="fail instead of creating a missing recipient token account",
    )
    return parser


def load_wallet() -> Wallet:
    try:
        return Wallet.local()
    except (OSError, ValueError) as exc:
        raise MissingConfiguration(
            f"Couldn't load wallet keypair ({exc}). Set ANCHOR_WALLET or create one with `solana-keygen new`."
        ) from exc


async def initialize(config: ClientConfig, client: AsyncClient, builder: InstructionBuilder,
                     gateway: SubmissionGateway, daily_cap: int):
    if not 0 <= daily_cap <= U64_MAX:
        raise InvalidInput(f"--daily-cap must fit in an unsigned 64-bit integer, got {daily_cap}")
    mint_info = (await client.get_account_info(config.mint, commitment=Confirmed)).value
    if mint_info is None:
        raise MissingConfiguration(f"LUMI_MINT {config.mint} not found on-chain. Create the mint first.")
    logger.info(f"LUMI_MINT owner: {mint_info.owner}")
    if mint_info.owner != config.token_program:
        raise MissingConfiguration(
            f"Selected token program ({config.token_program}) does not match "
            f"LUMI_MINT owner ({mint_info.owner}). Set TOKEN_PROGRAM accordingly."
        )

    config_kp = Keypair()
    logger.info(f"Creating new Config at: {config_kp.pubkey()}")
    ix = builder.build_initialize_config(config_kp.pubkey(), daily_cap)
    signature = await gateway.submit([ix], [config_kp])
    print(f"initialize_config tx: {signature}")
    save_config_address(config.state_path, config_kp.pubkey())
    return config_kp.pubkey()


async def show(config: ClientConfig, client: AsyncClient, wallet: Wallet) -> None:
    print(f"wallet: {wallet.public_key}")
    print(f"program: {config.program_id}")
    if config.config_address is None:
        print("No config pubkey available. Run with --init first.")
        return
    print(f"config: {config.config_address}")
    try:
        cfg = await Config.fetch(client, config.config_address, program_id=config.program_id)
    except (ValueError, AccountInvalidDiscriminator) as exc:
        raise MissingConfiguration(
            f"{config.config_address} is not a LUMI Config account of program {config.program_id}: {exc}"
        ) from exc
    if cfg is None:
        print("Config account not found on-chain.")
    else:
        print(f"Config: {cfg.to_json()}")
    mint_authority, bump = mint_authority_pda(config.config_address, config.program_id)
    print(f"mint_authority PDA: {mint_authority} (bump {bump})")
    issuer_record, _ = issuer_pda(config.config_address, wallet.public_key, config.program_id)
    print(f"issuer PDA: {issuer_record}")
    try:
        issuer = await Issuer.fetch(client, issuer_record, program_id=config.program_id)
    except (ValueError, AccountInvalidDiscriminator) as exc:
        raise MissingConfiguration(f"Issuer record {issuer_record} could not be decoded: {exc}") from exc
    if issuer is not None:
        print(f"Issuer: {issuer.to_json()}")


async def run(args: argparse.Namespace, config: ClientConfig) -> int:
    saved = load_config_address(config.state_path)
    if saved is not None:
        config = config.with_config_address(saved)

    if args.balance is not None:
        owner = parse_pubkey(args.balance, "owner")
        async with AsyncClient(config.rpc_endpoint) as client:
            balance = await fetch_balance(client, owner, config.mint, config.token_program)
        if not balance.accounts:
            print("No token accounts found for owner with this mint.")
        else:
            print(f"TOTAL: {balance.display} (raw: {balance.raw})")
        return 0

    wallet = load_wallet()
    async with AsyncClient(config.rpc_endpoint) as client:
        builder = InstructionBuilder(config, client, wallet.public_key)
        gateway = SubmissionGateway(client, wallet, config.ws_endpoint, config.commitment)

        if args.init:
            await initialize(config, client, builder, gateway, args.daily_cap)
        elif args.add_issuer is not None:
            config_address = config.require_config_address()
            issuer_wallet = parse_pubkey(args.add_issuer, "issuer wallet") if args.add_issuer else None
            signature = await gateway.submit([builder.build_add_issuer(config_address, issuer_wallet)])
            print(f"add_issuer tx: {signature}")
        elif args.issue is not None:
            recipient, amount = args.issue
            request = IssuanceRequest(
                recipient=recipient,
                amount=amount,
                reason_code=reason_from_hex(args.reason),
                note=args.cid,
                base_units=args.base_units,
            )
            issuance = Issuance(request, builder, gateway, create_missing=not args.no_create_ata)
            signature = await issuance.run()
            print(f"issue_lumi tx: {signature}")
            print(config.explorer_tx_url(signature))
        else:
            await show(config, client, wallet)
    return 0


def main(argv: typing.Optional[typing.Sequence[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    try:
        config = ClientConfig.from_env()
        return asyncio.run(run(args, config))
    except (RPCException, SolanaRpcException) as exc:
        err = SubmissionFailed("RPC request failed", exc)
        logger.error(err.describe())
        print(err.describe(), file=sys.stderr)
        return 1
    except LumiClientError as err:
        logger.error(err.describe())
        print(err.describe(), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
