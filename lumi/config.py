"""Client configuration.

Read once from the environment by the front ends and passed down
explicitly; nothing else in the package looks at ``os.environ``.
"""

from __future__ import annotations

import os
import typing
from dataclasses import dataclass, replace

from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from .errors import InvalidAddress, MissingConfiguration
from .program_id import PROGRAM_ID

DEFAULT_RPC_ENDPOINT = "https://api.devnet.solana.com"
DEFAULT_MINT = "DRfReSvGUqqqpnmC49GqsRBCVZqG8ihhwVsmAf6SQRJk"
DEFAULT_STATE_PATH = os.path.join("target", "config.json")
DEFAULT_COMMITMENT = "confirmed"
EXPLORER_URL = "https://explorer.solana.com"


def parse_pubkey(value: str, name: str = "address") -> Pubkey:
    if not isinstance(value, str) or not value.strip():
        raise InvalidAddress(f"{name} must be a non-empty base58 address")
    try:
        return Pubkey.from_string(value.strip())
    except ValueError as exc:
        raise InvalidAddress(f"{name} is not a valid address: {value}") from exc


def ws_from_http(url: str) -> str:
    if url.startswith("https://"):
        return "wss://" + url[len("https://"):]
    if url.startswith("http://"):
        return "ws://" + url[len("http://"):]
    return url


@dataclass(frozen=True)
class ClientConfig:
    rpc_endpoint: str = DEFAULT_RPC_ENDPOINT
    ws_endpoint: str = ws_from_http(DEFAULT_RPC_ENDPOINT)
    program_id: Pubkey = PROGRAM_ID
    mint: Pubkey = Pubkey.from_string(DEFAULT_MINT)
    config_address: typing.Optional[Pubkey] = None
    token_program: Pubkey = TOKEN_PROGRAM_ID
    decimals: typing.Optional[int] = None
    state_path: str = DEFAULT_STATE_PATH
    commitment: str = DEFAULT_COMMITMENT

    @classmethod
    def from_env(cls, environ: typing.Optional[typing.Mapping[str, str]] = None) -> "ClientConfig":
        env = os.environ if environ is None else environ
        rpc = env.get("SOLANA_RPC_URL") or env.get("ANCHOR_PROVIDER_URL") or DEFAULT_RPC_ENDPOINT
        config_address = None
        if env.get("CONFIG_PUBKEY"):
            config_address = parse_pubkey(env["CONFIG_PUBKEY"], "CONFIG_PUBKEY")
        decimals = None
        if env.get("LUMI_DECIMALS"):
            raw = env["LUMI_DECIMALS"].strip()
            if not raw.isdigit():
                raise MissingConfiguration(f"LUMI_DECIMALS must be a non-negative integer, got {raw!r}")
            decimals = int(raw)
        return cls(
            rpc_endpoint=rpc,
            ws_endpoint=env.get("WSS_URL") or ws_from_http(rpc),
            program_id=parse_pubkey(env["PROGRAM_ID"], "PROGRAM_ID") if env.get("PROGRAM_ID") else PROGRAM_ID,
            mint=parse_pubkey(env.get("LUMI_MINT") or DEFAULT_MINT, "LUMI_MINT"),
            config_address=config_address,
            token_program=(
                parse_pubkey(env["TOKEN_PROGRAM"], "TOKEN_PROGRAM")
                if env.get("TOKEN_PROGRAM")
                else TOKEN_PROGRAM_ID
            ),
            decimals=decimals,
            state_path=env.get("LUMI_STATE_PATH") or DEFAULT_STATE_PATH,
        )

    def with_config_address(self, address: typing.Optional[Pubkey]) -> "ClientConfig":
        return replace(self, config_address=address)

    def require_config_address(self) -> Pubkey:
        if self.config_address is None:
            raise MissingConfiguration(
                "No Config address available. Set CONFIG_PUBKEY or run `lumi --init` first."
            )
        return self.config_address

    @property
    def cluster(self) -> typing.Optional[str]:
        for name in ("devnet", "testnet"):
            if name in self.rpc_endpoint:
                return name
        if "localhost" in self.rpc_endpoint or "127.0.0.1" in self.rpc_endpoint:
            return "custom"
        return None

    def explorer_tx_url(self, signature: object) -> str:
        url = f"{EXPLORER_URL}/tx/{signature}"
        if self.cluster == "custom":
            return f"{url}?cluster=custom&customUrl={self.rpc_endpoint}"
        if self.cluster:
            return f"{url}?cluster={self.cluster}"
        return url
