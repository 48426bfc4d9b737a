from types import SimpleNamespace

import pytest
from anchorpy import Wallet
from solders.hash import Hash
from solders.keypair import Keypair
from solders.pubkey import Pubkey

from lumi.config import ClientConfig


class FakeClient:
    """In-memory stand-in for ``AsyncClient`` recording every call."""

    def __init__(self, existing=(), decimals=6, owners=None):
        self.existing = set(existing)
        self.decimals = decimals
        self.owners = owners or {}
        self.calls = []

    async def get_account_info(self, pubkey, commitment=None):
        self.calls.append(("get_account_info", pubkey))
        if pubkey not in self.existing:
            return SimpleNamespace(value=None)
        owner = self.owners.get(pubkey, Pubkey.default())
        return SimpleNamespace(value=SimpleNamespace(owner=owner, data=b""))

    async def get_token_supply(self, pubkey, commitment=None):
        self.calls.append(("get_token_supply", pubkey))
        return SimpleNamespace(value=SimpleNamespace(decimals=self.decimals))

    async def get_latest_blockhash(self, commitment=None):
        self.calls.append(("get_latest_blockhash", None))
        return SimpleNamespace(
            value=SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=0)
        )


class FakeProvider:
    def __init__(self, signature=None, error=None):
        self.signature = signature
        self.error = error
        self.sent = []

    async def send(self, tx, opts=None):
        self.sent.append(tx)
        if self.error is not None:
            raise self.error
        return self.signature or tx.signatures[0]


def notification(err=None):
    return [SimpleNamespace(result=SimpleNamespace(value=SimpleNamespace(err=err)))]


@pytest.fixture
def issuer_wallet():
    return Wallet(Keypair())


@pytest.fixture
def config_address():
    return Keypair().pubkey()


@pytest.fixture
def client_config(config_address):
    return ClientConfig(config_address=config_address)


@pytest.fixture
def recipient():
    return Keypair().pubkey()
