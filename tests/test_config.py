import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from spl.token.constants import TOKEN_PROGRAM_ID

from lumi.config import DEFAULT_MINT, DEFAULT_RPC_ENDPOINT, ClientConfig
from lumi.errors import InvalidAddress, MissingConfiguration
from lumi.program_id import PROGRAM_ID
from lumi.state import load_config_address, save_config_address


def test_defaults_target_devnet():
    config = ClientConfig.from_env({})
    assert config.rpc_endpoint == DEFAULT_RPC_ENDPOINT
    assert config.ws_endpoint == "wss://api.devnet.solana.com"
    assert config.program_id == PROGRAM_ID
    assert config.mint == Pubkey.from_string(DEFAULT_MINT)
    assert config.token_program == TOKEN_PROGRAM_ID
    assert config.config_address is None
    assert config.decimals is None


def test_env_overrides():
    config_address = Keypair().pubkey()
    mint = Keypair().pubkey()
    config = ClientConfig.from_env(
        {
            "SOLANA_RPC_URL": "http://127.0.0.1:8899",
            "LUMI_MINT": str(mint),
            "CONFIG_PUBKEY": str(config_address),
            "LUMI_DECIMALS": "6",
            "WSS_URL": "ws://127.0.0.1:8900",
        }
    )
    assert config.rpc_endpoint == "http://127.0.0.1:8899"
    assert config.ws_endpoint == "ws://127.0.0.1:8900"
    assert config.mint == mint
    assert config.require_config_address() == config_address
    assert config.decimals == 6


def test_invalid_address_names_the_variable():
    with pytest.raises(InvalidAddress) as excinfo:
        ClientConfig.from_env({"LUMI_MINT": "nope"})
    assert "LUMI_MINT" in str(excinfo.value)


def test_missing_config_address_is_reported():
    with pytest.raises(MissingConfiguration):
        ClientConfig.from_env({}).require_config_address()


def test_explorer_links():
    assert ClientConfig().explorer_tx_url("abc") == "https://explorer.solana.com/tx/abc?cluster=devnet"
    mainnet = ClientConfig(rpc_endpoint="https://api.mainnet-beta.solana.com")
    assert mainnet.explorer_tx_url("abc") == "https://explorer.solana.com/tx/abc"


def test_config_address_round_trip(tmp_path):
    path = str(tmp_path / "target" / "config.json")
    assert load_config_address(path) is None
    address = Keypair().pubkey()
    save_config_address(path, address)
    assert load_config_address(path) == address


def test_corrupt_state_file_is_ignored(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    assert load_config_address(str(path)) is None
