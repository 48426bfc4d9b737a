import asyncio
from types import SimpleNamespace

import pytest
from solana.rpc.core import RPCException
from solders.keypair import Keypair
from solders.signature import Signature

from conftest import FakeClient, FakeProvider, notification
from lumi.errors import ProgramRejected, SubmissionFailed
from lumi.errors.custom import DailyCapExceeded, IssuerInactive
from lumi.gateway import SubmissionGateway, custom_error_code
from lumi.instructions import add_issuer, initialize_config


def _gateway(wallet, provider, notify=None):
    gateway = SubmissionGateway(FakeClient(), wallet, "ws://localhost:8900")
    gateway.provider = provider

    async def listen(signature):
        gateway.listened = signature
        return notify or notification()

    gateway.listen_transaction = listen
    return gateway


def _instruction(wallet):
    return add_issuer(
        {
            "admin": wallet.public_key,
            "config": Keypair().pubkey(),
            "issuer": Keypair().pubkey(),
            "issuer_wallet": wallet.public_key,
        }
    )


def test_submit_signs_sends_once_and_confirms(issuer_wallet):
    provider = FakeProvider()
    gateway = _gateway(issuer_wallet, provider)
    signature = asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    assert len(provider.sent) == 1
    tx = provider.sent[0]
    assert tx.message.account_keys[0] == issuer_wallet.public_key
    assert signature == tx.signatures[0]
    assert gateway.listened == signature


def test_submit_with_extra_signer(issuer_wallet):
    provider = FakeProvider()
    gateway = _gateway(issuer_wallet, provider)
    extra = Keypair()
    init = initialize_config(
        {"daily_cap_per_issuer": 1},
        {
            "admin": issuer_wallet.public_key,
            "mint_authority": Keypair().pubkey(),
            "lumi_mint": Keypair().pubkey(),
            "config": extra.pubkey(),
        },
    )
    asyncio.run(gateway.submit([init], [extra]))
    assert len(provider.sent[0].signatures) == 2


def test_broadcast_failure_keeps_nested_cause(issuer_wallet):
    try:
        try:
            raise ConnectionResetError("connection reset by peer")
        except ConnectionResetError as inner:
            raise RPCException("Node is unhealthy") from inner
    except RPCException as exc:
        error = exc
    gateway = _gateway(issuer_wallet, FakeProvider(error=error))
    with pytest.raises(SubmissionFailed) as excinfo:
        asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    message = str(excinfo.value)
    assert message.startswith("Transaction broadcast failed")
    assert "Node is unhealthy" in message
    assert "connection reset by peer" in message
    assert excinfo.value.stage == "network"
    assert not hasattr(gateway, "listened")


def test_preflight_program_error_is_reported_verbatim(issuer_wallet):
    detail = SimpleNamespace(
        message="Transaction simulation failed: Error processing Instruction 0",
        data=SimpleNamespace(
            err="InstructionError(0, Custom(6001))",
            logs=[
                "Program log: AnchorError occurred. Error Code: DailyCapExceeded. "
                "Error Number: 6001. Error Message: Daily cap exceeded.",
            ],
        ),
    )
    gateway = _gateway(issuer_wallet, FakeProvider(error=RPCException(detail)))
    with pytest.raises(ProgramRejected) as excinfo:
        asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    assert excinfo.value.code == 6001
    assert isinstance(excinfo.value.program_error, DailyCapExceeded)
    assert "Daily cap exceeded" in str(excinfo.value)
    assert excinfo.value.logs
    assert excinfo.value.stage == "program"


def test_confirmed_program_error(issuer_wallet):
    err = SimpleNamespace(index=0, err=SimpleNamespace(code=6000))
    gateway = _gateway(issuer_wallet, FakeProvider(), notify=notification(err))
    with pytest.raises(ProgramRejected) as excinfo:
        asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    assert isinstance(excinfo.value.program_error, IssuerInactive)


def test_confirmed_non_program_error(issuer_wallet):
    gateway = _gateway(issuer_wallet, FakeProvider(), notify=notification("AccountNotFound"))
    with pytest.raises(SubmissionFailed) as excinfo:
        asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    assert "AccountNotFound" in str(excinfo.value)


def test_custom_error_code_parsing():
    assert custom_error_code("custom program error: 0x1771") == 6001
    assert custom_error_code("x", ["Error Number: 6002."]) == 6002
    assert custom_error_code(SimpleNamespace(err=SimpleNamespace(code=3))) == 3
    assert custom_error_code("InsufficientFundsForFee") is None


def test_signature_type_passthrough(issuer_wallet):
    sig = Signature.default()
    gateway = _gateway(issuer_wallet, FakeProvider(signature=sig))
    assert asyncio.run(gateway.submit([_instruction(issuer_wallet)])) == sig


def test_malformed_notification_is_submission_failure(issuer_wallet):
    gateway = _gateway(issuer_wallet, FakeProvider(), notify=[SimpleNamespace(error="boom")])
    with pytest.raises(SubmissionFailed) as excinfo:
        asyncio.run(gateway.submit([_instruction(issuer_wallet)]))
    assert "Unexpected confirmation response" in str(excinfo.value)
