from solders.keypair import Keypair

from lumi import lambda_function


def _clear_env(monkeypatch):
    for name in ("CONFIG_PUBKEY", "ISSUER_SECRET", "LUMI_MINT", "PROGRAM_ID", "LUMI_DECIMALS"):
        monkeypatch.delenv(name, raising=False)


def test_missing_config_disables_issuing(monkeypatch):
    _clear_env(monkeypatch)
    response = lambda_function.lambda_handler({"recipient": "x", "amount": "1"}, None)
    assert response["statusCode"] == 200
    assert response["body"]["status"] == "warning"


def test_invalid_environment_is_reported(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CONFIG_PUBKEY", "not-a-key")
    response = lambda_function.lambda_handler({}, None)
    assert response["body"]["status"] == "error"
    assert response["body"]["message"][0].startswith("validation error")


def test_missing_fields(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CONFIG_PUBKEY", str(Keypair().pubkey()))
    response = lambda_function.lambda_handler({"reason": "TOO-LONG-REASON"}, None)
    body = response["body"]
    assert body["status"] == "error"
    assert "Recipient wallet address not found" in body["message"]
    assert "Amount not found" in body["message"]
    assert len(body["message"]) == 3


def test_missing_signing_key(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CONFIG_PUBKEY", str(Keypair().pubkey()))
    event = {"recipient": str(Keypair().pubkey()), "amount": "1"}
    response = lambda_function.lambda_handler(event, None)
    assert response["body"]["status"] == "error"
    assert "signing key" in response["body"]["message"][0]


def test_elided_recipient_is_rejected(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CONFIG_PUBKEY", str(Keypair().pubkey()))
    monkeypatch.setenv("ISSUER_SECRET", str(Keypair()))
    response = lambda_function.lambda_handler({"recipient": "Hvn6...VYQw", "amount": "25"}, None)
    assert response["body"]["status"] == "error"
    assert response["body"]["message"][0].startswith("validation error")


def test_balance_requires_owner():
    response = lambda_function.balance_handler({}, None)
    assert response["body"]["status"] == "error"
    assert response["body"]["message"] == ["Owner wallet address not found"]


def test_balance_rejects_bad_owner(monkeypatch):
    _clear_env(monkeypatch)
    response = lambda_function.balance_handler({"owner": "bogus"}, None)
    assert response["body"]["status"] == "error"


def test_event_values_are_normalized(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CONFIG_PUBKEY", str(Keypair().pubkey()))
    monkeypatch.setenv("ISSUER_SECRET", str(Keypair()))
    captured = {}

    async def fake_issue(config, wallet, request):
        captured["request"] = request
        return "sig"

    monkeypatch.setattr(lambda_function, "issue", fake_issue)
    event = {"recipient": str(Keypair().pubkey()), "amount": " 2.5 ", "reason": "DEMO", "note": 12345}
    response = lambda_function.lambda_handler(event, None)
    assert response["body"]["status"] == "success"
    assert captured["request"].note == "12345"
    assert captured["request"].amount == "2.5"
    assert captured["request"].reason_code == b"DEMO    "
