from datetime import datetime, timedelta, timezone

import httpx

from payment_factory.integrations import LiveGateway, MockGateway


EVM_ADDRESS = "0x742d35Cc6634C0532925a3b844Bc454e4438f44e"
FIXED_NOW = datetime(2026, 1, 16, 10, 42, 15, tzinfo=timezone.utc)


def test_health_reports_gateway_mode(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["gateway"] == "mock"


def test_classify_endpoint(api_client):
    response = api_client.post(
        "/api/v1/routing/classify",
        json={"account": "MX12345678901234567890", "dest_country": "MX", "currency": "USD"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "route": "CPN",
        "chain": None,
        "reason": "Destination country MX + USD = CPN corridor supported",
    }


def test_classify_endpoint_blockchain(api_client):
    response = api_client.post("/api/v1/routing/classify", json={"account": EVM_ADDRESS, "currency": "USDC"})

    assert response.json()["route"] == "Blockchain"
    assert response.json()["chain"] == "EVM"


def test_pain001_upload_returns_routing_report(api_client, sample_pain001):
    response = api_client.post(
        "/api/v1/routing/pain001",
        content=sample_pain001,
        headers={"Content-Type": "application/xml"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [p["route"] for p in body["payments"]] == ["CPN", "CPN", "Blockchain", "Traditional", "Traditional"]
    assert body["summary"]["routes"] == {"Blockchain": 1, "CPN": 2, "Traditional": 2}


def test_pain001_upload_rejects_malformed_xml(api_client):
    response = api_client.post("/api/v1/routing/pain001", content=b"<Document>", headers={"Content-Type": "application/xml"})

    assert response.status_code == 422
    assert response.json()["detail"]["element"] == "document"


def test_wallet_balances(api_client):
    response = api_client.get("/api/v1/wallets/wallet-corp-001/balances")

    assert response.status_code == 200
    body = response.json()
    assert body["wallet_id"] == "wallet-corp-001"
    assert len(body["chains"]) == 5


def test_fee_estimate_unknown_chain_is_bad_request(api_client):
    assert api_client.post("/api/v1/wallets/fee-estimate", json={"blockchain": "sol"}).status_code == 200

    response = api_client.post("/api/v1/wallets/fee-estimate", json={"blockchain": "DOGE"})

    assert response.status_code == 400


def test_transfer_validates_evm_destination(api_client):
    bad = api_client.post("/api/v1/transfers", json={"destination_address": "0x1234", "amount": "10"})
    assert bad.status_code == 422
    assert bad.json()["detail"]["message"] == "Invalid destination address"

    good = api_client.post("/api/v1/transfers", json={"destination_address": EVM_ADDRESS, "amount": "10"})
    assert good.status_code == 200
    assert good.json()["status"] == "pending"
    assert good.json()["wallet_id"] == "wallet-corp-001"


def test_quotes_for_corridor(api_client):
    response = api_client.post(
        "/api/v1/cpn/quotes",
        json={"sender_country": "us", "destination_country": "mx", "source_amount": "25000"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["corridor"] == "US-MX"
    assert body["quotes"][0]["bfi_name"] == "Bitso"
    assert body["quotes"][0]["total_received"] == 445803.75
    assert body["quotes"][0]["expires_at"].startswith("2026-01-16T10:42:45")


def test_quote_request_validation(api_client):
    response = api_client.post(
        "/api/v1/cpn/quotes",
        json={"sender_country": "USA", "destination_country": "MX", "source_amount": "100"},
    )

    assert response.status_code == 422
    assert "sender_country must be a two-letter country code" in response.json()["detail"]["errors"]


def test_corridors_listing(api_client):
    response = api_client.get("/api/v1/cpn/corridors")

    pairs = {p["corridor"]: p["eligible"] for p in response.json()["currency_pairs"]}
    assert pairs["US-MX"] is True
    assert pairs["GB-NG"] is True


def test_payment_auto_encrypts_travel_rule_and_can_be_fetched(api_client):
    response = api_client.post(
        "/api/v1/cpn/payments",
        json={
            "quote_id": "q-bitso-001",
            "source_amount": "25000",
            "beneficiary": {"name": "Proveedor Azteca SA de CV", "country": "MX", "id_number": "GODE561231HDFRRN09"},
        },
    )

    assert response.status_code == 200
    created = response.json()
    assert created["status"] == "pending"

    fetched = api_client.get(f"/api/v1/cpn/payments/{created['id']}").json()
    assert fetched["status"] == "completed"
    assert fetched["quote_id"] == "q-bitso-001"
    assert len(fetched["events"]) == 6


def test_payment_rejects_invalid_beneficiary_id(api_client):
    response = api_client.post(
        "/api/v1/cpn/payments",
        json={"quote_id": "q-1", "source_amount": "100", "beneficiary": {"name": "X", "country": "BR", "id_number": "1"}},
    )

    assert response.status_code == 422


def test_travel_rule_encrypt_uses_configured_originator(api_client):
    response = api_client.post(
        "/api/v1/travel-rule/encrypt",
        json={"beneficiary": {"name": "Comercio Brasil Ltda", "country": "BR", "id_number": "123.456.789-09"}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["jwe"].endswith("...encrypted")
    assert body["preview"]["originator"] == {"name": "***tion", "country": "US"}
    assert body["preview"]["beneficiary"]["name"] == "***Ltda"


def test_api_key_protection(api_client, monkeypatch):
    monkeypatch.setenv("API_KEYS", "k1, k2")

    assert api_client.get("/health").status_code == 200
    assert api_client.post("/api/v1/routing/classify", json={"account": "x"}).status_code == 401

    response = api_client.post("/api/v1/routing/classify", json={"account": "x"}, headers={"X-API-KEY": "k2"})
    assert response.status_code == 200


def test_circle_errors_surface_as_bad_gateway(api_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"code": 401, "message": "Invalid credentials"})

    api_client.app.state.gateway = LiveGateway(api_key="sk-test", transport=httpx.MockTransport(handler))

    response = api_client.get("/api/v1/wallets/wallet-corp-001/balances")

    assert response.status_code == 502
    assert response.json()["detail"] == {"message": "Invalid credentials", "status": 401, "code": 401}


def test_non_json_gateway_body_surfaces_as_bad_gateway(api_client):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    api_client.app.state.gateway = LiveGateway(api_key="sk-test", transport=httpx.MockTransport(handler))

    balances = api_client.get("/api/v1/wallets/wallet-corp-001/balances")
    fee = api_client.post("/api/v1/wallets/fee-estimate", json={"blockchain": "ETH"})

    assert balances.status_code == 502
    assert balances.json()["detail"]["stage"] == "gateway_response"
    assert fee.status_code == 502


def test_payment_against_expired_quote_is_conflict(api_client):
    now = [FIXED_NOW]
    api_client.app.state.gateway = MockGateway(clock=lambda: now[0])

    quotes = api_client.post(
        "/api/v1/cpn/quotes", json={"destination_country": "MX", "source_amount": "25000"}
    ).json()["quotes"]
    now[0] = FIXED_NOW + timedelta(minutes=5)

    response = api_client.post(
        "/api/v1/cpn/payments", json={"quote_id": quotes[0]["quote_id"], "source_amount": "25000"}
    )

    assert response.status_code == 409
    assert "expired" in response.json()["detail"]
