"""
Integration tests for the AI function endpoints.

WHAT: /functions/v1/ai-contract-generator, ai-negotiation-assistant, ai-contract-analyzer
WHY: These are the JSON shapes the front-end depends on
HOW: TestClient against the app, upstream chat-completions mocked with respx
"""

import json

import pytest
import respx
import httpx
from fastapi.testclient import TestClient

from dealcounsel.main import app
from dealcounsel.prompts.contract import DISCLAIMER
from dealcounsel.services import store
from tests.fixtures.mock_llm import GROQ_CHAT_URL, OPENAI_CHAT_URL, completion_json

USER_ID = "user-1"


@pytest.fixture
def client():
    """Create FastAPI test client."""
    return TestClient(app)


@pytest.mark.integration
class TestContractGeneratorEndpoint:

    @respx.mock
    def test_generates_service_agreement(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL).mock(
            return_value=httpx.Response(200, json=completion_json("SERVICE AGREEMENT\nThis Agreement is made..."))
        )

        response = client.post("/functions/v1/ai-contract-generator", json={
            "contractType": "service_agreement",
            "parties": [
                {"name": "Acme Corp", "role": "Client", "address": "1 Main St"},
                {"name": "Jane Doe", "role": "Contractor"},
            ],
            "terms": {"duration": "6 months", "paymentAmount": "$12,000", "paymentTerms": "Net 30"},
        })

        assert response.status_code == 200
        data = response.json()
        assert data["contract"]
        assert data["disclaimer"] == DISCLAIMER
        assert data["contractType"] == "service_agreement"
        assert data["jurisdiction"] == "United States"
        assert "timestamp" in data

        payload = json.loads(route.calls.last.request.content)
        assert payload["model"] == "gpt-4o-mini"
        assert payload["temperature"] == 0.2
        assert '"name": "Acme Corp"' in payload["messages"][1]["content"]
        assert '"paymentTerms": "Net 30"' in payload["messages"][1]["content"]

    @respx.mock
    def test_parties_and_terms_forwarded_as_sent(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL).mock(
            return_value=httpx.Response(200, json=completion_json("NDA"))
        )
        parties = [{"role": "Discloser", "name": "Acme Corp", "taxId": "12-345"}]
        terms = {"paymentAmount": 5000, "governingLaw": "Delaware", "duration": "1y"}

        response = client.post("/functions/v1/ai-contract-generator", json={
            "contractType": "nda",
            "parties": parties,
            "terms": terms,
        })

        assert response.status_code == 200
        user = json.loads(route.calls.last.request.content)["messages"][1]["content"]
        assert f"Parties: {json.dumps(parties)}" in user
        assert f"Terms: {json.dumps(terms)}" in user
        assert "null" not in user

    @respx.mock(assert_all_called=False)
    def test_missing_party_name_makes_no_upstream_call(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL)

        response = client.post("/functions/v1/ai-contract-generator", json={
            "contractType": "nda",
            "parties": [{"name": "Acme Corp"}, {"name": ""}],
        })

        assert response.status_code == 400
        assert response.json()["error"] == "Please fill in contract type and all party names."
        assert route.call_count == 0

    @respx.mock(assert_all_called=False)
    def test_missing_contract_type(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL)

        response = client.post("/functions/v1/ai-contract-generator", json={"parties": [{"name": "Acme"}]})

        assert response.status_code == 400
        assert response.json()["error"] == "Contract type and parties are required"
        assert route.call_count == 0

    @respx.mock
    def test_upstream_failure_is_generic(self, client, api_keys):
        respx.post(OPENAI_CHAT_URL).mock(return_value=httpx.Response(401, json={"error": "bad key"}))

        response = client.post("/functions/v1/ai-contract-generator", json={
            "contractType": "nda",
            "parties": [{"name": "Acme Corp"}],
        })

        assert response.status_code == 502
        assert response.json()["error"] == "LLM API request failed"

    def test_missing_api_key(self, client):
        response = client.post("/functions/v1/ai-contract-generator", json={
            "contractType": "nda",
            "parties": [{"name": "Acme Corp"}],
        })

        assert response.status_code == 503
        assert response.json()["code"] == "LLM_PROVIDER_DISABLED"


@pytest.mark.integration
class TestNegotiationAssistantEndpoint:

    @respx.mock
    def test_reply_appends_exactly_two_rows(self, client, api_keys):
        route = respx.post(GROQ_CHAT_URL).mock(
            return_value=httpx.Response(200, json=completion_json("Ask for a 3-year term."))
        )
        negotiation = store.create_negotiation(USER_ID, "Supply deal")

        response = client.post(
            "/functions/v1/ai-negotiation-assistant",
            headers={"X-User-Id": USER_ID},
            json={
                "negotiationId": negotiation.id,
                "userMessage": "How do I lock in pricing?",
                "negotiationContext": "Negotiation: Supply deal. Description: . Counterparty: . Deal Value: $TBD",
                "strategy": "collaborative",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["aiResponse"] == "Ask for a 3-year term."
        assert data["strategy"] == "collaborative"

        messages = store.list_messages(negotiation.id)
        assert [(m.sender_type, m.message) for m in messages] == [
            ("user", "How do I lock in pricing?"),
            ("ai", "Ask for a 3-year term."),
        ]

        payload = json.loads(route.calls.last.request.content)
        assert payload["model"] == "llama-3.3-70b-versatile"
        assert payload["temperature"] == 0.7

    @respx.mock
    def test_without_negotiation_id_nothing_is_stored(self, client, api_keys):
        respx.post(GROQ_CHAT_URL).mock(return_value=httpx.Response(200, json=completion_json("Advice")))
        negotiation = store.create_negotiation(USER_ID, "Supply deal")

        response = client.post("/functions/v1/ai-negotiation-assistant", json={"userMessage": "General tips?"})

        assert response.status_code == 200
        assert response.json()["strategy"] == "balanced"
        assert store.list_messages(negotiation.id) == []

    @respx.mock
    def test_upstream_500_leaves_no_partial_pair(self, client, api_keys):
        respx.post(GROQ_CHAT_URL).mock(return_value=httpx.Response(500))
        negotiation = store.create_negotiation(USER_ID, "Supply deal")

        response = client.post("/functions/v1/ai-negotiation-assistant", json={
            "negotiationId": negotiation.id,
            "userMessage": "Hello",
        })

        assert response.status_code == 502
        assert "error" in response.json()
        assert store.list_messages(negotiation.id) == []

    @respx.mock(assert_all_called=False)
    def test_blank_message_rejected(self, client, api_keys):
        route = respx.post(GROQ_CHAT_URL)

        response = client.post("/functions/v1/ai-negotiation-assistant", json={"userMessage": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == "User message is required"
        assert route.call_count == 0

    @respx.mock(assert_all_called=False)
    def test_foreign_negotiation_is_404(self, client, api_keys):
        route = respx.post(GROQ_CHAT_URL)
        negotiation = store.create_negotiation("user-2", "Theirs")

        response = client.post(
            "/functions/v1/ai-negotiation-assistant",
            headers={"X-User-Id": USER_ID},
            json={"negotiationId": negotiation.id, "userMessage": "Hi"},
        )

        assert response.status_code == 404
        assert route.call_count == 0

    def test_unknown_strategy_rejected(self, client):
        response = client.post("/functions/v1/ai-negotiation-assistant", json={
            "userMessage": "Hi",
            "strategy": "reckless",
        })

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    @respx.mock
    def test_structured_context_is_rendered(self, client, api_keys):
        route = respx.post(GROQ_CHAT_URL).mock(return_value=httpx.Response(200, json=completion_json("ok")))

        client.post("/functions/v1/ai-negotiation-assistant", json={
            "userMessage": "Hi",
            "negotiationContext": {"title": "Lease", "counterpartyName": "Landlord LLC", "dealValue": 250000},
        })

        system = json.loads(route.calls.last.request.content)["messages"][0]["content"]
        assert "Negotiation: Lease. Description: . Counterparty: Landlord LLC. Deal Value: $250,000" in system


@pytest.mark.integration
class TestContractAnalyzerEndpoint:

    @respx.mock
    def test_analysis(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL).mock(
            return_value=httpx.Response(200, json=completion_json("1. Summary\nA services contract."))
        )

        response = client.post("/functions/v1/ai-contract-analyzer", json={"contractText": "This Agreement..."})

        assert response.status_code == 200
        data = response.json()
        assert data["analysis"] == "1. Summary\nA services contract."
        assert data["analysisType"] == "full"
        assert json.loads(route.calls.last.request.content)["temperature"] == 0.3

    @respx.mock(assert_all_called=False)
    def test_blank_text_rejected(self, client, api_keys):
        route = respx.post(OPENAI_CHAT_URL)

        response = client.post("/functions/v1/ai-contract-analyzer", json={"contractText": ""})

        assert response.status_code == 400
        assert route.call_count == 0


@pytest.mark.integration
class TestPreflight:

    @pytest.mark.parametrize("path", [
        "/functions/v1/ai-contract-generator",
        "/functions/v1/ai-negotiation-assistant",
        "/functions/v1/ai-contract-analyzer",
    ])
    def test_options_returns_empty_200(self, client, path):
        response = client.options(path)

        assert response.status_code == 200
        assert response.content == b""

    def test_cors_preflight_is_permissive(self, client):
        response = client.options(
            "/functions/v1/ai-contract-generator",
            headers={
                "Origin": "https://app.example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    @respx.mock
    def test_cors_header_on_post(self, client, api_keys):
        respx.post(OPENAI_CHAT_URL).mock(return_value=httpx.Response(200, json=completion_json("ok")))

        response = client.post(
            "/functions/v1/ai-contract-analyzer",
            headers={"Origin": "https://app.example.com"},
            json={"contractText": "Text"},
        )

        assert response.headers["access-control-allow-origin"] == "*"
