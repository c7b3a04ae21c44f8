"""
Unit tests for the feature services.

WHAT: Assistant, contract generator and analyzer service behavior
WHY: Validation must short-circuit before I/O; persistence only on success
HOW: MockLLMProvider injected directly, real SQLite store underneath
"""

import pytest

from dealcounsel.core.config import settings
from dealcounsel.models.api_schemas import NegotiationContextSummary
from dealcounsel.prompts.contract import DISCLAIMER
from dealcounsel.services import store
from dealcounsel.services.assistant_service import ask_assistant, resolve_context
from dealcounsel.services.contract_service import generate_contract
from dealcounsel.services.analyzer_service import analyze_contract
from dealcounsel.llm.types import ProviderResponseError
from dealcounsel.utils.exceptions import NegotiationNotFoundException, ValidationException
from tests.fixtures.mock_llm import MockLLMProvider

USER_ID = "user-1"


@pytest.mark.unit
class TestAssistantService:

    @pytest.mark.asyncio
    async def test_blank_message_rejected_before_any_call(self):
        provider = MockLLMProvider()

        with pytest.raises(ValidationException, match="User message is required"):
            await ask_assistant("   ", negotiation_id="missing", provider=provider)

        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_reply_without_negotiation_writes_nothing(self):
        provider = MockLLMProvider(["Hold firm on price."])

        reply = await ask_assistant("Should I concede?", strategy="defensive", provider=provider)

        assert reply.ai_response == "Hold firm on price."
        assert reply.strategy == "defensive"
        call = provider.calls[0]
        assert call["temperature"] == settings.NEGOTIATION_TEMPERATURE
        assert call["model"] == settings.NEGOTIATION_MODEL

    @pytest.mark.asyncio
    async def test_exchange_appended_user_then_ai(self):
        negotiation = store.create_negotiation(USER_ID, "Supply deal")
        provider = MockLLMProvider(["Counter at 45k."])

        await ask_assistant("They offered 40k", negotiation_id=negotiation.id, user_id=USER_ID, provider=provider)

        messages = store.list_messages(negotiation.id, USER_ID)
        assert [(m.sender_type, m.message) for m in messages] == [
            ("user", "They offered 40k"),
            ("ai", "Counter at 45k."),
        ]
        assert all(m.message_type == "text" for m in messages)

    @pytest.mark.asyncio
    async def test_history_replayed_into_prompt(self):
        negotiation = store.create_negotiation(USER_ID, "Supply deal")
        store.append_exchange(negotiation.id, "First question", "First answer")
        provider = MockLLMProvider()

        await ask_assistant("Second question", negotiation_id=negotiation.id, provider=provider)

        system = provider.calls[0]["messages"][0]["content"]
        assert "user: First question\nai: First answer" in system
        assert provider.calls[0]["messages"][1]["content"] == "Second question"

    @pytest.mark.asyncio
    async def test_upstream_failure_leaves_no_partial_pair(self):
        negotiation = store.create_negotiation(USER_ID, "Supply deal")
        provider = MockLLMProvider(should_fail=True)

        with pytest.raises(ProviderResponseError):
            await ask_assistant("Hello", negotiation_id=negotiation.id, provider=provider)

        assert store.list_messages(negotiation.id) == []

    @pytest.mark.asyncio
    async def test_foreign_negotiation_is_not_found(self):
        negotiation = store.create_negotiation("someone-else", "Their deal")
        provider = MockLLMProvider()

        with pytest.raises(NegotiationNotFoundException):
            await ask_assistant("Hi", negotiation_id=negotiation.id, user_id=USER_ID, provider=provider)

        assert provider.calls == []

    def test_structured_context_is_rendered(self):
        summary = NegotiationContextSummary(title="Lease", counterpartyName="Landlord LLC", dealValue=120000)
        assert resolve_context(summary) == (
            "Negotiation: Lease. Description: . Counterparty: Landlord LLC. Deal Value: $120,000"
        )
        assert resolve_context("free text") == "free text"
        assert resolve_context(None) is None


@pytest.mark.unit
class TestContractService:

    @pytest.mark.asyncio
    async def test_missing_type_rejected(self):
        provider = MockLLMProvider()

        with pytest.raises(ValidationException, match="Contract type and parties are required"):
            await generate_contract(None, [{"name": "Acme Corp"}], provider=provider)

        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_nameless_party_rejected(self):
        provider = MockLLMProvider()

        with pytest.raises(ValidationException) as exc_info:
            await generate_contract("nda", [{"name": "Acme Corp"}, {"name": " "}], provider=provider)

        assert exc_info.value.details == {"field_errors": [{"field": "parties[1].name", "error": "required"}]}
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_generates_with_disclaimer(self):
        provider = MockLLMProvider(["SERVICE AGREEMENT\n..."])

        generated = await generate_contract(
            "service_agreement",
            [{"name": "Acme Corp", "role": "Client"}, {"name": "Jane Doe", "role": "Contractor"}],
            {"duration": "6 months", "paymentAmount": "$10,000"},
            provider=provider,
        )

        assert generated.contract == "SERVICE AGREEMENT\n..."
        assert generated.disclaimer == DISCLAIMER
        assert generated.jurisdiction == "United States"
        assert provider.calls[0]["temperature"] == settings.CONTRACT_TEMPERATURE

        user = provider.calls[0]["messages"][1]["content"]
        assert '"paymentAmount": "$10,000"' in user
        assert '"name": "Jane Doe"' in user

    @pytest.mark.asyncio
    async def test_non_string_party_name_rejected(self):
        provider = MockLLMProvider()

        with pytest.raises(ValidationException):
            await generate_contract("nda", [{"name": 42}], provider=provider)

        assert provider.calls == []


@pytest.mark.unit
class TestAnalyzerService:

    @pytest.mark.asyncio
    async def test_blank_text_rejected(self):
        provider = MockLLMProvider()

        with pytest.raises(ValidationException, match="Please enter or paste contract text"):
            await analyze_contract("\n\t", provider=provider)

        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_analysis_returned_verbatim(self):
        provider = MockLLMProvider(["## Summary\nOne-sided indemnity."])

        result = await analyze_contract("The Contractor shall indemnify...", provider=provider)

        assert result.analysis == "## Summary\nOne-sided indemnity."
        assert result.analysis_type == "full"
        assert provider.calls[0]["model"] == settings.ANALYZER_MODEL
