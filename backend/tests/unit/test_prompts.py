"""
Unit tests for prompt rendering.

WHAT: Negotiation, contract and analysis prompts
WHY: The model sees exactly what these functions produce
HOW: Render with known inputs and inspect the chat messages
"""

import json

import pytest

from dealcounsel.prompts.negotiation import (
    DEFAULT_CONTEXT,
    STRATEGY_GUIDANCE,
    format_deal_value,
    format_negotiation_context,
    format_transcript,
    render_negotiation_prompt,
)
from dealcounsel.prompts.contract import (
    CONTRACT_TEMPLATES,
    ContractType,
    render_contract_prompt,
    resolve_template,
)
from dealcounsel.prompts.analysis import render_analysis_prompt


@pytest.mark.unit
class TestNegotiationPrompt:

    def test_deal_value_formatting(self):
        assert format_deal_value(None) == "TBD"
        assert format_deal_value(50000) == "50,000"
        assert format_deal_value(1250000.5) == "1,250,000.5"
        assert format_deal_value(0) == "0"

    def test_structured_context_line(self):
        line = format_negotiation_context("Supply deal", "Q3 volumes", "Acme Corp", 50000)
        assert line == (
            "Negotiation: Supply deal. Description: Q3 volumes. "
            "Counterparty: Acme Corp. Deal Value: $50,000"
        )

    def test_context_without_deal_value(self):
        assert format_negotiation_context("Lease", None, None, None).endswith("Deal Value: $TBD")

    def test_transcript_lines_in_order(self):
        transcript = format_transcript([
            {"sender_type": "user", "message": "Open at 40k?"},
            {"sender_type": "ai", "message": "Anchor at 38k."},
        ])
        assert transcript == "user: Open at 40k?\nai: Anchor at 38k."

    def test_prompt_embeds_strategy_context_and_history(self):
        messages = render_negotiation_prompt(
            user_message="What now?",
            strategy="aggressive",
            context="Negotiation: Lease. Description: . Counterparty: . Deal Value: $TBD",
            history=[{"sender_type": "user", "message": "Hello"}],
        )

        assert [m["role"] for m in messages] == ["system", "user"]
        system = messages[0]["content"]
        assert "Negotiation Strategy: aggressive" in system
        assert STRATEGY_GUIDANCE["aggressive"] in system
        assert "Context: Negotiation: Lease." in system
        assert "Previous conversation:\nuser: Hello" in system
        assert messages[1]["content"] == "What now?"

    def test_missing_context_uses_default(self):
        messages = render_negotiation_prompt("Hi", "balanced", None, [])
        assert f"Context: {DEFAULT_CONTEXT}" in messages[0]["content"]

    def test_unknown_strategy_label_still_embedded(self):
        messages = render_negotiation_prompt("Hi", "patient", None, [])
        assert "Negotiation Strategy: patient" in messages[0]["content"]
        assert STRATEGY_GUIDANCE["balanced"] in messages[0]["content"]


@pytest.mark.unit
class TestContractPrompt:

    def test_every_contract_type_has_a_template(self):
        assert set(CONTRACT_TEMPLATES) == set(ContractType)

    def test_unknown_type_falls_back_to_general(self):
        assert resolve_template("lease") is CONTRACT_TEMPLATES[ContractType.GENERAL]

    def test_prompt_contains_parties_and_terms_json(self):
        parties = [{"name": "Acme Corp", "role": "Client", "address": None}]
        terms = {"duration": "12 months", "paymentAmount": "$5,000"}

        messages = render_contract_prompt("service_agreement", parties, terms, "New York")
        user = messages[1]["content"]

        assert user.startswith("Generate a service_agreement contract")
        assert f"Parties: {json.dumps(parties)}" in user
        assert f"Terms: {json.dumps(terms)}" in user
        assert "Jurisdiction: New York" in user
        assert "Contract Form: Service Agreement" in user
        assert "scope of services and deliverables" in user

    def test_additional_requirements_only_when_present(self):
        parties = [{"name": "A"}]
        without = render_contract_prompt("nda", parties, {}, custom_requirements="   ")[1]["content"]
        with_req = render_contract_prompt("nda", parties, {}, custom_requirements="Mutual")[1]["content"]

        assert "Additional Requirements" not in without
        assert "Additional Requirements: Mutual" in with_req

    def test_unknown_type_tag_is_embedded_verbatim(self):
        user = render_contract_prompt("lease", [{"name": "A"}], None)[1]["content"]
        assert user.startswith("Generate a lease contract")
        assert "Contract Form: General Contract" in user


@pytest.mark.unit
def test_analysis_prompt_keeps_full_text():
    text = "Clause 1. " * 5000
    messages = render_analysis_prompt(text, "full")

    assert "full analysis" in messages[0]["content"]
    assert messages[1]["content"] == f"Analyze this contract:\n\n{text}"


@pytest.mark.unit
@pytest.mark.parametrize("title,expected", [
    ("Acme NDA", "Acme NDA.txt"),
    ("Acme/Jane NDA", "Acme_Jane NDA.txt"),
    ('Q3: "Final"?', "Q3_ _Final__.txt"),
    (None, "contract.txt"),
    ("  ", "contract.txt"),
])
def test_download_filename(title, expected):
    from dealcounsel.client.generator import safe_filename

    assert safe_filename(title) == expected
