"""Prompt template for contract analysis."""

from typing import List

from ..llm.types import ChatMessage


ANALYSIS_SYSTEM_PROMPT = """You are an experienced contract attorney reviewing an agreement for a business client.

Produce a {analysis_type} analysis in plain language with these sections:
1. Summary - what the agreement is and who the parties are
2. Key Terms - payment, duration, deliverables and renewal
3. Obligations - what each party must do
4. Risks - one-sided, ambiguous or missing clauses, each with a severity (high/medium/low)
5. Recommendations - concrete edits or questions to raise before signing

Quote the contract wording when pointing at a clause. This is not legal advice; recommend review by a qualified attorney."""


def render_analysis_prompt(contract_text: str, analysis_type: str = "full") -> List[ChatMessage]:
    """The whole contract goes in the user turn; nothing is chunked or trimmed."""
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT.format(analysis_type=analysis_type)},
        {"role": "user", "content": f"Analyze this contract:\n\n{contract_text}"},
    ]
