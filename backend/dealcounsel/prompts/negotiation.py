"""
Prompt templates for the negotiation assistant.

WHAT: System prompt and rendering helpers for the advisory chat
WHY: Strategy, deal context and transcript must reach the model verbatim
HOW: Template string with context injection, returns a ChatMessage list
"""

from typing import Iterable, List, Mapping, Optional, Union

from ..llm.types import ChatMessage


DEFAULT_CONTEXT = "General business negotiation"

# Wording hint per strategy label; the label never changes control flow
STRATEGY_GUIDANCE = {
    "balanced": "Weigh firmness against flexibility and look for trades that leave both sides better off.",
    "aggressive": "Anchor high, concede slowly and press every point of leverage the user holds.",
    "collaborative": "Prioritise the long-term relationship and search for shared interests to expand the deal.",
    "defensive": "Protect the user's downside first: limit exposure, resist concessions and flag risky terms.",
}

NEGOTIATION_SYSTEM_PROMPT = """You are an expert AI negotiation assistant with deep knowledge of business law, contracts, and strategic negotiation tactics. Your role is to help users navigate complex negotiations with professionalism and strategic insight.

Negotiation Strategy: {strategy}
Strategy Guidance: {guidance}
Context: {context}

Previous conversation:
{history}

Provide strategic advice, suggest responses, identify leverage points, and help achieve win-win outcomes. Be professional, ethical, and focused on creating value for all parties."""


def format_deal_value(deal_value: Optional[float]) -> str:
    """Render a currency amount with thousands separators, or TBD."""
    if deal_value is None:
        return "TBD"
    return f"{deal_value:,.2f}".rstrip("0").rstrip(".")


def format_negotiation_context(
    title: Optional[str],
    description: Optional[str] = None,
    counterparty_name: Optional[str] = None,
    deal_value: Optional[float] = None
) -> str:
    """
    Render a structured negotiation summary as one context line.

    Example:
        Negotiation: Supply deal. Description: Q3 volumes. Counterparty: Acme. Deal Value: $50,000
    """
    return (
        f"Negotiation: {title or ''}. "
        f"Description: {description or ''}. "
        f"Counterparty: {counterparty_name or ''}. "
        f"Deal Value: ${format_deal_value(deal_value)}"
    )


def format_transcript(messages: Iterable[Mapping[str, str]]) -> str:
    """Join prior turns as "<sender>: <text>" lines in the order given."""
    return "\n".join(f"{msg['sender_type']}: {msg['message']}" for msg in messages)


def render_negotiation_prompt(
    user_message: str,
    strategy: str,
    context: Union[str, None],
    history: Iterable[Mapping[str, str]]
) -> List[ChatMessage]:
    """
    Render assistant prompt.

    Args:
        user_message: The user's new message (becomes the user turn)
        strategy: Strategy label, embedded verbatim
        context: Rendered negotiation context, or None for the default
        history: Prior turns, oldest first, with sender_type and message keys

    Returns:
        System and user chat messages
    """
    system_prompt = NEGOTIATION_SYSTEM_PROMPT.format(
        strategy=strategy,
        guidance=STRATEGY_GUIDANCE.get(strategy, STRATEGY_GUIDANCE["balanced"]),
        context=context or DEFAULT_CONTEXT,
        history=format_transcript(history),
    )

    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_message},
    ]
