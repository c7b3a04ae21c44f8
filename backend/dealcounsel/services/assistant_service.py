"""
Negotiation assistant service.

WHAT: Turn a user message into strategic advice and log the exchange
WHY: Core of the advisory chat behind /ai-negotiation-assistant
HOW: Validate, replay the stored transcript into the prompt, make exactly one
     upstream call, then append the user/ai pair
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from ..core.config import settings
from ..llm.provider import LLMProvider
from ..llm.provider_factory import get_provider
from ..models.api_schemas import NegotiationContextSummary
from ..prompts.negotiation import format_negotiation_context, render_negotiation_prompt
from . import store
from ..utils.exceptions import ValidationException
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AssistantReply:
    ai_response: str
    strategy: str
    timestamp: str


def resolve_context(context: Union[str, NegotiationContextSummary, None]) -> Optional[str]:
    """Structured summaries become one context line; strings pass through."""
    if isinstance(context, NegotiationContextSummary):
        return format_negotiation_context(
            context.title,
            context.description,
            context.counterparty_name,
            context.deal_value,
        )
    return context or None


async def ask_assistant(
    user_message: Optional[str],
    *,
    negotiation_id: Optional[str] = None,
    negotiation_context: Union[str, NegotiationContextSummary, None] = None,
    strategy: str = "balanced",
    user_id: Optional[str] = None,
    provider: Optional[LLMProvider] = None
) -> AssistantReply:
    """
    Ask the assistant for advice on a negotiation.

    Args:
        user_message: The user's message; required
        negotiation_id: When given, history is replayed and the exchange stored
        negotiation_context: Free-text or structured deal summary
        strategy: Strategy label embedded in the prompt
        user_id: Caller identity; scopes the negotiation lookup when present
        provider: Override the configured provider (tests)

    Raises:
        ValidationException: Blank message (raised before any I/O)
        NegotiationNotFoundException: Unknown or foreign negotiation id
        ProviderResponseError and friends: Upstream failure; nothing is stored
    """
    if not user_message or not user_message.strip():
        raise ValidationException(
            "User message is required",
            field_errors=[{"field": "userMessage", "error": "required"}]
        )

    history = []
    if negotiation_id:
        messages = store.list_messages(negotiation_id, user_id)
        history = [{"sender_type": m.sender_type, "message": m.message} for m in messages]

    prompt = render_negotiation_prompt(
        user_message=user_message,
        strategy=strategy,
        context=resolve_context(negotiation_context),
        history=history,
    )

    provider = provider or get_provider(settings.NEGOTIATION_PROVIDER)
    logger.info(
        f"Negotiation assistant call (negotiation={negotiation_id}, strategy={strategy}, "
        f"history={len(history)} messages)"
    )
    result = await provider.generate(
        prompt,
        temperature=settings.NEGOTIATION_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        model=settings.NEGOTIATION_MODEL,
    )

    if negotiation_id:
        store.append_exchange(negotiation_id, user_message, result.text)

    return AssistantReply(
        ai_response=result.text,
        strategy=strategy,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
