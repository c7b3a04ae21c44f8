"""
Contract analyzer service.

WHAT: Send a contract's full text for review and return the analysis
WHY: Backs /ai-contract-analyzer
HOW: One upstream call; the reply is returned verbatim
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from ..core.config import settings
from ..llm.provider import LLMProvider
from ..llm.provider_factory import get_provider
from ..prompts.analysis import render_analysis_prompt
from ..utils.exceptions import ValidationException
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ContractAnalysis:
    analysis: str
    analysis_type: str
    timestamp: str


async def analyze_contract(
    contract_text: Optional[str],
    analysis_type: str = "full",
    *,
    provider: Optional[LLMProvider] = None
) -> ContractAnalysis:
    """Raises ValidationException for blank text before calling out."""
    if not contract_text or not contract_text.strip():
        raise ValidationException(
            "Please enter or paste contract text to analyze.",
            field_errors=[{"field": "contractText", "error": "required"}]
        )

    provider = provider or get_provider(settings.ANALYZER_PROVIDER)
    logger.info(f"Analyzing contract ({len(contract_text)} chars, type={analysis_type})")
    result = await provider.generate(
        render_analysis_prompt(contract_text, analysis_type),
        temperature=settings.ANALYZER_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        model=settings.ANALYZER_MODEL,
    )

    return ContractAnalysis(
        analysis=result.text,
        analysis_type=analysis_type,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
