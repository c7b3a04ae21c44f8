"""
Contract generation service.

WHAT: Draft a contract document from type, parties and terms
WHY: Backs /ai-contract-generator
HOW: Validate required fields, render the type-specific prompt, one upstream
     call at a low temperature
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..core.config import settings
from ..llm.provider import LLMProvider
from ..llm.provider_factory import get_provider
from ..prompts.contract import DEFAULT_JURISDICTION, DISCLAIMER, render_contract_prompt
from ..utils.exceptions import ValidationException
from ..utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class GeneratedContract:
    contract: str
    contract_type: str
    jurisdiction: str
    timestamp: str
    disclaimer: str = DISCLAIMER


def _has_name(party: Dict[str, Any]) -> bool:
    name = party.get("name")
    return isinstance(name, str) and bool(name.strip())


def validate_contract_request(contract_type: Optional[str], parties: Optional[List[Dict[str, Any]]]) -> None:
    """
    Check the only fields the generator insists on.

    Raises:
        ValidationException: Missing contract type, no parties, or a nameless party
    """
    if not contract_type or not contract_type.strip() or not parties:
        raise ValidationException("Contract type and parties are required")

    nameless = [i for i, party in enumerate(parties) if not _has_name(party)]
    if nameless:
        raise ValidationException(
            "Please fill in contract type and all party names.",
            field_errors=[{"field": f"parties[{i}].name", "error": "required"} for i in nameless]
        )


async def generate_contract(
    contract_type: Optional[str],
    parties: Optional[List[Dict[str, Any]]],
    terms: Optional[Dict[str, Any]] = None,
    jurisdiction: Optional[str] = None,
    custom_requirements: Optional[str] = None,
    *,
    provider: Optional[LLMProvider] = None
) -> GeneratedContract:
    """Generate the full contract text; raises before any call if input is incomplete."""
    validate_contract_request(contract_type, parties)
    jurisdiction = jurisdiction or DEFAULT_JURISDICTION

    prompt = render_contract_prompt(
        contract_type=contract_type,
        parties=parties,
        terms=terms or {},
        jurisdiction=jurisdiction,
        custom_requirements=custom_requirements,
    )

    provider = provider or get_provider(settings.CONTRACT_PROVIDER)
    logger.info(f"Generating {contract_type} contract ({len(parties)} parties, jurisdiction={jurisdiction})")
    result = await provider.generate(
        prompt,
        temperature=settings.CONTRACT_TEMPERATURE,
        max_tokens=settings.LLM_MAX_TOKENS,
        model=settings.CONTRACT_MODEL,
    )

    return GeneratedContract(
        contract=result.text,
        contract_type=contract_type,
        jurisdiction=jurisdiction,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
