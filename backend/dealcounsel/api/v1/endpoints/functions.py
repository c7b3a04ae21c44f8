"""
AI function endpoints.

WHAT: Contract generator, negotiation assistant and contract analyzer
WHY: The front-end calls these as plain JSON functions
HOW: Each POST validates, delegates to its service and answers with the
     camelCase response body; OPTIONS answers preflight with an empty 200
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response

from ....models.api_schemas import (
    ContractGenerationRequest,
    ContractGenerationResponse,
    NegotiationAssistantRequest,
    NegotiationAssistantResponse,
    ContractAnalysisRequest,
    ContractAnalysisResponse,
)
from ....services.contract_service import generate_contract
from ....services.assistant_service import ask_assistant
from ....services.analyzer_service import analyze_contract
from ...deps import get_optional_user_id
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _preflight() -> Response:
    return Response(status_code=200)


@router.options("/ai-contract-generator", include_in_schema=False)
async def contract_generator_preflight():
    return _preflight()


@router.post("/ai-contract-generator", response_model=ContractGenerationResponse)
async def contract_generator(request: ContractGenerationRequest):
    """
    Generate a contract draft.

    Raises:
        ValidationException: Missing contract type or party names (400)
        ProviderResponseError: Upstream failure (502)
    """
    generated = await generate_contract(
        contract_type=request.contract_type,
        parties=request.parties,
        terms=request.terms,
        jurisdiction=request.jurisdiction,
        custom_requirements=request.custom_requirements,
    )

    return ContractGenerationResponse(
        contract=generated.contract,
        contract_type=generated.contract_type,
        jurisdiction=generated.jurisdiction,
        timestamp=generated.timestamp,
        disclaimer=generated.disclaimer,
    )


@router.options("/ai-negotiation-assistant", include_in_schema=False)
async def negotiation_assistant_preflight():
    return _preflight()


@router.post("/ai-negotiation-assistant", response_model=NegotiationAssistantResponse)
async def negotiation_assistant(
    request: NegotiationAssistantRequest,
    user_id: Optional[str] = Depends(get_optional_user_id)
):
    """
    Ask the negotiation assistant.

    WHAT: One advisory reply for the user's message
    WHY: Strategy advice grounded in the negotiation's transcript
    HOW: When negotiationId is set, the exchange is appended after the reply
    """
    reply = await ask_assistant(
        request.user_message,
        negotiation_id=request.negotiation_id,
        negotiation_context=request.negotiation_context,
        strategy=request.strategy,
        user_id=user_id,
    )

    return NegotiationAssistantResponse(
        ai_response=reply.ai_response,
        strategy=reply.strategy,
        timestamp=reply.timestamp,
    )


@router.options("/ai-contract-analyzer", include_in_schema=False)
async def contract_analyzer_preflight():
    return _preflight()


@router.post("/ai-contract-analyzer", response_model=ContractAnalysisResponse)
async def contract_analyzer(request: ContractAnalysisRequest):
    """Analyze pasted contract text."""
    result = await analyze_contract(request.contract_text, request.analysis_type)

    return ContractAnalysisResponse(
        analysis=result.analysis,
        analysis_type=result.analysis_type,
        timestamp=result.timestamp,
    )
