"""
Negotiation store endpoints.

WHAT: Create and read the caller's negotiations and their transcripts
WHY: The negotiation workspace lists, selects and creates negotiations
HOW: Thin wrappers over services.store scoped by X-User-Id
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ....models.api_schemas import NegotiationCreate, NegotiationOut, NegotiationMessageOut
from ....services import store
from ...deps import get_current_user_id

router = APIRouter()


@router.post("/negotiations", response_model=NegotiationOut, status_code=status.HTTP_201_CREATED)
async def create_negotiation(
    request: NegotiationCreate,
    user_id: str = Depends(get_current_user_id)
):
    """Create a negotiation in draft status."""
    return store.create_negotiation(
        user_id=user_id,
        title=request.title,
        description=request.description,
        counterparty_name=request.counterparty_name,
        deal_value=request.deal_value,
    )


@router.get("/negotiations", response_model=List[NegotiationOut])
async def list_negotiations(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id)
):
    """Caller's negotiations, newest first."""
    return store.list_negotiations(user_id, limit)


@router.get("/negotiations/{negotiation_id}", response_model=NegotiationOut)
async def get_negotiation(negotiation_id: str, user_id: str = Depends(get_current_user_id)):
    return store.get_negotiation(negotiation_id, user_id)


@router.get("/negotiations/{negotiation_id}/messages", response_model=List[NegotiationMessageOut])
async def list_messages(negotiation_id: str, user_id: str = Depends(get_current_user_id)):
    """Transcript in ascending created_at order."""
    return store.list_messages(negotiation_id, user_id)
