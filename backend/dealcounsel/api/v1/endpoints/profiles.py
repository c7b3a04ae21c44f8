"""
Profile and dashboard endpoints.

WHAT: Caller's profile and the dashboard summary
WHY: The dashboard greets the user and shows recent negotiations
HOW: Profile lookup plus the five newest negotiations
"""

from fastapi import APIRouter, Depends

from ....models.api_schemas import ProfileOut, DashboardResponse, NegotiationOut
from ....services import store
from ....utils.exceptions import ProfileNotFoundException
from ...deps import get_current_user_id

router = APIRouter()

RECENT_NEGOTIATIONS_LIMIT = 5


@router.get("/profile", response_model=ProfileOut)
async def get_profile(user_id: str = Depends(get_current_user_id)):
    profile = store.get_profile(user_id)
    if profile is None:
        raise ProfileNotFoundException(user_id)
    return profile


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(user_id: str = Depends(get_current_user_id)):
    """
    Dashboard summary.

    A missing profile is not an error here; the front-end falls back to a
    generic greeting.
    """
    profile = store.get_profile(user_id)
    recent = store.list_negotiations(user_id, limit=RECENT_NEGOTIATIONS_LIMIT)

    return DashboardResponse(
        profile=ProfileOut.model_validate(profile) if profile else None,
        recent_negotiations=[NegotiationOut.model_validate(n) for n in recent],
    )
