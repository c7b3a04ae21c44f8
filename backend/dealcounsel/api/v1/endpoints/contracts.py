"""
Contract store endpoints.

WHAT: Save and read generated contracts
WHY: Users keep drafts from the generator
HOW: Thin wrappers over services.store scoped by X-User-Id
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ....models.api_schemas import ContractCreate, ContractOut
from ....services import store
from ...deps import get_current_user_id

router = APIRouter()


@router.post("/contracts", response_model=ContractOut, status_code=status.HTTP_201_CREATED)
async def save_contract(request: ContractCreate, user_id: str = Depends(get_current_user_id)):
    """Persist a contract snapshot with status draft."""
    return store.save_contract(
        user_id=user_id,
        title=request.title,
        content=request.content,
        contract_type=request.contract_type,
    )


@router.get("/contracts", response_model=List[ContractOut])
async def list_contracts(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    user_id: str = Depends(get_current_user_id)
):
    return store.list_contracts(user_id, limit)


@router.get("/contracts/{contract_id}", response_model=ContractOut)
async def get_contract(contract_id: str, user_id: str = Depends(get_current_user_id)):
    return store.get_contract(contract_id, user_id)
