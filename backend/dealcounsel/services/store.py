"""
Store operations for profiles, negotiations, messages and contracts.

WHAT: Create/read/query helpers keyed by the caller's identity
WHY: Every read and write is scoped to its owner; a row owned by someone
     else looks exactly like a missing one
HOW: Short-lived sessions from get_db(), explicit ordering on every list
"""

from typing import List, Optional

from sqlalchemy import select

from ..core.database import get_db
from ..core.models import (
    Contract,
    ContractStatus,
    Negotiation,
    NegotiationMessage,
    NegotiationStatus,
    Profile,
    SenderType,
)
from ..utils.exceptions import (
    ContractNotFoundException,
    NegotiationNotFoundException,
    ValidationException,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)


# ========== Negotiations ==========

def create_negotiation(
    user_id: str,
    title: str,
    description: Optional[str] = None,
    counterparty_name: Optional[str] = None,
    deal_value: Optional[float] = None
) -> Negotiation:
    """
    Insert a negotiation in draft status.

    Raises:
        ValidationException: If the title is blank
    """
    if not title or not title.strip():
        raise ValidationException(
            "Please enter a negotiation title.",
            field_errors=[{"field": "title", "error": "required"}]
        )

    with get_db() as db:
        negotiation = Negotiation(
            user_id=user_id,
            title=title,
            description=description,
            counterparty_name=counterparty_name,
            deal_value=deal_value,
            status=NegotiationStatus.DRAFT.value,
        )
        db.add(negotiation)
        db.flush()
        logger.info(f"Created negotiation {negotiation.id} for user {user_id}")
        return negotiation


def list_negotiations(user_id: str, limit: Optional[int] = None) -> List[Negotiation]:
    """Caller's negotiations, newest first."""
    with get_db() as db:
        stmt = (
            select(Negotiation)
            .where(Negotiation.user_id == user_id)
            .order_by(Negotiation.created_at.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return list(db.scalars(stmt).all())


def get_negotiation(negotiation_id: str, user_id: Optional[str] = None) -> Negotiation:
    """
    Fetch one negotiation.

    Args:
        negotiation_id: Negotiation id
        user_id: When given, the negotiation must belong to this user

    Raises:
        NegotiationNotFoundException: Missing, or owned by another user
    """
    with get_db() as db:
        negotiation = db.get(Negotiation, negotiation_id)
        if negotiation is None or (user_id is not None and negotiation.user_id != user_id):
            raise NegotiationNotFoundException(negotiation_id)
        return negotiation


def list_messages(negotiation_id: str, user_id: Optional[str] = None) -> List[NegotiationMessage]:
    """Messages of one negotiation, oldest first."""
    get_negotiation(negotiation_id, user_id)

    with get_db() as db:
        stmt = (
            select(NegotiationMessage)
            .where(NegotiationMessage.negotiation_id == negotiation_id)
            .order_by(NegotiationMessage.created_at.asc(), NegotiationMessage.id.asc())
        )
        return list(db.scalars(stmt).all())


def append_exchange(negotiation_id: str, user_message: str, ai_response: str) -> List[NegotiationMessage]:
    """
    Append a user turn and the assistant's reply.

    Both rows go in one transaction, user first, so the pair is either
    fully written or not written at all.
    """
    with get_db() as db:
        rows = [
            NegotiationMessage(
                negotiation_id=negotiation_id,
                sender_type=SenderType.USER.value,
                message=user_message,
                message_type="text",
            ),
            NegotiationMessage(
                negotiation_id=negotiation_id,
                sender_type=SenderType.AI.value,
                message=ai_response,
                message_type="text",
            ),
        ]
        for row in rows:
            db.add(row)
            # Flush one at a time so autoincrement ids follow insertion order
            db.flush()

        logger.info(f"Appended user/ai exchange to negotiation {negotiation_id}")
        return rows


# ========== Contracts ==========

def save_contract(
    user_id: str,
    title: str,
    content: str,
    contract_type: Optional[str] = None
) -> Contract:
    """
    Persist a generated contract snapshot.

    Raises:
        ValidationException: If title or content is blank
    """
    if not content or not content.strip() or not title or not title.strip():
        raise ValidationException(
            "Please provide a contract title and generate the contract first."
        )

    with get_db() as db:
        contract = Contract(
            user_id=user_id,
            title=title,
            content=content,
            contract_type=contract_type,
            status=ContractStatus.DRAFT.value,
        )
        db.add(contract)
        db.flush()
        logger.info(f"Saved contract {contract.id} ({contract_type}) for user {user_id}")
        return contract


def list_contracts(user_id: str, limit: Optional[int] = None) -> List[Contract]:
    """Caller's saved contracts, newest first."""
    with get_db() as db:
        stmt = (
            select(Contract)
            .where(Contract.user_id == user_id)
            .order_by(Contract.created_at.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        return list(db.scalars(stmt).all())


def get_contract(contract_id: str, user_id: str) -> Contract:
    """Raises ContractNotFoundException unless the caller owns the contract."""
    with get_db() as db:
        contract = db.get(Contract, contract_id)
        if contract is None or contract.user_id != user_id:
            raise ContractNotFoundException(contract_id)
        return contract


# ========== Profiles ==========

def get_profile(user_id: str) -> Optional[Profile]:
    """Caller's profile, or None when it has not been created yet."""
    with get_db() as db:
        return db.scalars(select(Profile).where(Profile.user_id == user_id)).first()
