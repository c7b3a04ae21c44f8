"""
ORM models for database persistence.

WHAT: SQLAlchemy models for profiles, negotiations, messages and contracts
WHY: Persist the negotiation workspace and generated contracts per user
HOW: Declarative models with FK constraints, ordering indexes and uuid keys
"""

from datetime import datetime
from uuid import uuid4
from sqlalchemy import (
    Column, Integer, String, Float, DateTime, Text, ForeignKey, Index
)
from sqlalchemy.orm import relationship
import enum

from .database import Base


class NegotiationStatus(str, enum.Enum):
    """Known negotiation status values (the column itself is free-form)."""
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class SenderType(str, enum.Enum):
    """Who wrote a negotiation message."""
    USER = "user"
    AI = "ai"


class ContractStatus(str, enum.Enum):
    DRAFT = "draft"


class Profile(Base):
    """
    Profile table - display data for an authenticated user.

    Populated by the sign-up flow outside this service; read-only here.
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(100), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=True)
    company_name = Column(String(200), nullable=True)
    role = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Profile(user_id={self.user_id}, name={self.full_name})>"


class Negotiation(Base):
    """
    Negotiation table - one business deal under discussion.

    WHAT: User-owned deal record with counterparty and value
    WHY: Anchor for the advisory chat thread
    HOW: Status stays where the user put it; nothing here changes it
    """
    __tablename__ = "negotiations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(100), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default=NegotiationStatus.DRAFT.value)
    counterparty_name = Column(String(200), nullable=True)
    deal_value = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    messages = relationship(
        "NegotiationMessage",
        back_populates="negotiation",
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_negotiation_user_created", "user_id", "created_at"),
    )

    def __repr__(self):
        return f"<Negotiation(id={self.id}, title={self.title}, status={self.status})>"


class NegotiationMessage(Base):
    """
    NegotiationMessage table - append-only chat turns.

    WHAT: One user or AI turn tied to a negotiation
    WHY: Transcript is replayed into every assistant prompt
    HOW: Autoincrement id breaks created_at ties so pairs keep insertion order
    """
    __tablename__ = "negotiation_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    message_id = Column(String(36), unique=True, nullable=False, default=lambda: str(uuid4()))
    negotiation_id = Column(
        String(36), ForeignKey("negotiations.id", ondelete="CASCADE"), nullable=False
    )
    sender_type = Column(String(20), nullable=False)  # user or ai
    message = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default="text")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    negotiation = relationship("Negotiation", back_populates="messages")

    __table_args__ = (
        Index("idx_message_negotiation_created", "negotiation_id", "created_at"),
    )

    def __repr__(self):
        return f"<NegotiationMessage(id={self.message_id}, sender={self.sender_type})>"


class Contract(Base):
    """Contract table - a saved snapshot of generated contract text."""
    __tablename__ = "contracts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(String(100), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    contract_type = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default=ContractStatus.DRAFT.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Contract(id={self.id}, title={self.title}, type={self.contract_type})>"
