"""
Pydantic API schemas.

WHAT: Request and response models for FastAPI
WHY: Type-safe validation and serialization matching the front-end payloads
HOW: Pydantic v2 models; function endpoints use camelCase aliases, store
     endpoints mirror the table columns
"""

from typing import Any, Dict, Optional, List, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime

from ..prompts.contract import DEFAULT_JURISDICTION


Strategy = Literal["balanced", "aggressive", "collaborative", "defensive"]


class CamelModel(BaseModel):
    """Accepts both camelCase aliases and field names."""
    model_config = ConfigDict(populate_by_name=True)


# ========== Contract Generator ==========

class ContractGenerationRequest(CamelModel):
    contract_type: Optional[str] = Field(default=None, alias="contractType")
    # Parties and terms reach the prompt exactly as sent; only party names are checked
    parties: Optional[List[Dict[str, Any]]] = None
    terms: Optional[Dict[str, Any]] = None
    jurisdiction: str = Field(default=DEFAULT_JURISDICTION)
    custom_requirements: Optional[str] = Field(default=None, alias="customRequirements")


class ContractGenerationResponse(CamelModel):
    contract: str
    contract_type: str = Field(alias="contractType")
    jurisdiction: str
    timestamp: str
    disclaimer: str


# ========== Negotiation Assistant ==========

class NegotiationContextSummary(CamelModel):
    """Structured deal summary; rendered into one context line."""
    title: Optional[str] = None
    description: Optional[str] = None
    counterparty_name: Optional[str] = Field(default=None, alias="counterpartyName")
    deal_value: Optional[float] = Field(default=None, alias="dealValue")


class NegotiationAssistantRequest(CamelModel):
    negotiation_id: Optional[str] = Field(default=None, alias="negotiationId")
    user_message: Optional[str] = Field(default=None, alias="userMessage")
    negotiation_context: Union[str, NegotiationContextSummary, None] = Field(
        default=None, alias="negotiationContext"
    )
    strategy: Strategy = "balanced"


class NegotiationAssistantResponse(CamelModel):
    ai_response: str = Field(alias="aiResponse")
    strategy: str
    timestamp: str


# ========== Contract Analyzer ==========

class ContractAnalysisRequest(CamelModel):
    contract_text: Optional[str] = Field(default=None, alias="contractText")
    analysis_type: str = Field(default="full", alias="analysisType")


class ContractAnalysisResponse(CamelModel):
    analysis: str
    analysis_type: str = Field(alias="analysisType")
    timestamp: str


# ========== Store: Negotiations ==========

class NegotiationCreate(BaseModel):
    title: str = Field(..., max_length=200, description="Negotiation title")
    description: Optional[str] = None
    counterparty_name: Optional[str] = Field(default=None, max_length=200)
    deal_value: Optional[float] = Field(default=None, ge=0, description="Deal value in currency units")


class NegotiationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    status: str
    counterparty_name: Optional[str] = None
    deal_value: Optional[float] = None
    created_at: datetime


class NegotiationMessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(validation_alias="message_id")
    negotiation_id: str
    sender_type: str
    message: str
    message_type: str
    created_at: datetime


# ========== Store: Contracts ==========

class ContractCreate(BaseModel):
    title: str = Field(..., max_length=200)
    content: str
    contract_type: Optional[str] = Field(default=None, max_length=50)


class ContractOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    title: str
    content: str
    contract_type: Optional[str] = None
    status: str
    created_at: datetime


# ========== Store: Profile / Dashboard ==========

class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    full_name: Optional[str] = None
    company_name: Optional[str] = None
    role: Optional[str] = None


class DashboardResponse(BaseModel):
    profile: Optional[ProfileOut] = None
    recent_negotiations: List[NegotiationOut] = []
