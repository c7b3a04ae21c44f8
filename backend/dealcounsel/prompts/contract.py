"""
Prompt templates for contract generation.

WHAT: Per-contract-type drafting templates and prompt rendering
WHY: Each agreement type needs its own clause checklist
HOW: ContractType enum keys a registry of ContractTemplate entries; unknown
     tags fall back to the general template
"""

import enum
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..llm.types import ChatMessage


DEFAULT_JURISDICTION = "United States"

DISCLAIMER = "This contract is AI-generated and should be reviewed by a qualified attorney before use."


class ContractType(str, enum.Enum):
    NDA = "nda"
    SERVICE_AGREEMENT = "service_agreement"
    PARTNERSHIP = "partnership"
    EMPLOYMENT = "employment"
    GENERAL = "general"


@dataclass(frozen=True)
class ContractTemplate:
    """Drafting guidance for one contract type."""
    display_name: str
    required_clauses: tuple[str, ...]


CONTRACT_TEMPLATES: Dict[ContractType, ContractTemplate] = {
    ContractType.NDA: ContractTemplate(
        display_name="Non-Disclosure Agreement (NDA)",
        required_clauses=(
            "definition of confidential information",
            "exclusions from confidentiality",
            "obligations of the receiving party",
            "term and survival of obligations",
            "return or destruction of materials",
            "remedies including injunctive relief",
        ),
    ),
    ContractType.SERVICE_AGREEMENT: ContractTemplate(
        display_name="Service Agreement",
        required_clauses=(
            "scope of services and deliverables",
            "payment amount, schedule and late fees",
            "term and termination",
            "intellectual property ownership",
            "warranties and limitation of liability",
            "independent contractor status",
        ),
    ),
    ContractType.PARTNERSHIP: ContractTemplate(
        display_name="Partnership Agreement",
        required_clauses=(
            "capital contributions",
            "profit and loss allocation",
            "management and voting rights",
            "admission and withdrawal of partners",
            "dispute resolution",
            "dissolution",
        ),
    ),
    ContractType.EMPLOYMENT: ContractTemplate(
        display_name="Employment Contract",
        required_clauses=(
            "position, duties and reporting line",
            "compensation and benefits",
            "working hours and location",
            "confidentiality and intellectual property assignment",
            "termination and notice periods",
            "governing law",
        ),
    ),
    ContractType.GENERAL: ContractTemplate(
        display_name="General Contract",
        required_clauses=(
            "recitals and definitions",
            "obligations of each party",
            "payment terms",
            "term and termination",
            "governing law and dispute resolution",
            "entire agreement and severability",
        ),
    ),
}


CONTRACT_SYSTEM_PROMPT = """You are an expert legal AI specializing in contract drafting. Generate professional, legally sound contracts based on the provided parameters. Include all necessary legal language, clauses, and protections appropriate for the jurisdiction and contract type.

Important: Generate contracts that are professionally formatted, comprehensive, and include standard legal protections. Always include appropriate disclaimers about legal review."""


def resolve_template(contract_type: str) -> ContractTemplate:
    """Pick the drafting template for a contract-type tag."""
    try:
        return CONTRACT_TEMPLATES[ContractType(contract_type)]
    except ValueError:
        return CONTRACT_TEMPLATES[ContractType.GENERAL]


def render_contract_prompt(
    contract_type: str,
    parties: List[Dict[str, Any]],
    terms: Optional[Dict[str, Any]],
    jurisdiction: str = DEFAULT_JURISDICTION,
    custom_requirements: Optional[str] = None
) -> List[ChatMessage]:
    """
    Render drafting prompt.

    Parties and terms are serialized as JSON without reshaping.
    """
    template = resolve_template(contract_type)
    clauses = "\n".join(f"- {clause}" for clause in template.required_clauses)

    lines = [
        f"Generate a {contract_type} contract with the following details:",
        "",
        f"Contract Form: {template.display_name}",
        f"Parties: {json.dumps(parties)}",
        f"Terms: {json.dumps(terms or {})}",
        f"Jurisdiction: {jurisdiction}",
    ]
    if custom_requirements and custom_requirements.strip():
        lines.append(f"Additional Requirements: {custom_requirements}")
    lines += [
        "",
        "Make sure the document covers:",
        clauses,
        "",
        "Please create a comprehensive, professional contract document.",
    ]

    return [
        {"role": "system", "content": CONTRACT_SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join(lines)},
    ]
