"""
Contract generator workflow.

WHAT: Form validation, generation, save and download for one draft
WHY: Save and download are independent follow-ups with their own failures
HOW: Controller holding the last generated contract
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from .api_client import ApiError, DealCounselClient
from .notifications import NotificationCenter
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Path separators, characters Windows rejects, and control characters
UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(title: Optional[str]) -> str:
    """Title as a .txt filename with unsafe characters replaced; falls back to contract.txt."""
    stem = UNSAFE_FILENAME_CHARS.sub("_", title or "").strip(" .")
    return f"{stem or 'contract'}.txt"


class ContractGeneratorController:
    def __init__(self, client: DealCounselClient, notifications: Optional[NotificationCenter] = None):
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.contract_type: Optional[str] = None
        self.generated_contract: Optional[str] = None
        self.disclaimer: Optional[str] = None
        self.is_generating = False

    def validate(self, contract_type: Optional[str], parties: List[Dict[str, Any]]) -> bool:
        if (
            not contract_type
            or not parties
            or any(not (party.get("name") or "").strip() for party in parties)
        ):
            self.notifications.error(
                "Required fields missing",
                "Please fill in contract type and all party names."
            )
            return False
        return True

    async def generate(
        self,
        contract_type: Optional[str],
        parties: List[Dict[str, Any]],
        terms: Optional[Dict[str, Any]] = None,
        jurisdiction: Optional[str] = None,
        custom_requirements: Optional[str] = None
    ) -> Optional[str]:
        """Generate a draft; invalid input raises a notice and sends nothing."""
        if not self.validate(contract_type, parties):
            return None

        self.is_generating = True
        try:
            result = await self.client.generate_contract(
                contract_type=contract_type,
                parties=parties,
                terms=terms,
                jurisdiction=jurisdiction,
                custom_requirements=custom_requirements,
            )
        except (ApiError, httpx.HTTPError) as e:
            message = e.message if isinstance(e, ApiError) else "Failed to generate contract. Please try again."
            self.notifications.error("Generation failed", message)
            return None
        finally:
            self.is_generating = False

        self.contract_type = contract_type
        self.generated_contract = result["contract"]
        self.disclaimer = result.get("disclaimer")
        self.notifications.info("Contract generated!", "Your AI-generated contract is ready for review.")
        return self.generated_contract

    async def save(self, title: str) -> Optional[Dict[str, Any]]:
        """Save the current draft under a title."""
        if not self.generated_contract or not title or not title.strip():
            self.notifications.error(
                "Missing information",
                "Please provide a contract title and generate the contract first."
            )
            return None

        try:
            saved = await self.client.save_contract(title, self.generated_contract, self.contract_type)
        except ApiError as e:
            self.notifications.error("Save failed", e.message)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error saving contract: {e}")
            self.notifications.error("Save failed", "Failed to save contract.")
            return None

        self.notifications.info("Contract saved!", "Your contract has been saved to your dashboard.")
        return saved

    def download(self, directory: Union[str, Path], title: Optional[str] = None) -> Optional[Path]:
        """Write the draft to <title or "contract">.txt in directory."""
        if not self.generated_contract:
            self.notifications.error("Nothing to download", "Generate a contract first.")
            return None

        path = Path(directory) / safe_filename(title)
        try:
            path.write_text(self.generated_contract, encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing {path}: {e}")
            self.notifications.error("Download failed", "The contract could not be written to disk.")
            return None

        logger.info(f"Contract written to {path}")
        return path
