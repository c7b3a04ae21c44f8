"""
Contract analyzer workflow.

WHAT: Load contract text from a file or paste, then request an analysis
WHY: Only plain-text files are understood; everything else is refused
HOW: mimetypes check before reading; notices for every refusal
"""

import mimetypes
from pathlib import Path
from typing import Optional, Union

import httpx

from .api_client import ApiError, DealCounselClient
from .notifications import NotificationCenter
from ..utils.logger import get_logger

logger = get_logger(__name__)

TEXT_MIME_TYPE = "text/plain"


class ContractAnalyzerController:
    def __init__(self, client: DealCounselClient, notifications: Optional[NotificationCenter] = None):
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.contract_text = ""
        self.analysis: Optional[str] = None
        self.is_analyzing = False

    @staticmethod
    def is_plain_text(path: Union[str, Path], mime_type: Optional[str] = None) -> bool:
        mime_type = mime_type or mimetypes.guess_type(str(path))[0]
        return mime_type == TEXT_MIME_TYPE

    def load_file(self, path: Union[str, Path], mime_type: Optional[str] = None) -> bool:
        """
        Replace the contract text with a file's content.

        Any non-plain-text file is rejected with the same notice each time;
        the current text is left untouched.
        """
        if not self.is_plain_text(path, mime_type):
            self.notifications.error("Invalid file type", "Please upload a text (.txt) file.")
            return False

        try:
            # Undecodable bytes become U+FFFD rather than failing the load
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            self.notifications.error("File could not be read", "Please choose another text (.txt) file.")
            return False

        self.contract_text = text
        return True

    async def analyze(self, contract_text: Optional[str] = None, analysis_type: str = "full") -> Optional[str]:
        if contract_text is not None:
            self.contract_text = contract_text
        if not self.contract_text.strip():
            self.notifications.error(
                "Contract text required",
                "Please enter or paste contract text to analyze."
            )
            return None

        self.is_analyzing = True
        try:
            result = await self.client.analyze_contract(self.contract_text, analysis_type)
        except ApiError as e:
            self.notifications.error("Analysis failed", e.message)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error analyzing contract: {e}")
            self.notifications.error("Analysis failed", "Failed to analyze contract. Please try again.")
            return None
        finally:
            self.is_analyzing = False

        self.analysis = result["analysis"]
        self.notifications.info("Analysis complete!", "Your contract has been successfully analyzed.")
        return self.analysis
