"""
Negotiation session workflow.

WHAT: State behind the negotiation workspace: list, selection, transcript
WHY: Only one negotiation is active at a time and only one send may be
     pending; the transcript shown is always the store's, never a local copy
HOW: Explicit SessionState machine driven by async calls to DealCounselClient

States:
    NO_SELECTION -> LOADING -> IDLE -> IN_FLIGHT -> (reload) -> IDLE
"""

from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from .api_client import ApiError, DealCounselClient
from .notifications import NotificationCenter
from ..utils.logger import get_logger

logger = get_logger(__name__)


class SessionState(str, Enum):
    NO_SELECTION = "no_selection"
    LOADING = "loading"
    IDLE = "idle"
    IN_FLIGHT = "in_flight"


class NegotiationSession:
    """
    Client-local negotiation workspace.

    Attributes:
        negotiations: Caller's negotiations, newest first
        selected_id: Id of the active negotiation, if any
        messages: Transcript of the active negotiation, oldest first
        state: Current SessionState
    """

    def __init__(self, client: DealCounselClient, notifications: Optional[NotificationCenter] = None):
        self.client = client
        self.notifications = notifications or NotificationCenter()
        self.negotiations: List[Dict[str, Any]] = []
        self.selected_id: Optional[str] = None
        self.messages: List[Dict[str, Any]] = []
        self.state = SessionState.NO_SELECTION
        self._send_pending = False

    @property
    def selected(self) -> Optional[Dict[str, Any]]:
        return next((n for n in self.negotiations if n["id"] == self.selected_id), None)

    @property
    def can_send(self) -> bool:
        """Send control is enabled only with a selection and nothing pending."""
        return self.selected_id is not None and self.state == SessionState.IDLE

    async def load_negotiations(self) -> List[Dict[str, Any]]:
        """Fetch the list; a failed read leaves an empty list."""
        try:
            self.negotiations = await self.client.list_negotiations()
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching negotiations: {e}")
            self.negotiations = []
        return self.negotiations

    async def _fetch_messages(self, negotiation_id: str) -> List[Dict[str, Any]]:
        try:
            return await self.client.list_messages(negotiation_id)
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching messages for {negotiation_id}: {e}")
            return []

    async def select(self, negotiation_id: str) -> List[Dict[str, Any]]:
        """
        Make a negotiation active.

        The previous transcript is discarded before the read, so a slow or
        failed read never shows another negotiation's messages.
        """
        self.selected_id = negotiation_id
        self.messages = []
        self.state = SessionState.LOADING

        messages = await self._fetch_messages(negotiation_id)
        # A later select() may have replaced the selection meanwhile
        if self.selected_id == negotiation_id:
            self.messages = messages
            self.state = SessionState.IN_FLIGHT if self._send_pending else SessionState.IDLE
        return messages

    async def create_negotiation(
        self,
        title: str,
        description: Optional[str] = None,
        counterparty_name: Optional[str] = None,
        deal_value: Optional[float] = None
    ) -> Optional[Dict[str, Any]]:
        """Create, prepend and select a negotiation. Blank title sends nothing."""
        if not title or not title.strip():
            self.notifications.error("Title required", "Please enter a negotiation title.")
            return None

        try:
            negotiation = await self.client.create_negotiation(
                title=title,
                description=description or None,
                counterparty_name=counterparty_name or None,
                deal_value=deal_value,
            )
        except ApiError as e:
            self.notifications.error("Error creating negotiation", e.message)
            return None
        except httpx.HTTPError as e:
            logger.error(f"Error creating negotiation: {e}")
            self.notifications.error("Error creating negotiation", str(e))
            return None

        self.negotiations.insert(0, negotiation)
        await self.select(negotiation["id"])
        self.notifications.info("Negotiation created!", "Your new negotiation has been started.")
        return negotiation

    def _context_for(self, negotiation: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if negotiation is None:
            return None
        return {
            "title": negotiation.get("title"),
            "description": negotiation.get("description"),
            "counterpartyName": negotiation.get("counterparty_name"),
            "dealValue": negotiation.get("deal_value"),
        }

    async def send_message(self, text: str, strategy: str = "balanced") -> bool:
        """
        Ask the assistant and reload the transcript.

        Returns:
            True if the assistant replied; False if the send was refused or failed
        """
        if self._send_pending or self.state == SessionState.IN_FLIGHT:
            logger.debug("Send refused: a message is already pending")
            return False
        if self.selected_id is None:
            self.notifications.error("No negotiation selected", "Select or create a negotiation first.")
            return False
        if not text or not text.strip():
            self.notifications.error("Message required", "Please enter a message.")
            return False

        negotiation_id = self.selected_id
        self._send_pending = True
        self.state = SessionState.IN_FLIGHT
        try:
            await self.client.ask_assistant(
                user_message=text,
                negotiation_id=negotiation_id,
                negotiation_context=self._context_for(self.selected),
                strategy=strategy,
            )
        except ApiError as e:
            self.notifications.error("Error sending message", e.message)
            return False
        except httpx.HTTPError as e:
            logger.error(f"Error sending message: {e}")
            self.notifications.error("Error sending message", "Failed to get AI response. Please try again.")
            return False
        finally:
            self._send_pending = False
            # A select() still loading owns the state
            if self.state == SessionState.IN_FLIGHT:
                self.state = SessionState.IDLE

        if self.selected_id == negotiation_id:
            self.messages = await self._fetch_messages(negotiation_id)
        self.notifications.info(
            "AI Assistant responded",
            "Strategic advice has been provided for your negotiation."
        )
        return True
