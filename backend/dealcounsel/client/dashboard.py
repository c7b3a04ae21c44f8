"""
Dashboard workflow.

WHAT: Greeting name and recent negotiations
HOW: One GET /api/v1/dashboard; failures degrade to an empty dashboard
"""

from typing import Any, Dict, List, Optional

import httpx

from .api_client import ApiError, DealCounselClient
from ..utils.logger import get_logger

logger = get_logger(__name__)


class DashboardController:
    def __init__(self, client: DealCounselClient):
        self.client = client
        self.profile: Optional[Dict[str, Any]] = None
        self.recent_negotiations: List[Dict[str, Any]] = []

    @property
    def display_name(self) -> str:
        if self.profile and self.profile.get("full_name"):
            return self.profile["full_name"]
        return self.client.user_id or ""

    async def load(self) -> None:
        try:
            data = await self.client.get_dashboard()
        except (ApiError, httpx.HTTPError) as e:
            logger.error(f"Error fetching dashboard: {e}")
            self.profile = None
            self.recent_negotiations = []
            return

        self.profile = data.get("profile")
        self.recent_negotiations = data.get("recent_negotiations", [])
