"""
Client-side workflows.

WHAT: Async API client plus the controllers behind each screen
WHY: The front-end's validation, session state and notices live in one place
HOW: httpx.AsyncClient against the service; controllers hold screen state
"""

from .api_client import DealCounselClient, ApiError
from .notifications import Notice, NotificationCenter
from .session import NegotiationSession, SessionState
from .generator import ContractGeneratorController
from .analyzer import ContractAnalyzerController
from .dashboard import DashboardController

__all__ = [
    "DealCounselClient",
    "ApiError",
    "Notice",
    "NotificationCenter",
    "NegotiationSession",
    "SessionState",
    "ContractGeneratorController",
    "ContractAnalyzerController",
    "DashboardController",
]
