"""
Async API client.

WHAT: Typed-ish wrapper over the function and store endpoints
WHY: Controllers should not build URLs or parse error bodies themselves
HOW: One httpx.AsyncClient; non-2xx responses raise ApiError carrying the
     server's {"error": ...} message
"""

from typing import Any, Dict, List, Optional

import httpx

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx response from the service."""

    def __init__(self, message: str, status_code: int, code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class DealCounselClient:
    """
    Client for one signed-in user.

    Args:
        base_url: Service root, e.g. http://localhost:8000
        user_id: Caller identity sent as X-User-Id
        transport: Optional httpx transport (tests pass httpx.ASGITransport)
    """

    def __init__(
        self,
        base_url: str,
        user_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None
    ):
        headers = {"Content-Type": "application/json"}
        if user_id:
            headers["X-User-Id"] = user_id
        self.user_id = user_id
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            transport=transport,
            timeout=httpx.Timeout(timeout),
        )

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        message = body.get("error") if isinstance(body, dict) else None
        code = body.get("code") if isinstance(body, dict) else None
        logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiError(message or f"Request failed with status {response.status_code}", response.status_code, code)

    # ========== AI functions ==========

    async def generate_contract(
        self,
        contract_type: str,
        parties: List[Dict[str, Any]],
        terms: Optional[Dict[str, Any]] = None,
        jurisdiction: Optional[str] = None,
        custom_requirements: Optional[str] = None
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"contractType": contract_type, "parties": parties, "terms": terms or {}}
        if jurisdiction:
            body["jurisdiction"] = jurisdiction
        if custom_requirements:
            body["customRequirements"] = custom_requirements
        return await self._request("POST", "/functions/v1/ai-contract-generator", json=body)

    async def ask_assistant(
        self,
        user_message: str,
        negotiation_id: Optional[str] = None,
        negotiation_context: Any = None,
        strategy: str = "balanced"
    ) -> Dict[str, Any]:
        body = {
            "negotiationId": negotiation_id,
            "userMessage": user_message,
            "negotiationContext": negotiation_context,
            "strategy": strategy,
        }
        return await self._request("POST", "/functions/v1/ai-negotiation-assistant", json=body)

    async def analyze_contract(self, contract_text: str, analysis_type: str = "full") -> Dict[str, Any]:
        body = {"contractText": contract_text, "analysisType": analysis_type}
        return await self._request("POST", "/functions/v1/ai-contract-analyzer", json=body)

    # ========== Store ==========

    async def create_negotiation(
        self,
        title: str,
        description: Optional[str] = None,
        counterparty_name: Optional[str] = None,
        deal_value: Optional[float] = None
    ) -> Dict[str, Any]:
        body = {
            "title": title,
            "description": description,
            "counterparty_name": counterparty_name,
            "deal_value": deal_value,
        }
        return await self._request("POST", "/api/v1/negotiations", json=body)

    async def list_negotiations(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"limit": limit} if limit else None
        return await self._request("GET", "/api/v1/negotiations", params=params)

    async def list_messages(self, negotiation_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/api/v1/negotiations/{negotiation_id}/messages")

    async def save_contract(self, title: str, content: str, contract_type: Optional[str] = None) -> Dict[str, Any]:
        body = {"title": title, "content": content, "contract_type": contract_type}
        return await self._request("POST", "/api/v1/contracts", json=body)

    async def list_contracts(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        params = {"limit": limit} if limit else None
        return await self._request("GET", "/api/v1/contracts", params=params)

    async def get_profile(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/v1/profile")

    async def get_dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/v1/dashboard")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "DealCounselClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
