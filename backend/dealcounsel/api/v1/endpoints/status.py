"""
Status and health check endpoints.

WHAT: Health monitoring for LLM providers and database
WHY: Quick diagnostics for the front-end and ops
HOW: FastAPI endpoints calling provider ping and DB ping
"""

from fastapi import APIRouter

from ....llm.provider_factory import get_provider, configured_provider_names
from ....core.database import ping_database
from ....core.config import settings
from ....utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


async def _provider_statuses() -> dict:
    """Ping every provider referenced by a feature setting."""
    statuses = {}
    for name in configured_provider_names():
        try:
            provider = get_provider(name)
            status = await provider.ping()
            statuses[name] = {
                "available": status.available,
                "base_url": status.base_url,
                "models": status.models,
                "error": status.error
            }
        except ValueError as e:
            logger.error(f"Failed to get LLM status for {name}: {e}")
            statuses[name] = {
                "available": False,
                "base_url": "unknown",
                "models": None,
                "error": str(e)
            }
    return statuses


@router.get("/llm/status")
async def llm_status():
    """
    Check LLM provider status.

    WHAT: Health of each configured upstream plus the database
    WHY: Front-end can warn before the user asks for a contract
    HOW: Call provider.ping() per provider and database.ping_database()

    Returns:
        JSON with provider statuses, feature routing and database status
    """
    return {
        "llm": await _provider_statuses(),
        "features": {
            "negotiation_assistant": settings.NEGOTIATION_PROVIDER,
            "contract_generator": settings.CONTRACT_PROVIDER,
            "contract_analyzer": settings.ANALYZER_PROVIDER
        },
        "database": ping_database()
    }


@router.get("/health")
async def health_check():
    """
    Overall application health check.

    Healthy only when the database and every configured provider are up.
    """
    providers = await _provider_statuses()
    db_status = ping_database()

    llm_available = all(p["available"] for p in providers.values())
    healthy = llm_available and db_status["available"]

    return {
        "status": "healthy" if healthy else "degraded",
        "version": settings.APP_VERSION,
        "app_name": settings.APP_NAME,
        "components": {
            "llm": {
                name: {"available": p["available"]} for name, p in providers.items()
            },
            "database": {
                "available": db_status["available"]
            }
        }
    }
