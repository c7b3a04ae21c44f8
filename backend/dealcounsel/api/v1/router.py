"""
API router aggregation.

WHAT: Combine the function and store routers
WHY: Single place to register all routes
HOW: Include routers from endpoints with prefixes
"""

from fastapi import APIRouter

from .endpoints import status, functions, negotiations, contracts, profiles

# Create main router
api_router = APIRouter()

# AI functions keep the path shape the front-end already calls
api_router.include_router(
    functions.router,
    prefix="/functions/v1",
    tags=["functions"]
)

api_router.include_router(
    status.router,
    prefix="/api/v1",
    tags=["status"]
)

api_router.include_router(
    negotiations.router,
    prefix="/api/v1",
    tags=["negotiations"]
)

api_router.include_router(
    contracts.router,
    prefix="/api/v1",
    tags=["contracts"]
)

api_router.include_router(
    profiles.router,
    prefix="/api/v1",
    tags=["profiles"]
)
