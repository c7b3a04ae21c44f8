"""
Request dependencies.

WHAT: Caller identity extraction
WHY: Authentication happens upstream; this service only scopes data by user
HOW: Read the X-User-Id header set by the auth proxy
"""

from typing import Optional

from fastapi import Header

from ..utils.exceptions import AuthenticationRequiredException


USER_ID_HEADER = "X-User-Id"


async def get_optional_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    """Caller identity if present."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return None


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Caller identity; raises AuthenticationRequiredException (401) when absent."""
    user_id = await get_optional_user_id(x_user_id)
    if user_id is None:
        raise AuthenticationRequiredException()
    return user_id
