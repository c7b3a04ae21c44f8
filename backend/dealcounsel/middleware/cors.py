"""
CORS middleware.

WHAT: Permissive cross-origin handling for the function endpoints
WHY: Browser preflights must get an empty 200, same as a bare OPTIONS
HOW: Starlette's CORSMiddleware with the "OK" preflight body dropped
"""

from fastapi import Response
from fastapi.middleware.cors import CORSMiddleware


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose successful preflight responses carry no body."""

    def preflight_response(self, request_headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response

        headers = {
            key: value for key, value in response.headers.items()
            if key not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)
