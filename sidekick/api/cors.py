"""
CORS Support

The browser client calls the service cross-origin. Preflight requests are
answered with an empty body and permissive headers.
"""

from typing import Final

from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers
from starlette.responses import Response

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

# Body headers of Starlette's plain-text "OK" preflight response
_BODY_HEADERS: Final[frozenset[str]] = frozenset({"content-length", "content-type"})


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose successful preflight responses carry no body."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code != 200:
            return response
        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in _BODY_HEADERS
        }
        return Response(status_code=200, headers=headers)
