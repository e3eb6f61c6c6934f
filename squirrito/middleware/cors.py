# FILE: squirrito/middleware/cors.py
"""
Permissive CORS middleware

Every response gets the same wide-open headers, and any OPTIONS request is
answered directly, with or without preflight request headers.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "content-type",
}


class OpenCORSMiddleware(BaseHTTPMiddleware):
    """Stamp CORS headers on everything"""

    async def dispatch(self, request: Request, call_next):
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=CORS_HEADERS)

        response = await call_next(request)
        for name, value in CORS_HEADERS.items():
            response.headers[name] = value
        return response
