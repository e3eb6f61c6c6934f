# FILE: squirrito/middleware/trailing_slash.py
"""
Trailing slash middleware

`/api/memories/` and `/api/memories` reach the same route. The UI catch-all
route keeps FastAPI's own redirect from ever firing, so the path is
normalised here before routing.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class StripTrailingSlashMiddleware(BaseHTTPMiddleware):
    """Drop trailing slashes from every path except the root"""

    async def dispatch(self, request: Request, call_next):
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            request.scope["path"] = path.rstrip("/") or "/"
        return await call_next(request)
