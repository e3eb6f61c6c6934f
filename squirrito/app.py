# FILE: squirrito/app.py
"""
FastAPI application entry point for Squirrito
Scene jokes from a hosted model, saved to a shared map only on consent
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from squirrito import __version__
from squirrito.config import get_settings
from squirrito.middleware.body_limit import BodySizeLimitMiddleware
from squirrito.middleware.cors import CORS_HEADERS, OpenCORSMiddleware
from squirrito.middleware.trailing_slash import StripTrailingSlashMiddleware
from squirrito.routes import geocode, health, joke, memories, ui
from squirrito.services.startup_verify import verify_startup

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown"""
    logger.info(f"Starting Squirrito backend v{__version__}")

    verify_result = await verify_startup()
    if not verify_result["storage_writable"]:
        logger.error("Startup verification: memory store is not writable, saves will fail")

    yield

    logger.info("Shutting down Squirrito backend")


app = FastAPI(
    title="Squirrito API",
    description="Location-aware jokes pinned to a shared map",
    version=__version__,
    lifespan=lifespan
)

app.add_middleware(StripTrailingSlashMiddleware)

# Body size limit
app.add_middleware(BodySizeLimitMiddleware, max_size=settings.body_size_limit_kb * 1024)

# CORS (outermost, so rejected requests still carry the headers)
app.add_middleware(OpenCORSMiddleware)


def describe_validation_errors(errors) -> str:
    """Short plain-text reason for a rejected request"""
    if any(e.get("type") == "json_invalid" for e in errors):
        return "Invalid JSON"

    # absent or empty reads as "required", anything else as "invalid"
    required, invalid = [], []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ()) if part not in ("body", "query")]
        if not loc:
            continue
        field = loc[0]
        if e.get("type") in ("missing", "string_too_short"):
            if field in invalid:
                invalid.remove(field)
            if field not in required:
                required.append(field)
        elif field not in required and field not in invalid:
            invalid.append(field)

    parts = []
    if required:
        parts.append(f"{' and '.join(required)} required")
    if invalid:
        parts.append(f"{' and '.join(invalid)} invalid")
    if not parts:
        return "Invalid request body"
    return "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_errors(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return PlainTextResponse(message, status_code=400)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    # runs outside OpenCORSMiddleware, so the headers are added here
    return PlainTextResponse("Internal server error", status_code=500, headers=CORS_HEADERS)


# Include routers (UI catch-all last)
app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(joke.router, prefix="/api", tags=["joke"])
app.include_router(memories.router, prefix="/api", tags=["memories"])
app.include_router(geocode.router, prefix="/api", tags=["geocode"])
app.include_router(ui.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "squirrito.app:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.environment == "development"
    )
