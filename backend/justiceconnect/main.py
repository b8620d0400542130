"""
JusticeConnect - Main FastAPI Application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .api import auth_router, chat_router, health_router
from .core.errors import JusticeConnectError
from .core.logging_config import setup_logging
from .identity import init_identity_provider
from .middleware import RequestLoggingMiddleware
from .storage import init_kv_store

# Logger will be initialized after setup_logging() is called
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    setup_logging(settings)

    init_kv_store()
    logger.info(f"History store initialized: {settings.storage_type}")
    init_identity_provider()
    logger.info(f"Identity provider initialized: {settings.identity_provider}")

    if not (settings.llm_api_key or settings.groq_api_key):
        logger.warning("No completion provider API key configured; /chat will return 500")

    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"API prefix: {settings.api_prefix}")
    logger.info(f"Log level: {settings.log_level.upper()}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="AI legal assistant for Philippine law",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request logging middleware (after CORS)
if settings.log_api_requests:
    app.add_middleware(
        RequestLoggingMiddleware,
        exclude_paths=[f"{settings.api_prefix}/health"],
    )


@app.exception_handler(JusticeConnectError)
async def service_error_handler(request: Request, exc: JusticeConnectError):
    """Render service errors as ``{"error", "details"}``."""
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors (400), not 422."""
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "details": str(exc)},
    )


# Include routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(chat_router, prefix=settings.api_prefix)
app.include_router(health_router, prefix=settings.api_prefix)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "justiceconnect.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
