"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shoplist.api import auth, dishes, health, ingredients, lists, users
from shoplist.config import get_settings
from shoplist.exceptions import DomainError

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting shopping list API ({settings.environment})")
    yield
    logger.info("Shutting down shopping list API")


app = FastAPI(
    title="Shopping List API",
    description="Ingredients, dishes and shopping lists materialized from them",
    version="0.1.0",
    lifespan=lifespan,
)

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
elif settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _trace_id(request: Request) -> str:
    return request.headers.get("X-Request-ID") or uuid.uuid4().hex


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    trace_id = _trace_id(request)
    logger.warning(
        f"Domain error on {request.method} {request.url.path} ({trace_id}): "
        f"{exc.code} {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, "trace_id": trace_id},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    trace_id = _trace_id(request)
    logger.error(
        f"Unhandled error on {request.method} {request.url.path} ({trace_id})",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred.", "trace_id": trace_id},
    )


# Register routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(ingredients.router)
app.include_router(dishes.router)
app.include_router(lists.router)
