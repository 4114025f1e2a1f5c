"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from newsboard.api.middleware import RequestContextMiddleware
from newsboard.api.routes import api_router
from newsboard.core.errors import NewsboardError, UnauthorizedError
from newsboard.logging_config import setup_logging
from newsboard.persistence.database import engine
from newsboard.settings import settings

# Setup logging
setup_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting Newsboard API environment={settings.environment}")
    yield
    await engine.dispose()


app = FastAPI(
    title="Newsboard API",
    description="Link and discussion forum with threaded comments and upvotes",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)


@app.exception_handler(NewsboardError)
async def newsboard_error_handler(request: Request, exc: NewsboardError) -> JSONResponse:
    """Render domain errors as `{"detail": ...}` with their status code."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    if exc.status_code >= 500:
        logger.error(f"Unhandled domain error: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


app.include_router(api_router, prefix=settings.api_v1_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
