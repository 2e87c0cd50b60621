"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from teamplan.config import get_settings
from teamplan.database.session import init_db, close_db
from teamplan.llm.ollama import OllamaAdapter, OllamaConfig
from teamplan.api.routes import router


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    config = OllamaConfig.from_settings(settings)
    app.state.generation_client = OllamaAdapter(config)
    logger.info(f"Model server at {config.base_url} (default model {config.model})")

    # Initialize database
    if settings.environment == "development":
        await init_db()
        logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.generation_client.close()
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Teamplan API - projects, tasks, employees and generated project plans",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed request bodies with 400 instead of 422."""
    logger.info(f"Rejected {request.method} {request.url.path}: invalid request")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Include routes
app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "teamplan.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
