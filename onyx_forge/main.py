"""Main FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import generation, health
from .core import (
    BannerOrchestrator,
    ImageGenerator,
    ProgressSimulator,
    PromptEnhancer,
    VariationPlanner,
)
from .providers import GeminiClient
from .utils.config import load_config
from .utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown.

    Builds the provider client and core components on startup,
    closes the client on shutdown.
    """
    logger.info("Application starting up...")

    try:
        config = load_config(os.getenv("ONYX_FORGE_CONFIG"))

        # The key is handed to the client here; nothing below reads the environment
        gemini = GeminiClient(
            api_key=config.gemini_api_key,
            base_url=config.gemini_base_url,
            text_model=config.models.text,
            image_model=config.models.image,
            timeout=config.timeout_gemini_seconds,
        )
        await gemini.initialize()

        orchestrator = BannerOrchestrator(
            enhancer=PromptEnhancer(gemini),
            planner=VariationPlanner(gemini),
            generator=ImageGenerator(gemini),
            progress=ProgressSimulator.from_config(config.progress),
        )

        app.state.config = config
        app.state.gemini = gemini
        app.state.orchestrator = orchestrator

        logger.info("Application startup complete")

    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("Application shutting down...")
    await gemini.close()
    logger.info("Application shutdown complete")


app = FastAPI(
    title="Onyx Forge",
    description="AI advertising banner generation with A/B variations",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware (adjust origins for production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(generation.router, tags=["generation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "onyx-forge",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))

    uvicorn.run(
        "onyx_forge.main:app",
        host="0.0.0.0",
        port=port,
        reload=True,
        log_level="info",
    )
