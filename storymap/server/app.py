"""FastAPI application serving an in-memory story map canvas."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storymap.adapters.host import InMemoryCanvas
from storymap.config import get_layout_settings
from storymap.server.canvas_routes import router as canvas_router
from storymap.server.command_routes import router as command_router

from dotenv import load_dotenv
load_dotenv()  # load environment variables from .env file

logger = logging.getLogger(__name__)

# CORS origins - configurable via environment variable
# Use comma-separated values for multiple origins, or "*" for all (development only)
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective layout settings on startup."""
    logger.info("storymap server starting with %s", get_layout_settings())
    yield


def create_app(canvas: InMemoryCanvas | None = None) -> FastAPI:
    app = FastAPI(
        title="Story Map API",
        description="Canvas host and command surface for story map cards",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.canvas = canvas or InMemoryCanvas()

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # include routes
    app.include_router(canvas_router, prefix="/api")
    app.include_router(command_router, prefix="/api")

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {
            "status": "ok",
            "version": "0.1.0",
            "nodes": len(app.state.canvas.nodes),
            "endpoints": {
                "nodes": "/api/nodes",
                "connectors": "/api/connectors",
                "commands": "/api/commands",
            },
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
