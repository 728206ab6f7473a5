"""
FastAPI application for the PR review dashboard.

This provides the REST API consumed by the React frontend: GitHub sign-in,
the aggregated pull request list and on-demand AI reviews.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from backend.ai_routes import router as ai_router
from backend.auth_routes import router as auth_router
from backend.session_store import SessionStore
from models.config_models import Config
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = logging.getLogger(__name__)


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the FastAPI app.

    Args:
        config: Validated configuration (loaded from the environment if omitted)

    Returns:
        Configured FastAPI application
    """
    config = config or load_config()
    setup_logger(config.log_level)

    app = FastAPI(
        title="PR Review Dashboard API",
        description="Lists a GitHub user's pull requests and generates AI reviews",
        version="1.0.0"
    )
    app.state.config = config

    # The frontend runs on another origin and sends the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.state.sessions = SessionStore(max_age=config.server.session_max_age)
    app.add_middleware(
        SessionMiddleware,
        secret_key=config.server.session_secret,
        max_age=config.server.session_max_age,
    )

    app.include_router(auth_router)
    app.include_router(ai_router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info(
        f"FastAPI app initialized (CORS origins: {', '.join(config.server.cors_origins) or 'none'})"
    )
    return app
