"""Shared CORS configuration for the portfolio API."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

logger = logging.getLogger(__name__)

# Development origins (dev environment only)
DEV_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
    "https://localhost:3000",
]


def get_allowed_origins(environment: str = "development", frontend_url: Optional[str] = None) -> list[str]:
    """
    Return the allowed CORS origins for the given environment.

    FRONTEND_URL is the only production origin; it may hold several
    comma-separated URLs.
    """
    origins = []
    if frontend_url:
        for url in frontend_url.split(","):
            clean_url = url.strip().rstrip("/")
            if clean_url and clean_url not in origins:
                origins.append(clean_url)

    if environment != "production":
        origins.extend(origin for origin in DEV_ORIGINS if origin not in origins)

    return origins


def setup_cors(app: FastAPI, environment: str = "development", frontend_url: Optional[str] = None) -> None:
    """Add CORS middleware to a FastAPI app."""
    origins = get_allowed_origins(environment, frontend_url)
    if not origins:
        logger.warning("No CORS origins configured. Set FRONTEND_URL to allow browser access.")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
