"""
Portfolio Backend API

Application factory. Owns the store client lifecycle: the Database is built at
startup, kept on app.state and disposed at shutdown.

Local development:
    DATABASE_URL=sqlite:///./portfolio.db python -m portfolio.main
Production:
    uvicorn portfolio.main:create_app --factory
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request

from portfolio.shared.config import Settings
from portfolio.shared.cors import setup_cors
from portfolio.shared.database import Database, get_database
from portfolio.shared.errors import setup_error_handlers
from portfolio.shared.security_headers import setup_security_headers
from portfolio.projects.main import router as projects_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Build the API.

    Args:
        settings: Defaults to Settings.from_env()
        database: A pre-built store client. When given, the caller owns it and
            it is not disposed at shutdown.
    """
    if settings is None:
        settings = Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = database
        owns_database = db is None
        if owns_database:
            db = Database.from_url(settings.database_url, connect_timeout=settings.db_connect_timeout)

        if db.is_ready():
            logger.info("Connected to database")
        elif settings.is_production:
            # Keep serving; store-backed routes answer 503 until it comes back
            logger.error("Failed to connect to database, continuing without it")
        else:
            if owns_database:
                db.dispose()
            raise RuntimeError("Failed to connect to database")

        app.state.database = db
        logger.info(f"Portfolio API started in {settings.environment} mode")
        try:
            yield
        finally:
            app.state.database = None
            if owns_database:
                db.dispose()

    app = FastAPI(
        title="Portfolio Backend API",
        version="1.0.0",
        description="Portfolio projects management",
        docs_url="/api/docs",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None

    # Order matters: later middleware wraps earlier, CORS is outermost
    setup_error_handlers(app)
    setup_security_headers(app)
    setup_cors(app, settings.environment, settings.frontend_url)

    @app.get("/")
    def root():
        return {"message": "Welcome to Portfolio Backend API"}

    @app.get("/health")
    def health(request: Request):
        """Health check endpoint - always 200, reports database connectivity."""
        db = get_database(request)
        return {
            "status": "ok",
            "environment": settings.environment,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "dbConnected": db is not None and db.check_connection(),
        }

    app.include_router(projects_router)
    return app


def main() -> None:
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(
        "portfolio.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    main()
