"""
GreenPlan Server - Main FastAPI Application

This module contains the application factory for the GreenPlan server.
It wires configuration, the database manager, the token codec, CORS,
error rendering and the REST API routers together.
"""

import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from auth import TokenCodec
from config import GetSettings, Settings
from exceptions import GreenPlanError
from managers import DatabaseManager
from routes import auth, logs, materials, points, status

logger = logging.getLogger(__name__)


# ==================== Logging ====================

def ConfigureLogging(settings: Settings) -> None:
    """
    Configure logging to write to both console and a rotating file

    Args:
        settings: Server settings (log_dir, log_level)
    """
    # Create logs directory if it doesn't exist
    logs_dir = Path(settings.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)

    # Create log filename with timestamp
    log_filename = logs_dir / f"greenplan-server-{datetime.now().strftime('%Y-%m-%d')}.log"

    logging.basicConfig(
        level=settings.log_level.upper(),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            # Console handler
            logging.StreamHandler(),
            # File handler with rotation (max 10MB per file, keep 10 backup files)
            RotatingFileHandler(
                log_filename,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=10,
                encoding='utf-8'
            )
        ]
    )


# ==================== Error Handlers ====================

async def HandleApplicationError(request: Request, exc: GreenPlanError) -> JSONResponse:
    """Render an application error as {"message": ...} with its status code"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers=exc.headers
    )


async def HandleValidationError(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as 400 Invalid Input"""
    logger.info(f"Invalid request body on {request.method} {request.url.path}")

    # Rejected values are not echoed back (they may be non-finite floats or passwords)
    errors = [
        {key: value for key, value in error.items() if key != "input"}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"message": "Invalid request body", "errors": jsonable_encoder(errors)}
    )


# ==================== Application Factory ====================

def CreateApp(
    settings: Optional[Settings] = None,
    db_manager: Optional[DatabaseManager] = None
) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        settings: Server settings (loaded from environment if omitted)
        db_manager: Database manager to use (built from settings if omitted)

    Returns:
        FastAPI: Configured application
    """
    settings = settings or GetSettings()

    if db_manager is None:
        db_manager = DatabaseManager(
            settings.database_url,
            pool_size=settings.db_pool_size,
            ssl_ca=settings.db_ssl_ca,
            bcrypt_rounds=settings.bcrypt_rounds
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        FastAPI lifespan event handler for startup and shutdown
        Manages database initialization and cleanup
        """
        # Startup
        logger.info("GreenPlan Server starting up...")

        if settings.uses_default_secret:
            logger.warning("Using the default development JWT secret - set GREENPLAN_JWT_SECRET in production")

        db_manager.InitializeDatabase()
        logger.info("Server startup complete")

        yield

        # Shutdown
        logger.info("GreenPlan Server shutting down...")
        db_manager.Dispose()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="GreenPlan Server",
        description="Community recycling tracker API",
        version=status.SERVICE_VERSION,
        lifespan=lifespan
    )

    # Shared read-only state for dependencies
    app.state.settings = settings
    app.state.db_manager = db_manager
    app.state.token_codec = TokenCodec.FromSettings(settings)

    # ==================== CORS Middleware ====================

    # Only listed origins; requests without an Origin header are not affected
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(GreenPlanError, HandleApplicationError)
    app.add_exception_handler(RequestValidationError, HandleValidationError)

    # ==================== Include Routers ====================

    app.include_router(status.router)
    app.include_router(auth.router)
    app.include_router(points.router)
    app.include_router(materials.router)
    app.include_router(logs.router)

    return app


def CreateServerApp() -> FastAPI:
    """Entry point for uvicorn's factory mode: configures logging, then builds the app"""
    settings = GetSettings()
    ConfigureLogging(settings)
    return CreateApp(settings)


# ==================== Main Entry Point ====================

def main():
    """
    Run the server using uvicorn
    """
    settings = GetSettings()

    logger.info("Starting GreenPlan Server...")

    uvicorn.run(
        "server:CreateServerApp",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
