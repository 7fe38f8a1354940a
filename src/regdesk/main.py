#!/usr/bin/env python3
"""regdesk - Registration admin API"""

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from starlette.exceptions import HTTPException as StarletteHTTPException

from regdesk.config import config
from regdesk.logging_config import get_logger, setup_logging
from regdesk.models.database import create_db_engine, init_db
from regdesk.routers.dashboard import router as dashboard_router
from regdesk.routers.export import router as export_router
from regdesk.routers.files import router as files_router
from regdesk.routers.health import health
from regdesk.routers.registrations import router as registrations_router

# Configure logging (INFO -> stdout, WARNING/ERROR -> stderr)
setup_logging()
logger = get_logger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def create_app(
    database_url: Optional[str] = None, engine: Optional[Engine] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    The database engine is created when the application starts (or the given
    engine is used) and disposed when it shuts down.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_engine = engine is None
        app.state.engine = engine or create_db_engine(
            database_url or config["database_url"]
        )
        if config["auto_create_tables"]:
            init_db(app.state.engine)
        logger.info("Database engine ready")
        try:
            yield
        finally:
            if owns_engine:
                app.state.engine.dispose()
                logger.info("Database engine disposed")

    app = FastAPI(
        title="regdesk",
        description="Registration admin API - manage training registrations, "
        "export reports and serve dashboard aggregates",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["cors_origins"],
        allow_credentials="*" not in config["cors_origins"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": _validation_message(exc)},
        )

    app.include_router(health)
    app.include_router(registrations_router)
    app.include_router(export_router)
    app.include_router(files_router)
    app.include_router(dashboard_router)

    return app


app = create_app()


if __name__ == "__main__":
    port = config.get("port")
    logger.info(f"Starting regdesk on 0.0.0.0:{port}")
    logger.info(f"Health check available at /health")

    try:
        uvicorn.run(
            app, host="0.0.0.0", port=port, log_level=config["log_level"].lower()
        )
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        raise
