# app/main.py - Application factory and entrypoint

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine

from app.config import Settings
from app.core.logging import configure_logging
from app.db.database import create_db_engine, create_session_factory, init_db
from app.routers.subscription import router as subscription_router

logger = logging.getLogger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        msg = error.get("msg", "invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        messages.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(messages)


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the FastAPI app.

    ``settings`` defaults to ``Settings.from_env()``, which refuses to start
    when a required variable is missing. ``engine`` can be injected (tests use
    an in-memory SQLite engine); otherwise one is built from the settings.
    """
    if engine is None:
        settings = settings or Settings.from_env()
        engine = create_db_engine(settings)

    configure_logging(settings.log_level if settings else "INFO")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting subscription service...")
        init_db(engine)
        try:
            yield
        finally:
            logger.info("Shutdown signal received, closing database connections")
            engine.dispose()
            logger.info("Server exiting gracefully")

    app = FastAPI(title="Subscriptions API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _format_validation_errors(exc)},
        )

    app.include_router(subscription_router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.app_host, port=settings.app_port)
