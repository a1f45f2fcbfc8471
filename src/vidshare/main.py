"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from vidshare.api.router import dev_router, router as otp_router
from vidshare.config import Settings, settings
from vidshare.database.engine import init_db, make_engine, make_session_factory
from vidshare.otp.dev_probe import DevelopmentCodeProbe
from vidshare.otp.generator import NumericCodeGenerator
from vidshare.otp.service import OTPService
from vidshare.otp.sql_store import SqlOTPStore
from vidshare.otp.store import InMemoryOTPStore, OTPStore
from vidshare.services.notifier import build_notifier

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def build_store(config: Settings, engine: AsyncEngine | None = None) -> OTPStore:
    """Select the OTP store backend named in the configuration.

    The database backend uses *engine* when given, else one built from
    ``config.database_url``.
    """
    if config.otp_store_backend == "memory":
        return InMemoryOTPStore()
    if config.otp_store_backend == "database":
        return SqlOTPStore(make_session_factory(engine or make_engine(config)))
    raise ValueError(f"Unknown OTP store backend: {config.otp_store_backend!r}")


def build_otp_service(config: Settings, engine: AsyncEngine | None = None) -> OTPService:
    """Wire the OTP service from configuration."""
    probe = DevelopmentCodeProbe() if config.development_mode else None
    return OTPService(
        store=build_store(config, engine),
        notifier=build_notifier(config),
        generator=NumericCodeGenerator(config.otp_length),
        ttl=timedelta(seconds=config.otp_ttl_seconds),
        probe=probe,
    )


def create_app(config: Settings | None = None) -> FastAPI:
    config = config or settings
    engine = make_engine(config) if config.otp_store_backend == "database" else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup / shutdown lifecycle hook."""
        logger.info("Starting %s …", config.app_name)
        if engine is not None:
            await init_db(engine)
            logger.info("Database initialised")
        yield
        logger.info("Shutting down %s …", config.app_name)
        await app.state.otp_service.drain()
        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        title=config.app_name,
        description="Mobile-number OTP verification for vidshare registration",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.otp_service = build_otp_service(config, engine)

    app.include_router(otp_router)
    if config.development_mode:
        logger.warning("Development mode on — latest OTP is exposed over HTTP")
        app.include_router(dev_router)

    @app.get("/api/health")
    async def health_check():
        """Simple liveness probe."""
        return {"status": "ok", "app": config.app_name}

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (``vidshare`` console script)."""
    import uvicorn

    uvicorn.run(
        "vidshare.main:app",
        host="127.0.0.1",
        port=8000,
        log_level="debug" if settings.debug else "info",
    )
