import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktrack import config
from tasktrack.database import init_models
from tasktrack.errors import register_error_handlers
from tasktrack.logging_setup import setup_logging
from tasktrack.routers import auth, tasks
from tasktrack.utils.rate_limit import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("TaskTrack API started (env=%s)", config.APP_ENV)
    yield


def create_app() -> FastAPI:
    # no signing secret, no server
    config.require_secret()
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(title="TaskTrack API", lifespan=lifespan)
    app.state.auth_limiter = FixedWindowRateLimiter(config.AUTH_RATE_LIMIT, config.AUTH_RATE_WINDOW_SECONDS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.CORS_ORIGIN],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(tasks.router)

    @app.get("/health", tags=["health"])
    async def health():
        return {
            "status": "OK",
            "message": "Server is running",
            "timestamp": datetime.now(UTC).isoformat(),
        }

    register_error_handlers(app)
    return app


app = create_app()
