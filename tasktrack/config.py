import os

SECRET_KEY = os.environ.get("JWT_SECRET")
ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
# 7 days
ACCESS_TOKEN_EXPIRE_MINUTES = float(os.environ.get("ACCESS_TOKEN_EXPIRE_MINUTES", 7 * 24 * 60))

# Default to local SQLite for dev/tests; override via env in Docker/Prod
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite+aiosqlite:///./tasktrack.db")

APP_ENV = os.environ.get("APP_ENV", "production")
CORS_ORIGIN = os.environ.get("CORS_ORIGIN", "http://localhost:5173")

AUTH_RATE_LIMIT = int(os.environ.get("AUTH_RATE_LIMIT", 5))
AUTH_RATE_WINDOW_SECONDS = float(os.environ.get("AUTH_RATE_WINDOW_SECONDS", 15 * 60))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", 8000))


def is_development() -> bool:
    return APP_ENV == "development"


def require_secret() -> str:
    """Return the signing secret or refuse to continue without one."""
    if not SECRET_KEY:
        raise RuntimeError("JWT_SECRET is not set; refusing to start without a token signing secret")
    return SECRET_KEY
