"""Application configuration."""

import os
from pathlib import Path

from flask.cli import load_dotenv

# Base directory of the userhub project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# A .env next to the project wins over nothing, never over the real environment.
load_dotenv(BASE_DIR / ".env")


def env_int(name: str, default: int) -> int:
    """Read an integer env var, falling back to *default* when unset or unparsable."""
    raw = os.environ.get(name, "")
    try:
        return int(raw)
    except ValueError:
        return default


class Config:
    SECRET_KEY = os.environ.get(
        "SECRET_KEY",
        "change-me-in-production-" + os.urandom(8).hex(),
    )

    # Listener
    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = env_int("PORT", 5000)

    # Document store.  Leaving MONGODB_URI unset does not block startup;
    # every write then fails with StoreUnavailableError.
    MONGODB_URI = os.environ.get("MONGODB_URI")
    MONGODB_DB_NAME = os.environ.get("MONGODB_DB_NAME", "userhub")
    MONGODB_TIMEOUT_MS = env_int("MONGODB_TIMEOUT_MS", 5000)

    # Prebuilt front-end bundle
    STATIC_DIR = os.environ.get("STATIC_DIR", str(BASE_DIR / "build"))
    INDEX_FILE = os.environ.get("INDEX_FILE", "index.html")

    # Applies to both the HTTP API and the Socket.IO endpoint
    CORS_ALLOWED_ORIGINS = os.environ.get("CORS_ALLOWED_ORIGINS", "*")
