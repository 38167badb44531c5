# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
SQLite by default, verbose app logging.
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env  # explicit for Ruff (F405)

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "testserver"])

CORS_ALLOWED_ORIGINS = env.list(
    "CORS_ALLOWED_ORIGINS", default=["http://localhost:5173", "http://localhost:3000"]
)

CSRF_TRUSTED_ORIGINS = env.list(
    "CSRF_TRUSTED_ORIGINS", default=["http://localhost:5173", "http://localhost:3000"]
)

CORS_ALLOW_CREDENTIALS = True

# Show SQL when DJANGO_LOG_LEVEL=DEBUG
LOGGING["loggers"]["django.db.backends"] = {
    "handlers": ["console"],
    "level": env("DJANGO_DB_LOG_LEVEL", default="WARNING"),
    "propagate": False,
}
