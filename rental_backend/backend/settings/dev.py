# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS
- SQLite by default (DATABASE_URL overrides)
- Frontend dev server on :3000 allowed for CORS/CSRF
- Rental service logs at DEBUG unless RENTAL_LOG_LEVEL says otherwise
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "0.0.0.0"])

CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=["http://localhost:3000"])
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=["http://localhost:3000"])
CORS_ALLOW_CREDENTIALS = True

_dev_level = env("RENTAL_LOG_LEVEL", default="DEBUG").strip().upper()
for _name in ("rentals", "orders", "products"):
    LOGGING["loggers"][_name]["level"] = _dev_level
