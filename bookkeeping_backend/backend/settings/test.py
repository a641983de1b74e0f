# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- In-memory SQLite (fast, isolated)
- Cheap password hashing
- Logging kept quiet unless LOG_LEVEL overrides it
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env  # explicit for Ruff (F405)

DEBUG = False

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": (),
}

_test_log_level = env("LOG_LEVEL", default="WARNING")
LOGGING["root"]["level"] = _test_log_level
for _logger in LOGGING["loggers"].values():
    _logger["level"] = _test_log_level
