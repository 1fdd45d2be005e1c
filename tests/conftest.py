"""Pytest configuration.

The environment is pinned before anything under ``src.user_api`` is imported,
because configuration is read once at import time.
"""

import os

os.environ["APP_ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_FILE"] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from tests.fixtures import *  # noqa: E402,F401,F403
