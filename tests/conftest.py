"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any application import so that the
module-level settings object is built from them.
"""

import os

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("LLM_PROVIDER", "anthropic")
os.environ.setdefault("LLM_MODEL", "claude-sonnet-4-20250514")
os.environ.setdefault("LLM_API_KEY", "test-key-123")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest

from app.api.routes import analyze as analyze_routes
from app.core.rate_limit import reset_rate_limiter


@pytest.fixture(autouse=True)
def _fresh_process_state():
    """Give every test an empty limiter and a fresh analysis service."""
    reset_rate_limiter()
    analyze_routes._analysis_service = None
    yield
    reset_rate_limiter()
    analyze_routes._analysis_service = None
