"""
Tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from redtask.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("REDTASK_REDIS_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.redis_url == "redis://127.0.0.1:6379/0"
    assert settings.log_level is None


def test_env_override(monkeypatch):
    monkeypatch.setenv("REDTASK_REDIS_URL", "redis://cache:6380/2")
    get_settings.cache_clear()
    try:
        assert get_settings().redis_url == "redis://cache:6380/2"
    finally:
        get_settings.cache_clear()


def test_rejects_non_redis_url():
    with pytest.raises(ValidationError):
        Settings(redis_url="postgres://localhost/db", _env_file=None)
