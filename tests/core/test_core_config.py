# tests/core/test_core_config.py
"""
core/config.py 단위 테스트

get_version, load_settings 테스트.
"""

import pytest

from core.config import (
    DEFAULT_ERROR_TTL_SECONDS,
    DEFAULT_LOG_LEVEL,
    Settings,
    get_version,
    load_settings,
)
from core.exceptions import ConfigError


class TestGetVersion:
    """get_version 테스트"""

    def test_version_format(self):
        """x.y.z 형식"""
        parts = get_version().split(".")
        assert len(parts) >= 2, "버전은 최소 x.y 형식이어야 함"
        for part in parts:
            assert part.isdigit(), f"버전 파트는 숫자여야 함: {part}"

    def test_missing_version_file(self, tmp_path, monkeypatch):
        import core.config

        monkeypatch.setattr(core.config, "_VERSION_FILE", tmp_path / "missing.txt")
        assert get_version() == "0.0.0"


class TestLoadSettings:
    """load_settings 테스트"""

    def test_defaults(self):
        settings = load_settings({})

        assert settings == Settings()
        assert settings.cache_path is None
        assert settings.error_ttl_seconds == DEFAULT_ERROR_TTL_SECONDS == 60
        assert settings.log_level == DEFAULT_LOG_LEVEL

    def test_from_environ(self):
        settings = load_settings(
            {
                "CT_CACHE_PATH": "/tmp/ct/cache.json",
                "CT_ERROR_TTL_SECONDS": "120",
                "CT_LOG_LEVEL": "debug",
                "CT_CONNECT_TIMEOUT": "5",
                "CT_READ_TIMEOUT": "15",
                "CT_MAX_ATTEMPTS": "1",
            }
        )

        assert settings.cache_path == "/tmp/ct/cache.json"
        assert settings.error_ttl_seconds == 120
        assert settings.log_level == "DEBUG"
        assert settings.connect_timeout == 5
        assert settings.read_timeout == 15
        assert settings.max_attempts == 1

    def test_blank_values_use_defaults(self):
        settings = load_settings({"CT_ERROR_TTL_SECONDS": " ", "CT_CACHE_PATH": ""})

        assert settings.error_ttl_seconds == 60
        assert settings.cache_path is None

    def test_os_environ_default(self, monkeypatch):
        monkeypatch.setenv("CT_MAX_ATTEMPTS", "7")
        assert load_settings().max_attempts == 7

    def test_non_integer(self):
        with pytest.raises(ConfigError) as exc_info:
            load_settings({"CT_ERROR_TTL_SECONDS": "soon"})
        assert exc_info.value.config_key == "CT_ERROR_TTL_SECONDS"

    def test_below_minimum(self):
        with pytest.raises(ConfigError):
            load_settings({"CT_ERROR_TTL_SECONDS": "0"})

    def test_unknown_log_level(self):
        with pytest.raises(ConfigError) as exc_info:
            load_settings({"CT_LOG_LEVEL": "LOUD"})
        assert "LOUD" in str(exc_info.value)
