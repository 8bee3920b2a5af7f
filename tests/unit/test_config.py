"""Tests for Settings."""

from __future__ import annotations

import pytest

from sls_multicloud.config import Settings


class TestSettingsDefaults:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.provider is None
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.log_json is True
        assert settings.completion_timeout is None

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Settings().debug = True  # type: ignore[misc]

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            Settings(log_level="LOUD")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValueError):
            Settings(completion_timeout=0)


class TestSettingsFromEnv:
    def test_empty_environment(self) -> None:
        assert Settings.from_env({}) == Settings()

    def test_reads_all_variables(self) -> None:
        settings = Settings.from_env(
            {
                "SLS_PROVIDER": "aws",
                "SLS_DEBUG": "true",
                "SLS_LOG_LEVEL": "debug",
                "SLS_LOG_JSON": "0",
                "SLS_COMPLETION_TIMEOUT": "2.5",
            }
        )
        assert settings == Settings(
            provider="aws",
            debug=True,
            log_level="DEBUG",
            log_json=False,
            completion_timeout=2.5,
        )

    @pytest.mark.parametrize("raw", ["1", "yes", "ON", " True "])
    def test_truthy_values(self, raw: str) -> None:
        assert Settings.from_env({"SLS_DEBUG": raw}).debug is True

    @pytest.mark.parametrize("raw", ["0", "no", "off", "false", ""])
    def test_falsy_values(self, raw: str) -> None:
        assert Settings.from_env({"SLS_DEBUG": raw}).debug is False

    def test_invalid_bool(self) -> None:
        with pytest.raises(ValueError, match="SLS_DEBUG"):
            Settings.from_env({"SLS_DEBUG": "maybe"})

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="SLS_COMPLETION_TIMEOUT"):
            Settings.from_env({"SLS_COMPLETION_TIMEOUT": "soon"})

    def test_empty_provider_is_none(self) -> None:
        assert Settings.from_env({"SLS_PROVIDER": ""}).provider is None
