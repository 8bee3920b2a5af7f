"""Settings: runtime configuration read from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class Settings:
    """Configuration shared by every invocation of one App.

    Attributes:
        provider: Name of the registered provider used when the App is not
            given one explicitly.
        debug: Record an ``InvocationTrace`` in ``ctx.state["trace"]``.
        log_level: Level passed to ``configure_logging``.
        log_json: Emit JSON log records instead of plain text.
        completion_timeout: Seconds to wait for callback-style handlers,
            ``None`` waits until the host runtime times out.
    """

    provider: str | None = None
    debug: bool = False
    log_level: str = "INFO"
    log_json: bool = True
    completion_timeout: float | None = None

    def __post_init__(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level!r}")
        if self.completion_timeout is not None and self.completion_timeout <= 0:
            raise ValueError("completion_timeout must be positive")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``SLS_*`` environment variables."""
        env = os.environ if environ is None else environ

        timeout_raw = env.get("SLS_COMPLETION_TIMEOUT", "").strip()
        try:
            timeout = float(timeout_raw) if timeout_raw else None
        except ValueError as e:
            raise ValueError(
                f"Invalid SLS_COMPLETION_TIMEOUT: {timeout_raw!r}"
            ) from e

        settings = cls(
            provider=env.get("SLS_PROVIDER") or None,
            debug=_parse_bool(env, "SLS_DEBUG", False),
            log_level=env.get("SLS_LOG_LEVEL", "INFO").upper(),
            log_json=_parse_bool(env, "SLS_LOG_JSON", True),
            completion_timeout=timeout,
        )
        logging.getLogger(__name__).debug(
            "Loaded settings from environment", extra={"provider": settings.provider}
        )
        return settings


def _parse_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean for {key}: {raw!r}")
