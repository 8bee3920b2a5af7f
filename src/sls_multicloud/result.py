"""Handler result variants and normalization of raw return values.

Handlers signal intent explicitly by returning one of:

- ``Value(body)``: body committed with status 200
- ``Reply(body, status, headers)``: full response fields
- ``Deferred()``: completion arrives later through ``ctx.send`` / ``ctx.done``

Raw return values are mapped onto these variants by ``normalize_result``.
The mapping for raw values is best-effort duck typing kept for handlers
written against the shape convention: anything exposing a ``body`` key or
attribute is treated as response fields rather than as a literal body.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Value:
    """Plain body committed with the default success status."""

    body: Any


@dataclass(frozen=True)
class Reply:
    """Explicit response fields."""

    body: Any = None
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Deferred:
    """Completion is signalled out of band."""


HandlerResult = Value | Reply | Deferred


def reply(
    body: Any = None, status: int = 200, headers: Mapping[str, str] | None = None
) -> Reply:
    return Reply(body=body, status=status, headers=dict(headers or {}))


def deferred() -> Deferred:
    return Deferred()


def normalize_result(value: Any) -> HandlerResult | None:
    """Map a resolved handler return value onto a ``HandlerResult``.

    ``None`` maps to ``None``: the handler committed its own response.
    """
    if value is None:
        return None
    if isinstance(value, (Value, Reply, Deferred)):
        return value
    shaped = _as_reply(value)
    if shaped is not None:
        return shaped
    return Value(value)


def _as_reply(value: Any) -> Reply | None:
    if isinstance(value, Mapping):
        if "body" not in value:
            return None
        status = value.get("status")
        return Reply(
            body=value["body"],
            status=200 if status is None else int(status),
            headers=dict(value.get("headers") or {}),
        )

    # Response-like objects, e.g. a CloudResponse from another context
    if isinstance(value, (str, bytes, list, tuple, int, float, bool)):
        return None
    if not hasattr(value, "body"):
        return None
    status = getattr(value, "status", None)
    headers = getattr(value, "headers", None)
    return Reply(
        body=value.body,
        status=200 if status is None else int(status),
        headers=dict(headers or {}),
    )
