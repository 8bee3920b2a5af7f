"""Shared type aliases and protocols."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sls_multicloud.context import CloudContext

# Continuation handed to middleware; re-enters the rest of the chain
Next = Callable[[], Awaitable[Any]]

Middleware = Callable[["CloudContext", Next], Awaitable[Any]]

# Handlers may be sync or async and may take passthrough runtime args
Handler = Callable[..., Any]

ComposedHandler = Callable[..., Awaitable[Any]]

# Host-facing callable returned by App.use()
Invocable = Callable[..., Any]

Validator = Callable[["CloudContext"], Any]
