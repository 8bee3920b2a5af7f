"""compose(): folds middleware and a terminal handler into one callable."""

from __future__ import annotations

import inspect
import time
from collections.abc import Sequence
from typing import Any

from sls_multicloud._types import ComposedHandler, Middleware
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import ContextError
from sls_multicloud.trace import InvocationTrace, TraceEntry


def compose(
    middlewares: Sequence[Middleware],
    handler: ComposedHandler,
    *,
    trace: InvocationTrace | None = None,
) -> ComposedHandler:
    """Build the chain right-to-left around ``handler``.

    Calling the result with ``(ctx, *args)`` runs the first middleware, whose
    ``next()`` runs the second, and so on down to ``handler(ctx, *args)``.
    A middleware that never calls ``next()`` stops the chain there.
    """
    if not middlewares and trace is None:
        return handler

    composed = handler if trace is None else _traced(_name_of(handler), handler, trace)
    for middleware in reversed(middlewares):
        composed = _layer(middleware, composed, trace)
    return composed


def _layer(
    middleware: Middleware,
    downstream: ComposedHandler,
    trace: InvocationTrace | None,
) -> ComposedHandler:
    name = _name_of(middleware)

    async def layer(ctx: CloudContext, *args: Any) -> Any:
        called = False

        async def next_() -> Any:
            nonlocal called
            if called:
                raise ContextError(f"next() called multiple times in {name}")
            called = True
            return await downstream(ctx, *args)

        if trace is None:
            return await _maybe_await(middleware(ctx, next_))

        start = time.perf_counter()
        try:
            result = await _maybe_await(middleware(ctx, next_))
        except Exception as exc:
            trace.entries.append(
                TraceEntry(
                    name=name,
                    duration_ms=(time.perf_counter() - start) * 1000,
                    outcome="FAILED",
                    reason=str(exc),
                )
            )
            raise
        trace.entries.append(
            TraceEntry(
                name=name,
                duration_ms=(time.perf_counter() - start) * 1000,
                outcome="OK" if called else "SHORT_CIRCUIT",
            )
        )
        return result

    return layer


def _traced(
    name: str, handler: ComposedHandler, trace: InvocationTrace
) -> ComposedHandler:
    async def traced(ctx: CloudContext, *args: Any) -> Any:
        start = time.perf_counter()
        try:
            result = await _maybe_await(handler(ctx, *args))
        except Exception as exc:
            trace.entries.append(
                TraceEntry(
                    name=name,
                    duration_ms=(time.perf_counter() - start) * 1000,
                    outcome="FAILED",
                    reason=str(exc),
                )
            )
            raise
        trace.entries.append(
            TraceEntry(
                name=name,
                duration_ms=(time.perf_counter() - start) * 1000,
                outcome="OK",
            )
        )
        return result

    return traced


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _name_of(func: Any) -> str:
    return getattr(func, "__name__", None) or type(func).__name__
