"""wrap_handler(): turns any handler return convention into a response commit."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from sls_multicloud._types import ComposedHandler, Handler
from sls_multicloud.context import CloudContext
from sls_multicloud.result import Deferred, normalize_result

logger = logging.getLogger(__name__)


def wrap_handler(
    handler: Handler, *, completion_timeout: float | None = None
) -> ComposedHandler:
    """Wrap ``handler`` as the terminal link of a middleware chain.

    Return values are resolved in this order:

    1. awaitables are awaited; failures propagate without a commit
    2. ``Deferred``, or ``None`` from a plain function that neither completed
       the context nor wrote the response body or status, waits for
       ``ctx.send`` / ``ctx.done``
    3. ``None`` otherwise means the handler committed on its own
    4. response-shaped values commit their fields, anything else is the body

    A context that already completed keeps its response.
    """
    arity = _positional_arity(handler)

    async def terminal(ctx: CloudContext, *args: Any) -> Any:
        call_args = (ctx, *args)
        writes = ctx.response.writes
        value = handler(*(call_args if arity is None else call_args[:arity]))
        awaited = inspect.isawaitable(value)
        if awaited:
            value = await value

        result = normalize_result(value)
        if isinstance(result, Deferred) or (
            result is None and not awaited and not _wrote_response(ctx, writes)
        ):
            await ctx.wait_for_completion(completion_timeout)
            return value

        if ctx.error is not None:
            raise ctx.error
        if result is not None:
            if ctx.completed:
                logger.debug(
                    "Handler returned a value after completing, keeping first response",
                    extra={"invocation_id": ctx.invocation_id},
                )
            else:
                ctx.commit(result)
        return value

    terminal.__name__ = getattr(handler, "__name__", type(handler).__name__)
    return terminal


def _wrote_response(ctx: CloudContext, writes_before: int) -> bool:
    return ctx.response.flushed or ctx.response.writes != writes_before


def _positional_arity(handler: Handler) -> int | None:
    """Number of positional args the handler accepts, ``None`` if unbounded.

    The context is always the first argument; runtime args follow it.
    """
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return None

    positional = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return None
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            positional += 1
    return positional
