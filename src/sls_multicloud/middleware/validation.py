"""Validation middleware: rejects requests before the handler runs."""

from __future__ import annotations

import inspect
from typing import Any

from sls_multicloud._types import Next, Validator
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import BadRequest, InvocationAbort, MethodNotAllowed
from sls_multicloud.middleware.base import CloudMiddleware


class Validation(CloudMiddleware):
    """Runs ``validator(ctx)`` before the rest of the chain.

    Returning ``False`` or raising ``ValueError``, ``TypeError`` or
    ``KeyError`` aborts with 400. The validator may be sync or async;
    ``InvocationAbort`` raised by it propagates unchanged.
    """

    def __init__(self, validator: Validator, *, detail: str = "Invalid request") -> None:
        self._validator = validator
        self._detail = detail

    async def __call__(self, ctx: CloudContext, next: Next) -> Any:
        try:
            outcome = self._validator(ctx)
            if inspect.isawaitable(outcome):
                outcome = await outcome
        except InvocationAbort:
            raise
        except (ValueError, TypeError, KeyError) as exc:
            raise BadRequest(str(exc) or self._detail) from exc
        if outcome is False:
            raise BadRequest(self._detail)
        return await next()


class RequireMethods(CloudMiddleware):
    """Aborts with 405 unless the request method is one of ``methods``."""

    def __init__(self, *methods: str) -> None:
        self._methods = tuple(m.upper() for m in methods)

    async def __call__(self, ctx: CloudContext, next: Next) -> Any:
        if ctx.request.method.upper() not in self._methods:
            raise MethodNotAllowed(
                f"Method {ctx.request.method} not allowed", allowed=self._methods
            )
        return await next()
