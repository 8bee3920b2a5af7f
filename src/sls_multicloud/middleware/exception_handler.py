"""ExceptionHandler: converts errors raised downstream into responses."""

from __future__ import annotations

import logging
from typing import Any

from sls_multicloud._types import Next
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import InvocationAbort, MethodNotAllowed
from sls_multicloud.middleware.base import CloudMiddleware

logger = logging.getLogger(__name__)


class ExceptionHandler(CloudMiddleware):
    """Catches errors from the rest of the chain and sends an error body.

    ``InvocationAbort`` keeps its status and detail; anything else becomes a
    500. Register it first so it wraps every other middleware.
    """

    def __init__(self, *, expose_details: bool = False) -> None:
        self._expose_details = expose_details

    async def __call__(self, ctx: CloudContext, next: Next) -> Any:
        try:
            return await next()
        except InvocationAbort as exc:
            logger.info(
                "Invocation aborted",
                extra={
                    "invocation_id": ctx.invocation_id,
                    "status_code": exc.status_code,
                    "detail": exc.detail,
                },
            )
            headers = {}
            if isinstance(exc, MethodNotAllowed) and exc.allowed:
                headers["Allow"] = ", ".join(exc.allowed)
            self._send_error(ctx, {"error": exc.detail}, exc.status_code, headers)
        except Exception as exc:
            logger.error(
                f"Error handled by exception middleware: {exc}",
                extra={
                    "invocation_id": ctx.invocation_id,
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            body: dict[str, Any] = {"error": "Internal server error"}
            if self._expose_details:
                body["detail"] = str(exc)
                body["type"] = type(exc).__name__
            self._send_error(ctx, body, 500, {})
        return None

    @staticmethod
    def _send_error(
        ctx: CloudContext, body: Any, status: int, headers: dict[str, str]
    ) -> None:
        # A handler may have completed before failing; the error wins
        if ctx.completed:
            ctx.response.send(body, status, headers)
        else:
            ctx.send(body, status, headers)
