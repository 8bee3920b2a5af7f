"""Performance: times the downstream chain."""

from __future__ import annotations

import logging
import time
from typing import Any

from sls_multicloud._types import Next
from sls_multicloud.context import CloudContext
from sls_multicloud.middleware.base import CloudMiddleware

logger = logging.getLogger(__name__)


class Performance(CloudMiddleware):
    """Logs how long the rest of the chain took and stamps it on the response."""

    def __init__(self, *, header: str | None = "x-sls-duration-ms") -> None:
        self._header = header

    async def __call__(self, ctx: CloudContext, next: Next) -> Any:
        start = time.perf_counter()
        try:
            return await next()
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            ctx.state["duration_ms"] = elapsed
            if self._header is not None and not ctx.flushed:
                ctx.response.headers[self._header] = f"{elapsed:.3f}"
            logger.info(
                "Invocation timing",
                extra={"invocation_id": ctx.invocation_id, "duration_ms": elapsed},
            )
