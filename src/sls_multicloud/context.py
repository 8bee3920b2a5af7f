"""CloudContext: per-invocation request/response state container."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Mapping
from typing import Any, ClassVar

from sls_multicloud.exceptions import CloudException, CompletionTimeout
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse
from sls_multicloud.result import Deferred, Reply, Value, normalize_result

logger = logging.getLogger(__name__)


class CloudContext:
    """State for a single invocation, built by a provider from raw runtime args.

    A context is created per call and never reused. Completion is tracked
    with a ``completed`` flag: the first of ``send``/``done`` wins and any
    later completion attempt is ignored.
    """

    provider: ClassVar[str] = "unknown"

    def __init__(
        self,
        runtime: tuple[Any, ...],
        request: CloudRequest,
        response: CloudResponse,
        *,
        invocation_id: str | None = None,
    ) -> None:
        self.runtime = runtime
        self.request = request
        self.response = response
        self.invocation_id = invocation_id or uuid.uuid4().hex
        self.state: dict[str, Any] = {}
        self.error: BaseException | None = None
        self._completed = False
        self._completion: asyncio.Event | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def completed(self) -> bool:
        return self._completed

    @property
    def flushed(self) -> bool:
        return self.response.flushed

    def send(
        self,
        body: Any = None,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Commit response fields and mark the invocation complete."""
        if self._completed:
            logger.debug(
                "Ignoring send on completed context",
                extra={"invocation_id": self.invocation_id},
            )
            return
        self.response.send(body, status, headers)
        self._mark_completed()

    def done(self, error: Any = None, result: Any = None) -> None:
        """Callback-style completion signal.

        An error is re-raised to the chain by ``wait_for_completion``; a
        result is committed the same way as a handler return value.
        """
        if self._completed:
            logger.debug(
                "Ignoring done on completed context",
                extra={"invocation_id": self.invocation_id},
            )
            return
        if error is not None:
            if not isinstance(error, BaseException):
                error = CloudException(str(error))
            self.error = error
            self._mark_completed()
            return
        self.commit(normalize_result(result))
        self._mark_completed()

    def commit(self, result: Value | Reply | Deferred | None) -> None:
        """Apply a normalized handler result unless already completed."""
        if result is None or isinstance(result, Deferred):
            return
        if isinstance(result, Reply):
            self.send(result.body, result.status, result.headers)
        else:
            self.send(result.body, 200)

    async def wait_for_completion(self, timeout: float | None = None) -> None:
        """Wait until ``send`` or ``done`` is called, from any thread."""
        if not self._completed:
            # Loop before event: a completing thread reads them in reverse
            self._loop = asyncio.get_running_loop()
            event = self._event()
            if not self._completed:
                try:
                    await asyncio.wait_for(event.wait(), timeout)
                except TimeoutError as exc:
                    raise CompletionTimeout(timeout or 0.0) from exc
        if self.error is not None:
            raise self.error

    def flush(self) -> Any:
        return self.response.flush()

    def _event(self) -> asyncio.Event:
        if self._completion is None:
            self._completion = asyncio.Event()
        return self._completion

    def _mark_completed(self) -> None:
        self._completed = True
        event = self._completion
        if event is None:
            return
        loop = self._loop
        if loop is None or _running_loop() is loop:
            event.set()
        elif not loop.is_closed():
            loop.call_soon_threadsafe(event.set)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None
