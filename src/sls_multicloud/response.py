"""CloudResponse: response builder with a single guaranteed commit."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from sls_multicloud.exceptions import ContextError
from sls_multicloud.headers import StringParams

logger = logging.getLogger(__name__)

PROVIDER_HEADER = "x-sls-cloudprovider"

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class ResponsePayload:
    """Snapshot of response state at flush time."""

    status: int
    body: Any
    headers: dict[str, str] = field(default_factory=dict)

    def serialized_body(self) -> str | bytes | None:
        """Render structured bodies as JSON text for hosts that need strings."""
        if self.body is None or isinstance(self.body, (str, bytes)):
            return self.body
        return json.dumps(self.body, default=str)


def infer_content_type(body: Any) -> str | None:
    if isinstance(body, (Mapping, list)):
        return JSON_CONTENT_TYPE
    if isinstance(body, str):
        return TEXT_CONTENT_TYPE
    return None


class CloudResponse(ABC):
    """Accumulates body, status and headers until ``flush()`` commits them.

    Providers implement ``_commit`` to hand the payload to the host runtime.
    ``flush`` runs ``_commit`` at most once; later calls return the output of
    the first commit.
    """

    provider: ClassVar[str] = "unknown"

    def __init__(self, headers: Mapping[str, Any] | None = None) -> None:
        self._body: Any = None
        self._status: int = 200
        self._writes = 0
        self.headers = StringParams(headers)
        self.headers[PROVIDER_HEADER] = self.provider
        self._inferred_content_type: str | None = None
        self._flushed = False
        self._output: Any = None

    @property
    def body(self) -> Any:
        return self._body

    @body.setter
    def body(self, value: Any) -> None:
        self._body = value
        self._writes += 1

    @property
    def status(self) -> int:
        return self._status

    @status.setter
    def status(self, value: int) -> None:
        self._status = value
        self._writes += 1

    @property
    def writes(self) -> int:
        """Number of body or status assignments since construction."""
        return self._writes

    @property
    def flushed(self) -> bool:
        return self._flushed

    @property
    def output(self) -> Any:
        """Host-native value produced by the commit, if any."""
        return self._output

    def set_body(self, body: Any) -> None:
        self._ensure_open()
        self.body = body

    def set_status(self, status: int) -> None:
        self._ensure_open()
        self.status = int(status)

    def set_header(self, name: str, value: str) -> None:
        self._ensure_open()
        self.headers[name] = value

    def send(
        self,
        body: Any,
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """Set body and status, inferring Content-Type unless set explicitly."""
        self._ensure_open()
        for name, value in (headers or {}).items():
            self.set_header(name, value)
        self.body = body
        self.status = int(status)

        current = self.headers.get("Content-Type")
        if current is not None and current != self._inferred_content_type:
            return
        content_type = infer_content_type(body)
        if content_type is not None:
            self.headers["Content-Type"] = content_type
            self._inferred_content_type = content_type

    def payload(self) -> ResponsePayload:
        """Snapshot the response, inferring Content-Type from the final body.

        An explicit Content-Type header is kept; one inferred by an earlier
        ``send`` is recomputed because the body may have changed since.
        """
        headers = self.headers.copy()
        current = headers.get("Content-Type")
        if current is None or current == self._inferred_content_type:
            content_type = infer_content_type(self.body)
            if content_type is not None:
                headers["Content-Type"] = content_type
        return ResponsePayload(
            status=self.status, body=self.body, headers=headers.to_dict()
        )

    def flush(self) -> Any:
        if self._flushed:
            logger.debug("Response already flushed, ignoring repeated flush")
            return self._output
        self._flushed = True
        payload = self.payload()
        logger.debug(
            "Flushing response",
            extra={"provider": self.provider, "status_code": payload.status},
        )
        self._output = self._commit(payload)
        return self._output

    @abstractmethod
    def _commit(self, payload: ResponsePayload) -> Any: ...

    def _ensure_open(self) -> None:
        if self._flushed:
            raise ContextError("Response has already been flushed")
