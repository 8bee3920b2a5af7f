"""CloudRequest: provider-neutral view of the incoming request."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from sls_multicloud.headers import StringParams


@dataclass
class CloudRequest:
    """Read-mostly request data extracted by a provider adapter."""

    method: str = "GET"
    path: str = "/"
    headers: StringParams = field(default_factory=StringParams)
    query: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    body: Any = None
    raw_body: bytes | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, StringParams):
            self.headers = StringParams(self.headers)

    def json(self) -> Any:
        """Decode the body as JSON, accepting already-decoded bodies."""
        if isinstance(self.body, (dict, list)):
            return self.body
        payload = self.raw_body if self.raw_body is not None else self.body
        if payload in (None, b"", ""):
            return None
        return json.loads(payload)
