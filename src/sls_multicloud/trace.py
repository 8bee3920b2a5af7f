"""InvocationTrace and TraceEntry: debug execution recording."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True)
class TraceEntry:
    """Single middleware execution record."""

    name: str
    duration_ms: float
    outcome: Literal["OK", "SHORT_CIRCUIT", "FAILED"]
    reason: str | None = None


@dataclass
class InvocationTrace:
    """Structured record of a single invocation.

    Entries are appended as each layer finishes, so the innermost layer
    (the handler) comes first.
    """

    entries: list[TraceEntry] = field(default_factory=list)
    total_duration_ms: float = 0.0
    outcome: Literal["OK", "ERROR"] = "OK"
    error: BaseException | None = None

    @property
    def names(self) -> list[str]:
        return [entry.name for entry in self.entries]
