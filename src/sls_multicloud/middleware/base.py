"""CloudMiddleware abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from sls_multicloud._types import Next
from sls_multicloud.context import CloudContext


class CloudMiddleware(ABC):
    """Base for class-based middleware.

    Plain ``async def mw(ctx, next)`` functions work equally well; subclasses
    are useful when middleware carries configuration.
    """

    @abstractmethod
    async def __call__(self, ctx: CloudContext, next: Next) -> Any: ...
