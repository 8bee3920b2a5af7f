"""Built-in middleware."""

from sls_multicloud.middleware.base import CloudMiddleware
from sls_multicloud.middleware.exception_handler import ExceptionHandler
from sls_multicloud.middleware.performance import Performance
from sls_multicloud.middleware.validation import RequireMethods, Validation

__all__ = [
    "CloudMiddleware",
    "ExceptionHandler",
    "Performance",
    "RequireMethods",
    "Validation",
]
