"""sls-multicloud - run one function handler on multiple serverless runtimes."""

from sls_multicloud.app import App
from sls_multicloud.composer import compose
from sls_multicloud.config import Settings
from sls_multicloud.context import CloudContext
from sls_multicloud.exceptions import (
    BadRequest,
    CloudException,
    CompletionTimeout,
    ContextError,
    Forbidden,
    InvocationAbort,
    MethodNotAllowed,
    NotFound,
    ProviderNotFound,
    Unauthorized,
)
from sls_multicloud.headers import StringParams
from sls_multicloud.hooks import AfterInvocation, BeforeInvocation, InvocationHook
from sls_multicloud.logging_utils import configure_logging, sanitize_headers
from sls_multicloud.middleware import (
    CloudMiddleware,
    ExceptionHandler,
    Performance,
    RequireMethods,
    Validation,
)
from sls_multicloud.providers import (
    AwsProvider,
    AzureProvider,
    LocalProvider,
    MemoryProvider,
    Provider,
    add_function_route,
    get_provider,
    register_provider,
)
from sls_multicloud.request import CloudRequest
from sls_multicloud.response import CloudResponse, ResponsePayload
from sls_multicloud.result import (
    Deferred,
    HandlerResult,
    Reply,
    Value,
    deferred,
    normalize_result,
    reply,
)
from sls_multicloud.trace import InvocationTrace, TraceEntry
from sls_multicloud.unwrap import wrap_handler

__all__ = [
    "AfterInvocation",
    "App",
    "AwsProvider",
    "AzureProvider",
    "BadRequest",
    "BeforeInvocation",
    "CloudContext",
    "CloudException",
    "CloudMiddleware",
    "CloudRequest",
    "CloudResponse",
    "CompletionTimeout",
    "ContextError",
    "Deferred",
    "ExceptionHandler",
    "Forbidden",
    "HandlerResult",
    "InvocationAbort",
    "InvocationHook",
    "InvocationTrace",
    "LocalProvider",
    "MemoryProvider",
    "MethodNotAllowed",
    "NotFound",
    "Performance",
    "Provider",
    "ProviderNotFound",
    "Reply",
    "RequireMethods",
    "ResponsePayload",
    "Settings",
    "StringParams",
    "TraceEntry",
    "Unauthorized",
    "Validation",
    "Value",
    "add_function_route",
    "compose",
    "configure_logging",
    "deferred",
    "get_provider",
    "normalize_result",
    "register_provider",
    "reply",
    "sanitize_headers",
    "wrap_handler",
]
