"""Provider adapters for host runtimes.

Each provider turns the raw arguments a host passes to a function into a
CloudContext, commits the response back in the host's format, and adapts
the App's async invocable to the signature the host calls.
"""

from sls_multicloud.providers.aws import AwsContext, AwsProvider, AwsResponse
from sls_multicloud.providers.azure import AzureContext, AzureProvider, AzureResponse
from sls_multicloud.providers.base import (
    Provider,
    available_providers,
    get_provider,
    register_provider,
)
from sls_multicloud.providers.local import (
    LocalContext,
    LocalProvider,
    LocalResponse,
    add_function_route,
)
from sls_multicloud.providers.memory import (
    MemoryContext,
    MemoryProvider,
    MemoryResponse,
)

register_provider(AwsProvider.name, AwsProvider)
register_provider(AzureProvider.name, AzureProvider)
register_provider(LocalProvider.name, LocalProvider)
register_provider(MemoryProvider.name, MemoryProvider)

__all__ = [
    "AwsContext",
    "AwsProvider",
    "AwsResponse",
    "AzureContext",
    "AzureProvider",
    "AzureResponse",
    "LocalContext",
    "LocalProvider",
    "LocalResponse",
    "MemoryContext",
    "MemoryProvider",
    "MemoryResponse",
    "Provider",
    "add_function_route",
    "available_providers",
    "get_provider",
    "register_provider",
]
