"""
Azure Functions example for sls-multicloud.

Demonstrates:
- Per-invocation middleware passed to use()
- Callback-style completion with ctx.done()
- Committing a func.HttpResponse to the $return binding

function.json binds ``req`` (httpTrigger) and ``$return`` (http). The
Python worker only converts ``str`` or ``func.HttpResponse`` for HTTP
outputs, so the provider is given ``response_class=func.HttpResponse``.
"""

import azure.functions as func

from sls_multicloud import App, AzureProvider, ExceptionHandler, RequireMethods

app = App(AzureProvider(response_class=func.HttpResponse))
app.register_middleware(ExceptionHandler())


def greet(ctx):
    """Greet the caller using the ``name`` query parameter."""
    name = ctx.request.query.get("name", "world")
    ctx.done(None, {"body": {"message": f"Hello, {name}!"}, "status": 200})


main = app.use([RequireMethods("GET")], greet)
