"""Demo gateway for trying out the FaaS gateway client.

This FastAPI application serves a function listing the way a FaaS gateway
does, plus a few endpoints that redirect, so the client's redirect loop can
be exercised end to end.

Run with: python demo_app.py
Then list with:

    import asyncio
    from faas_gateway_client import GatewayClient, GatewayConfig

    async def main():
        config = GatewayConfig(gateway_url="http://127.0.0.1:8000")
        async with GatewayClient(config) as client:
            print(await client.list_functions(namespace="openfaas-fn"))

    asyncio.run(main())
"""

from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Query
from fastapi.responses import RedirectResponse

from faas_gateway_client.observability.logging import configure_logging

app = FastAPI(
    title="FaaS Gateway Demo",
    description="Stand-in gateway serving a function listing",
    version="0.1.0",
)

FUNCTIONS = [
    {
        "name": "figlet",
        "image": "ghcr.io/openfaas/figlet:latest",
        "namespace": "openfaas-fn",
        "invocationCount": 42,
        "replicas": 1,
        "availableReplicas": 1,
        "envProcess": "figlet",
        "labels": {"faas_function": "figlet"},
        "createdAt": datetime(2024, 1, 1, tzinfo=UTC).isoformat(),
    },
    {
        "name": "nodeinfo",
        "image": "ghcr.io/openfaas/nodeinfo:latest",
        "namespace": "openfaas-fn",
        "invocationCount": 7,
        "replicas": 2,
        "availableReplicas": 1,
        "envProcess": "node index.js",
    },
    {
        "name": "env",
        "image": "ghcr.io/openfaas/alpine:latest",
        "namespace": "staging",
        "replicas": 1,
        "availableReplicas": 0,
        "envProcess": "env",
    },
]


@app.get("/system/functions")
async def list_functions(namespace: str | None = Query(default=None)):
    """List deployed functions, optionally for one namespace."""
    if namespace:
        return [f for f in FUNCTIONS if f["namespace"] == namespace]
    return FUNCTIONS


@app.get("/legacy/system/functions")
async def legacy_list_functions():
    """Moved permanently to the current listing path."""
    return RedirectResponse("/system/functions", status_code=308)


@app.get("/loop/system/functions")
async def looping_list_functions():
    """Enters a redirect cycle between /loop/a and /loop/b."""
    return RedirectResponse("/loop/a", status_code=307)


@app.get("/loop/a")
async def loop_a():
    return RedirectResponse("/loop/b", status_code=307)


@app.get("/loop/b")
async def loop_b():
    return RedirectResponse("/loop/a", status_code=307)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now(UTC).isoformat()}


if __name__ == "__main__":
    configure_logging(level="INFO")

    print("\n" + "=" * 60)
    print("FaaS Gateway Demo")
    print("=" * 60)
    print("\nServer starting at: http://127.0.0.1:8000")
    print("Listing:            http://127.0.0.1:8000/system/functions")
    print("\nPress CTRL+C to stop\n")

    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
