"""End-to-end scenarios for the gateway client.

This package contains scenario tests that run the client against in-process
FastAPI gateways. Each scenario covers one aspect of the listing flow:
happy path, redirects, failures, cancellation and the demo gateway.
"""
