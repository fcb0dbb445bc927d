"""Core listing logic for the FaaS gateway client.

This package contains:
- Outcome: classification of one gateway response
- Redirect loop: bounded, redirect-following listing of deployed functions

The core only depends on the RequestIssuer protocol and can run over any
transport implementing it.
"""

from faas_gateway_client.core.redirect_loop import MAX_ATTEMPTS, fetch_list

__all__ = ["fetch_list", "MAX_ATTEMPTS"]
