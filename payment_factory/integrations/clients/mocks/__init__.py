"""
Mock integration clients.

These clients return fake (but realistic) responses without calling any external API.
They are used when:
- no Circle API key is configured
- we want to run the demo end-to-end without external dependencies

Important:
- Mock clients implement the SAME PaymentsGateway interface as the live client.
- Responses are shaped by the same normalisers (integrations/policy/response_wrappers.py).
"""

from .gateway import MockGateway

__all__ = ["MockGateway"]
