"""
Real HTTP integration clients.

These clients communicate with the Circle payments API over HTTP.

Important:
- Must implement the same PaymentsGateway interface as the mock clients
- Must return data shaped according to integrations/contracts/*

Switching:
The selection of mock vs live happens once, in integrations/gateway_factory.py.
"""

from .circle import CircleAPIError, LiveGateway

__all__ = ["CircleAPIError", "LiveGateway"]
