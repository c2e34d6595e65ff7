"""
Payment factory: routes corporate payments to blockchain, CPN corridor or
traditional rails, and drives the Circle wallet and CPN APIs (mock or live).
"""

__version__ = "0.1.0"
