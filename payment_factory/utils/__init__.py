"""
Utility modules for the payment factory
"""
from .config_loader import FactoryConfig, load_factory_config
from .formatting import format_amount

__all__ = [
    'FactoryConfig',
    'load_factory_config',
    'format_amount',
]
