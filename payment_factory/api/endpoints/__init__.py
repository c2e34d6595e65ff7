from .cpn import cpn_api
from .routing import routing_api
from .travel_rule import travel_rule_api
from .wallets import wallets_api

__all__ = ["cpn_api", "routing_api", "travel_rule_api", "wallets_api"]
