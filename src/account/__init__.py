# === MODULE PURPOSE ===
# Account configuration: traded pairs, per-symbol investment limits and
# order manager bindings.

# === KEY CONCEPTS ===
# - TradingStrategyGroup: fluent aggregate owning all registries
# - Allocation / NO_LIMITS: per-symbol limits and the unrestricted sentinel
# - SymbolPairRegistry: pairs define which symbols are supported
# - OrderManagerRegistry: order lifecycle delegate per pair key

from src.account.allocation import NO_LIMITS, Allocation
from src.account.allocation_registry import AllocationRegistry
from src.account.errors import (
    ConfigurationError,
    InvalidMarginReserveError,
    MissingReferenceCurrencyError,
    NoTradingTargetError,
    UnknownSymbolError,
)
from src.account.group import TradingStrategyGroup
from src.account.instances import Instances, NewInstances
from src.account.loader import build_group, load_group
from src.account.order_managers import (
    DEFAULT_ORDER_MANAGER,
    DefaultOrderManager,
    OrderManager,
    OrderManagerRegistry,
)
from src.account.symbol_pairs import SymbolPair, SymbolPairRegistry

__all__ = [
    # Aggregate
    "TradingStrategyGroup",
    "build_group",
    "load_group",
    # Allocations
    "Allocation",
    "AllocationRegistry",
    "NO_LIMITS",
    # Pairs
    "SymbolPair",
    "SymbolPairRegistry",
    # Order managers
    "OrderManager",
    "DefaultOrderManager",
    "DEFAULT_ORDER_MANAGER",
    "OrderManagerRegistry",
    # Collaborator collections
    "NewInstances",
    "Instances",
    # Errors
    "ConfigurationError",
    "UnknownSymbolError",
    "InvalidMarginReserveError",
    "NoTradingTargetError",
    "MissingReferenceCurrencyError",
]
