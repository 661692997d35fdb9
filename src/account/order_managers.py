# === MODULE PURPOSE ===
# Binds order managers (order lifecycle delegates) to symbols of an account.

# === KEY CONCEPTS ===
# - OrderManager: opaque collaborator; stored and returned, never invoked here
# - DEFAULT_ORDER_MANAGER: process-wide instance for unbound keys
# - Binding without symbols targets the registered pair keys (e.g. "BTCUSDT"),
#   while callers often look up bare symbols (e.g. "BTC"). The two only meet
#   when a pair key equals the queried symbol.

import logging
import threading

from src.account.errors import NoTradingTargetError
from src.account.symbol_pairs import SymbolPairRegistry

logger = logging.getLogger(__name__)


class OrderManager:
    """Base type for objects that govern the lifecycle of open orders."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DefaultOrderManager(OrderManager):
    """Order manager used for every symbol without an explicit binding."""


DEFAULT_ORDER_MANAGER = DefaultOrderManager()


class OrderManagerRegistry:
    """
    Order manager bindings keyed by symbol or pair key.

    Usage:
        managers = OrderManagerRegistry(pairs)
        managers.bind(MyOrderManager())             # all pair keys
        managers.bind(OtherOrderManager(), "BTCUSDT")

        managers.get("BTCUSDT")  # OtherOrderManager
        managers.get("XRPUSDT")  # DEFAULT_ORDER_MANAGER
    """

    def __init__(self, pairs: SymbolPairRegistry):
        self._pairs = pairs
        self._managers: dict[str, OrderManager] = {}
        self._lock = threading.Lock()

    def bind(self, manager: OrderManager, *symbols: str) -> None:
        """
        Bind a manager to the given keys, or to every pair key if none given.

        Raises:
            NoTradingTargetError: If no keys are given and no pair is registered
        """
        keys = symbols or tuple(self._pairs.keys())
        if not keys:
            raise NoTradingTargetError(manager)
        with self._lock:
            for key in keys:
                self._managers[key] = manager
        logger.debug(f"Order manager {manager!r} bound to {', '.join(keys)}")

    def get(self, symbol: str) -> OrderManager:
        with self._lock:
            return self._managers.get(symbol, DEFAULT_ORDER_MANAGER)

    def bindings(self) -> dict[str, OrderManager]:
        """Snapshot of explicit bindings."""
        with self._lock:
            return dict(self._managers)

    def copy(self, pairs: SymbolPairRegistry) -> "OrderManagerRegistry":
        out = OrderManagerRegistry(pairs)
        with self._lock:
            out._managers = dict(self._managers)
        return out

    def __len__(self) -> int:
        return len(self._managers)
