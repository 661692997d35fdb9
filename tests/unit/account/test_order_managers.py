# Tests for OrderManagerRegistry
# Tests binding by pair key and fallback to the default manager

import pytest

from src.account.errors import NoTradingTargetError
from src.account.order_managers import (
    DEFAULT_ORDER_MANAGER,
    DefaultOrderManager,
    OrderManager,
    OrderManagerRegistry,
)
from src.account.symbol_pairs import SymbolPairRegistry


class TrailingStopManager(OrderManager):
    """Stand-in for a custom order lifecycle delegate."""


class TestOrderManagerRegistry:
    """Tests for OrderManagerRegistry."""

    def test_default_manager(self, pairs):
        """Test unbound keys resolve to the shared default."""
        registry = OrderManagerRegistry(pairs)
        assert registry.get("BTCUSDT") is DEFAULT_ORDER_MANAGER
        assert isinstance(DEFAULT_ORDER_MANAGER, DefaultOrderManager)

    def test_bind_without_symbols_and_no_pairs(self):
        """Test binding to all pairs fails when there are none."""
        registry = OrderManagerRegistry(SymbolPairRegistry("USDT"))
        manager = TrailingStopManager()

        with pytest.raises(NoTradingTargetError) as exc_info:
            registry.bind(manager)
        assert exc_info.value.manager is manager
        assert len(registry) == 0

    def test_bind_without_symbols_uses_pair_keys(self, pairs):
        """Test binding without symbols targets pair keys, not bare symbols."""
        registry = OrderManagerRegistry(pairs)
        manager = TrailingStopManager()
        registry.bind(manager)

        assert registry.get("BTCUSDT") is manager
        assert registry.get("ETHUSDT") is manager
        # Bare asset symbols are a different key space
        assert registry.get("BTC") is DEFAULT_ORDER_MANAGER
        assert registry.get("USDT") is DEFAULT_ORDER_MANAGER

    def test_bind_explicit_symbols(self, pairs):
        """Test explicit keys are bound as given, without validation."""
        registry = OrderManagerRegistry(pairs)
        manager = TrailingStopManager()
        registry.bind(manager, "BTC", "XRPUSDT")

        assert registry.get("BTC") is manager
        assert registry.get("XRPUSDT") is manager
        assert registry.get("BTCUSDT") is DEFAULT_ORDER_MANAGER

    def test_bind_only_current_pairs(self, pairs):
        """Test pairs added after binding keep the default manager."""
        registry = OrderManagerRegistry(pairs)
        manager = TrailingStopManager()
        registry.bind(manager)
        pairs.trade_with("SOL")

        assert registry.get("SOLUSDT") is DEFAULT_ORDER_MANAGER

    def test_rebind_replaces(self, pairs):
        """Test later bindings replace earlier ones."""
        registry = OrderManagerRegistry(pairs)
        first, second = TrailingStopManager(), TrailingStopManager()
        registry.bind(first)
        registry.bind(second, "BTCUSDT")

        assert registry.bindings() == {"BTCUSDT": second, "ETHUSDT": first}

    def test_copy_is_independent(self, pairs):
        """Test copies have their own bindings."""
        registry = OrderManagerRegistry(pairs)
        manager = TrailingStopManager()
        registry.bind(manager, "BTCUSDT")

        copy = registry.copy(pairs.copy())
        copy.bind(TrailingStopManager(), "ETHUSDT")

        assert copy.get("BTCUSDT") is manager
        assert registry.get("ETHUSDT") is DEFAULT_ORDER_MANAGER
