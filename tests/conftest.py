# === MODULE PURPOSE ===
# Pytest configuration and shared fixtures for tests.

import pytest

from src.account.group import TradingStrategyGroup
from src.account.symbol_pairs import SymbolPairRegistry


@pytest.fixture
def pairs():
    """Pair registry with USDT reference currency and BTCUSDT, ETHUSDT."""
    registry = SymbolPairRegistry("USDT")
    registry.trade_with("BTC", "ETH")
    return registry


@pytest.fixture
def group():
    """Account trading BTC and ETH against USDT."""
    return TradingStrategyGroup("main").set_reference_currency("USDT").trade_with("BTC", "ETH")
