# Tests for SymbolPairRegistry
# Tests pair registration, symbol support and clearing

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.account.errors import MissingReferenceCurrencyError
from src.account.symbol_pairs import SymbolPair, SymbolPairRegistry


class TestSymbolPair:
    """Tests for SymbolPair."""

    def test_key_is_concatenation(self):
        """Test pair key is asset followed by fund."""
        assert SymbolPair("BTC", "USD").key == "BTCUSD"

    def test_equals_plain_tuple(self):
        """Test pair compares equal to an (asset, fund) tuple."""
        assert SymbolPair("BTC", "USD") == ("BTC", "USD")


class TestSymbolPairRegistry:
    """Tests for SymbolPairRegistry."""

    def test_trade_with_pair(self):
        """Test both symbols become supported and pair is keyed by concatenation."""
        registry = SymbolPairRegistry()
        registry.trade_with_pair("BTC", "USD")

        assert registry.is_symbol_supported("BTC")
        assert registry.is_symbol_supported("USD")
        assert registry.symbol_pairs()["BTCUSD"] == ("BTC", "USD")

    def test_trade_with_pair_is_idempotent(self):
        """Test re-adding a pair keeps a single entry."""
        registry = SymbolPairRegistry()
        registry.trade_with_pair("BTC", "USD")
        registry.trade_with_pair("BTC", "USD")

        assert len(registry) == 1
        assert registry.symbols() == ["BTC", "USD"]

    def test_trade_with_uses_reference_currency(self, pairs):
        """Test bare assets are paired with the reference currency."""
        assert set(pairs.symbol_pairs()) == {"BTCUSDT", "ETHUSDT"}
        assert pairs.symbol_pairs()["ETHUSDT"] == SymbolPair("ETH", "USDT")

    def test_trade_with_without_reference_currency(self):
        """Test bare assets can't be registered without a reference currency."""
        registry = SymbolPairRegistry()
        with pytest.raises(MissingReferenceCurrencyError, match="BTC"):
            registry.trade_with("BTC")
        assert len(registry) == 0

    def test_trade_with_pairs(self):
        """Test bulk registration of pairs."""
        registry = SymbolPairRegistry()
        registry.trade_with_pairs([("ADA", "BTC"), ["ETH", "BTC"]])

        assert registry.keys() == ["ADABTC", "ETHBTC"]
        assert registry.traded_with_pairs() == [("ADA", "BTC"), ("ETH", "BTC")]

    def test_symbols_are_sorted_without_duplicates(self):
        """Test symbols() returns a canonical sorted list."""
        registry = SymbolPairRegistry()
        registry.trade_with_pairs([("ETH", "USDT"), ("BTC", "USDT"), ("ADA", "BTC")])
        assert registry.symbols() == ["ADA", "BTC", "ETH", "USDT"]

    def test_reference_currency_is_implicitly_supported(self):
        """Test reference currency is supported without any pair."""
        registry = SymbolPairRegistry("EUR")
        assert registry.is_symbol_supported("EUR")
        assert not registry.has_symbol("EUR")
        assert not registry.is_symbol_supported("BTC")

    def test_symbol_pairs_is_read_only(self, pairs):
        """Test the pair view can't be modified."""
        view = pairs.symbol_pairs()
        with pytest.raises(TypeError):
            view["XRPUSDT"] = SymbolPair("XRP", "USDT")

    def test_symbol_pairs_is_snapshot(self):
        """Test the returned map doesn't change with later registrations."""
        registry = SymbolPairRegistry()
        registry.trade_with_pair("ETH", "USD")
        view = registry.symbol_pairs()
        registry.trade_with_pair("BTC", "USD")

        assert "BTCUSD" not in view
        assert list(view) == ["ETHUSD"]
        assert "BTCUSD" in registry.symbol_pairs()

    def test_clear(self, pairs):
        """Test clear removes pairs and symbols, keeping the reference currency."""
        pairs.clear()

        assert len(pairs.symbol_pairs()) == 0
        assert pairs.symbols() == []
        assert not pairs.is_symbol_supported("BTC")
        assert pairs.is_symbol_supported("USDT")

    def test_copy_is_independent(self, pairs):
        """Test copies don't share containers."""
        copy = pairs.copy()
        copy.trade_with("SOL")
        pairs.clear()

        assert copy.symbols() == ["BTC", "ETH", "SOL", "USDT"]
        assert pairs.symbols() == []
        assert copy.reference_currency == "USDT"

    def test_concurrent_registration(self):
        """Test pairs registered from many threads are all kept."""
        registry = SymbolPairRegistry("USDT")
        assets = [f"A{i}" for i in range(200)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(registry.trade_with, assets))

        assert len(registry) == 200
        assert len(registry.symbols()) == 201

    def test_iterate_pairs_while_registering(self):
        """Test reading pairs while another thread registers new ones."""
        registry = SymbolPairRegistry("USDT")
        done = threading.Event()

        def register():
            for i in range(2000):
                registry.trade_with(f"A{i}")
            done.set()

        writer = threading.Thread(target=register)
        writer.start()
        try:
            while not done.is_set():
                for key, pair in registry.symbol_pairs().items():
                    assert key == pair.key
        finally:
            writer.join()

        assert len(registry.symbol_pairs()) == 2000
