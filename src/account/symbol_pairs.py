# === MODULE PURPOSE ===
# Registry of the trading pairs an account may trade.
# The set of supported symbols is derived from the registered pairs.

# === KEY CONCEPTS ===
# - SymbolPair: directed (asset, fund) relationship, e.g. BTC bought with USDT
# - Pair key: asset + fund concatenation, e.g. "BTCUSDT"
# - Reference currency: implicit fund symbol for bare assets; always
#   considered supported even when no pair mentions it
# - Thread safety: one lock guards the pair map and the symbol set together

import logging
import threading
from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from src.account.errors import MissingReferenceCurrencyError

logger = logging.getLogger(__name__)


class SymbolPair(NamedTuple):
    """A tradable (asset, fund) pair."""

    asset: str
    fund: str

    @property
    def key(self) -> str:
        return self.asset + self.fund


class SymbolPairRegistry:
    """
    Supported symbols and trading pairs of one account.

    Usage:
        pairs = SymbolPairRegistry(reference_currency="USDT")
        pairs.trade_with("BTC", "ETH")        # BTCUSDT, ETHUSDT
        pairs.trade_with_pair("ADA", "BTC")   # ADABTC

        pairs.is_symbol_supported("ADA")      # True
        pairs.symbols()                       # ['ADA', 'BTC', 'ETH', 'USDT']
    """

    def __init__(self, reference_currency: str | None = None):
        self.reference_currency = reference_currency
        self._pairs: dict[str, SymbolPair] = {}
        self._symbols: set[str] = set()
        self._lock = threading.Lock()

    def trade_with_pair(self, asset: str, fund: str) -> SymbolPair:
        """
        Register a trading pair. Re-adding an existing pair is a no-op.

        Returns:
            The stored pair
        """
        pair = SymbolPair(asset, fund)
        with self._lock:
            self._pairs[pair.key] = pair
            self._symbols.add(asset)
            self._symbols.add(fund)
        logger.debug(f"Trading pair registered: {pair.key} ({asset}/{fund})")
        return pair

    def trade_with_pairs(self, pairs: Iterable[tuple[str, str] | list[str]]) -> None:
        for asset, fund in pairs:
            self.trade_with_pair(asset, fund)

    def trade_with(self, *assets: str) -> None:
        """
        Register each asset against the reference currency.

        Raises:
            MissingReferenceCurrencyError: If no reference currency is set
        """
        for asset in assets:
            if not self.reference_currency:
                raise MissingReferenceCurrencyError(asset)
            self.trade_with_pair(asset, self.reference_currency)

    def has_symbol(self, symbol: str) -> bool:
        """True if some registered pair mentions the symbol."""
        with self._lock:
            return symbol in self._symbols

    def is_symbol_supported(self, symbol: str) -> bool:
        return self.has_symbol(symbol) or symbol == self.reference_currency

    def symbols(self) -> list[str]:
        """Sorted snapshot of the symbols appearing in registered pairs."""
        with self._lock:
            return sorted(self._symbols)

    def keys(self) -> list[str]:
        """Snapshot of the registered pair keys."""
        with self._lock:
            return list(self._pairs)

    def traded_with_pairs(self) -> list[SymbolPair]:
        with self._lock:
            return list(self._pairs.values())

    def symbol_pairs(self) -> Mapping[str, SymbolPair]:
        """Read-only snapshot of the pair map, keyed by pair key."""
        with self._lock:
            return MappingProxyType(dict(self._pairs))

    def clear(self) -> None:
        """Remove every pair and supported symbol in one step."""
        with self._lock:
            removed = len(self._pairs)
            self._pairs.clear()
            self._symbols.clear()
        logger.debug(f"Cleared {removed} trading pairs")

    def copy(self) -> "SymbolPairRegistry":
        """Return a registry with independent containers holding the same pairs."""
        out = SymbolPairRegistry(self.reference_currency)
        with self._lock:
            out._pairs = dict(self._pairs)
            out._symbols = set(self._symbols)
        return out

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, key: str) -> bool:
        return key in self._pairs
