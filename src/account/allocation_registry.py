# === MODULE PURPOSE ===
# Per-symbol investment limits of an account, validated against the
# symbols the account trades.

# === KEY CONCEPTS ===
# - One Allocation per symbol; unconfigured symbols read as NO_LIMITS
# - Setters without symbols apply to every symbol of the registered pairs
#   (snapshot taken at call time; symbols added concurrently may be missed)
# - Bulk parsing: while enabled, unknown symbols are accepted so that a
#   declarative config can list limits before the pairs they refer to
# - Read-modify-write per symbol runs under the registry lock, so
#   concurrent setters on the same symbol compose. Shallow copies share
#   the lock along with the Allocation objects

import logging
import threading
from typing import Callable

import pandas as pd

from src.account.allocation import NO_LIMITS, Allocation
from src.account.errors import UnknownSymbolError
from src.account.symbol_pairs import SymbolPairRegistry

logger = logging.getLogger(__name__)

# Mutation applied to an Allocation; returns the allocation to store
AllocationUpdate = Callable[[Allocation], Allocation]


class AllocationRegistry:
    """
    Investment limits keyed by asset symbol.

    Usage:
        pairs = SymbolPairRegistry("USDT")
        pairs.trade_with("BTC", "ETH")
        allocations = AllocationRegistry(pairs)

        allocations.set_max_percent_per_asset(20)            # BTC, ETH, USDT
        allocations.set_max_amount_per_trade(500, "BTC")

        allocations.max_amount_per_trade("BTC")   # 500.0
        allocations.max_amount_per_trade("DOGE")  # inf (never configured)
    """

    def __init__(self, pairs: SymbolPairRegistry, account_id: str = ""):
        self._pairs = pairs
        self._account_id = account_id
        self._allocations: dict[str, Allocation] = {}
        self._lock = threading.Lock()
        self.bulk_parsing = False

    # === SETTERS ===

    def set_max_percent_per_asset(self, percentage: float, *symbols: str) -> None:
        """Cap the share of the account balance held in each symbol (0 to 100)."""
        self._update(
            "percentage of account",
            percentage,
            symbols,
            lambda a: a.set_max_percent_per_asset(percentage),
        )

    def set_max_amount_per_asset(self, amount: float, *symbols: str) -> None:
        """Cap the total amount invested in each symbol."""
        self._update(
            "maximum expenditure of account",
            amount,
            symbols,
            lambda a: a.set_max_amount_per_asset(amount),
        )

    def set_max_percent_per_trade(self, percentage: float, *symbols: str) -> None:
        """Cap the share of the account balance spent on a single trade."""
        self._update(
            "percentage of account per trade",
            percentage,
            symbols,
            lambda a: a.set_max_percent_per_trade(percentage),
        )

    def set_max_amount_per_trade(self, amount: float, *symbols: str) -> None:
        """Cap the amount spent on a single trade."""
        self._update(
            "maximum expenditure per trade",
            amount,
            symbols,
            lambda a: a.set_max_amount_per_trade(amount),
        )

    def set_min_amount_per_trade(self, amount: float, *symbols: str) -> None:
        """Require every trade to be worth at least this amount."""
        self._update(
            "minimum expenditure per trade",
            amount,
            symbols,
            lambda a: a.set_min_amount_per_trade(amount),
        )

    def _update(
        self,
        description: str,
        value: float,
        symbols: tuple[str, ...],
        update: AllocationUpdate,
    ) -> None:
        targets = symbols or tuple(self._pairs.symbols())
        for symbol in targets:
            if self.bulk_parsing or self._pairs.has_symbol(symbol):
                self.compute(symbol, update)
                logger.debug(f"Allocation {description} for '{symbol}' set to {value}")
            else:
                raise self.unknown_symbol(
                    symbol, f"Can't allocate {description} for '{symbol}' to {value}"
                )

    def compute(self, symbol: str, update: AllocationUpdate) -> Allocation:
        """
        Atomically apply an update to the allocation of a symbol.

        A missing entry starts from the NO_LIMITS values. No symbol
        validation happens here.

        Returns:
            The stored allocation
        """
        with self._lock:
            current = self._allocations.get(symbol)
            result = update(current if current is not None else Allocation())
            self._allocations[symbol] = result
            return result

    def unknown_symbol(self, symbol: str, message: str | None = None) -> UnknownSymbolError:
        return UnknownSymbolError(
            symbol,
            self._pairs.symbols(),
            self._pairs.reference_currency,
            self._account_id,
            message,
        )

    # === GETTERS ===

    def get(self, symbol: str) -> Allocation:
        """Stored allocation of a symbol, or NO_LIMITS if none."""
        with self._lock:
            return self._allocations.get(symbol, NO_LIMITS)

    def max_percent_per_asset(self, symbol: str) -> float:
        return self.get(symbol).max_percent_per_asset

    def max_amount_per_asset(self, symbol: str) -> float:
        return self.get(symbol).max_amount_per_asset

    def max_percent_per_trade(self, symbol: str) -> float:
        return self.get(symbol).max_percent_per_trade

    def max_amount_per_trade(self, symbol: str) -> float:
        return self.get(symbol).max_amount_per_trade

    def min_amount_per_trade(self, symbol: str) -> float:
        return self.get(symbol).min_amount_per_trade

    def symbols(self) -> list[str]:
        """Symbols with an explicit allocation, sorted."""
        with self._lock:
            return sorted(self._allocations)

    def unsupported_symbols(self) -> list[str]:
        """Configured symbols that no registered pair mentions."""
        return [s for s in self.symbols() if not self._pairs.has_symbol(s)]

    def discard(self, *symbols: str) -> None:
        """Remove the allocations of the given symbols, if any."""
        with self._lock:
            for symbol in symbols:
                self._allocations.pop(symbol, None)

    def to_frame(self) -> pd.DataFrame:
        """One row per configured symbol, indexed by symbol."""
        with self._lock:
            rows = {symbol: a.to_dict() for symbol, a in self._allocations.items()}
        frame = pd.DataFrame.from_dict(rows, orient="index")
        if frame.empty:
            frame = pd.DataFrame(columns=list(NO_LIMITS.to_dict()))
        frame.index.name = "symbol"
        return frame.sort_index()

    # === CLONING ===

    def copy(self, pairs: SymbolPairRegistry, deep: bool = False) -> "AllocationRegistry":
        """
        Return a registry bound to `pairs` with its own allocation map.

        A shallow copy shares the Allocation objects and therefore the lock
        that guards their updates.

        Args:
            pairs: Pair registry of the new owner
            deep: Duplicate each Allocation instead of sharing it
        """
        out = AllocationRegistry(pairs, self._account_id)
        out.bulk_parsing = self.bulk_parsing
        if not deep:
            out._lock = self._lock
        with self._lock:
            if deep:
                out._allocations = {s: a.copy() for s, a in self._allocations.items()}
            else:
                out._allocations = dict(self._allocations)
        return out

    def __len__(self) -> int:
        return len(self._allocations)

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._allocations
