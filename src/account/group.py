# === MODULE PURPOSE ===
# Account-wide trading configuration: traded pairs, per-symbol investment
# limits, order managers, shorting and margin settings.

# === DEPENDENCIES ===
# - SymbolPairRegistry: establishes the symbols the account may trade
# - AllocationRegistry / OrderManagerRegistry: validated against those pairs
# - NewInstances / Instances: strategy, monitor and listener providers

# === KEY CONCEPTS ===
# - Fluent setup: every mutator returns the group for chained calls
# - Configure pairs first, then allocations and order managers; or wrap the
#   whole setup in bulk_parsing() to make the order irrelevant
# - shallow_copy(): independent containers, Allocation objects shared
# - deep_copy(): independent containers and Allocation objects

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Mapping

import pandas as pd

from src.account.allocation import Allocation
from src.account.allocation_registry import AllocationRegistry
from src.account.errors import InvalidMarginReserveError, UnknownSymbolError
from src.account.instances import Instances, NewInstances
from src.account.order_managers import OrderManager, OrderManagerRegistry
from src.account.symbol_pairs import SymbolPair, SymbolPairRegistry

logger = logging.getLogger(__name__)

DEFAULT_MARGIN_RESERVE_PERCENTAGE = 150


class TradingStrategyGroup:
    """
    Trading configuration of one account.

    Usage:
        group = (
            TradingStrategyGroup("main")
            .set_reference_currency("USDT")
            .trade_with("BTC", "ETH")
            .trade_with_pair("ADA", "BTC")
            .set_max_percent_per_asset(20)
            .set_max_amount_per_trade(500, "BTC")
            .enable_shorting()
            .set_margin_reserve_percentage(175)
        )

        group.max_amount_per_trade("BTC")  # 500.0
        group.order_manager("BTCUSDT")     # DEFAULT_ORDER_MANAGER

    Thread Safety:
        Each registry guards its own state with a lock. Operations spanning
        registries (e.g. applying a limit to all symbols) are best-effort:
        a pair added concurrently may or may not receive the limit.
    """

    def __init__(self, id: str, reference_currency: str | None = None):
        self._id = id
        self._pairs = SymbolPairRegistry(reference_currency)
        self._allocations = AllocationRegistry(self._pairs, id)
        self._order_managers = OrderManagerRegistry(self._pairs)
        self._strategies: NewInstances = NewInstances()
        self._monitors: NewInstances = NewInstances()
        self._listeners: Instances = Instances()
        self._shorting_enabled = False
        self._margin_reserve_percentage = DEFAULT_MARGIN_RESERVE_PERCENTAGE
        self._bulk_parsing_depth = 0

    @property
    def id(self) -> str:
        return self._id

    @property
    def strategies(self) -> NewInstances:
        return self._strategies

    @property
    def monitors(self) -> NewInstances:
        return self._monitors

    @property
    def listeners(self) -> Instances:
        return self._listeners

    # === ACCOUNT SETTINGS ===

    @property
    def reference_currency(self) -> str | None:
        return self._pairs.reference_currency

    def set_reference_currency(self, reference_currency: str) -> "TradingStrategyGroup":
        self._pairs.reference_currency = reference_currency
        return self

    @property
    def shorting_enabled(self) -> bool:
        return self._shorting_enabled

    def enable_shorting(self) -> "TradingStrategyGroup":
        self._shorting_enabled = True
        return self

    def disable_shorting(self) -> "TradingStrategyGroup":
        self._shorting_enabled = False
        return self

    @property
    def margin_reserve_percentage(self) -> int:
        return self._margin_reserve_percentage

    def set_margin_reserve_percentage(self, percentage: int) -> "TradingStrategyGroup":
        """
        Set the reserve kept for margin/short positions, e.g. 150 holds 1.5x
        the position value.

        Raises:
            InvalidMarginReserveError: If percentage is below 100
        """
        if percentage < 100:
            raise InvalidMarginReserveError(percentage)
        self._margin_reserve_percentage = int(percentage)
        return self

    # === TRADING PAIRS ===

    def trade_with_pair(self, asset: str, fund: str) -> "TradingStrategyGroup":
        self._pairs.trade_with_pair(asset, fund)
        return self

    def trade_with_pairs(
        self, pairs: Iterable[tuple[str, str] | list[str]]
    ) -> "TradingStrategyGroup":
        self._pairs.trade_with_pairs(pairs)
        return self

    def trade_with(self, *assets: str) -> "TradingStrategyGroup":
        """
        Trade each asset against the reference currency.

        Raises:
            MissingReferenceCurrencyError: If no reference currency is set
        """
        self._pairs.trade_with(*assets)
        return self

    def clear_trading_pairs(self) -> "TradingStrategyGroup":
        self._pairs.clear()
        return self

    def is_symbol_supported(self, symbol: str) -> bool:
        return self._pairs.is_symbol_supported(symbol)

    def symbols(self) -> list[str]:
        return self._pairs.symbols()

    def symbol_pairs(self) -> Mapping[str, SymbolPair]:
        return self._pairs.symbol_pairs()

    def traded_with_pairs(self) -> list[SymbolPair]:
        return self._pairs.traded_with_pairs()

    # === ALLOCATIONS ===
    # Setters apply to all traded symbols when no symbol is given.

    def set_max_percent_per_asset(
        self, percentage: float, *symbols: str
    ) -> "TradingStrategyGroup":
        """
        Limit the percentage of the whole account balance invested in an asset.

        With a $1000.00 balance and 20.0, no more than $200.00 worth of the
        asset is ever bought; the rest stays available for other symbols.
        """
        self._allocations.set_max_percent_per_asset(percentage, *symbols)
        return self

    def set_max_amount_per_asset(self, amount: float, *symbols: str) -> "TradingStrategyGroup":
        self._allocations.set_max_amount_per_asset(amount, *symbols)
        return self

    def set_max_percent_per_trade(
        self, percentage: float, *symbols: str
    ) -> "TradingStrategyGroup":
        """
        Limit the percentage of the account balance spent in a single trade.

        With a $1000.00 balance and 5.0, each purchase is capped at $50.00,
        including further purchases of an asset already held.
        """
        self._allocations.set_max_percent_per_trade(percentage, *symbols)
        return self

    def set_max_amount_per_trade(self, amount: float, *symbols: str) -> "TradingStrategyGroup":
        self._allocations.set_max_amount_per_trade(amount, *symbols)
        return self

    def set_min_amount_per_trade(self, amount: float, *symbols: str) -> "TradingStrategyGroup":
        """Never open a buy order worth less than `amount`."""
        self._allocations.set_min_amount_per_trade(amount, *symbols)
        return self

    def allocation(self, symbol: str) -> Allocation:
        return self._allocations.get(symbol)

    def max_percent_per_asset(self, symbol: str) -> float:
        return self._allocations.max_percent_per_asset(symbol)

    def max_amount_per_asset(self, symbol: str) -> float:
        return self._allocations.max_amount_per_asset(symbol)

    def max_percent_per_trade(self, symbol: str) -> float:
        return self._allocations.max_percent_per_trade(symbol)

    def max_amount_per_trade(self, symbol: str) -> float:
        return self._allocations.max_amount_per_trade(symbol)

    def min_amount_per_trade(self, symbol: str) -> float:
        return self._allocations.min_amount_per_trade(symbol)

    def allocations_frame(self) -> pd.DataFrame:
        return self._allocations.to_frame()

    @contextmanager
    def bulk_parsing(self) -> Iterator["TradingStrategyGroup"]:
        """
        Accept allocations for symbols not traded yet, validating on exit.

        Usage:
            with group.bulk_parsing():
                group.set_max_amount_per_trade(100, "BTC")
                group.trade_with("BTC")

        Raises:
            UnknownSymbolError: On exit, if an allocated symbol is still
                not part of any trading pair

        Allocations of untraded symbols are dropped before the error is
        raised; the rest of the configuration is kept.
        """
        self._bulk_parsing_depth += 1
        self._allocations.bulk_parsing = True
        try:
            yield self
        finally:
            self._bulk_parsing_depth -= 1
            if self._bulk_parsing_depth == 0:
                self._allocations.bulk_parsing = False

        if self._bulk_parsing_depth == 0:
            unsupported = self._allocations.unsupported_symbols()
            if unsupported:
                logger.warning(
                    f"Account '{self._id}' has allocations for untraded symbols: "
                    f"{', '.join(unsupported)}"
                )
                self._allocations.discard(*unsupported)
                raise self.report_unknown_symbol(
                    unsupported[0], "Allocation configured for a symbol that is not traded"
                )

    @property
    def parsing(self) -> bool:
        """True while inside bulk_parsing()."""
        return self._bulk_parsing_depth > 0

    # === ORDER MANAGERS ===

    def set_order_manager(self, manager: OrderManager, *symbols: str) -> "TradingStrategyGroup":
        """
        Use `manager` for the given symbols (e.g. BTCUSDT, EURJPY), or for
        every registered pair key if none given.

        Raises:
            NoTradingTargetError: If no symbols given and no pair registered
        """
        self._order_managers.bind(manager, *symbols)
        return self

    def order_manager(self, symbol: str) -> OrderManager:
        return self._order_managers.get(symbol)

    # === ERRORS ===

    def report_unknown_symbol(self, symbol: str, message: str | None = None) -> UnknownSymbolError:
        """Build the error describing a symbol this account doesn't trade."""
        return self._allocations.unknown_symbol(symbol, message)

    # === CLONING ===

    def shallow_copy(self) -> "TradingStrategyGroup":
        """Copy with independent containers; Allocations and their lock are shared."""
        return self._copy(deep=False)

    def deep_copy(self) -> "TradingStrategyGroup":
        """Copy with independent containers and Allocation objects."""
        return self._copy(deep=True)

    def _copy(self, deep: bool) -> "TradingStrategyGroup":
        out = TradingStrategyGroup.__new__(type(self))
        out._id = self._id
        out._pairs = self._pairs.copy()
        out._allocations = self._allocations.copy(out._pairs, deep=deep)
        out._order_managers = self._order_managers.copy(out._pairs)
        out._strategies = self._strategies.copy()
        out._monitors = self._monitors.copy()
        out._listeners = self._listeners.copy()
        out._shorting_enabled = self._shorting_enabled
        out._margin_reserve_percentage = self._margin_reserve_percentage
        out._bulk_parsing_depth = 0
        out._allocations.bulk_parsing = False
        logger.debug(
            f"Copied account '{self._id}' ({'deep' if deep else 'shallow'}): "
            f"{len(out._pairs)} pairs, {len(out._allocations)} allocations"
        )
        return out

    def __repr__(self) -> str:
        return (
            f"TradingStrategyGroup(id={self._id!r}, "
            f"reference_currency={self.reference_currency!r}, pairs={len(self._pairs)})"
        )
