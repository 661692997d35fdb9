# === MODULE PURPOSE ===
# Errors raised while configuring a trading account.
# All of them are argument errors: fail fast, never retried.

from typing import Any, Iterable


class ConfigurationError(ValueError):
    """Base class for invalid account configuration."""


class UnknownSymbolError(ConfigurationError):
    """Raised when a symbol outside the account's tradable universe is used."""

    def __init__(
        self,
        symbol: str,
        allowed: Iterable[str],
        reference_currency: str | None,
        account_id: str = "",
        message: str | None = None,
    ):
        self.symbol = symbol
        self.allowed = sorted(allowed)
        self.reference_currency = reference_currency
        self.account_id = account_id

        account = f"'{account_id}' " if account_id and account_id.strip() else ""
        detail = (
            f"Account {account}is not managing '{symbol}'. "
            f"Allowed symbols are: {', '.join(self.allowed)} and {reference_currency}"
        )
        super().__init__(f"{message}. {detail}" if message else detail)


class InvalidMarginReserveError(ConfigurationError):
    """Raised when the margin reserve percentage is set below 100."""

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Margin reserve percentage must be at least 100%, got {value}")


class NoTradingTargetError(ConfigurationError):
    """Raised when an order manager is bound before any trading pair exists."""

    def __init__(self, manager: Any):
        self.manager = manager
        super().__init__(
            f"Can't associate order manager {manager!r} before configuring "
            "the trading symbols to be used"
        )


class MissingReferenceCurrencyError(ConfigurationError):
    """Raised when a bare asset is registered without a reference currency."""

    def __init__(self, asset: str):
        self.asset = asset
        super().__init__(
            f"Can't trade '{asset}' against the reference currency: "
            "no reference currency configured"
        )
