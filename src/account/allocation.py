# === MODULE PURPOSE ===
# Per-symbol investment limits of a trading account.

# === KEY CONCEPTS ===
# - Allocation: maximum percentage/amount per asset and per trade, plus a
#   minimum amount per trade
# - NO_LIMITS: shared read-only sentinel meaning "unrestricted"
# - Percentages are relative to the whole account balance (0 to 100)
# - Setters mutate in place and return the same instance, so registries can
#   share one Allocation between shallow copies of a group

import math
from dataclasses import asdict, dataclass, replace
from typing import Any

UNBOUNDED = math.inf


def _check_percentage(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or not 0.0 <= value <= 100.0:
        raise ValueError(f"{name} must be between 0 and 100, got {value}")
    return value


def _check_amount(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0.0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class Allocation:
    """
    Investment limits for a single symbol.

    Example: with an account balance of $1000.00, max_percent_per_asset=20
    means the account never holds more than $200.00 worth of the asset, and
    max_amount_per_trade=50 caps every single purchase at $50.00.

    Unset fields keep the values of NO_LIMITS.
    """

    max_percent_per_asset: float = 100.0
    max_amount_per_asset: float = UNBOUNDED
    max_percent_per_trade: float = 100.0
    max_amount_per_trade: float = UNBOUNDED
    min_amount_per_trade: float = 0.0

    def __setattr__(self, name: str, value: Any) -> None:
        if self.__dict__.get("_read_only"):
            raise AttributeError(f"Can't modify read-only allocation: {name}")
        super().__setattr__(name, value)

    def set_max_percent_per_asset(self, percentage: float) -> "Allocation":
        self.max_percent_per_asset = _check_percentage("max_percent_per_asset", percentage)
        return self

    def set_max_amount_per_asset(self, amount: float) -> "Allocation":
        self.max_amount_per_asset = _check_amount("max_amount_per_asset", amount)
        return self

    def set_max_percent_per_trade(self, percentage: float) -> "Allocation":
        self.max_percent_per_trade = _check_percentage("max_percent_per_trade", percentage)
        return self

    def set_max_amount_per_trade(self, amount: float) -> "Allocation":
        self.max_amount_per_trade = _check_amount("max_amount_per_trade", amount)
        return self

    def set_min_amount_per_trade(self, amount: float) -> "Allocation":
        self.min_amount_per_trade = _check_amount("min_amount_per_trade", amount)
        return self

    @property
    def read_only(self) -> bool:
        return bool(self.__dict__.get("_read_only"))

    def copy(self) -> "Allocation":
        """Return an independent, mutable duplicate."""
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for reporting."""
        return asdict(self)


def _read_only(allocation: Allocation) -> Allocation:
    object.__setattr__(allocation, "_read_only", True)
    return allocation


NO_LIMITS = _read_only(Allocation())
