# === MODULE PURPOSE ===
# Builds a TradingStrategyGroup from YAML configuration.

# === KEY CONCEPTS ===
# - Declarative: allocations may be listed before the pairs they refer to,
#   everything is applied inside group.bulk_parsing()
# - "*" allocation entry applies to every traded symbol, except for the
#   limits a symbol sets in its own entry
#
# Example (config/account.yaml):
#   account:
#     id: main
#     reference_currency: USDT
#     shorting: false
#     margin_reserve_percentage: 150
#     allocations:
#       "*": {max_percent_per_asset: 20}
#       BTC: {max_amount_per_trade: 500, min_amount_per_trade: 10}
#     trade_with: [BTC, ETH]
#     trade_with_pairs: [[ADA, BTC]]

import logging
from pathlib import Path
from typing import Any

from src.account.errors import ConfigurationError
from src.account.group import DEFAULT_MARGIN_RESERVE_PERCENTAGE, TradingStrategyGroup
from src.common.config import Config

logger = logging.getLogger(__name__)

ALL_SYMBOLS = "*"

# allocation key in YAML -> group setter
ALLOCATION_SETTERS = {
    "max_percent_per_asset": TradingStrategyGroup.set_max_percent_per_asset,
    "max_amount_per_asset": TradingStrategyGroup.set_max_amount_per_asset,
    "max_percent_per_trade": TradingStrategyGroup.set_max_percent_per_trade,
    "max_amount_per_trade": TradingStrategyGroup.set_max_amount_per_trade,
    "min_amount_per_trade": TradingStrategyGroup.set_min_amount_per_trade,
}


def _check_limits(symbol: str, limits: Any) -> dict[str, Any]:
    if not isinstance(limits, dict):
        raise ConfigurationError(f"Allocation for '{symbol}' must be a mapping, got {limits!r}")
    for key in limits:
        if key not in ALLOCATION_SETTERS:
            raise ConfigurationError(
                f"Unknown allocation setting '{key}' for '{symbol}'. "
                f"Expected one of: {', '.join(ALLOCATION_SETTERS)}"
            )
    return limits


def _apply_defaults(
    group: TradingStrategyGroup, defaults: dict[str, Any], allocations: dict[str, Any]
) -> None:
    """Apply the "*" entry to every traded symbol not overriding the same setting."""
    for key, value in defaults.items():
        targets = [s for s in group.symbols() if key not in (allocations.get(s) or {})]
        if targets:
            ALLOCATION_SETTERS[key](group, float(value), *targets)


def build_group(config: Config, section: str = "account") -> TradingStrategyGroup:
    """
    Create and configure a group from a config section.

    Args:
        config: Loaded configuration
        section: Dot-separated key of the account section

    Returns:
        Configured TradingStrategyGroup

    Raises:
        ConfigurationError: If the section is missing or malformed
        UnknownSymbolError: If an allocation names a symbol that is never traded
    """
    data = config.get_dict(section)
    if not data:
        raise ConfigurationError(f"Missing account configuration section: {section}")

    group = TradingStrategyGroup(config.get_str(f"{section}.id"))
    reference_currency = config.get_str(f"{section}.reference_currency")
    if reference_currency:
        group.set_reference_currency(reference_currency)

    if config.get_bool(f"{section}.shorting"):
        group.enable_shorting()
    group.set_margin_reserve_percentage(
        config.get_int(
            f"{section}.margin_reserve_percentage", DEFAULT_MARGIN_RESERVE_PERCENTAGE
        )
    )

    if not isinstance(config.get(f"{section}.allocations", {}), dict):
        raise ConfigurationError(f"'{section}.allocations' must be a mapping")
    allocations = {
        str(s): _check_limits(str(s), limits)
        for s, limits in config.get_dict(f"{section}.allocations").items()
    }

    with group.bulk_parsing():
        for symbol, limits in allocations.items():
            if symbol == ALL_SYMBOLS:
                continue
            for key, value in limits.items():
                ALLOCATION_SETTERS[key](group, float(value), symbol)

        group.trade_with(*[str(s) for s in config.get_list(f"{section}.trade_with")])
        for pair in config.get_list(f"{section}.trade_with_pairs"):
            if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                raise ConfigurationError(f"Trading pair must be [asset, fund], got {pair!r}")
            group.trade_with_pair(str(pair[0]), str(pair[1]))

        # Applied last so that it sees every pair
        if ALL_SYMBOLS in allocations:
            _apply_defaults(group, allocations[ALL_SYMBOLS], allocations)

    logger.info(
        f"Loaded account '{group.id}': {len(group.symbol_pairs())} pairs, "
        f"reference currency {group.reference_currency}"
    )
    return group


def load_group(config_path: str | Path, section: str = "account") -> TradingStrategyGroup:
    """Load a YAML file and build the group from it."""
    return build_group(Config.load(config_path), section)
