#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Show the trading configuration of an account.

Loads the account YAML file, validates it, and prints the traded pairs,
order manager defaults and the per-symbol investment limits.

Usage:
    uv run python scripts/show_account.py
    uv run python scripts/show_account.py --config config/account.example.yaml
    uv run python scripts/show_account.py --section accounts.paper
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.account import ConfigurationError, load_group
from src.common.config import get_account_config_path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> int:
    parser = argparse.ArgumentParser(description="Show account trading configuration")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Account YAML file (default: $ACCOUNT_CONFIG or config/account.yaml)",
    )
    parser.add_argument(
        "--section",
        default="account",
        help="Dot-separated key of the account section (default: account)",
    )
    args = parser.parse_args()

    config_path = args.config or get_account_config_path()
    try:
        group = load_group(config_path, args.section)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except ConfigurationError as e:
        logger.error(f"Invalid account configuration: {e}")
        return 1

    print(f"Account: {group.id or '(unnamed)'}")
    print(f"Reference currency: {group.reference_currency}")
    print(f"Shorting: {'enabled' if group.shorting_enabled else 'disabled'}")
    print(f"Margin reserve: {group.margin_reserve_percentage}%")
    print()
    print("Trading pairs:")
    for key, pair in sorted(group.symbol_pairs().items()):
        print(f"  {key:<12} {pair.asset}/{pair.fund}  -> {group.order_manager(key)!r}")
    print()
    print("Allocations:")
    frame = group.allocations_frame()
    print(frame.to_string() if not frame.empty else "  (no limits configured)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
