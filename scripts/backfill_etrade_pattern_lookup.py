#!/usr/bin/env python3
"""
Backfill the etradePatternLookup flag on the master collection.

Every master record that has no etradePatternLookup field gets it set to
false. Records that already carry the flag (true or false) are left alone,
so the script can be re-run safely.

Steps:
    1. report the current flag distribution
    2. set the missing flags to false
    3. re-count and confirm that no record is missing the flag
    4. (opt-in) enable the tickers listed in ENABLE_TICKERS

Usage:
    python -m scripts.backfill_etrade_pattern_lookup
"""
import logging
import sys

from swan_admin.db import close_client, get_collection
from swan_admin.models.collection_types import Collection
from swan_admin.services.flag_backfill import FlagBackfill

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# #######################
# # RUN PARAMS
# #######################
WATCH_TICKERS = ["ELTP", "HODU", "CONX"]

# Tickers to switch etradePatternLookup on after the backfill.
# Left empty so nothing is enabled unless an operator fills it in.
ENABLE_TICKERS = [
    # "AAPL",
    # "MSFT",
    # "GOOGL",
    # "AMZN",
    # "TSLA",
]


def main() -> int:
    try:
        coll = get_collection(Collection.MASTER)
    except Exception as exc:
        logging.error("Invalid MongoDB configuration: %s", exc, exc_info=True)
        return 1

    try:
        report = FlagBackfill(coll, watch_tickers=WATCH_TICKERS).run(enable_tickers=ENABLE_TICKERS)
    finally:
        close_client()

    return 0 if report.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
