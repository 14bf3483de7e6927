#!/usr/bin/env python3
"""
Switch etradePatternLookup off for a list of tickers.

Use this for tickers the pattern provider does not know about. Tickers are
matched case-insensitively.
Usage:
    python -m scripts.disable_etrade_lookup
"""
import logging
import sys

from swan_admin.db import close_client, get_collection
from swan_admin.models.collection_types import Collection
from swan_admin.repositories.master_repo import disable_ticker
from swan_admin.services.flag_backfill import FlagBackfill

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)

TICKERS = [
    "ELTP",
    "HODU",
    "CONX",
]


def disable_tickers(tickers, collection) -> int:
    disabled = 0
    for ticker in tickers:
        if disable_ticker(ticker, collection):
            disabled += 1

    logging.info("Disabled etradePatternLookup for %d of %d ticker(s)", disabled, len(tickers))
    FlagBackfill(collection, watch_tickers=tickers).log_enabled_tickers()
    return disabled


if __name__ == "__main__":
    try:
        coll = get_collection(Collection.MASTER)
    except Exception as exc:
        logging.error("Invalid MongoDB configuration: %s", exc, exc_info=True)
        sys.exit(1)

    try:
        disable_tickers(TICKERS, coll)
    finally:
        close_client()
