import logging
import re
from typing import Dict, Iterable, List

from swan_admin.db import get_collection
from swan_admin.models.collection_types import Collection, MasterFields
from swan_admin.models.master_flag import FlagCounts, TickerFlag, UpdateSummary

FLAG = MasterFields.ETRADE_PATTERN_LOOKUP


def _master(collection=None):
    return collection if collection is not None else get_collection(Collection.MASTER)


def missing_flag_filter() -> Dict:
    return {FLAG: {"$exists": False}}


def count_flag_states(collection=None) -> FlagCounts:
    coll = _master(collection)
    return FlagCounts(
        total=coll.count_documents({}),
        enabled=coll.count_documents({FLAG: True}),
        disabled=coll.count_documents({FLAG: False}),
        missing=coll.count_documents(missing_flag_filter()),
    )


def sample_missing(collection=None, limit: int = 5) -> List[TickerFlag]:
    """Return up to ``limit`` records that do not carry the flag yet."""
    coll = _master(collection)
    cursor = coll.find(
        missing_flag_filter(),
        {MasterFields.TICKER: 1, MasterFields.NAME: 1, FLAG: 1}
    ).limit(limit)
    return [TickerFlag.from_document(doc) for doc in cursor]


def find_ticker_flags(tickers: Iterable[str], collection=None) -> List[TickerFlag]:
    tickers = list(tickers)
    if not tickers:
        return []

    coll = _master(collection)
    cursor = coll.find(
        {MasterFields.TICKER: {"$in": tickers}},
        {MasterFields.TICKER: 1, FLAG: 1}
    )
    return [TickerFlag.from_document(doc) for doc in cursor]


def backfill_missing_flag(collection=None, value: bool = False) -> UpdateSummary:
    """
    Set the flag to ``value`` on every record where it is absent.

    Records that already carry the flag (true or false) are not matched, so a
    second run matches nothing.
    """
    coll = _master(collection)
    result = coll.update_many(missing_flag_filter(), {"$set": {FLAG: value}})
    return UpdateSummary.from_result(result)


def enable_tickers(tickers: Iterable[str], collection=None) -> UpdateSummary:
    tickers = list(tickers)
    if not tickers:
        raise ValueError("At least one ticker is required to enable etradePatternLookup.")

    coll = _master(collection)
    result = coll.update_many(
        {MasterFields.TICKER: {"$in": tickers}},
        {"$set": {FLAG: True}}
    )
    return UpdateSummary.from_result(result)


def disable_ticker(ticker: str, collection=None) -> bool:
    """
    Turn the flag off for one ticker, matched case-insensitively.

    Returns True if a record was modified.
    """
    coll = _master(collection)
    query = {MasterFields.TICKER: {"$regex": f"^{re.escape(ticker)}$", "$options": "i"}}

    try:
        result = coll.update_one(query, {"$set": {FLAG: False}})
    except Exception:
        logging.error("Error disabling ticker %s in master collection", ticker, exc_info=True)
        raise

    if result.modified_count > 0:
        logging.info("Disabled etradePatternLookup for ticker: %s", ticker)
        return True
    if result.matched_count > 0:
        logging.info("etradePatternLookup already disabled for ticker: %s", ticker)
    else:
        logging.warning("Could not find ticker in master collection to disable: %s", ticker)
    return False


def list_enabled_tickers(collection=None) -> List[str]:
    coll = _master(collection)
    cursor = coll.find({FLAG: True}, {MasterFields.TICKER: 1, "_id": 0})
    return sorted(doc[MasterFields.TICKER] for doc in cursor if doc.get(MasterFields.TICKER))
