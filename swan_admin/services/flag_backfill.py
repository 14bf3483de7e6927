import logging
from typing import Iterable, List, Optional, Sequence

from swan_admin.models.master_flag import BackfillReport, FlagCounts, UpdateSummary
from swan_admin.repositories import master_repo

DEFAULT_WATCH_TICKERS = ("ELTP", "HODU", "CONX")

NEXT_STEPS = (
    "Restart the application",
    "Fetch patterns from the dashboard",
    "Check logs for 'Found X masters with eTrade pattern enabled'",
    "Verify the watched tickers are NOT in the enabled list",
)


class FlagBackfill:
    """
    Audit, backfill and verify the etradePatternLookup flag on the master collection.

    Every step can be repeated safely: the backfill only matches records that
    lack the flag, so once it has run it matches nothing.
    """

    def __init__(self, collection=None, watch_tickers: Sequence[str] = DEFAULT_WATCH_TICKERS,
                 sample_size: int = 5):
        self.collection = collection
        self.watch_tickers = list(watch_tickers)
        self.sample_size = sample_size

    def audit(self, stage: str = "CURRENT STATE") -> FlagCounts:
        logging.info(f"=== {stage} ===")
        counts = master_repo.count_flag_states(self.collection)
        self._log_counts(counts)

        if counts.missing:
            logging.info(f"Sample records WITHOUT field (up to {self.sample_size}):")
            for record in master_repo.sample_missing(self.collection, limit=self.sample_size):
                logging.info(f"  {record.describe()}")

        self.log_watched_tickers()
        return counts

    def backfill(self) -> UpdateSummary:
        logging.info("=== UPDATING MISSING FIELDS TO FALSE ===")
        summary = master_repo.backfill_missing_flag(self.collection, value=False)
        logging.info(f"Records matched: {summary.matched}")
        logging.info(f"Records modified: {summary.modified}")
        return summary

    def verify(self) -> FlagCounts:
        logging.info("=== VERIFICATION AFTER UPDATE ===")
        counts = master_repo.count_flag_states(self.collection)
        self._log_counts(counts)

        if counts.converged:
            logging.info("SUCCESS! All records now have etradePatternLookup field")
        else:
            logging.warning(f"WARNING! {counts.missing} record(s) still missing etradePatternLookup field")

        self.log_watched_tickers()
        return counts

    def enable(self, tickers: Iterable[str]) -> UpdateSummary:
        tickers = list(tickers)
        logging.info(f"=== ENABLING etradePatternLookup FOR {len(tickers)} TICKER(S) ===")
        summary = master_repo.enable_tickers(tickers, self.collection)
        logging.info(f"Records matched: {summary.matched}")
        logging.info(f"Records modified: {summary.modified}")

        missing = set(tickers) - {flag.ticker for flag in master_repo.find_ticker_flags(tickers, self.collection)}
        if missing:
            logging.warning(f"Tickers not found in master collection: {', '.join(sorted(missing))}")
        return summary

    def run(self, enable_tickers: Optional[Iterable[str]] = None) -> BackfillReport:
        before = self.audit()
        update = self.backfill()
        after = self.verify()

        if before.missing != update.matched:
            logging.warning(
                f"Matched {update.matched} record(s) but {before.missing} were missing before the update; "
                f"the collection changed in between"
            )

        enable_tickers = list(enable_tickers or [])
        enabled = None
        if enable_tickers:
            enabled = self.enable(enable_tickers)
            self.log_enabled_tickers()
        else:
            self._log_enable_template()

        self._log_next_steps()
        return BackfillReport(before=before, update=update, after=after, enabled=enabled)

    def log_watched_tickers(self) -> None:
        if not self.watch_tickers:
            return

        logging.info(f"Check {', '.join(self.watch_tickers)}:")
        found = master_repo.find_ticker_flags(self.watch_tickers, self.collection)
        for flag in found:
            logging.info(f"  {flag.describe()}")

        seen = {flag.ticker for flag in found}
        absent = [t for t in self.watch_tickers if t not in seen]
        if absent:
            logging.info(f"  not in master collection: {', '.join(absent)}")

    def log_enabled_tickers(self) -> List[str]:
        enabled = master_repo.list_enabled_tickers(self.collection)
        logging.info(f"Found {len(enabled)} masters with eTrade pattern enabled (etradePatternLookup = true)")
        if enabled and len(enabled) <= 10:
            logging.info(f"Enabled tickers: {', '.join(enabled)}")
        return enabled

    @staticmethod
    def _log_counts(counts: FlagCounts) -> None:
        logging.info(f"Total masters: {counts.total}")
        logging.info(f"With etradePatternLookup = true: {counts.enabled}")
        logging.info(f"With etradePatternLookup = false: {counts.disabled}")
        logging.info(f"Field missing: {counts.missing}")
        if counts.non_boolean:
            logging.warning(f"With non-boolean etradePatternLookup: {counts.non_boolean}")

    @staticmethod
    def _log_enable_template() -> None:
        logging.info("To enable specific tickers, list them in ENABLE_TICKERS and re-run, or call:")
        logging.info("  master_repo.enable_tickers(['AAPL', 'MSFT', 'GOOGL', 'AMZN', 'TSLA'])")

    @staticmethod
    def _log_next_steps() -> None:
        logging.info("=== DONE! ===")
        logging.info("Next steps:")
        for idx, step in enumerate(NEXT_STEPS, start=1):
            logging.info(f"{idx}. {step}")
