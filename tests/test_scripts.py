import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from scripts import backfill_etrade_pattern_lookup, disable_etrade_lookup
from swan_admin.config import ConfigurationError
from tests.test_base import BaseTestCase, InMemoryCollection

FLAG = "etradePatternLookup"


class TestBackfillScript(BaseTestCase):
    """Test cases for the backfill entry point."""

    def setUp(self):
        super().setUp()
        self.coll = InMemoryCollection([
            {"ticker": "ELTP"},
            {"ticker": "HODU", FLAG: False},
            {"ticker": "CONX"},
        ])
        self.mock_get_collection = self.create_patch('scripts.backfill_etrade_pattern_lookup.get_collection')
        self.mock_get_collection.return_value = self.coll
        self.mock_close = self.create_patch('scripts.backfill_etrade_pattern_lookup.close_client')

    def test_allow_list_is_empty_by_default(self):
        self.assertEqual(backfill_etrade_pattern_lookup.ENABLE_TICKERS, [])

    def test_main_succeeds(self):
        with self.assertLogs(level='INFO'):
            self.assertEqual(backfill_etrade_pattern_lookup.main(), 0)

        self.assertTrue(all(doc[FLAG] is False for doc in self.coll.documents))
        self.mock_close.assert_called_once()

    def test_main_fails_when_records_still_missing(self):
        # update_many matches nothing, so the verification still counts missing flags
        self.coll.update_many = MagicMock(return_value=SimpleNamespace(matched_count=0, modified_count=0))

        with self.assertLogs(level='INFO') as logs:
            self.assertEqual(backfill_etrade_pattern_lookup.main(), 1)

        self.assertTrue(any(line.startswith("WARNING") and "still missing" in line for line in logs.output))
        self.mock_close.assert_called_once()

    def test_main_configuration_error(self):
        self.mock_get_collection.side_effect = ConfigurationError("DEV_MONGO_URI is not set")

        with self.assertLogs(level='ERROR') as logs:
            self.assertEqual(backfill_etrade_pattern_lookup.main(), 1)

        self.assertIn("Invalid MongoDB configuration", logs.output[0])
        self.mock_close.assert_not_called()


class TestDisableScript(unittest.TestCase):
    """Test cases for disabling tickers."""

    def test_disable_tickers(self):
        coll = InMemoryCollection([
            {"ticker": "eltp", FLAG: True},
            {"ticker": "AAPL", FLAG: True},
        ])

        with self.assertLogs(level='INFO') as logs:
            disabled = disable_etrade_lookup.disable_tickers(["ELTP", "CONX"], coll)

        self.assertEqual(disabled, 1)
        self.assertIs(coll.by_ticker("eltp")[FLAG], False)
        self.assertIs(coll.by_ticker("AAPL")[FLAG], True)
        self.assertTrue(any("Enabled tickers: AAPL" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
