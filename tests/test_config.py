from __future__ import annotations

import os
import unittest
from unittest import mock

from app.config import get_csv_validation_settings, get_log_level


class TestCSVValidationSettings(unittest.TestCase):
    def setUp(self) -> None:
        get_csv_validation_settings.cache_clear()

    def tearDown(self) -> None:
        get_csv_validation_settings.cache_clear()

    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = get_csv_validation_settings()

        self.assertEqual(settings.max_rows, 100_000)
        self.assertEqual(settings.default_industry, "others")
        self.assertTrue(settings.log_summary)

    def test_environment_overrides(self) -> None:
        env = {
            "CSV_VALIDATION_MAX_ROWS": "250",
            "CSV_VALIDATION_DEFAULT_INDUSTRY": "doctor_roster",
            "CSV_VALIDATION_LOG_SUMMARY": "off",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            settings = get_csv_validation_settings()

        self.assertEqual(settings.max_rows, 250)
        self.assertEqual(settings.default_industry, "doctor_roster")
        self.assertFalse(settings.log_summary)

    def test_malformed_and_out_of_range_values_fall_back(self) -> None:
        with mock.patch.dict(os.environ, {"CSV_VALIDATION_MAX_ROWS": "lots"}, clear=True):
            self.assertEqual(get_csv_validation_settings().max_rows, 100_000)

        get_csv_validation_settings.cache_clear()
        with mock.patch.dict(os.environ, {"CSV_VALIDATION_MAX_ROWS": "0"}, clear=True):
            self.assertEqual(get_csv_validation_settings().max_rows, 1)

    def test_log_level_is_upper_cased(self) -> None:
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "debug"}, clear=True):
            self.assertEqual(get_log_level(), "DEBUG")


if __name__ == "__main__":
    unittest.main()
