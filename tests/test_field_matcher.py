from __future__ import annotations

import unittest

from validation.field_matcher import (
    FieldMapping,
    FieldMatcher,
    MatchStrategy,
    normalize_field_name,
)


class TestNormalizeFieldName(unittest.TestCase):
    def test_lowercases_and_strips_non_alphanumerics(self) -> None:
        self.assertEqual(normalize_field_name(" Doctor-ID (primary) "), "doctoridprimary")

    def test_punctuation_only_name_normalizes_to_empty(self) -> None:
        self.assertEqual(normalize_field_name("__--__"), "")


class TestFieldMatcher(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FieldMatcher()

    def test_exact_match_ignores_case_and_separators(self) -> None:
        self.assertEqual(self.matcher.match("doctor id", ["Doctor_ID"]), "Doctor_ID")

    def test_partial_match_on_substring(self) -> None:
        self.assertEqual(self.matcher.match("Date of Visit", ["Date"]), "Date")

    def test_alias_match_from_default_table(self) -> None:
        self.assertEqual(self.matcher.match("Client", ["Customer_Name"]), "Customer_Name")
        self.assertEqual(
            self.matcher.strategy_for("Client", "Customer_Name"),
            MatchStrategy.ALIAS,
        )

    def test_exact_match_beats_earlier_partial_candidate(self) -> None:
        self.assertEqual(self.matcher.match("Date", ["Visit_Date", "Date"]), "Date")

    def test_unmatched_header_returns_none(self) -> None:
        self.assertIsNone(self.matcher.match("Foo", ["Doctor_ID", "Shift"]))

    def test_empty_normalized_header_never_matches(self) -> None:
        self.assertIsNone(self.matcher.match("___", ["Doctor_ID"]))

    def test_custom_alias_table(self) -> None:
        matcher = FieldMatcher(aliases={"Shift": ["rota"]})

        self.assertEqual(matcher.match("Rota Slot", ["Shift"]), "Shift")
        self.assertIsNone(matcher.match("Client", ["Customer_Name"]))


class TestResolveMapping(unittest.TestCase):
    def setUp(self) -> None:
        self.matcher = FieldMatcher()

    def test_exact_matches_claim_headers_before_partial_matches(self) -> None:
        mapping = self.matcher.resolve_mapping(["Date", "Visit_Date"], ["Visit Date", "Date"])

        self.assertEqual(mapping.header_for("Date"), "Date")
        self.assertEqual(mapping.header_for("Visit_Date"), "Visit Date")
        self.assertEqual(mapping.strategies["Visit_Date"], MatchStrategy.EXACT)

    def test_header_is_claimed_by_at_most_one_field(self) -> None:
        mapping = self.matcher.resolve_mapping(["Start_Time", "End_Time"], ["Time"])

        self.assertEqual(mapping.header_for("Start_Time"), "Time")
        self.assertIsNone(mapping.header_for("End_Time"))
        self.assertEqual(mapping.unmatched, ("End_Time",))

    def test_mapping_keeps_field_order(self) -> None:
        mapping = self.matcher.resolve_mapping(
            ["Doctor_ID", "Doctor_Name"],
            ["Doctor Name", "Doctor ID"],
        )

        self.assertEqual(list(mapping.field_to_header), ["Doctor_ID", "Doctor_Name"])
        self.assertEqual(mapping.field_for("Doctor Name"), "Doctor_Name")
        self.assertEqual(mapping.mapped_headers, frozenset({"Doctor Name", "Doctor ID"}))

    def test_identity_mapping(self) -> None:
        mapping = FieldMapping.identity(["Amount", "When"])

        self.assertEqual(mapping.field_for("When"), "When")
        self.assertEqual(mapping.header_for("Amount"), "Amount")
        self.assertEqual(mapping.unmatched, ())


if __name__ == "__main__":
    unittest.main()
