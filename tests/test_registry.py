from __future__ import annotations

import unittest

from validation.detection import HeaderOverlapDetector, NullSchemaDetector
from validation.models import FieldType
from validation.registry import (
    DEFAULT_REGISTRY,
    DOCTOR_ROSTER_SCHEMA,
    OPBILLING_SCHEMA,
    Schema,
    SchemaRegistry,
    build_all_purpose_schema,
)


class TestSchema(unittest.TestCase):
    def test_build_converts_type_names(self) -> None:
        schema = Schema.build(required=("Amount",), types={"Amount": "number"})

        self.assertEqual(schema.type_for("Amount"), FieldType.NUMBER)
        self.assertIsNone(schema.type_for("Other"))
        self.assertIsNone(schema.type_for(None))

    def test_build_rejects_unknown_type_name(self) -> None:
        with self.assertRaises(ValueError):
            Schema.build(required=("Amount",), types={"Amount": "money"})

    def test_expected_fields_are_required_then_optional(self) -> None:
        schema = Schema.build(required=("A", "B"), optional=("C",))

        self.assertEqual(schema.expected_fields, ("A", "B", "C"))

    def test_doctor_roster_shape(self) -> None:
        self.assertEqual(len(DOCTOR_ROSTER_SCHEMA.required), 8)
        self.assertEqual(DOCTOR_ROSTER_SCHEMA.typed_field_count, 15)
        self.assertEqual(DOCTOR_ROSTER_SCHEMA.type_for("Date"), FieldType.DATE)
        self.assertEqual(DOCTOR_ROSTER_SCHEMA.type_for("Max_Appointments"), FieldType.NUMBER)

    def test_all_purpose_schema_has_no_fields(self) -> None:
        schema = build_all_purpose_schema({"Amount": FieldType.NUMBER})

        self.assertTrue(schema.is_all_purpose)
        self.assertEqual(schema.expected_fields, ())
        self.assertEqual(schema.type_for("Amount"), FieldType.NUMBER)


class TestSchemaRegistry(unittest.TestCase):
    def test_lookup_is_case_insensitive(self) -> None:
        self.assertIs(DEFAULT_REGISTRY.get(" Doctor_Roster "), DOCTOR_ROSTER_SCHEMA)
        self.assertIn("OPBILLING", DEFAULT_REGISTRY)

    def test_unknown_industry_resolves_to_generic(self) -> None:
        schema = DEFAULT_REGISTRY.get("aerospace")

        self.assertEqual(schema.required, ())
        self.assertTrue(DEFAULT_REGISTRY.is_generic("aerospace"))
        self.assertTrue(DEFAULT_REGISTRY.is_generic("Others"))
        self.assertFalse(DEFAULT_REGISTRY.is_generic("opbilling"))

    def test_default_names(self) -> None:
        self.assertEqual(DEFAULT_REGISTRY.names(), ("doctor_roster", "opbilling", "others"))
        self.assertEqual(DEFAULT_REGISTRY.generic_name, "others")

    def test_custom_registry_gains_generic_entry(self) -> None:
        registry = SchemaRegistry({"Inventory": Schema.build(required=("SKU",))})

        self.assertEqual(registry.names(), ("inventory", "others"))
        self.assertEqual(registry.get("others").required, ())


class TestSchemaDetectors(unittest.TestCase):
    def test_null_detector_never_detects(self) -> None:
        self.assertIsNone(NullSchemaDetector().detect(["Bill_ID", "Patient_ID"]))

    def test_header_overlap_detector_picks_best_schema(self) -> None:
        detection = HeaderOverlapDetector().detect(list(OPBILLING_SCHEMA.required))

        self.assertIsNotNone(detection)
        self.assertEqual(detection.name, "opbilling")
        self.assertEqual(detection.confidence, 1.0)

    def test_header_overlap_detector_skips_excluded_schema(self) -> None:
        registry = SchemaRegistry(
            {
                "ledger": Schema.build(required=("Alpha", "Beta", "Gamma")),
                "notes": Schema.build(required=("Alpha", "Beta", "Gamma")),
            }
        )
        detector = HeaderOverlapDetector(registry)

        self.assertEqual(detector.detect(["Alpha", "Beta", "Gamma"]).name, "ledger")
        self.assertEqual(detector.detect(["Alpha", "Beta", "Gamma"], exclude=" Ledger ").name, "notes")

    def test_header_overlap_detector_without_overlap(self) -> None:
        self.assertIsNone(HeaderOverlapDetector().detect(["Foo", "Bar"]))


if __name__ == "__main__":
    unittest.main()
