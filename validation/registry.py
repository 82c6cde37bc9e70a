"""
validation/registry.py

Schema definitions and the registry the fallback orchestrator selects from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator, Mapping, Sequence

from validation.models import FieldType

GENERIC_INDUSTRY = "others"


@dataclass(frozen=True)
class Schema:
    """
    Required and optional field names plus the expected type per field.

    Fields absent from ``types`` are not type-checked. An all-purpose
    schema has no required or optional fields and accepts every header.
    """

    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    types: Mapping[str, FieldType] = field(default_factory=dict)
    is_all_purpose: bool = False

    @classmethod
    def build(
        cls,
        *,
        required: Sequence[str] = (),
        optional: Sequence[str] = (),
        types: Mapping[str, str | FieldType] | None = None,
    ) -> "Schema":
        """
        Build a schema from plain strings.

        Raises:
            ValueError: If a type name is not one of number, date or string.
        """

        return cls(
            required=tuple(required),
            optional=tuple(optional),
            types=MappingProxyType({name: FieldType(kind) for name, kind in (types or {}).items()}),
        )

    @property
    def expected_fields(self) -> tuple[str, ...]:
        return self.required + self.optional

    @property
    def typed_field_count(self) -> int:
        return len(self.types)

    def type_for(self, field_name: str | None) -> FieldType | None:
        if field_name is None:
            return None
        return self.types.get(field_name)


def build_all_purpose_schema(types: Mapping[str, FieldType]) -> Schema:
    """
    Synthesize the layer-3 schema from inferred column types.
    """

    return Schema(types=MappingProxyType(dict(types)), is_all_purpose=True)


# ---------------------------------------------------------------------------
# Built-in industry schemas
# ---------------------------------------------------------------------------

DOCTOR_ROSTER_SCHEMA = Schema.build(
    required=(
        "Doctor_ID",
        "Doctor_Name",
        "Specialization",
        "Department",
        "Date",
        "Shift",
        "Start_Time",
        "End_Time",
    ),
    optional=(
        "Location",
        "Room_No",
        "On_Call",
        "Contact",
        "Email",
        "Max_Appointments",
        "Notes",
    ),
    types={
        "Doctor_ID": "string",
        "Doctor_Name": "string",
        "Specialization": "string",
        "Department": "string",
        "Date": "date",
        "Shift": "string",
        "Start_Time": "string",
        "End_Time": "string",
        "Location": "string",
        "Room_No": "string",
        "On_Call": "string",
        "Contact": "string",
        "Email": "string",
        "Max_Appointments": "number",
        "Notes": "string",
    },
)

OPBILLING_SCHEMA = Schema.build(
    required=(
        "Bill_ID",
        "Patient_ID",
        "Doctor_ID",
        "Visit_Date",
        "Procedure_Code",
        "Total_Amount",
        "Payment_Status",
    ),
    optional=(
        "Bill_Date",
        "Payer_Type",
        "Doctor_Name",
        "Department",
        "Consent_Flag",
        "Notes",
    ),
    types={
        "Bill_ID": "string",
        "Patient_ID": "string",
        "Doctor_ID": "string",
        "Visit_Date": "date",
        "Procedure_Code": "string",
        "Total_Amount": "number",
        "Payment_Status": "string",
        "Bill_Date": "date",
        "Payer_Type": "string",
        "Doctor_Name": "string",
        "Department": "string",
        "Consent_Flag": "string",
        "Notes": "string",
    },
)

GENERIC_SCHEMA = Schema.build()


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class SchemaRegistry:
    """
    Immutable table of named industry schemas.

    Lookups are case-insensitive. Unknown names resolve to the generic
    placeholder schema, which has no required fields.
    """

    def __init__(
        self,
        schemas: Mapping[str, Schema],
        *,
        generic_name: str = GENERIC_INDUSTRY,
    ) -> None:
        entries = {self._key(name): schema for name, schema in schemas.items()}
        self._generic_name = self._key(generic_name)
        entries.setdefault(self._generic_name, GENERIC_SCHEMA)
        self._schemas: Mapping[str, Schema] = MappingProxyType(entries)

    @property
    def generic_name(self) -> str:
        return self._generic_name

    def get(self, industry: str) -> Schema:
        return self._schemas.get(self._key(industry), self._schemas[self._generic_name])

    def is_generic(self, industry: str) -> bool:
        key = self._key(industry)
        return key == self._generic_name or key not in self._schemas

    def names(self) -> tuple[str, ...]:
        return tuple(self._schemas)

    def items(self) -> Iterator[tuple[str, Schema]]:
        return iter(self._schemas.items())

    def __contains__(self, industry: object) -> bool:
        return isinstance(industry, str) and self._key(industry) in self._schemas

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()


DEFAULT_REGISTRY = SchemaRegistry(
    {
        "doctor_roster": DOCTOR_ROSTER_SCHEMA,
        "opbilling": OPBILLING_SCHEMA,
        GENERIC_INDUSTRY: GENERIC_SCHEMA,
    }
)
