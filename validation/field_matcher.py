"""
validation/field_matcher.py

Fuzzy alignment of arbitrary CSV headers to canonical schema field names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Sequence

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Keyed by normalized canonical field name. A header matches the field when
# its normalized form contains any of the tokens.
DEFAULT_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "customername": ("customer", "client", "buyer"),
    "invoiceid": ("invoice", "id", "number"),
    "qty": ("quantity", "amount", "count"),
    "unitprice": ("price", "rate", "cost"),
    "saledate": ("date", "timestamp", "time"),
    "starttime": ("shiftstart",),
    "endtime": ("shiftend",),
    "totalamount": ("amount", "billed", "gross"),
    "procedurecode": ("procedure", "service", "proc"),
    "payertype": ("payer",),
    "consentflag": ("consent",),
    "patientid": ("patient",),
}


def normalize_field_name(name: str) -> str:
    """
    Lowercase and drop every character that is not an ASCII letter or digit.
    """

    return _NON_ALNUM.sub("", name.lower())


class MatchStrategy(str, Enum):
    EXACT = "exact"
    PARTIAL = "partial"
    ALIAS = "alias"


# Priority order; the first strategy that produces a hit wins.
STRATEGY_ORDER: tuple[MatchStrategy, ...] = (
    MatchStrategy.EXACT,
    MatchStrategy.PARTIAL,
    MatchStrategy.ALIAS,
)


@dataclass(frozen=True)
class FieldMapping:
    """
    Resolved correspondence between schema fields and CSV headers for one
    dataset.
    """

    field_to_header: dict[str, str]
    strategies: dict[str, MatchStrategy] = field(default_factory=dict)
    unmatched: tuple[str, ...] = ()

    @classmethod
    def identity(cls, headers: Sequence[str]) -> "FieldMapping":
        """
        Map every header to itself.
        """

        return cls(
            field_to_header={header: header for header in headers},
            strategies={header: MatchStrategy.EXACT for header in headers},
        )

    def header_for(self, field_name: str) -> str | None:
        return self.field_to_header.get(field_name)

    def field_for(self, header: str) -> str | None:
        for field_name, mapped_header in self.field_to_header.items():
            if mapped_header == header:
                return field_name
        return None

    @property
    def mapped_headers(self) -> frozenset[str]:
        return frozenset(self.field_to_header.values())


class FieldMatcher:
    """
    Matches CSV headers against canonical field names.

    Strategies, in priority order: exact equality of normalized names,
    substring containment in either direction, then the alias table.
    Stateless apart from the alias table supplied at construction.
    """

    def __init__(self, *, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            normalize_field_name(canonical): tuple(
                normalize_field_name(token) for token in tokens if normalize_field_name(token)
            )
            for canonical, tokens in (aliases or DEFAULT_FIELD_ALIASES).items()
        }

    def match(self, csv_header: str, candidate_field_names: Sequence[str]) -> str | None:
        """
        Return the candidate field that ``csv_header`` matches, or ``None``.

        All candidates are tried with one strategy before the next strategy
        is considered, so an exact hit always beats an earlier partial one.
        """

        for strategy in STRATEGY_ORDER:
            for candidate in candidate_field_names:
                if self._matches(csv_header, candidate, strategy):
                    return candidate
        return None

    def strategy_for(self, csv_header: str, field_name: str) -> MatchStrategy | None:
        """
        Return the highest-priority strategy under which the pair matches.
        """

        for strategy in STRATEGY_ORDER:
            if self._matches(csv_header, field_name, strategy):
                return strategy
        return None

    def resolve_mapping(
        self,
        field_names: Sequence[str],
        headers: Sequence[str],
    ) -> FieldMapping:
        """
        Assign each field at most one header and each header at most one field.

        Resolution runs strategy by strategy across every unresolved field,
        in field order, so exact matches claim their headers before any
        substring or alias match is attempted.
        """

        resolved: dict[str, str] = {}
        strategies: dict[str, MatchStrategy] = {}
        claimed: set[str] = set()

        for strategy in STRATEGY_ORDER:
            for field_name in field_names:
                if field_name in resolved:
                    continue
                for header in headers:
                    if header in claimed:
                        continue
                    if self._matches(header, field_name, strategy):
                        resolved[field_name] = header
                        strategies[field_name] = strategy
                        claimed.add(header)
                        break

        # Keep the schema's field order in the mapping itself.
        ordered = {name: resolved[name] for name in field_names if name in resolved}
        return FieldMapping(
            field_to_header=ordered,
            strategies={name: strategies[name] for name in ordered},
            unmatched=tuple(name for name in field_names if name not in resolved),
        )

    def _matches(self, csv_header: str, field_name: str, strategy: MatchStrategy) -> bool:
        header_norm = normalize_field_name(csv_header)
        field_norm = normalize_field_name(field_name)
        if not header_norm or not field_norm:
            return False

        if strategy is MatchStrategy.EXACT:
            return header_norm == field_norm
        if strategy is MatchStrategy.PARTIAL:
            return header_norm in field_norm or field_norm in header_norm
        return any(token in header_norm for token in self._aliases.get(field_norm, ()))
