"""
validation/detection.py

Layer-2 extension point: detect an alternate named schema from headers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from validation.field_matcher import FieldMatcher
from validation.registry import DEFAULT_REGISTRY, Schema, SchemaRegistry


@dataclass(frozen=True)
class SchemaDetection:
    """
    A candidate schema and the detector's confidence in it, in ``[0, 1]``.
    """

    name: str
    schema: Schema
    confidence: float


class BaseSchemaDetector(ABC):
    """
    Contract for dynamic schema detectors.

    Implementations look only at header names. No I/O and no side effects
    are permitted inside :meth:`detect`.
    """

    @abstractmethod
    def detect(
        self,
        headers: Sequence[str],
        *,
        exclude: str | None = None,
    ) -> SchemaDetection | None:
        """
        Return the best alternate schema for ``headers``, or ``None``.

        ``exclude`` names the schema that already failed; it must not be
        proposed again.
        """


class NullSchemaDetector(BaseSchemaDetector):
    """
    Detector that never proposes a schema. Layer 2 is skipped with it.
    """

    def detect(
        self,
        headers: Sequence[str],
        *,
        exclude: str | None = None,
    ) -> SchemaDetection | None:
        return None


class HeaderOverlapDetector(BaseSchemaDetector):
    """
    Scores every registered schema other than ``exclude`` by the share of
    its required fields that resolve against the headers, and proposes the
    best one.

    Schemas without required fields (the generic placeholder) are never
    proposed. Ties keep the earlier registry entry.
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        *,
        matcher: FieldMatcher | None = None,
    ) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._matcher = matcher or FieldMatcher()

    def detect(
        self,
        headers: Sequence[str],
        *,
        exclude: str | None = None,
    ) -> SchemaDetection | None:
        excluded = exclude.strip().lower() if exclude is not None else None
        best: SchemaDetection | None = None
        for name, schema in self._registry.items():
            if not schema.required or name == excluded:
                continue
            mapping = self._matcher.resolve_mapping(schema.required, headers)
            confidence = len(mapping.field_to_header) / len(schema.required)
            if best is None or confidence > best.confidence:
                best = SchemaDetection(name=name, schema=schema, confidence=confidence)

        if best is None or best.confidence <= 0.0:
            return None
        return best
