"""
validation/type_inference.py

Column type inference used to synthesize the all-purpose schema.
"""

from __future__ import annotations

from typing import Mapping, Sequence

from validation.models import FieldType
from validation.type_validators import is_valid_date, is_valid_number

INFERENCE_SAMPLE_SIZE = 100
NUMBER_INFERENCE_RATIO = 0.8
DATE_INFERENCE_RATIO = 0.6


class TypeInferencer:
    """
    Infers ``number`` / ``date`` / ``string`` per column from a value sample.

    For each header the first ``INFERENCE_SAMPLE_SIZE`` non-empty values are
    sampled. At least 80% numeric makes the column a number; otherwise at
    least 60% valid dates makes it a date; anything else, including a column
    with no non-empty values, is a string.
    """

    def infer(
        self,
        dataset: Sequence[Mapping[str, str | None]],
        headers: Sequence[str],
    ) -> dict[str, FieldType]:
        return {header: self.infer_column(self._sample(dataset, header)) for header in headers}

    def infer_column(self, values: Sequence[str]) -> FieldType:
        if not values:
            return FieldType.STRING

        number_count = sum(1 for value in values if is_valid_number(value))
        if number_count / len(values) >= NUMBER_INFERENCE_RATIO:
            return FieldType.NUMBER

        date_count = sum(1 for value in values if is_valid_date(value).is_valid)
        if date_count / len(values) >= DATE_INFERENCE_RATIO:
            return FieldType.DATE

        return FieldType.STRING

    @staticmethod
    def _sample(dataset: Sequence[Mapping[str, str | None]], header: str) -> list[str]:
        sample: list[str] = []
        for row in dataset:
            value = row.get(header)
            if value is None or not str(value).strip():
                continue
            sample.append(str(value))
            if len(sample) >= INFERENCE_SAMPLE_SIZE:
                break
        return sample
