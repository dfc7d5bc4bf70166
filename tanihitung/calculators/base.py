"""
Abstract base class for all formula calculators.

Input: a raw CalculationInput mapping (JSON object from the client)
Output: CalculationOutput (result_value, unit_label, optional additional_results)

Each formula declares its fields. `parse` turns the raw mapping into the
formula's own typed input dataclass or raises ValidationFailedError for the
first field that fails. `compute` only ever sees parsed input.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

from ..errors import ValidationFailedError


@dataclass
class CalculationOutput:
    result_value: float
    unit_label: str
    additional_results: Optional[Dict[str, float]] = None

    def to_dict(self) -> dict:
        data = {"result_value": self.result_value, "unit_label": self.unit_label}
        if self.additional_results is not None:
            data["additional_results"] = dict(self.additional_results)
        return data


@dataclass(frozen=True)
class FormulaField:
    """One input field of a formula and its domain constraint."""

    name: str                 # key in the raw input mapping, e.g. "areaHa"
    attr: str                 # attribute on the typed input, e.g. "area_ha"
    description: str          # used in validation messages
    integer: bool = False
    required: bool = True
    suggested_default: Optional[float] = None  # shown to clients, never substituted

    @property
    def kind(self) -> str:
        return "integer" if self.integer else "number"

    def check(self, value: Any):
        """Return the value as int (integer fields) or float, or raise ValidationFailedError."""
        as_float = _to_finite_float(value)
        if as_float is None or as_float <= 0:
            raise self._failure()
        if self.integer:
            if not as_float.is_integer():
                raise self._failure()
            return value if isinstance(value, int) else int(as_float)
        return as_float

    def _failure(self) -> ValidationFailedError:
        return ValidationFailedError(
            self.name, f"{self.description} must be a positive {self.kind}"
        )

    def describe(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.kind,
            "required": self.required,
            "suggested_default": self.suggested_default,
        }


def _to_finite_float(value: Any) -> Optional[float]:
    # bool is an int subclass but never a valid measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        as_float = float(value)
    except OverflowError:
        return None
    return as_float if math.isfinite(as_float) else None


def _check_finite(name: str, value: float):
    # Valid inputs can still multiply past float range
    if not math.isfinite(value):
        raise ValidationFailedError(name, f"{name} is too large to calculate for the given input")


class BaseFormula(ABC):
    """All registered formulas inherit from this."""

    key: str = ""
    name: str = ""
    description: str = ""
    category: str = "farming"
    unit_label: str = ""
    fields: Tuple[FormulaField, ...] = ()
    input_type: type = dict

    def ordered_fields(self) -> Tuple[FormulaField, ...]:
        """Required fields first, then optional, each in declared order."""
        required = tuple(f for f in self.fields if f.required)
        optional = tuple(f for f in self.fields if not f.required)
        return required + optional

    def parse(self, data: Mapping[str, Any]):
        """Validate `data` and build this formula's typed input."""
        values = {}
        for field in self.ordered_fields():
            raw = data.get(field.name)
            if raw is None and not field.required:
                values[field.attr] = None
                continue
            values[field.attr] = field.check(raw)
        return self.input_type(**values)

    @abstractmethod
    def compute(self, params) -> CalculationOutput:
        """Takes parsed input. Returns a CalculationOutput."""
        pass

    def calculate(self, data: Mapping[str, Any]) -> CalculationOutput:
        output = self.compute(self.parse(data))
        _check_finite("result_value", output.result_value)
        for name, value in (output.additional_results or {}).items():
            _check_finite(name, value)
        return output

    def describe(self) -> dict:
        return {
            "key": self.key,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "unit_label": self.unit_label,
            "fields": [f.describe() for f in self.ordered_fields()],
        }
