"""
Calculation dispatcher — the single entry point for running a formula.

    calculate(formula_key, input) -> CalculationOutput

Steps: check the key, check the input is a mapping, resolve the formula,
validate, compute. Every failure is a typed CalculationError; nothing is
returned half-done and nothing touches the database.
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..errors import BadRequestError, UnknownFormulaError
from .base import CalculationOutput
from .registry import get_formula

logger = logging.getLogger(__name__)


def _resolve(formula_key: Any, data: Any):
    if not formula_key or not isinstance(formula_key, str):
        raise BadRequestError("slug is required")
    if data is None or not isinstance(data, Mapping):
        raise BadRequestError("valid input data is required")
    try:
        return get_formula(formula_key)
    except UnknownFormulaError:
        logger.warning("Calculation requested for unknown slug %r", formula_key)
        raise


def validate_input(formula_key: str, data: Mapping):
    """Validate without computing. Returns the formula's typed input."""
    formula = _resolve(formula_key, data)
    return formula.parse(data)


def calculate(formula_key: str, data: Mapping) -> CalculationOutput:
    formula = _resolve(formula_key, data)
    return formula.calculate(data)
