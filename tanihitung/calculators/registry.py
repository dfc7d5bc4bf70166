"""
Formula registry — maps formula keys to formula instances.

Keys are immutable once registered. New formulas are added with
register_formula(); the dispatcher never needs to change.
"""

from typing import List

from ..errors import UnknownFormulaError
from .base import BaseFormula
from .chicken_feed_daily import ChickenFeedDailyFormula
from .fertilizer_requirement import FertilizerRequirementFormula
from .harvest_estimation import HarvestEstimationFormula
from .livestock_medicine_dosage import LivestockMedicineDosageFormula
from .planting_cost import PlantingCostFormula

FORMULA_REGISTRY: dict[str, BaseFormula] = {}


def register_formula(formula: BaseFormula) -> BaseFormula:
    """Add a formula to the registry. Raises ValueError on a duplicate or empty key."""
    if not formula.key:
        raise ValueError(f"{type(formula).__name__} has no formula key")
    if formula.key in FORMULA_REGISTRY:
        raise ValueError(f"Formula key already registered: {formula.key}")
    FORMULA_REGISTRY[formula.key] = formula
    return formula


def get_formula(formula_key: str) -> BaseFormula:
    """Returns the formula for a key, or raises UnknownFormulaError."""
    try:
        return FORMULA_REGISTRY[formula_key]
    except KeyError:
        raise UnknownFormulaError(formula_key) from None


def has_formula(formula_key: str) -> bool:
    """Check if a formula exists for a key."""
    return formula_key in FORMULA_REGISTRY


def list_formulas() -> List[BaseFormula]:
    """All registered formulas, in registration order."""
    return list(FORMULA_REGISTRY.values())


for _formula in (
    FertilizerRequirementFormula(),
    ChickenFeedDailyFormula(),
    LivestockMedicineDosageFormula(),
    HarvestEstimationFormula(),
    PlantingCostFormula(),
):
    register_formula(_formula)
