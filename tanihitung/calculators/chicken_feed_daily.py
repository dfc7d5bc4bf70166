"""
Daily chicken feed calculator.

kg/day = chicken count x feed per chicken per day (kg)
"""

from dataclasses import dataclass

from .base import BaseFormula, CalculationOutput, FormulaField


@dataclass(frozen=True)
class ChickenFeedDailyInput:
    chicken_count: int
    feed_kg_per_chicken_per_day: float


class ChickenFeedDailyFormula(BaseFormula):
    key = "chicken-feed-daily"
    name = "Chicken Feed Daily"
    description = "Calculate daily feed needed for your flock"
    category = "livestock"
    unit_label = "kg/day"
    input_type = ChickenFeedDailyInput
    fields = (
        FormulaField("chickenCount", "chicken_count", "Chicken count", integer=True),
        FormulaField("feedKgPerChickenPerDay", "feed_kg_per_chicken_per_day",
                     "Feed per chicken per day (kg)", suggested_default=0.12),
    )

    def compute(self, params: ChickenFeedDailyInput) -> CalculationOutput:
        return CalculationOutput(
            result_value=params.chicken_count * params.feed_kg_per_chicken_per_day,
            unit_label=self.unit_label,
        )
