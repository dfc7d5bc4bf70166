"""
Harvest estimation calculator.

tons = area (ha) x expected yield (ton/ha)
"""

from dataclasses import dataclass

from .base import BaseFormula, CalculationOutput, FormulaField


@dataclass(frozen=True)
class HarvestEstimationInput:
    area_ha: float
    yield_ton_per_ha: float


class HarvestEstimationFormula(BaseFormula):
    key = "harvest-estimation"
    name = "Harvest Estimation"
    description = "Estimate total harvest from planted area and expected yield"
    category = "farming"
    unit_label = "ton"
    input_type = HarvestEstimationInput
    fields = (
        FormulaField("areaHa", "area_ha", "Area (ha)"),
        FormulaField("yieldTonPerHa", "yield_ton_per_ha", "Yield per hectare (ton/ha)",
                     suggested_default=5),
    )

    def compute(self, params: HarvestEstimationInput) -> CalculationOutput:
        return CalculationOutput(
            result_value=params.area_ha * params.yield_ton_per_ha,
            unit_label=self.unit_label,
        )
