"""
Planting cost calculator.

Rp total = area (ha) x cost (Rp/ha)
"""

from dataclasses import dataclass

from .base import BaseFormula, CalculationOutput, FormulaField


@dataclass(frozen=True)
class PlantingCostInput:
    area_ha: float
    cost_rp_per_ha: float


class PlantingCostFormula(BaseFormula):
    key = "planting-cost"
    name = "Planting Cost"
    description = "Estimate planting cost for your farm area"
    category = "farming"
    unit_label = "Rp"
    input_type = PlantingCostInput
    fields = (
        FormulaField("areaHa", "area_ha", "Area (ha)"),
        FormulaField("costRpPerHa", "cost_rp_per_ha", "Cost per hectare (Rp/ha)",
                     suggested_default=1_000_000),
    )

    def compute(self, params: PlantingCostInput) -> CalculationOutput:
        return CalculationOutput(
            result_value=params.area_ha * params.cost_rp_per_ha,
            unit_label=self.unit_label,
        )
