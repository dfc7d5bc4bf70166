"""
Fertilizer requirement calculator.

kg needed = area (ha) x dose (kg/ha)
"""

from dataclasses import dataclass

from .base import BaseFormula, CalculationOutput, FormulaField


@dataclass(frozen=True)
class FertilizerRequirementInput:
    area_ha: float
    dose_kg_per_ha: float


class FertilizerRequirementFormula(BaseFormula):
    key = "fertilizer-requirement"
    name = "Fertilizer Requirement"
    description = "Calculate fertilizer needed for your farm area"
    category = "farming"
    unit_label = "kg"
    input_type = FertilizerRequirementInput
    fields = (
        FormulaField("areaHa", "area_ha", "Area (ha)"),
        FormulaField("doseKgPerHa", "dose_kg_per_ha", "Dose per hectare (kg/ha)",
                     suggested_default=100),
    )

    def compute(self, params: FertilizerRequirementInput) -> CalculationOutput:
        return CalculationOutput(
            result_value=params.area_ha * params.dose_kg_per_ha,
            unit_label=self.unit_label,
        )
