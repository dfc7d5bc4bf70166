"""
Livestock medicine dosage calculator.

mg total = body weight (kg) x dose (mg/kg)
If the product concentration (mg/ml) is given, also report the volume to
draw up: volumeMl = mg total / concentration.
"""

from dataclasses import dataclass
from typing import Optional

from .base import BaseFormula, CalculationOutput, FormulaField


@dataclass(frozen=True)
class LivestockMedicineDosageInput:
    weight_kg: float
    dose_mg_per_kg: float
    concentration_mg_per_ml: Optional[float] = None


class LivestockMedicineDosageFormula(BaseFormula):
    key = "livestock-medicine-dosage"
    name = "Livestock Medicine Dosage"
    description = "Calculate medicine dose by body weight, and volume when concentration is known"
    category = "livestock"
    unit_label = "mg"
    input_type = LivestockMedicineDosageInput
    fields = (
        FormulaField("weightKg", "weight_kg", "Weight (kg)"),
        FormulaField("doseMgPerKg", "dose_mg_per_kg", "Dose per kg (mg/kg)"),
        FormulaField("concentrationMgPerMl", "concentration_mg_per_ml",
                     "Concentration (mg/ml)", required=False),
    )

    def compute(self, params: LivestockMedicineDosageInput) -> CalculationOutput:
        mg_total = params.weight_kg * params.dose_mg_per_kg
        output = CalculationOutput(result_value=mg_total, unit_label=self.unit_label)
        if params.concentration_mg_per_ml is not None:
            output.additional_results = {
                "volumeMl": mg_total / params.concentration_mg_per_ml,
            }
        return output
