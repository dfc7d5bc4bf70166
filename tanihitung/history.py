"""
History record store — saved calculation results.

All reads and deletes filter on user_id in the query itself, so one user's
records are never loaded on behalf of another.

result_value is stored as NUMERIC(15, 4). save_result recomputes the result
from input_json whenever the calculator's formula is registered, so a stored
value always matches what the dispatcher would produce.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from sqlalchemy.orm import Session

from . import models
from .calculators.registry import get_formula, has_formula
from .catalog import get_calculator
from .errors import NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)

RESULT_QUANTUM = Decimal(1).scaleb(-models.RESULT_SCALE)  # 0.0001


def quantize_result(value) -> Decimal:
    """Round a result to storage precision (4 fractional digits, half-up)."""
    number = Decimal(str(value))
    if not _storable(number):
        raise ValidationFailedError(
            "result_value", f"Result value {value} is outside the storable range"
        )
    return number.quantize(RESULT_QUANTUM, rounding=ROUND_HALF_UP)


def _storable(number: Decimal) -> bool:
    return number.is_finite() and abs(number) < models.RESULT_LIMIT


def _newest_first(query):
    # Same timestamp: later insert first
    return query.order_by(models.CalculationResult.created_at.desc(),
                          models.CalculationResult.id.desc())


def insert_result(db: Session, user_id: Optional[int], calculator_id: int,
                  input_json: dict, result_value, unit_label: str) -> models.CalculationResult:
    record = models.CalculationResult(
        user_id=user_id,
        calculator_id=calculator_id,
        input_json=input_json,
        result_value=quantize_result(result_value),
        unit_label=unit_label,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def _check_against_formula(calculator: models.Calculator, input_json: dict,
                           result_value, unit_label: str):
    formula = get_formula(calculator.formula_key)
    expected = formula.calculate(input_json)
    if not _storable(Decimal(str(expected.result_value))):
        raise ValidationFailedError(
            "result_value",
            f"{calculator.formula_key} result {expected.result_value} for the given input "
            f"is outside the storable range",
        )
    if quantize_result(expected.result_value) != quantize_result(result_value):
        raise ValidationFailedError(
            "result_value",
            f"Result value {result_value} does not match {calculator.formula_key} "
            f"result {expected.result_value} for the given input",
        )
    if unit_label != expected.unit_label:
        raise ValidationFailedError(
            "unit_label",
            f"Unit label {unit_label!r} does not match {calculator.formula_key} "
            f"unit {expected.unit_label!r}",
        )


def save_result(db: Session, user_id: int, calculator_id: int, input_json: dict,
                result_value, unit_label: str) -> models.CalculationResult:
    """
    Persist a calculation for a user.

    Raises NotFoundError for a missing user or calculator and
    ValidationFailedError when the result does not match the formula.
    """
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise NotFoundError(f"User with ID {user_id} not found")

    calculator = get_calculator(db, calculator_id)
    if not calculator:
        raise NotFoundError(f"Calculator with ID {calculator_id} not found")

    if has_formula(calculator.formula_key):
        try:
            _check_against_formula(calculator, input_json, result_value, unit_label)
        except ValidationFailedError as e:
            logger.warning("Rejected save for user %s on %s: %s",
                           user_id, calculator.slug, e.message)
            raise

    record = insert_result(db, user_id, calculator_id, input_json, result_value, unit_label)
    logger.info("Saved result %s for user %s (%s)", record.id, user_id, calculator.slug)
    return record


def list_results(db: Session, user_id: int) -> List[models.CalculationResult]:
    query = db.query(models.CalculationResult).filter(
        models.CalculationResult.user_id == user_id
    )
    return _newest_first(query).all()


def list_results_with_calculator(db: Session, user_id: int) -> list:
    """Rows of (CalculationResult, calculator_name), newest first."""
    query = (
        db.query(models.CalculationResult, models.Calculator.name.label("calculator_name"))
        .join(models.Calculator, models.CalculationResult.calculator_id == models.Calculator.id)
        .filter(models.CalculationResult.user_id == user_id)
    )
    return _newest_first(query).all()


def delete_result(db: Session, result_id: int, user_id: int) -> int:
    """Delete a record only if it belongs to user_id. Returns the number of rows deleted."""
    if user_id is None:
        # `user_id == None` would compile to IS NULL and match guest records
        return 0
    deleted = (
        db.query(models.CalculationResult)
        .filter(
            models.CalculationResult.id == result_id,
            models.CalculationResult.user_id == user_id,
        )
        .delete(synchronize_session=False)
    )
    db.commit()
    if deleted:
        logger.info("Deleted result %s for user %s", result_id, user_id)
    return deleted
