"""
Calculator catalog — the `calculators` table.

Plain lookups and inserts. The five built-in formulas are seeded into the
catalog on startup so every registered formula has a catalog entry to save
results against.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .calculators.registry import list_formulas
from .errors import ConflictError

logger = logging.getLogger(__name__)


def default_calculators() -> List[dict]:
    """Catalog rows for every registered formula. Slug and formula key are the same."""
    return [
        {
            "name": formula.name,
            "slug": formula.key,
            "description": formula.description,
            "category": models.CalculatorCategory(formula.category),
            "unit_label": formula.unit_label,
            "formula_key": formula.key,
        }
        for formula in list_formulas()
    ]


def find_by_slug(db: Session, slug: str) -> Optional[models.Calculator]:
    return db.query(models.Calculator).filter(models.Calculator.slug == slug).first()


def get_calculator(db: Session, calculator_id: int) -> Optional[models.Calculator]:
    return db.query(models.Calculator).filter(models.Calculator.id == calculator_id).first()


def list_calculators(db: Session, category=None) -> List[models.Calculator]:
    query = db.query(models.Calculator)
    if category is not None:
        query = query.filter(models.Calculator.category == models.CalculatorCategory(category))
    return query.order_by(models.Calculator.id).all()


def create_calculator(db: Session, data: dict) -> models.Calculator:
    """Insert a catalog entry. A duplicate slug raises ConflictError with the database message."""
    calculator = models.Calculator(**data)
    db.add(calculator)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(str(e.orig)) from e
    db.refresh(calculator)
    logger.info("Created calculator %s (%s)", calculator.slug, calculator.formula_key)
    return calculator


def seed_default_calculators(db: Session) -> int:
    """Insert missing built-in calculators. Safe to run multiple times — skips existing."""
    seeded = 0
    for data in default_calculators():
        if find_by_slug(db, data["slug"]) is None:
            db.add(models.Calculator(**data))
            seeded += 1
    db.commit()
    if seeded:
        logger.info("Seeded %d default calculators", seeded)
    return seeded
