"""
Calculator catalog and calculation endpoints.

GET  /api/calculators               — catalog, optionally ?category=farming|livestock
GET  /api/calculators/{slug}        — one catalog entry
POST /api/calculators               — add a catalog entry (409 on duplicate slug)
POST /api/calculate                 — run a formula: {"slug": ..., "input": {...}}
GET  /api/formulas                  — registered formulas with their fields
GET  /api/formulas/{key}            — one formula
POST /api/formulas/{key}/validate   — validate input without computing
"""

from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import catalog, models, schemas
from ..calculators.dispatcher import calculate as run_calculation, validate_input
from ..calculators.registry import get_formula, list_formulas
from ..database import get_db

router = APIRouter(tags=["calculators"])


@router.get("/calculators", response_model=List[schemas.Calculator])
def list_calculators(category: Optional[models.CalculatorCategory] = None,
                     db: Session = Depends(get_db)):
    return catalog.list_calculators(db, category)


@router.get("/calculators/{slug}", response_model=schemas.Calculator)
def get_calculator(slug: str, db: Session = Depends(get_db)):
    calculator = catalog.find_by_slug(db, slug)
    if not calculator:
        raise HTTPException(status_code=404, detail="Calculator not found")
    return calculator


@router.post("/calculators", response_model=schemas.Calculator)
def create_calculator(request: schemas.CalculatorCreate, db: Session = Depends(get_db)):
    return catalog.create_calculator(db, request.model_dump())


@router.post("/calculate")
def calculate(request: schemas.CalculateRequest):
    """No authentication — anyone can calculate; saving needs an account."""
    return run_calculation(request.slug, request.input).to_dict()


@router.get("/formulas", response_model=List[schemas.FormulaInfo])
def list_formula_info():
    return [formula.describe() for formula in list_formulas()]


@router.get("/formulas/{formula_key}", response_model=schemas.FormulaInfo)
def get_formula_info(formula_key: str):
    return get_formula(formula_key).describe()


@router.post("/formulas/{formula_key}/validate")
def validate_formula_input(formula_key: str, data: dict = Body(...)):
    parsed = validate_input(formula_key, data)
    return {"valid": True, "input": asdict(parsed)}
