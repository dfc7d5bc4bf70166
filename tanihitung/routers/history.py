"""
History endpoints — save, list, delete and export the caller's results.

All routes act on the authenticated user only.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from .. import history, models, schemas
from ..auth import get_current_user
from ..csv_export import CSV_MEDIA_TYPE, export_history_csv
from ..database import get_db

router = APIRouter(prefix="/history", tags=["history"])


@router.post("", response_model=schemas.CalculationResult)
def save_result(
    request: schemas.SaveResultRequest,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return history.save_result(
        db,
        user_id=current_user.id,
        calculator_id=request.calculator_id,
        input_json=request.input_json,
        result_value=request.result_value,
        unit_label=request.unit_label,
    )


@router.get("", response_model=List[schemas.CalculationResult])
def list_results(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    return history.list_results(db, current_user.id)


@router.get("/export")
def export_csv(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    content = export_history_csv(db, current_user.id)
    return Response(
        content=content,
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="calculation-history.csv"'},
    )


@router.delete("/{result_id}")
def delete_result(
    result_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    deleted = history.delete_result(db, result_id, current_user.id)
    return {"deleted": deleted > 0}
