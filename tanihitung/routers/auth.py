"""
Auth endpoints — register, login, me.

Registering an email that already exists is a 409 conflict.
Login returns a bearer access token used by the history endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import authenticate, create_access_token, get_current_user, hash_password
from ..database import get_db
from ..errors import ConflictError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: models.User) -> dict:
    return {
        "access_token": create_access_token(user.id),
        "token_type": "bearer",
        "user_id": user.id,
        "user": schemas.User.model_validate(user).model_dump(mode="json"),
    }


@router.post("/register")
def register(request: schemas.UserCreate, db: Session = Depends(get_db)):
    user = models.User(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError(str(e.orig)) from e
    db.refresh(user)
    logger.info("Registered user %s", user.id)
    return _token_response(user)


@router.post("/login")
def login(request: schemas.LoginRequest, db: Session = Depends(get_db)):
    user = authenticate(db, request.email, request.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return _token_response(user)


@router.get("/me", response_model=schemas.User)
def me(current_user: models.User = Depends(get_current_user)):
    return current_user
