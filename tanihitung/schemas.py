from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime
from .models import CalculatorCategory, RESULT_LIMIT


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=1)


class User(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    class Config:
        from_attributes = True


class CalculatorBase(BaseModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: CalculatorCategory
    unit_label: str = Field(..., min_length=1)
    formula_key: str = Field(..., min_length=1)


class CalculatorCreate(CalculatorBase):
    pass


class Calculator(CalculatorBase):
    id: int
    created_at: datetime
    class Config:
        from_attributes = True


class CalculateRequest(BaseModel):
    slug: Optional[str] = None
    # Left untyped so the dispatcher reports a non-mapping input itself
    input: Any = None


class SaveResultRequest(BaseModel):
    calculator_id: int
    input_json: Dict[str, Any]
    result_value: float = Field(..., gt=-RESULT_LIMIT, lt=RESULT_LIMIT, allow_inf_nan=False)
    unit_label: str


class CalculationResult(BaseModel):
    id: int
    user_id: Optional[int] = None
    calculator_id: int
    input_json: Dict[str, Any]
    result_value: float
    unit_label: str
    created_at: datetime
    class Config:
        from_attributes = True

    @field_validator("result_value", mode="before")
    @classmethod
    def stored_decimal(cls, value):
        # NUMERIC columns come back as Decimal
        return float(value)


class FormulaFieldInfo(BaseModel):
    name: str
    description: str
    type: str
    required: bool
    suggested_default: Optional[float] = None


class FormulaInfo(BaseModel):
    key: str
    name: str
    description: str
    category: str
    unit_label: str
    fields: List[FormulaFieldInfo]
