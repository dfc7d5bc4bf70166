from sqlalchemy import Column, Integer, String, Numeric, DateTime, Text, ForeignKey, Enum, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum


class CalculatorCategory(str, enum.Enum):
    FARMING = "farming"
    LIVESTOCK = "livestock"


# Saved results keep 4 fractional digits
RESULT_PRECISION = 15
RESULT_SCALE = 4
# Largest magnitude a NUMERIC(15, 4) column holds
RESULT_LIMIT = 10 ** (RESULT_PRECISION - RESULT_SCALE)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    results = relationship("CalculationResult", back_populates="user")


class Calculator(Base):
    """Catalog entry — the human-facing side of a registered formula."""
    __tablename__ = "calculators"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(Enum(CalculatorCategory), nullable=False)
    unit_label = Column(String, nullable=False)
    formula_key = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    results = relationship("CalculationResult", back_populates="calculator")


class CalculationResult(Base):
    """A saved calculation. Immutable once written; only deleted by its owner."""
    __tablename__ = "results"

    id = Column(Integer, primary_key=True, index=True)
    # Nullable for guest calculations that get attributed later
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    calculator_id = Column(Integer, ForeignKey("calculators.id"), nullable=False)
    input_json = Column(JSON, nullable=False)
    result_value = Column(Numeric(RESULT_PRECISION, RESULT_SCALE), nullable=False)
    unit_label = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="results")
    calculator = relationship("Calculator", back_populates="results")
