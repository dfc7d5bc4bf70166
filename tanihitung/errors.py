"""
Typed errors raised by the calculation core, history store and catalog.

Each error carries a `kind` and the HTTP status the API boundary maps it to.
The message text is passed through to clients unchanged.
"""


class CalculationError(Exception):
    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"detail": self.message, "kind": self.kind}


class BadRequestError(CalculationError):
    """Missing formula key or a non-mapping input."""
    kind = "bad_request"
    status_code = 400


class UnknownFormulaError(CalculationError):
    kind = "unknown_formula"
    status_code = 404

    def __init__(self, formula_key: str):
        super().__init__(f"unknown calculator slug: {formula_key}")
        self.formula_key = formula_key


class ValidationFailedError(CalculationError):
    """A single input field failed its type, positivity or integer check."""
    kind = "validation_failed"
    status_code = 422

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field

    def to_dict(self) -> dict:
        return {**super().to_dict(), "field": self.field}


class NotFoundError(CalculationError):
    kind = "not_found"
    status_code = 404


class ConflictError(CalculationError):
    """Uniqueness violation reported by the database."""
    kind = "conflict"
    status_code = 409
