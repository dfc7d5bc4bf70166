"""
CSV export of a user's calculation history.

Columns: Date, Calculator, Input Summary, Result, Unit — newest first.

- Date is the UTC calendar date (YYYY-MM-DD)
- Input Summary turns the stored input JSON into "Area Ha: 2.5 | Dose Kg Per Ha: 100"
- Result is the stored decimal without the 4-digit padding (250.0000 -> 250)
- Fields with a comma, quote or line break are quoted, inner quotes doubled

Output always ends with a newline; an empty history is the header line alone.
"""

import csv
import io
import json
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Iterable

from sqlalchemy.orm import Session

from .history import list_results_with_calculator

CSV_COLUMNS = ["Date", "Calculator", "Input Summary", "Result", "Unit"]
CSV_MEDIA_TYPE = "text/csv"
NO_INPUT_DATA = "No input data"
SUMMARY_DECIMALS = 4

# Wide enough to quantize any finite float to 4 places
_DECIMAL_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)
_UPPERCASE = re.compile(r"([A-Z])")


@dataclass
class ExportRow:
    created_at: datetime
    calculator_name: str
    input_json: Any
    result_value: Any
    unit_label: str


def readable_key(key: str) -> str:
    """camelCase -> 'Camel Case'."""
    spaced = _UPPERCASE.sub(r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def plain_decimal(value: Decimal) -> str:
    """Decimal without exponent or trailing zeros."""
    value = value.normalize(_DECIMAL_CONTEXT)
    if value.is_zero():
        return "0"
    return format(value, "f")


def format_number(value, decimals: int = SUMMARY_DECIMALS) -> str:
    """
    Round to at most `decimals` fractional digits and drop trailing zeros.

    Rounds half-up on the exact binary value of a float, so 100.12345
    (stored as 100.1234500000000055...) gives 100.1235 and the exact tie
    0.03125 gives 0.0313.
    """
    if isinstance(value, float) and not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "Infinity" if value > 0 else "-Infinity"
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(value).quantize(quantum, context=_DECIMAL_CONTEXT)
    return plain_decimal(rounded)


def format_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, str):
        return value
    # Nested lists/objects are shown as compact JSON
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def summarize_input(input_json: Any) -> str:
    if not isinstance(input_json, Mapping) or not input_json:
        return NO_INPUT_DATA
    return " | ".join(
        f"{readable_key(str(key))}: {format_value(value)}"
        for key, value in input_json.items()
    )


def format_date(created_at: datetime) -> str:
    if created_at.tzinfo is not None:
        created_at = created_at.astimezone(timezone.utc)
    return created_at.strftime("%Y-%m-%d")


def format_result(result_value) -> str:
    if isinstance(result_value, Decimal):
        return plain_decimal(result_value)
    return format_number(result_value)


def csv_line(fields: Iterable[str]) -> str:
    """One CSV record without its terminator. Quotes only fields that need it."""
    buffer = io.StringIO()
    # "\r\n" as terminator makes the writer quote fields holding either character
    csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n").writerow(fields)
    return buffer.getvalue()[:-2]


def render_history_csv(rows: Iterable[ExportRow]) -> str:
    """Render rows (already newest first) as CSV text."""
    lines = [csv_line(CSV_COLUMNS)]
    for row in rows:
        lines.append(csv_line([
            format_date(row.created_at),
            row.calculator_name,
            summarize_input(row.input_json),
            format_result(row.result_value),
            row.unit_label,
        ]))
    return "\n".join(lines) + "\n"


def export_history_csv(db: Session, user_id: int) -> str:
    """Full history for one user as CSV text."""
    rows = [
        ExportRow(
            created_at=record.created_at,
            calculator_name=calculator_name,
            input_json=record.input_json,
            result_value=record.result_value,
            unit_label=record.unit_label,
        )
        for record, calculator_name in list_results_with_calculator(db, user_id)
    ]
    return render_history_csv(rows)
