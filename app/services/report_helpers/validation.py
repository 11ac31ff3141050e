# /reporting-backend/app/services/report_helpers/validation.py

"""
Input checks shared by the submission engine, the rating reconciler and the
hierarchy updates.

Required fields are enforced strictly. Numeric fields are the opposite:
anything that does not parse as a number becomes 0 instead of being rejected.
"""

import math
from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Type

import pandas as pd

from ..errors import ReportValidationError

REQUIRED_REPORT_FIELDS = ("lecturer_id", "week_of_reporting", "date_of_lecture", "topic_taught")

# Count columns are 32-bit signed integers on every supported backend.
MAX_STORED_COUNT = 2**31 - 1


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and value.strip() == ""


def missing_fields(values: Mapping[str, Any], required: Iterable[str]) -> List[str]:
    return [name for name in required if _is_blank(values.get(name))]


def require_fields(
    values: Mapping[str, Any],
    required: Iterable[str],
    message: str = "Missing required fields",
    error: Type[ValueError] = ReportValidationError,
) -> None:
    """Raises `error` naming every blank or absent field."""
    missing = missing_fields(values, required)
    if missing:
        raise error(f"{message}: {', '.join(missing)}")


def safe_number(value: Any) -> float:
    """Best-effort numeric coercion. None, blanks, garbage, NaN and infinities all become 0."""
    if value is None or str(value).strip() == "":
        return 0.0
    try:
        number = float(value)
    except (ValueError, TypeError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def safe_count(value: Any) -> int:
    """Like `safe_number`, truncated to an int. Values the count columns cannot hold become 0."""
    number = safe_number(value)
    if abs(number) > MAX_STORED_COUNT:
        return 0
    return int(number)


def parse_lecture_date(value: Any) -> date:
    """
    Accepts a date, a datetime or any date string pandas can parse
    ("2024-02-05", "05 Feb 2024", "2024/02/05").

    Raises:
        ReportValidationError: the value is not a recognisable date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        raise ReportValidationError(f"Invalid date_of_lecture: {value}")
    return parsed.date()
