"""Row-level validation for the CSV bulk import.

Every rule runs independently so a row reports all of its problems at once.
Rows arrive keyed by column label (built-in columns use their fixed names,
custom fields their category label).
"""
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from assetdesk.models.asset import AssetCondition, AssetStatus
from assetdesk.schemas.category import FieldDefinition

VALID_STATUSES = [s.value for s in AssetStatus]
VALID_CONDITIONS = [c.value for c in AssetCondition]

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
PRICE_LIMIT = Decimal("100000000")
PRICE_STEP = Decimal("0.01")
_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%d/%m/%Y", "%Y/%m/%d")
_TRUE_VALUES = {"true", "yes", "1"}
_FALSE_VALUES = {"false", "no", "0"}


# ─── Value parsers ───

def parse_number(value: str) -> float | None:
    value = (value or "").strip()
    if not _NUMBER_RE.match(value):
        return None
    number = float(value)
    # "1e999" overflows to inf, which JSONB cannot store
    return number if math.isfinite(number) else None


def parse_decimal(value: str) -> Decimal | None:
    value = (value or "").strip()
    if not _NUMBER_RE.match(value):
        return None
    try:
        return Decimal(value)
    except InvalidOperation:
        return None


def price_fits(price: Decimal) -> bool:
    """True if ``price`` fits the NUMERIC(10, 2) purchase_price column."""
    return abs(price) < PRICE_LIMIT and price % PRICE_STEP == 0


def parse_date(value: str) -> datetime | None:
    value = (value or "").strip()
    if not value:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            pass
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def parse_bool(value: str) -> bool | None:
    lowered = (value or "").strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


# ─── Validation ───

@dataclass
class RowValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class ImportValidationResult:
    valid_rows: list[dict] = field(default_factory=list)    # {rowNumber, data}
    invalid_rows: list[dict] = field(default_factory=list)  # {rowNumber, data, errors}

    @property
    def total_rows(self) -> int:
        return len(self.valid_rows) + len(self.invalid_rows)


def _present(row: dict[str, str], key: str) -> str:
    return (row.get(key) or "").strip()


def _validate_custom_field(f: FieldDefinition, value: str) -> str | None:
    if f.type == "number" and parse_number(value) is None:
        return f"{f.label} must be a number"
    if f.type == "date" and parse_date(value) is None:
        return f"{f.label} must be a valid date (YYYY-MM-DD)"
    if f.type == "boolean" and parse_bool(value) is None:
        return f"{f.label} must be true or false"
    # An options-less select accepts anything
    if f.type == "select" and f.options and value not in f.options:
        return f"{f.label} must be one of: {', '.join(f.options)}"
    return None


def validate_row(row: dict[str, str], field_schema: list[FieldDefinition]) -> RowValidationResult:
    errors: list[str] = []

    if not _present(row, "name"):
        errors.append("Name is required")

    status = _present(row, "status")
    if status and status.upper() not in VALID_STATUSES:
        errors.append(f"Invalid status: {status}. Must be one of: {', '.join(VALID_STATUSES)}")

    condition = _present(row, "condition")
    if condition and condition.upper() not in VALID_CONDITIONS:
        errors.append(f"Invalid condition: {condition}. Must be one of: {', '.join(VALID_CONDITIONS)}")

    price = _present(row, "purchasePrice")
    if price:
        amount = parse_decimal(price)
        if amount is None:
            errors.append("Purchase price must be a number")
        elif not price_fits(amount):
            errors.append("Purchase price must be below 100000000 with at most 2 decimal places")

    purchase_date = _present(row, "purchaseDate")
    if purchase_date and parse_date(purchase_date) is None:
        errors.append("Purchase date must be a valid date (YYYY-MM-DD)")

    warranty_end = _present(row, "warrantyEnd")
    if warranty_end and parse_date(warranty_end) is None:
        errors.append("Warranty end must be a valid date (YYYY-MM-DD)")

    for f in field_schema:
        value = _present(row, f.label)
        if not value:
            if f.required:
                errors.append(f"{f.label} is required")
            continue
        error = _validate_custom_field(f, value)
        if error:
            errors.append(error)

    return RowValidationResult(valid=not errors, errors=errors)


def validate_rows(rows: list[dict[str, str]], field_schema: list[FieldDefinition],
                  first_row_number: int = 2) -> ImportValidationResult:
    """Partition rows into valid / invalid.

    ``first_row_number`` defaults to 2 so numbers match spreadsheet lines
    (line 1 is the header).
    """
    result = ImportValidationResult()
    for idx, row in enumerate(rows, start=first_row_number):
        check = validate_row(row, field_schema)
        if check.valid:
            result.valid_rows.append({"rowNumber": idx, "data": row})
        else:
            result.invalid_rows.append({"rowNumber": idx, "data": row, "errors": check.errors})
    return result
