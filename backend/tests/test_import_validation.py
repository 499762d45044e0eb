"""Tests for bulk import row validation and template generation."""
import pytest

from assetdesk.schemas.category import FieldDefinition
from assetdesk.services.csv_utils import parse_csv
from assetdesk.services.field_schema import (
    build_import_template,
    build_label_to_key_map,
    load_field_schema,
    template_filename,
    template_headers,
)
from assetdesk.services.import_validation import (
    parse_bool,
    parse_date,
    parse_number,
    validate_row,
    validate_rows,
)

LAPTOP_SCHEMA = [FieldDefinition(key="ram_gb", label="RAM (GB)", type="number", required=True)]

RICH_SCHEMA = load_field_schema([
    {"key": "ram_gb", "label": "RAM (GB)", "type": "number", "required": True},
    {"key": "os", "label": "Operating System", "type": "select", "options": ["macOS", "Windows"]},
    {"key": "bought", "label": "Bought On", "type": "date"},
    {"key": "encrypted", "label": "Disk Encrypted", "type": "boolean"},
    {"key": "desc", "label": "Description", "type": "textarea"},
])


# ─── Laptops scenario ─────────────────────────────────────────────────────────

def test_laptop_row_with_ram_is_valid():
    result = validate_row({"name": "MacBook Pro", "RAM (GB)": "16"}, LAPTOP_SCHEMA)
    assert result.valid is True
    assert result.errors == []


def test_missing_name_is_reported():
    result = validate_row({"name": "", "RAM (GB)": "16"}, LAPTOP_SCHEMA)
    assert result.valid is False
    assert result.errors == ["Name is required"]


def test_non_numeric_ram_is_reported():
    result = validate_row({"name": "iMac", "RAM (GB)": "abc"}, LAPTOP_SCHEMA)
    assert result.errors == ["RAM (GB) must be a number"]


def test_missing_required_custom_field():
    result = validate_row({"name": "iMac", "RAM (GB)": "  "}, LAPTOP_SCHEMA)
    assert result.errors == ["RAM (GB) is required"]


# ─── Built-in columns ─────────────────────────────────────────────────────────

def test_errors_accumulate_instead_of_short_circuiting():
    row = {
        "name": " ",
        "status": "LOST",
        "condition": "broken",
        "purchasePrice": "12,50",
        "purchaseDate": "yesterday",
        "warrantyEnd": "2024-13-45",
    }
    errors = validate_row(row, []).errors
    assert errors[0] == "Name is required"
    assert "Invalid status: LOST. Must be one of: AVAILABLE, ASSIGNED, MAINTENANCE, RETIRED" in errors
    assert "Invalid condition: broken. Must be one of: EXCELLENT, GOOD, FAIR, POOR" in errors
    assert "Purchase price must be a number" in errors
    assert "Purchase date must be a valid date (YYYY-MM-DD)" in errors
    assert "Warranty end must be a valid date (YYYY-MM-DD)" in errors
    assert len(errors) == 6


def test_status_and_condition_are_case_insensitive():
    row = {"name": "Phone", "status": "maintenance", "condition": "Excellent"}
    assert validate_row(row, []).valid is True


def test_name_missing_wins_even_when_everything_else_is_fine():
    row = {"status": "AVAILABLE", "purchasePrice": "10", "RAM (GB)": "8"}
    assert "Name is required" in validate_row(row, LAPTOP_SCHEMA).errors


def test_empty_optional_builtins_are_ignored():
    row = {"name": "Desk", "status": "", "purchasePrice": "", "purchaseDate": ""}
    assert validate_row(row, []).valid is True


# ─── Custom field types ───────────────────────────────────────────────────────

def test_rich_schema_valid_row():
    row = {
        "name": "ThinkPad",
        "RAM (GB)": "32",
        "Operating System": "Windows",
        "Bought On": "03/15/2024",
        "Disk Encrypted": "Yes",
        "Description": "anything goes",
    }
    assert validate_row(row, RICH_SCHEMA).valid is True


def test_rich_schema_type_errors():
    row = {
        "name": "ThinkPad",
        "RAM (GB)": "32",
        "Operating System": "BeOS",
        "Bought On": "soon",
        "Disk Encrypted": "maybe",
    }
    assert validate_row(row, RICH_SCHEMA).errors == [
        "Operating System must be one of: macOS, Windows",
        "Bought On must be a valid date (YYYY-MM-DD)",
        "Disk Encrypted must be true or false",
    ]


def test_select_without_options_accepts_any_value():
    schema = [FieldDefinition(key="color", label="Color", type="select")]
    assert validate_row({"name": "Chair", "Color": "teal"}, schema).valid is True


# ─── Value parsers ────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value, expected", [
    ("12.5", 12.5), ("16", 16.0), ("-3", -3.0), (".5", 0.5), ("1e3", 1000.0),
    ("abc", None), ("", None), ("1,000", None), ("nan", None), ("inf", None), ("1_000", None),
    ("1e999", None), ("-1e400", None),
])
def test_parse_number(value, expected):
    assert parse_number(value) == expected


@pytest.mark.parametrize("value", ["2024-01-15", "01/15/2024", "2024/01/15", "2024-01-15T10:30:00"])
def test_parse_date_accepts_common_formats(value):
    parsed = parse_date(value)
    assert parsed is not None
    assert (parsed.year, parsed.month, parsed.day) == (2024, 1, 15)
    assert parsed.tzinfo is not None


def test_parse_bool():
    assert parse_bool("TRUE") is True
    assert parse_bool("no") is False
    assert parse_bool("0") is False
    assert parse_bool("y") is None


# ─── Partitioning ─────────────────────────────────────────────────────────────

def test_validate_rows_numbers_rows_from_two():
    rows = [
        {"name": "MacBook Pro", "RAM (GB)": "16"},
        {"name": "", "RAM (GB)": "16"},
        {"name": "iMac", "RAM (GB)": "abc"},
    ]
    result = validate_rows(rows, LAPTOP_SCHEMA)
    assert result.total_rows == 3
    assert [r["rowNumber"] for r in result.valid_rows] == [2]
    assert [r["rowNumber"] for r in result.invalid_rows] == [3, 4]
    assert result.invalid_rows[0]["errors"] == ["Name is required"]
    assert result.invalid_rows[1]["data"] == {"name": "iMac", "RAM (GB)": "abc"}


# ─── Schema loading and template ──────────────────────────────────────────────

def test_load_field_schema_skips_bad_and_duplicate_entries():
    schema = load_field_schema([
        {"key": "a", "label": "A", "type": "text"},
        {"key": "a", "label": "A again", "type": "text"},
        {"label": "no key"},
        {"key": "b", "label": "B", "type": "colour"},
        {"key": "c", "label": "C", "type": "number", "required": None},
    ])
    assert [f.key for f in schema] == ["a", "c"]
    assert schema[1].required is False
    assert load_field_schema(None) == []


def test_label_to_key_map():
    assert build_label_to_key_map(RICH_SCHEMA)["Operating System"] == "os"


def test_template_headers_mark_required_columns():
    headers = template_headers(RICH_SCHEMA)
    assert headers[0] == "name*"
    assert "serialNumber" in headers
    assert headers[-5:] == ["RAM (GB)*", "Operating System", "Bought On", "Disk Encrypted", "Description"]


def test_filled_template_validates_cleanly():
    """Every row of a generated template must pass validation unchanged."""
    rows = parse_csv(build_import_template(RICH_SCHEMA))
    assert len(rows) == 1
    result = validate_rows(rows, RICH_SCHEMA)
    assert result.invalid_rows == []
    assert rows[0]["Operating System"] == "macOS"
    assert rows[0]["location"] == "Building A, Room 101"


def test_template_filename_is_sanitised():
    assert template_filename("Laptops & Tablets") == "laptops---tablets-import-template.csv"


def test_labels_are_normalised_for_csv_headers():
    schema = load_field_schema([
        {"key": "sz", "label": "Size ", "type": "text", "required": True},
        {"key": "cc", "label": " Cost Center *", "type": "text"},
        {"key": "bad", "label": " ** ", "type": "text"},
    ])
    assert [f.label for f in schema] == ["Size", "Cost Center"]
    assert template_headers(schema)[-2:] == ["Size*", "Cost Center"]


def test_template_with_untidy_labels_validates_cleanly():
    schema = load_field_schema([
        {"key": "sz", "label": "Size ", "type": "text", "required": True},
        {"key": "ram", "label": "RAM* ", "type": "number", "required": True},
    ])
    rows = parse_csv(build_import_template(schema))
    assert validate_rows(rows, schema).invalid_rows == []


# ─── Values the database cannot store ─────────────────────────────────────────

def test_overflowing_number_is_rejected():
    result = validate_row({"name": "X", "RAM (GB)": "1e999"}, LAPTOP_SCHEMA)
    assert result.errors == ["RAM (GB) must be a number"]


@pytest.mark.parametrize("price", ["123456789012", "100000000", "19.999", "1e9"])
def test_purchase_price_outside_column_range_is_rejected(price):
    result = validate_row({"name": "X", "purchasePrice": price}, [])
    assert result.errors == ["Purchase price must be below 100000000 with at most 2 decimal places"]


@pytest.mark.parametrize("price", ["99999999.99", "0.5", "19.90", "-12", "1e3"])
def test_purchase_price_within_column_range_is_accepted(price):
    assert validate_row({"name": "X", "purchasePrice": price}, []).valid is True
