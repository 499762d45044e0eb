"""Category field schema resolution and import template generation."""
import logging
import re

from pydantic import ValidationError

from assetdesk.schemas.category import FieldDefinition
from assetdesk.services.csv_utils import generate_csv

logger = logging.getLogger(__name__)

# ─── Built-in asset columns ───

BUILTIN_COLUMNS = [
    "name",
    "serialNumber",
    "assetTag",
    "status",         # AVAILABLE, ASSIGNED, MAINTENANCE, RETIRED
    "condition",      # EXCELLENT, GOOD, FAIR, POOR
    "location",
    "purchasePrice",
    "purchaseDate",   # YYYY-MM-DD
    "warrantyEnd",    # YYYY-MM-DD
    "notes",
]
REQUIRED_BUILTIN_COLUMNS = {"name"}

BUILTIN_EXAMPLE_ROW = [
    "Example Asset",
    "SN-12345",
    "AST-001",
    "AVAILABLE",
    "GOOD",
    "Building A, Room 101",
    "999.99",
    "2024-01-15",
    "2026-01-15",
    "Optional notes here",
]


def load_field_schema(raw: list | None) -> list[FieldDefinition]:
    """Parse the JSONB field_schema column into FieldDefinitions.

    Entries that do not describe a usable field are skipped and logged.
    Duplicate keys keep the first definition.
    """
    fields: list[FieldDefinition] = []
    seen_keys: set[str] = set()
    for entry in raw or []:
        try:
            field = FieldDefinition.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping malformed field definition %r: %s", entry, exc.errors()[0]["msg"])
            continue
        if field.key in seen_keys:
            logger.warning("Skipping duplicate field key %r", field.key)
            continue
        seen_keys.add(field.key)
        fields.append(field)
    return fields


def build_label_to_key_map(field_schema: list[FieldDefinition]) -> dict[str, str]:
    return {f.label: f.key for f in field_schema}


def _example_value(field: FieldDefinition) -> str:
    if field.type == "select" and field.options:
        return field.options[0]
    if field.type == "date":
        return "2024-01-15"
    if field.type == "number":
        return "100"
    if field.type == "boolean":
        return "true"
    return "Example value"


def template_headers(field_schema: list[FieldDefinition]) -> list[str]:
    """Column headers with ``*`` appended to required columns."""
    headers = [f"{c}*" if c in REQUIRED_BUILTIN_COLUMNS else c for c in BUILTIN_COLUMNS]
    headers.extend(f"{f.label}*" if f.required else f.label for f in field_schema)
    return headers


def build_import_template(field_schema: list[FieldDefinition]) -> str:
    """Header row plus one example row that validates against the schema."""
    example_row = BUILTIN_EXAMPLE_ROW + [_example_value(f) for f in field_schema]
    return generate_csv(template_headers(field_schema), [example_row])


def template_filename(category_name: str) -> str:
    safe_name = re.sub(r"[^a-zA-Z0-9]", "-", category_name).lower()
    return f"{safe_name}-import-template.csv"
