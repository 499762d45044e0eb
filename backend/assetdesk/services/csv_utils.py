"""CSV parsing and generation for bulk import/export.

Quoted cells may contain commas, doubled quotes and line breaks. Type checks
are left to the row validator; the parser only splits and trims.
"""
import csv
import io
import logging
import re
from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

_REQUIRED_MARKER = re.compile(r"\*$")


def clean_header(header: str) -> str:
    """Drop the trailing ``*`` templates use to flag required columns."""
    return _REQUIRED_MARKER.sub("", header.strip()).strip()


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into row dicts keyed by trimmed header name.

    Returns [] when there is no header, no data row, or the text is not
    readable as CSV. Short rows are padded with empty strings; cells beyond
    the header are dropped.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    try:
        records = [
            [cell.strip() for cell in record]
            for record in csv.reader(io.StringIO(text, newline=""))
            if record
        ]
    except csv.Error as exc:
        logger.warning("Unreadable CSV upload: %s", exc)
        return []

    if len(records) < 2:
        return []

    headers = [clean_header(h) for h in records[0]]
    rows: list[dict[str, str]] = []
    for values in records[1:]:
        rows.append({
            header: values[idx] if idx < len(values) else ""
            for idx, header in enumerate(headers)
        })
    return rows


def generate_csv(headers: Sequence[str], rows: Iterable[Sequence]) -> str:
    """Header line plus rows; cells are quoted only when they need it."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(headers)
    writer.writerows(rows)
    return output.getvalue()
