"""CSV export parsing: one record per journal entry."""

import csv
import io
from pathlib import Path

from ..core.model import Record
from ..errors import InputError


def parse_records(text: str) -> list[Record]:
    """
    Parse Day One CSV text into records, in file order.

    The header row supplies field names and every later row is zipped
    against it by position:
    - short rows simply lack the trailing keys
    - extra trailing fields are ignored
    - rows without a non-empty ``uuid`` (blank trailing rows) are dropped

    Raises:
        InputError: if the CSV is malformed
    """
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=",", quotechar='"', strict=True)
    records: list[Record] = []
    try:
        header = next(reader, None)
        if header is None:
            return records
        for row in reader:
            record = dict(zip(header, row))
            if not record.get("uuid", "").strip():
                continue
            records.append(record)
    except csv.Error as e:
        raise InputError(f"Malformed CSV at line {reader.line_num}: {e}") from e
    return records


def read_records(path: Path) -> list[Record]:
    """Read and parse a CSV export file (UTF-8, optional byte-order mark)."""
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read CSV file {path}: {e}", path=str(path)) from e
    try:
        return parse_records(text)
    except InputError as e:
        raise InputError(f"{path}: {e}", path=str(path)) from e
