"""Import report persistence."""

from pathlib import Path
from typing import Any

import yaml

from .models import ImportResult

REPORT_VERSION = 1


def report_dict(result: ImportResult) -> dict[str, Any]:
    return {
        "version": REPORT_VERSION,
        "timestamp": result.timestamp,
        "source": result.source,
        "document": result.document,
        "imported": result.imported,
        "skipped": list(result.skipped),
        "replaced": list(result.replaced),
    }


def save_report(result: ImportResult, output_path: Path) -> None:
    """Save an import report as YAML."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(report_dict(result), f, sort_keys=False, allow_unicode=True)


def load_report(input_path: Path) -> ImportResult:
    """Load an import report from YAML."""
    with input_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ImportResult(
        source=data.get("source", ""),
        imported=data.get("imported", 0),
        skipped=list(data.get("skipped") or []),
        replaced=list(data.get("replaced") or []),
        document=data.get("document"),
        timestamp=data.get("timestamp", ""),
    )
