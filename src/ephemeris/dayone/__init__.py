"""Day One CSV import."""

from .importer import import_csv, import_entry, import_records, resolve_anchor
from .models import ImportContext, ImportResult
from .properties import GeneratorRegistry, PropertyExtractor
from .records import parse_records, read_records
from .text import transform_text

__all__ = [
    "import_csv",
    "import_entry",
    "import_records",
    "resolve_anchor",
    "ImportContext",
    "ImportResult",
    "GeneratorRegistry",
    "PropertyExtractor",
    "parse_records",
    "read_records",
    "transform_text",
]
