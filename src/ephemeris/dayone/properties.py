"""Heading properties derived from a Day One record."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from string import Formatter

Generator = Callable[[Mapping[str, str]], "str | None"]

PROPERTY_PREFIX = "DAYONE_"

DEFAULT_COLUMNS = [
    "uuid",
    "date",
    "modifiedDate",
    "timeZoneIdentifier",
    "latitude",
    "longitude",
    "placeName",
    "localityName",
    "administrativeArea",
    "country",
]

ADDRESS_FIELDS = ["placeName", "localityName", "administrativeArea", "country"]


def source_property(record: Mapping[str, str]) -> str | None:
    return "Day One"


def address_property(record: Mapping[str, str]) -> str | None:
    """Join the non-blank location fields with ", "; None when there are none."""
    parts = [record[k] for k in ADDRESS_FIELDS if record.get(k, "").strip()]
    return ", ".join(parts) if parts else None


class GeneratorRegistry:
    """Ordered table of named property generators.

    A generator takes a read-only record and returns the property value, or
    None to leave the property out. Registering an existing name replaces
    the function but keeps its position.
    """

    def __init__(self, generators: dict[str, Generator] | None = None):
        self._generators: dict[str, Generator] = dict(generators or {})

    def register(self, name: str, fn: Generator | None = None):
        """Register ``fn`` under ``name``; usable as a decorator when ``fn`` is omitted."""
        if fn is None:
            def decorator(f: Generator) -> Generator:
                self._generators[name] = f
                return f
            return decorator
        self._generators[name] = fn
        return fn

    def unregister(self, name: str) -> None:
        self._generators.pop(name, None)

    def items(self) -> Iterator[tuple[str, Generator]]:
        return iter(list(self._generators.items()))

    def names(self) -> list[str]:
        return list(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __len__(self) -> int:
        return len(self._generators)


def default_registry() -> GeneratorRegistry:
    return GeneratorRegistry({"SOURCE": source_property, "ADDRESS": address_property})


def template_generator(template: str) -> Generator:
    """
    Build a generator from a format template such as "{placeName}, {country}".

    Missing fields format as empty strings; a result that is only whitespace
    suppresses the property.
    """
    fields = [name for _, name, _, _ in Formatter().parse(template) if name]

    def generate(record: Mapping[str, str]) -> str | None:
        values = {name: record.get(name, "") for name in fields}
        value = template.format_map(values)
        return value if value.strip() else None

    return generate


class PropertyExtractor:
    def __init__(
        self,
        columns: list[str] | None = None,
        generators: GeneratorRegistry | None = None,
        prefix: str = PROPERTY_PREFIX,
    ):
        self.columns = list(DEFAULT_COLUMNS if columns is None else columns)
        self.generators = default_registry() if generators is None else generators
        self.prefix = prefix
        self.uuid_property = prefix + "UUID"

    def extract(self, record: Mapping[str, str]) -> list[tuple[str, str]]:
        """
        Return (name, value) pairs: static columns first, then generators.

        Duplicate names are kept; applying them in order means the last one wins.
        """
        props: list[tuple[str, str]] = []
        for column in self.columns:
            value = record.get(column)
            if value is not None and value.strip():
                props.append((self.prefix + column.upper(), value))

        view = _ReadOnlyRecord(record)
        for name, generate in self.generators.items():
            value = generate(view)
            if value is not None:
                props.append((name, value))
        return props


class _ReadOnlyRecord(Mapping[str, str]):
    def __init__(self, record: Mapping[str, str]):
        self._record = record

    def __getitem__(self, k: str) -> str:
        return self._record[k]

    def __iter__(self):
        return iter(self._record)

    def __len__(self) -> int:
        return len(self._record)
