"""Configuration loader for ephemeris.toml."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

from .dayone.properties import (
    DEFAULT_COLUMNS,
    PROPERTY_PREFIX,
    GeneratorRegistry,
    PropertyExtractor,
    default_registry,
    template_generator,
)
from .errors import ConfigurationError


@dataclass
class ImportConfig:
    """Import run defaults."""
    csv: Path | None = None
    photos: Path | None = None
    document: Path | None = None
    on_conflict: str = "skip"
    root: list[str] = field(default_factory=list)


@dataclass
class PropertiesConfig:
    """Heading property configuration."""
    prefix: str = PROPERTY_PREFIX
    columns: list[str] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    generators: dict[str, str] = field(default_factory=dict)  # name -> template


@dataclass
class EphemerisConfig:
    """Complete ephemeris configuration."""
    import_: ImportConfig
    properties: PropertiesConfig
    path: Path | None = None  # file the settings came from, if any

    def build_extractor(self) -> PropertyExtractor:
        """Default generators, with templates from the config added or overriding."""
        registry: GeneratorRegistry = default_registry()
        for name, template in self.properties.generators.items():
            registry.register(name, template_generator(template))
        return PropertyExtractor(
            columns=self.properties.columns,
            generators=registry,
            prefix=self.properties.prefix,
        )


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def _string_list(value: Any, key: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"{key} must be a list of strings")
    return list(value)


def load_config(config_path: Path | None = None) -> EphemerisConfig:
    """
    Load configuration from ephemeris.toml.

    Search order:
    1. config_path (if provided)
    2. cwd/ephemeris.toml

    Args:
        config_path: Explicit path to config file

    Returns:
        EphemerisConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    found: Path | None = None

    # Search for config file
    search_paths = []
    if config_path:
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / "ephemeris.toml")

    for path in search_paths:
        if path.exists():
            try:
                with open(path, "rb") as f:
                    toml_data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid config file {path}: {e}") from e
            found = path
            break

    # Parse import config
    import_data = toml_data.get("import", {})
    import_config = ImportConfig(
        csv=_optional_path(import_data.get("csv")),
        photos=_optional_path(import_data.get("photos")),
        document=_optional_path(import_data.get("document")),
        on_conflict=str(import_data.get("on_conflict", "skip")),
        root=_string_list(import_data.get("root", []), "import.root"),
    )

    # Parse properties config
    props_data = toml_data.get("properties", {})
    generators = props_data.get("generators", {})
    if not isinstance(generators, dict) or not all(
        isinstance(v, str) for v in generators.values()
    ):
        raise ConfigurationError("properties.generators must map names to template strings")

    properties_config = PropertiesConfig(
        prefix=str(props_data.get("prefix", PROPERTY_PREFIX)),
        columns=_string_list(props_data.get("columns", list(DEFAULT_COLUMNS)), "properties.columns"),
        generators=dict(generators),
    )

    return EphemerisConfig(
        import_=import_config,
        properties=properties_config,
        path=found,
    )
