"""Runtime wiring helper for CLI applications."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.fs_storage import FsStorage
from .adapters.org_codec import OrgCodec
from .config import EphemerisConfig, load_config
from .core.store import DocumentStore
from .dayone.properties import PropertyExtractor


@dataclass
class Runtime:
    """Container for all wired components."""
    codec: OrgCodec
    extractor: PropertyExtractor
    config: EphemerisConfig

    def open_store(self, document: Path) -> DocumentStore:
        return DocumentStore(FsStorage(document), self.codec)


def build_runtime(config_path: Path | None = None) -> Runtime:
    """Build and wire all components."""
    config = load_config(config_path=config_path)

    return Runtime(
        codec=OrgCodec(),
        extractor=config.build_extractor(),
        config=config,
    )
