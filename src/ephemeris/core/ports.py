from typing import Protocol
from .model import OutlineDocument


class StorageStrategy(Protocol):
    """
    Single-file store for one outline document.
    """

    def read_raw(self) -> str | None:
        pass

    def write_raw(self, contents: str) -> None:
        pass

    def exists(self) -> bool:
        pass


class DocumentCodec(Protocol):
    """
    Round-trip outline text <-> OutlineDocument without enforcing any schema.
    """

    def parse(self, text: str) -> OutlineDocument:
        pass

    def render(self, doc: OutlineDocument) -> str:
        pass
