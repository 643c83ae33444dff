from .model import OutlineDocument
from .ports import DocumentCodec, StorageStrategy


class DocumentStore:
    def __init__(self, storage: StorageStrategy, codec: DocumentCodec):
        self.storage = storage
        self.codec = codec

    def load(self) -> tuple[OutlineDocument, bool]:
        """Return the stored document and whether it was freshly created."""
        raw = self.storage.read_raw()
        if raw is None:
            return OutlineDocument(), True
        return self.codec.parse(raw), False

    def save(self, doc: OutlineDocument) -> None:
        self.storage.write_raw(self.codec.render(doc))
