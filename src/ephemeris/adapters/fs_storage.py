from pathlib import Path
from ..core.ports import StorageStrategy


class FsStorage(StorageStrategy):
    def __init__(self, path: Path):
        self.path = path

    def read_raw(self) -> str | None:
        p = self.path
        return p.read_text(encoding="utf-8") if p.exists() else None

    def write_raw(self, contents: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Atomic replace via temp file
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(contents, encoding="utf-8")
        tmp_path.replace(self.path)

    def exists(self) -> bool:
        return self.path.exists()
