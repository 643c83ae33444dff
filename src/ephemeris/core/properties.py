from typing import Iterator, MutableMapping


class PropertyDrawer(MutableMapping[str, str]):
    """
    Ordered key/value properties attached to a heading, e.g.,
    - "DAYONE_UUID": "6F30404AB159433D8C9AF57052E4F3B6"
    - "SOURCE": "Day One"
    Assigning an existing key replaces its value in place (last write wins).
    """

    def __init__(self, initial: dict | None = None):
        self._d: dict[str, str] = dict(initial or {})

    # MutableMapping interface
    def __getitem__(self, k: str) -> str:
        return self._d[k]

    def __setitem__(self, k: str, v: str) -> None:
        self._d[k] = v

    def __delitem__(self, k: str) -> None:
        del self._d[k]

    def __iter__(self) -> Iterator[str]:
        return iter(self._d)

    def __len__(self) -> int:
        return len(self._d)

    def __repr__(self) -> str:
        return f"PropertyDrawer({self._d!r})"

    # Convenience
    def is_blank(self) -> bool:
        return not any(k.strip() or v.strip() for k, v in self._d.items())
