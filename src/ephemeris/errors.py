"""Exceptions raised by the import pipeline."""


class EphemerisError(Exception):
    """Base class for all fatal import errors."""


class InputError(EphemerisError):
    """Raised when the CSV export cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None):
        """Initialize the error."""
        self.path = path
        super().__init__(message)


class ConfigurationError(EphemerisError):
    """Raised for invalid configuration, e.g. an unknown conflict policy."""


class AnchorNotFoundError(EphemerisError):
    """Raised when the insertion anchor path does not exist in the document."""

    def __init__(self, path: list[str]):
        """Initialize the error."""
        self.path = list(path)
        super().__init__(f"Anchor not found: {' / '.join(self.path)}")
