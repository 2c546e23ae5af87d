"""Error types for ptree."""


class PairtreeError(Exception):
    """Base exception for ptree errors."""
    pass


class InvalidPathError(PairtreeError, ValueError):
    """Pairtree path violates the shorty segment-length rules."""

    def __init__(self, path: str, reason: str, message: str | None = None):
        self.path = path
        self.reason = reason
        super().__init__(message or f"Invalid pairtree path ({path}): {reason}")


class MalformedEscapeError(PairtreeError, ValueError):
    """A ``^`` escape in a cleaned identifier cannot be decoded."""

    def __init__(self, value: str, position: int, message: str | None = None):
        self.value = value
        self.position = position
        super().__init__(
            message or f"Malformed escape at position {position} in {value!r}"
        )


class ConfigError(PairtreeError):
    """Configuration error."""
    pass


class StorageError(PairtreeError, OSError):
    """Filesystem layer could not create or read a pairtree directory."""
    pass
