"""Exception types raised by libscout."""


class ScoutError(Exception):
    """Base class for libscout errors."""


class LibraryNotFoundError(ScoutError):
    """The configured shared library root does not exist."""

    def __init__(self, path):
        super().__init__(f"Shared library not found: {path}")
        self.path = path
