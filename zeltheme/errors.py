"""Exception types raised by zeltheme."""


class ZelthemeError(Exception):
    """Base class for all zeltheme errors."""


class ConfigurationError(ZelthemeError):
    """Raised when the Zellij configuration paths cannot be determined."""


class CatalogFetchError(ZelthemeError, OSError):
    """Raised when the remote theme listing cannot be retrieved or decoded."""


class DocumentParseError(ZelthemeError, ValueError):
    """Raised when a KDL document cannot be parsed."""

    def __init__(self, message: str, source: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human readable description of the failure.
            source: Where the document came from (file path or URL), if known.
        """
        super().__init__(message)
        self.source = source

    def __str__(self) -> str:
        """Render the error with its source when available."""
        message = super().__str__()
        if self.source:
            return f"{self.source}: {message}"
        return message
