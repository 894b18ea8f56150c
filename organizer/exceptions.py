"""
Exceptions raised by Organizer.

Missing fragment files surface as the builtin FileNotFoundError so callers
can handle them like any other missing file.
"""


class OrganizerError(Exception):
    """Base class for all Organizer errors."""
    pass


class InvalidFragmentError(OrganizerError):
    """Raised when a fragment of the wrong shape is added to a bundle."""
    pass


class ConfigError(OrganizerError):
    """Raised when the configuration cannot be loaded or validated."""

    def __init__(self, message: str, config_path: str | None = None) -> None:
        super().__init__(message)
        self.config_path = config_path


class BundleNotFoundError(OrganizerError):
    """Raised when a bundle URL does not map to a usable cached bundle."""
    pass
