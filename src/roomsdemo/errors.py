class RoomsError(Exception):
    """Base error for room sequencing exceptions."""


class InvalidArgument(RoomsError, ValueError):
    """Raised when an operation receives an argument outside its domain."""


class SessionNotStarted(RoomsError):
    """Raised when navigating before the session has been initialized."""


class ConfigError(RoomsError):
    """Raised when settings cannot be turned into a usable configuration."""
