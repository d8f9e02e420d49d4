"""Custom exceptions for cave generation."""


class CaveGenError(Exception):
    """Base exception for cave generation errors."""

    pass


class ConfigError(CaveGenError):
    """Raised when generator arguments are invalid."""

    pass


class NoSurvivingRoomsError(CaveGenError):
    """Raised when a main room is requested but pruning left no rooms."""

    pass
