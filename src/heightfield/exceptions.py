"""Custom exceptions for heightfield generation."""


class HeightfieldError(Exception):
    """Base exception for heightfield errors."""

    pass


class InvalidConfigurationError(HeightfieldError):
    """Raised when generation options describe an impossible setup."""

    pass


class GridShapeError(HeightfieldError):
    """Raised when a grid does not match the configured dimensions."""

    pass
