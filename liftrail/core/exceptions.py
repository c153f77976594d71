"""
Error types raised by the rail calculation core.
"""

from typing import Optional


class LiftRailError(Exception):
    """Base exception for calculation core errors."""
    pass


class ConfigurationError(LiftRailError):
    """Raised when a referenced rail profile is not in the catalog.

    Attributes:
        name: The requested rail name
    """

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.name = name


class InvalidGeometryError(LiftRailError):
    """Raised when a divisor of a load case is zero, negative or not finite.

    Attributes:
        field: Name of the offending input or section property
        value: The rejected value
    """

    def __init__(self, field: str, value: float, message: Optional[str] = None):
        self.field = field
        self.value = value
        self.message = message or f"'{field}' must be a positive finite number, got {value!r}"
        super().__init__(self.message)
