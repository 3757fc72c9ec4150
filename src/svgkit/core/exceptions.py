"""Exception classes for svgkit."""

from __future__ import annotations

from typing import Any


class SvgKitError(Exception):
    """Base exception for all svgkit errors."""


class UnsupportedShapeError(SvgKitError):
    """Raised when a transform receives a value outside the known shape set."""

    def __init__(self, shape: Any, operation: str) -> None:
        """Initialize the exception.

        Args:
            shape: The offending value.
            operation: Name of the operation that was dispatched.
        """
        super().__init__(f"Unsupported shape for {operation}: {type(shape).__name__}")
        self.shape = shape
        self.operation = operation


class EmptyGeometryError(SvgKitError):
    """Raised when bounds or a centroid is requested over zero points."""

    def __init__(self, what: str = "points") -> None:
        """Initialize the exception.

        Args:
            what: Description of the empty input.
        """
        super().__init__(f"Cannot compute geometry of empty {what}")
        self.what = what


class DivisionByZeroError(SvgKitError, ZeroDivisionError):
    """Raised on element-wise division by a zero component."""

    def __init__(self, numerator: Any, denominator: Any) -> None:
        """Initialize the exception.

        Args:
            numerator: The dividend vector.
            denominator: The divisor vector containing a zero.
        """
        super().__init__(f"Division by zero: {numerator} / {denominator}")
        self.numerator = numerator
        self.denominator = denominator


class InvalidShapeError(SvgKitError):
    """Raised when a shape is constructed or loaded with invalid data."""

    def __init__(self, message: str) -> None:
        """Initialize the exception with a custom message.

        Args:
            message: Description of why the shape is invalid.
        """
        super().__init__(message)


class InvalidPathCommandError(InvalidShapeError):
    """Raised when a path command carries operands that do not fit its kind."""

    def __init__(self, command: str, message: str) -> None:
        """Initialize the exception.

        Args:
            command: The command letter.
            message: Description of the problem.
        """
        super().__init__(f"Invalid path command '{command}': {message}")
        self.command = command
