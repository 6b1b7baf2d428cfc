"""Exception hierarchy for cuboid reboot operations."""


class RebootError(Exception):
    """Base exception for cuboid reboot operations."""
    pass

class ValidationError(RebootError):
    """Raised when parameter validation fails."""
    pass

class SegmentOverflowError(RebootError):
    """Raised when a segment endpoint falls outside the signed 64-bit range."""
    pass

class VolumeOverflowError(RebootError):
    """Raised when a volume does not fit an unsigned 64-bit integer."""
    pass

class ParseError(RebootError):
    """Raised when instruction text cannot be parsed."""

    def __init__(self, message: str, line_number: int | None = None, line: str | None = None):
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
        self.line_number = line_number
        self.line = line

class ShapeStoreError(RebootError):
    """Raised when a shape store is used incorrectly."""
    pass


__all__ = [
    "RebootError",
    "ValidationError",
    "SegmentOverflowError",
    "VolumeOverflowError",
    "ParseError",
    "ShapeStoreError",
]
