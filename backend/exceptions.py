"""
Exception classes for the double-check correction engine.
"""


class DoubleCheckError(ValueError):
    """Base exception for double-check correction errors."""

    pass


class CorrectionParseError(DoubleCheckError):
    """A correction payload is not an object or carries no type."""

    pass


class ArtifactShapeError(DoubleCheckError):
    """A structured artifact does not have the shape its applier patches."""

    pass
