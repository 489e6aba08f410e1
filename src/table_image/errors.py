"""Exception types raised by the table rendering pipeline.

Every error derives from TableImageError so the CLI can report any pipeline
failure with a single handler.  The two core errors also subclass ValueError
because they describe bad input or a malformed structure rather than an
environment problem.
"""


class TableImageError(Exception):
    """Base class for all table rendering errors."""


class EmptyInputError(TableImageError, ValueError):
    """Raised when the input text contains no non-empty rows."""


class MalformedInputError(TableImageError, ValueError):
    """Raised when the input text cannot be parsed as tab-separated records."""


class ConfigError(TableImageError, ValueError):
    """Raised when a render setting from the environment is invalid."""


class ColumnCountMismatchError(TableImageError, ValueError):
    """Raised when a realized table row does not resolve to the header's column count."""

    def __init__(self, row_index: int, expected: int, actual: int):
        self.row_index = row_index
        self.expected = expected
        self.actual = actual
        super().__init__(f"Row {row_index} should have {expected} columns, got {actual}")


class RenderError(TableImageError, RuntimeError):
    """Raised when an external rendering tool is missing, fails, or times out."""
