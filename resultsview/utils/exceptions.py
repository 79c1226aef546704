"""
Centralized exception hierarchy for the results viewer.

All custom exceptions inherit from ResultsViewError so callers have a
single base to catch. Failures raised by injected collaborators (field
formatters, configuration providers) are not wrapped.
"""


class ResultsViewError(Exception):
    """Base exception for all results viewer errors."""
    pass


class InvalidResultError(ResultsViewError):
    """Raised when a payload cannot be turned into a statement result."""

    def __init__(self, message: str, index: int = None):
        self.index = index
        msg = message
        if index is not None:
            msg = f"Result #{index}: {message}"
        super().__init__(msg)


class RowShapeError(ResultsViewError):
    """Raised by strict table rendering when a row doesn't match the fields."""

    def __init__(self, row_number: int, expected: int, actual: int):
        self.row_number = row_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Row {row_number} has {actual} values, expected {expected}"
        )
