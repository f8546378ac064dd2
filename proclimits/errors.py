"""Exceptions raised while parsing procfs tables."""


class ParseError(ValueError):
    """Base class for all parse failures."""


class MalformedRowError(ParseError):
    """A row of the table does not match the expected grammar.

    Attributes:
        row: 1-based position of the row in the fixed sequence.
        field: Name of the record field the row maps to.
        reason: What went wrong.
    """

    def __init__(self, row: int, field: str, reason: str) -> None:
        self.row = row
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed row {row} ({field}): {reason}")


class UnitMismatchError(MalformedRowError):
    """A duration row carries a unit that is not a time unit."""

    def __init__(self, row: int, field: str, unit: object) -> None:
        self.unit = unit
        super().__init__(
            row,
            field,
            f"unit {unit!r} is not seconds or microseconds",
        )


class TruncatedInputError(ParseError):
    """Input ended before the whole table was consumed."""

    def __init__(
        self,
        message: str = "Input is truncated",
        row: int | None = None,
        field: str | None = None,
    ) -> None:
        self.row = row
        self.field = field
        if row is not None:
            message = f"{message} at row {row} ({field})"
        super().__init__(message)
