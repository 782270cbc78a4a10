"""Exception types raised while decoding QVD files."""

from __future__ import annotations


class QvdError(Exception):
    """Base class for decode failures. Carries the field/offset/value when known."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        offset: int | None = None,
        value: int | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.offset = offset
        self.value = value

    def with_field(self, field: str) -> QvdError:
        """Attach the field name if the error was raised below the table level."""
        if self.field is None:
            self.field = field
            self.args = (f"field {field!r}: {self.args[0]}",)
        return self


class DecodingError(QvdError):
    """Header bytes are not valid text."""


class FormatError(QvdError):
    """Missing terminator, truncated record, or unparsable header."""


class BoundsError(FormatError):
    """A field's byte range falls outside the binary payload."""


class UnrecognizedTagError(FormatError):
    """A dispatch or record tag byte is not one of the known values."""
