"""Exception types raised by the KiCad parsers."""

from typing import Optional, Sequence


class KicadError(Exception):
    """Base class for every error raised by kiparse."""


class LexError(KicadError):
    """A span of source text could not be classified as a token.

    Lex errors never escape a scan: the lexer records them and falls back
    to a looser token class.
    """

    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.line = line
        self.column = column
        super().__init__(f"{message} (line {line}, column {column})")


class ParseError(KicadError, ValueError):
    """A structural problem inside a record the parser chose to read."""


class UnexpectedTokenError(ParseError):
    """The next token was not of the expected class or keyword."""

    def __init__(self, expected: str, found: str,
                 context: Optional[Sequence[str]] = None, line: int = 0):
        self.expected = expected
        self.found = found
        self.context = list(context or [])
        self.line = line
        message = f"Expected {expected}, found {found}"
        if line:
            message += f" at line {line}"
        if self.context:
            message += f" (after: {' '.join(self.context)})"
        super().__init__(message)


class MissingFieldError(ParseError):
    """A recognized record lacked one of its mandatory sub-fields."""

    def __init__(self, record: str, field: str, line: int = 0):
        self.record = record
        self.field = field
        self.line = line
        message = f"Missing field '{field}' in {record}"
        if line:
            message += f" starting at line {line}"
        super().__init__(message)


class InvalidFormatError(ParseError):
    """The text is not the kind of document the caller asked to parse."""
