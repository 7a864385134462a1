"""
Lexical scanner for the KiCad S-expression dialect.

Both board layouts and symbol libraries share this scanner. It turns raw
text into a lazy stream of tokens: parentheses, keywords, numbers, decoded
strings and bare identifiers. Whitespace and ``#`` comments are dropped.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterator, List, Union

from .errors import LexError

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    OPEN = 'open'
    CLOSE = 'close'
    KEYWORD = 'keyword'
    NUMBER = 'number'
    STRING = 'string'
    IDENT = 'ident'


@dataclass(frozen=True)
class Token:
    """A single lexeme."""
    kind: TokenKind
    value: Union[float, str]  # float for NUMBER, decoded text otherwise
    text: str  # raw source slice
    line: int = 0
    column: int = 0

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            return f"'{self.text}'"
        return f"{self.kind.value} {self.text!r}"


_TOKEN_RE = re.compile(r'''
    (?P<space>\s+)
  | (?P<open>\()
  | (?P<close>\))
  | (?P<comment>\#[^\n]*)
  | (?P<atom>[^\s()"]+)
''', re.VERBOSE)

# Always matches at a quote; ``close`` is empty when the string runs off the end.
_STRING_RE = re.compile(r'"(?P<body>(?:[^"\\]|\\.)*)(?P<close>"|\\?\Z)', re.DOTALL)

_NUMBER_RE = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)')

_ESCAPE_RE = re.compile(r'\\(.)', re.DOTALL)

_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r'}

_NUMERIC_START = frozenset('+-.0123456789')


def decode_escapes(body: str) -> str:
    """Resolve backslash escapes; unknown escapes stand for the escaped character."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


class Lexer:
    """Restartable token source.

    Every call to ``iter()`` scans the text again from the start, so a
    single ``Lexer`` may be consumed more than once. Lex errors found by
    the most recent scan are kept in ``errors``.
    """

    def __init__(self, text: str, keywords: FrozenSet[str] = frozenset()):
        self.text = text
        self.keywords = keywords
        self.errors: List[LexError] = []

    def __iter__(self) -> Iterator[Token]:
        return self._scan()

    def _recover(self, message: str, line: int, column: int):
        error = LexError(message, line, column)
        self.errors.append(error)
        logger.debug(f"Recovered lex error: {error}")

    def _classify(self, atom: str, line: int, column: int) -> Token:
        if atom[0] in _NUMERIC_START:
            if _NUMBER_RE.fullmatch(atom):
                value = float(atom)
                if math.isfinite(value):
                    return Token(TokenKind.NUMBER, value, atom, line, column)
                self._recover(f"Number {atom[:20]!r} out of range, treated as identifier", line, column)
            else:
                self._recover(f"Malformed number {atom!r} treated as identifier", line, column)
        elif atom in self.keywords:
            return Token(TokenKind.KEYWORD, atom, atom, line, column)
        return Token(TokenKind.IDENT, atom, atom, line, column)

    def _scan(self) -> Iterator[Token]:
        self.errors = []
        text = self.text
        pos = 0
        line = 1
        line_start = 0
        end = len(text)

        while pos < end:
            column = pos - line_start + 1

            if text[pos] == '"':
                match = _STRING_RE.match(text, pos)
                if not match.group('close') == '"':
                    self._recover("Unterminated string closed at end of input", line, column)
                yield Token(TokenKind.STRING, decode_escapes(match.group('body')),
                            match.group(), line, column)
            else:
                match = _TOKEN_RE.match(text, pos)
                kind = match.lastgroup
                if kind == 'open':
                    yield Token(TokenKind.OPEN, '(', '(', line, column)
                elif kind == 'close':
                    yield Token(TokenKind.CLOSE, ')', ')', line, column)
                elif kind == 'atom':
                    yield self._classify(match.group(), line, column)

            lexeme = match.group()
            newlines = lexeme.count('\n')
            if newlines:
                line += newlines
                line_start = pos + lexeme.rfind('\n') + 1
            pos = match.end()


def tokenize(text: str, keywords: FrozenSet[str] = frozenset()) -> Iterator[Token]:
    """Lazily tokenize ``text``; bare words found in ``keywords`` become KEYWORD tokens."""
    return iter(Lexer(text, keywords))
