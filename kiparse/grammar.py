"""
Recursive-descent primitives shared by the layout and symbol grammars.

``TokenCursor`` wraps a lazy token stream with lookahead, typed
expectations and ``skip_balanced_form``, the forward-compatibility
mechanism that discards any form the grammar does not know.
"""

from collections import deque
from typing import Deque, Iterable, Iterator, Optional, Tuple

from .errors import UnexpectedTokenError
from .lexer import Token, TokenKind

CONTEXT_SIZE = 6

_TEXT_KINDS = (TokenKind.STRING, TokenKind.IDENT, TokenKind.KEYWORD, TokenKind.NUMBER)
_HEAD_KINDS = (TokenKind.KEYWORD, TokenKind.IDENT)


class TokenCursor:
    """Cursor over a token stream, consumed strictly in order."""

    def __init__(self, tokens: Iterable[Token]):
        self._source: Iterator[Token] = iter(tokens)
        self._buffer: Deque[Token] = deque()
        self._history: Deque[Token] = deque(maxlen=CONTEXT_SIZE)

    def _fill(self, count: int) -> bool:
        while len(self._buffer) < count:
            token = next(self._source, None)
            if token is None:
                return False
            self._buffer.append(token)
        return True

    def peek(self, offset: int = 0) -> Optional[Token]:
        """Look at a token without consuming it; None past the end of input."""
        if not self._fill(offset + 1):
            return None
        return self._buffer[offset]

    def advance(self) -> Token:
        """Consume one token."""
        if not self._fill(1):
            self.fail('any token')
        token = self._buffer.popleft()
        self._history.append(token)
        return token

    def at_end(self) -> bool:
        return self.peek() is None

    def at(self, kind: TokenKind, value: Optional[str] = None, offset: int = 0) -> bool:
        token = self.peek(offset)
        if token is None or token.kind != kind:
            return False
        return value is None or token.value == value

    def at_close(self) -> bool:
        return self.at(TokenKind.CLOSE)

    def at_form(self, keyword: Optional[str] = None) -> bool:
        """True when the next two tokens open a form, optionally with head ``keyword``."""
        if not self.at(TokenKind.OPEN):
            return False
        head = self.peek(1)
        if head is None:
            return False
        if keyword is None:
            return True
        return head.kind in _HEAD_KINDS and head.value == keyword

    @property
    def line(self) -> int:
        """Source line of the most recently consumed token."""
        return self._history[-1].line if self._history else 0

    def context(self):
        return [token.text for token in self._history]

    def fail(self, expected: str):
        token = self.peek()
        found = token.describe() if token is not None else 'end of input'
        line = token.line if token is not None else self.line
        raise UnexpectedTokenError(expected, found, self.context(), line)

    def expect(self, kind: TokenKind, value: Optional[str] = None) -> Token:
        """Consume the next token, which must match ``kind`` (and ``value``)."""
        if not self.at(kind, value):
            self.fail(f"{kind.value} {value!r}" if value is not None else kind.value)
        return self.advance()

    def expect_number(self) -> float:
        return self.expect(TokenKind.NUMBER).value

    def optional_number(self) -> Optional[float]:
        if self.at(TokenKind.NUMBER):
            return self.advance().value
        return None

    def expect_text(self) -> str:
        """Consume a string, identifier or keyword; numbers yield their raw lexeme."""
        token = self.peek()
        if token is None or token.kind not in _TEXT_KINDS:
            self.fail('string')
        self.advance()
        if token.kind == TokenKind.NUMBER:
            return token.text
        return token.value

    def at_text(self) -> bool:
        token = self.peek()
        return token is not None and token.kind in _TEXT_KINDS

    def open_form(self) -> str:
        """Consume ``(`` and the form's head word, returning the head."""
        self.expect(TokenKind.OPEN)
        token = self.peek()
        if token is None or token.kind not in _HEAD_KINDS:
            self.fail('form keyword')
        self.advance()
        return token.value

    def skip_balanced_form(self):
        """Discard tokens up to and including the close matching an already consumed ``(``.

        Stops quietly at end of input: content that is skipped is never an error.
        """
        depth = 1
        while depth > 0:
            token = self.peek()
            if token is None:
                return
            self.advance()
            if token.kind == TokenKind.OPEN:
                depth += 1
            elif token.kind == TokenKind.CLOSE:
                depth -= 1

    def skip_item(self):
        """Skip one atom or one whole nested form."""
        if self.at(TokenKind.OPEN):
            self.advance()
            self.skip_balanced_form()
        else:
            self.advance()

    def close_form(self):
        """Skip whatever trails inside the current form, then consume its ``)``."""
        while not self.at_close():
            if self.at_end():
                self.fail("')'")
            self.skip_item()
        self.advance()

    def iter_fields(self) -> Iterator[Tuple[str, bool]]:
        """Walk the rest of the current form, yielding ``(word, is_form)`` pairs.

        Nested forms are yielded with the ``( head`` already consumed; the
        caller must consume the rest (``close_form`` or ``skip_balanced_form``).
        Bare atoms are consumed before being yielded. Forms without a head
        word are skipped. The enclosing ``)`` is consumed when the walk ends.
        """
        while True:
            token = self.peek()
            if token is None:
                self.fail("')'")
            if token.kind == TokenKind.CLOSE:
                self.advance()
                return
            if token.kind == TokenKind.OPEN:
                head = self.peek(1)
                if head is None:
                    self.fail('form keyword')
                self.advance()
                if head.kind in _HEAD_KINDS:
                    self.advance()
                    yield head.value, True
                else:
                    self.skip_balanced_form()
            else:
                self.advance()
                yield (token.text if token.kind == TokenKind.NUMBER else token.value), False
