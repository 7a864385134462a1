"""
KiCad symbol library (.kicad_sym) parser.

Extracts one Symbol per logical part: its base name and the first
``Description`` property found inside it. Graphical variants of a part
(``LED_0603``, ``LED_0805``, ``LED_0_1`` ...) share the base name ``LED``;
only the first record with a given base name is kept.
"""

from typing import List, Optional, Set, Tuple

from ..errors import MissingFieldError
from ..grammar import TokenCursor
from ..keywords import DESCRIPTION_PROPERTIES, SCHEMATIC_ROOT, SYMBOL_CONTAINERS, SYMBOL_KEYWORDS
from ..lexer import Lexer, TokenKind
from .types import Symbol

NAME_SEPARATOR = '_'


def base_name(declared: str) -> str:
    """Strip a symbol name from the first separator onward."""
    return declared.split(NAME_SEPARATOR, 1)[0]


class SymbolLibraryParser:
    """Single-use parser for one symbol library text."""

    def __init__(self, text: str):
        self.cursor = TokenCursor(Lexer(text, SYMBOL_KEYWORDS))
        self.symbols: List[Symbol] = []
        self._seen: Set[str] = set()

    def parse(self) -> Tuple[Symbol, ...]:
        self._walk()
        return tuple(self.symbols)

    def _walk(self):
        """Dispatch the forms of the top level and of every open container form.

        ``open_containers`` holds one flag per container entered, True when
        its ``symbol`` forms are definitions. Inside a schematic they are
        placed instances and are skipped.
        """
        cursor = self.cursor
        open_containers: List[bool] = []
        while True:
            token = cursor.peek()
            if token is None:
                return
            if token.kind == TokenKind.CLOSE:
                cursor.advance()
                if open_containers:
                    open_containers.pop()
                continue
            if token.kind != TokenKind.OPEN:
                cursor.advance()
                continue

            library = open_containers[-1] if open_containers else True
            if library and cursor.at_form('symbol'):
                cursor.open_form()
                self._symbol()
            elif any(cursor.at_form(container) for container in SYMBOL_CONTAINERS):
                cursor.open_form()
                open_containers.append(True)
            elif cursor.at_form(SCHEMATIC_ROOT):
                cursor.open_form()
                open_containers.append(False)
            else:
                cursor.advance()
                cursor.skip_balanced_form()

    def _symbol(self):
        cursor = self.cursor
        line = cursor.line
        if not cursor.at_text():
            raise MissingFieldError('symbol', 'name', line)
        name = base_name(cursor.expect_text())

        if name in self._seen:
            cursor.skip_balanced_form()
            return

        self._seen.add(name)
        description = self._find_description()
        self.symbols.append(Symbol(name=name, description=description or ''))

    def _find_description(self) -> Optional[str]:
        """Depth-first search of the current form for the first Description property.

        Consumes the form through its closing parenthesis.
        """
        cursor = self.cursor
        found = None
        depth = 1
        while depth > 0:
            token = cursor.peek()
            if token is None:
                cursor.fail("')'")
            if found is None and cursor.at_form('property'):
                cursor.open_form()
                found = self._description_property()
                continue
            cursor.advance()
            if token.kind == TokenKind.OPEN:
                depth += 1
            elif token.kind == TokenKind.CLOSE:
                depth -= 1
        return found

    def _description_property(self) -> Optional[str]:
        cursor = self.cursor
        value = None
        if cursor.at_text():
            key = cursor.expect_text()
            if key in DESCRIPTION_PROPERTIES and cursor.at(TokenKind.STRING):
                value = cursor.advance().value
        cursor.skip_balanced_form()
        return value


def parse_symbol_library(text: str) -> Tuple[Symbol, ...]:
    """Parse the full text of a .kicad_sym file (or a schematic's lib_symbols).

    Returns:
        Symbols in document order, one per base name

    Raises:
        UnexpectedTokenError: a symbol record is truncated or malformed
        MissingFieldError: a symbol record has no name
    """
    return SymbolLibraryParser(text).parse()
