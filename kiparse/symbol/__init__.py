"""Symbol library parsing for KiCad .kicad_sym files."""

from .types import Symbol
from .symbol_parser import parse_symbol_library, base_name, SymbolLibraryParser

__all__ = [
    'Symbol',
    'parse_symbol_library',
    'base_name',
    'SymbolLibraryParser',
]
