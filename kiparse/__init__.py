"""kiparse - Parse KiCad board layouts and symbol libraries into typed Python objects."""

__version__ = "0.1.0"

from .errors import (
    KicadError,
    LexError,
    ParseError,
    UnexpectedTokenError,
    MissingFieldError,
    InvalidFormatError,
)
from .pcb import (
    LayoutDocument,
    Layer,
    Footprint,
    Pad,
    Track,
    Via,
    Zone,
    Text,
    Graphic,
    Point,
    parse_layout_document,
    parse_layers_only,
    quick_stats,
)
from .symbol import Symbol, parse_symbol_library

__all__ = [
    'KicadError',
    'LexError',
    'ParseError',
    'UnexpectedTokenError',
    'MissingFieldError',
    'InvalidFormatError',
    'LayoutDocument',
    'Layer',
    'Footprint',
    'Pad',
    'Track',
    'Via',
    'Zone',
    'Text',
    'Graphic',
    'Point',
    'parse_layout_document',
    'parse_layers_only',
    'quick_stats',
    'Symbol',
    'parse_symbol_library',
]
