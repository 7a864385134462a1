"""Board layout parsing for KiCad .kicad_pcb files."""

from .types import (
    Point,
    BoundingBox,
    Layer,
    PadKind,
    PadShape,
    Pad,
    TextEffects,
    Text,
    Line,
    Circle,
    Arc,
    Rect,
    Polygon,
    Graphic,
    Footprint,
    Track,
    Via,
    Zone,
    LayoutDocument,
    bounding_box_of,
)
from .layout_parser import LayoutParser, parse_layout_document
from .layer_scan import (
    FAST_PASS_GENERATOR,
    FAST_PASS_VERSION,
    parse_layer_line,
    parse_layers_only,
)
from .quick_stats import QuickStats, quick_stats, mm_to_mils, mm2_to_sq_in

__all__ = [
    # types
    'Point',
    'BoundingBox',
    'Layer',
    'PadKind',
    'PadShape',
    'Pad',
    'TextEffects',
    'Text',
    'Line',
    'Circle',
    'Arc',
    'Rect',
    'Polygon',
    'Graphic',
    'Footprint',
    'Track',
    'Via',
    'Zone',
    'LayoutDocument',
    'bounding_box_of',
    # layout_parser
    'LayoutParser',
    'parse_layout_document',
    # layer_scan
    'FAST_PASS_GENERATOR',
    'FAST_PASS_VERSION',
    'parse_layer_line',
    'parse_layers_only',
    # quick_stats
    'QuickStats',
    'quick_stats',
    'mm_to_mils',
    'mm2_to_sq_in',
]
