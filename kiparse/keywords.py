"""Keyword tables shared by the lexer and both grammars.

These are fixed configuration: built once at import time and never mutated.
"""

LAYER_CATEGORIES = frozenset({'signal', 'power', 'mixed', 'jumper', 'user'})

PAD_KINDS = frozenset({'thru_hole', 'smd', 'np_thru_hole', 'connect'})

PAD_SHAPES = frozenset({'rect', 'circle', 'oval', 'roundrect', 'trapezoid', 'custom'})

FOOTPRINT_RECORDS = frozenset({'footprint', 'module'})

BOARD_GRAPHICS = frozenset({'gr_line', 'gr_circle', 'gr_arc', 'gr_rect', 'gr_poly'})

FOOTPRINT_GRAPHICS = frozenset({'fp_line', 'fp_circle', 'fp_arc', 'fp_rect', 'fp_poly'})

TEXT_RECORDS = frozenset({'gr_text', 'fp_text'})

# Every bare word the layout grammar dispatches on.
LAYOUT_KEYWORDS = frozenset({
    'kicad_pcb', 'version', 'generator', 'general', 'thickness', 'paper',
    'layers', 'layer', 'segment', 'via', 'zone', 'at', 'size', 'width',
    'start', 'mid', 'end', 'center', 'angle', 'net', 'net_name', 'pad',
    'drill', 'oval', 'offset', 'roundrect_rratio', 'polygon', 'pts', 'xy',
    'priority', 'connect_pads', 'locked', 'placed', 'uuid', 'tstamp',
    'property', 'model', 'effects', 'font', 'bold', 'italic', 'justify',
    'stroke', 'fill', 'yes', 'no',
}) | LAYER_CATEGORIES | FOOTPRINT_RECORDS | BOARD_GRAPHICS | FOOTPRINT_GRAPHICS \
    | TEXT_RECORDS | PAD_KINDS | PAD_SHAPES

SYMBOL_CONTAINERS = frozenset({'kicad_symbol_lib', 'lib_symbols'})

# Schematics are walked only to reach their embedded lib_symbols.
SCHEMATIC_ROOT = 'kicad_sch'

SYMBOL_KEYWORDS = frozenset({'symbol', 'property', SCHEMATIC_ROOT}) | SYMBOL_CONTAINERS

DESCRIPTION_PROPERTIES = frozenset({'Description', 'ki_description'})

EDGE_CUTS_LAYER = 'Edge.Cuts'
