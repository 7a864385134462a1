"""
KiCad board layout (.kicad_pcb) parser.

Builds a LayoutDocument from the layer table, footprints with their pads,
text and graphics, segments, vias, zones and board-level drawings. Every
record is read as "loop until the closing parenthesis, dispatch on the next
keyword", so field order does not matter and unknown sub-forms are skipped.
"""

import math
from typing import Callable, Dict, List, Optional, Tuple

from ..errors import InvalidFormatError, MissingFieldError
from ..grammar import TokenCursor
from ..keywords import (
    BOARD_GRAPHICS, FOOTPRINT_GRAPHICS, FOOTPRINT_RECORDS, LAYOUT_KEYWORDS,
    PAD_KINDS, PAD_SHAPES,
)
from ..lexer import Lexer, TokenKind
from .types import (
    Arc, Circle, Footprint, Graphic, Layer, LayoutDocument, Line, Pad, PadKind,
    PadShape, Point, Polygon, Rect, Text, TextEffects, Track, Via, Zone,
)

_FALSE_WORDS = frozenset({'no', 'none', 'false'})


def _require(fields: dict, record: str, names: Tuple[str, ...], line: int):
    for name in names:
        if fields.get(name) is None:
            raise MissingFieldError(record, name, line)


class LayoutParser:
    """Single-use parser for one board layout text."""

    def __init__(self, text: str):
        self.cursor = TokenCursor(Lexer(text, LAYOUT_KEYWORDS))
        self.net_names: Dict[str, str] = {}

        self.version = ''
        self.generator = ''
        self.board_thickness: Optional[float] = None
        self.paper_size: Optional[str] = None
        self.layers: Dict[int, Layer] = {}
        self.footprints: List[Footprint] = []
        self.tracks: List[Track] = []
        self.vias: List[Via] = []
        self.zones: List[Zone] = []
        self.texts: List[Text] = []
        self.graphics: List[Graphic] = []

        self._handlers: Dict[str, Callable[[str], None]] = {
            'version': self._version,
            'generator': self._generator,
            'general': self._general,
            'paper': self._paper,
            'layers': self._layer_table,
            'net': self._net_declaration,
            'segment': self._segment,
            'via': self._via,
            'zone': self._zone,
            'gr_text': self._board_text,
        }
        for keyword in FOOTPRINT_RECORDS:
            self._handlers[keyword] = self._board_footprint
        for keyword in BOARD_GRAPHICS:
            self._handlers[keyword] = self._board_graphic

    def parse(self) -> LayoutDocument:
        cursor = self.cursor
        if cursor.at_end():
            raise InvalidFormatError("Empty layout document")
        if not cursor.at_form('kicad_pcb'):
            raise InvalidFormatError(f"Not a KiCad layout: expected (kicad_pcb, found {cursor.peek().describe()}")
        cursor.open_form()

        while True:
            token = cursor.peek()
            if token is None:
                break
            if token.kind == TokenKind.CLOSE:
                cursor.advance()
                break
            if cursor.at(TokenKind.OPEN):
                head = cursor.peek(1)
                handler = self._handlers.get(head.value) if head is not None else None
                cursor.advance()
                if handler is not None and head.kind in (TokenKind.KEYWORD, TokenKind.IDENT):
                    cursor.advance()
                    handler(head.value)
                else:
                    cursor.skip_balanced_form()
            else:
                cursor.advance()

        return LayoutDocument(
            version=self.version,
            generator=self.generator,
            board_thickness=self.board_thickness,
            paper_size=self.paper_size,
            layers=dict(self.layers),
            footprints=tuple(self.footprints),
            tracks=tuple(self.tracks),
            vias=tuple(self.vias),
            zones=tuple(self.zones),
            texts=tuple(self.texts),
            graphics=tuple(self.graphics),
        )

    # Small forms. Each is entered just after its head keyword and consumes
    # through its closing parenthesis.

    def _point(self) -> Point:
        x = self.cursor.expect_number()
        y = self.cursor.expect_number()
        self.cursor.close_form()
        return Point(x, y)

    def _position(self) -> Tuple[Point, float]:
        """(at x y [rotation]); rotation defaults to 0."""
        x = self.cursor.expect_number()
        y = self.cursor.expect_number()
        rotation = self.cursor.optional_number()
        self.cursor.close_form()
        return Point(x, y), rotation if rotation is not None else 0.0

    def _number(self) -> float:
        value = self.cursor.expect_number()
        self.cursor.close_form()
        return value

    def _text(self) -> str:
        value = self.cursor.expect_text()
        self.cursor.close_form()
        return value

    def _flag(self) -> bool:
        """(locked), (locked yes) or (locked no)."""
        value = True
        if self.cursor.at_text():
            value = self.cursor.expect_text() not in _FALSE_WORDS
        self.cursor.close_form()
        return value

    def _text_list(self) -> Tuple[str, ...]:
        items = []
        while not self.cursor.at_close():
            if self.cursor.at(TokenKind.OPEN):
                self.cursor.skip_item()
            else:
                items.append(self.cursor.expect_text())
        self.cursor.advance()
        return tuple(items)

    def _net(self) -> Optional[str]:
        """(net NUMBER [NAME]) or (net NAME), resolved to a net reference."""
        number = None
        name = None
        if self.cursor.at(TokenKind.NUMBER):
            number = self.cursor.advance().text
        if self.cursor.at_text():
            name = self.cursor.expect_text()
        self.cursor.close_form()
        return self._net_ref(number, name)

    def _net_ref(self, number: Optional[str], name: Optional[str]) -> Optional[str]:
        if name:
            return name
        if number is None or number == '0':
            return None
        return self.net_names.get(number, number)

    def _points(self) -> Tuple[Point, ...]:
        points = []
        for head, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if head == 'xy':
                points.append(self._point())
            else:
                self.cursor.skip_balanced_form()
        return tuple(points)

    def _stroke_width(self) -> Optional[float]:
        width = None
        for head, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if head == 'width':
                width = self._number()
            else:
                self.cursor.skip_balanced_form()
        return width

    def _fill(self) -> bool:
        filled = False
        if self.cursor.at_text():
            filled = self.cursor.expect_text() not in _FALSE_WORDS
        self.cursor.close_form()
        return filled

    def _drill(self) -> Optional[float]:
        """(drill D), (drill oval W H) or (drill D (offset X Y)); returns the first dimension."""
        if self.cursor.at(TokenKind.KEYWORD) or self.cursor.at(TokenKind.IDENT):
            self.cursor.advance()
        diameter = self.cursor.optional_number()
        self.cursor.close_form()
        return diameter

    # Top-level records

    def _version(self, head: str):
        self.version = self._text()

    def _generator(self, head: str):
        self.generator = self._text()

    def _general(self, head: str):
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'thickness':
                self.board_thickness = self._number()
            else:
                self.cursor.skip_balanced_form()

    def _paper(self, head: str):
        self.paper_size = self._text()

    def _net_declaration(self, head: str):
        if self.cursor.at(TokenKind.NUMBER):
            number = self.cursor.advance().text
            if self.cursor.at_text():
                name = self.cursor.expect_text()
                if name:
                    self.net_names[number] = name
        self.cursor.close_form()

    def _layer_table(self, head: str):
        cursor = self.cursor
        while True:
            if cursor.at_close():
                cursor.advance()
                return
            if cursor.at_end():
                cursor.fail("')'")
            if cursor.at(TokenKind.OPEN):
                cursor.advance()
                layer = self._layer_entry()
                self.layers[layer.id] = layer
            else:
                cursor.advance()

    def _layer_entry(self) -> Layer:
        """(ID "name" category ["display name"])."""
        layer_id = int(self.cursor.expect_number())
        name = self.cursor.expect_text()
        category = self.cursor.expect_text()
        display_name = self.cursor.expect_text() if self.cursor.at_text() else None
        self.cursor.close_form()
        return Layer(id=layer_id, name=name, category=category, display_name=display_name)

    def _board_footprint(self, head: str):
        self.footprints.append(self._footprint(head))

    def _board_text(self, head: str):
        self.texts.append(self._text_record(head))

    def _board_graphic(self, head: str):
        self.graphics.append(self._graphic(head))

    def _segment(self, head: str):
        line = self.cursor.line
        fields = {}
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word in ('start', 'end'):
                fields[word] = self._point()
            elif word == 'width':
                fields['width'] = self._number()
            elif word == 'stroke':
                fields['width'] = self._stroke_width()
            elif word == 'layer':
                fields['layer'] = self._text()
            elif word == 'net':
                fields['net'] = self._net()
            else:
                self.cursor.skip_balanced_form()
        _require(fields, head, ('start', 'end', 'width', 'layer'), line)
        self.tracks.append(Track(**fields))

    def _via(self, head: str):
        line = self.cursor.line
        fields = {}
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue  # blind, micro, locked
            if word == 'at':
                fields['position'], _ = self._position()
            elif word == 'size':
                fields['size'] = self._number()
            elif word == 'drill':
                fields['drill'] = self._drill()
            elif word == 'layers':
                layers = self._text_list()
                if len(layers) >= 2:
                    fields['layers'] = layers[:2]
            elif word == 'net':
                fields['net'] = self._net()
            else:
                self.cursor.skip_balanced_form()
        _require(fields, head, ('position', 'size', 'drill', 'layers'), line)
        self.vias.append(Via(**fields))

    def _zone(self, head: str):
        line = self.cursor.line
        fields = {}
        number = None
        name = None
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'net':
                if self.cursor.at(TokenKind.NUMBER):
                    number = self.cursor.advance().text
                elif self.cursor.at_text():
                    name = self.cursor.expect_text()
                self.cursor.close_form()
            elif word == 'net_name':
                name = self._text()
            elif word == 'layer':
                fields['layer'] = self._text()
            elif word == 'layers':
                layers = self._text_list()
                if layers:
                    fields['layer'] = layers[0]
            elif word == 'priority':
                fields['priority'] = int(self._number())
            elif word == 'connect_pads':
                fields['connect_pads'] = self._connect_pads()
            elif word == 'polygon' and 'polygon' not in fields:
                fields['polygon'] = self._zone_outline()
            else:
                self.cursor.skip_balanced_form()
        _require(fields, head, ('layer', 'polygon'), line)
        self.zones.append(Zone(net=self._net_ref(number, name), **fields))

    def _connect_pads(self) -> bool:
        """(connect_pads [yes|no|thru_hole_only] (clearance N))."""
        connect = True
        if self.cursor.at_text():
            connect = self.cursor.expect_text() not in _FALSE_WORDS
        self.cursor.close_form()
        return connect

    def _zone_outline(self) -> Tuple[Point, ...]:
        points = None
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'pts' and points is None:
                points = self._points()
            else:
                self.cursor.skip_balanced_form()
        return points

    # Footprints and their children

    def _footprint(self, head: str) -> Footprint:
        line = self.cursor.line
        if not self.cursor.at_text():
            raise MissingFieldError(head, 'name', line)
        fields = {'name': self.cursor.expect_text()}
        properties: Dict[str, str] = {}
        pads: List[Pad] = []
        graphics: List[Graphic] = []
        texts: List[Text] = []
        models: List[str] = []

        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                if word in ('locked', 'placed'):
                    fields[word] = True
                continue
            if word == 'at':
                fields['position'], fields['rotation'] = self._position()
            elif word == 'layer':
                fields['layer'] = self._text()
            elif word in ('uuid', 'tstamp'):
                fields['uuid'] = self._text()
            elif word in ('locked', 'placed'):
                fields[word] = self._flag()
            elif word == 'property':
                key = self.cursor.expect_text()
                properties[key] = self.cursor.expect_text() if self.cursor.at_text() else ''
                self.cursor.close_form()
            elif word == 'pad':
                pads.append(self._pad(word))
            elif word == 'fp_text':
                texts.append(self._text_record(word))
            elif word in FOOTPRINT_GRAPHICS:
                graphics.append(self._graphic(word))
            elif word == 'model':
                models.append(self.cursor.expect_text())
                self.cursor.close_form()
            else:
                self.cursor.skip_balanced_form()

        return Footprint(properties=properties, pads=tuple(pads), graphics=tuple(graphics),
                         texts=tuple(texts), models=tuple(models), **fields)

    def _keyword_field(self, record: str, field: str, vocabulary, line: int) -> str:
        token = self.cursor.peek()
        if token is None or token.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            raise MissingFieldError(record, field, line)
        if token.kind not in (TokenKind.KEYWORD, TokenKind.IDENT) or token.value not in vocabulary:
            self.cursor.fail(f"pad {field}")
        return self.cursor.advance().value

    def _pad(self, head: str) -> Pad:
        line = self.cursor.line
        if not self.cursor.at_text():
            raise MissingFieldError(head, 'number', line)
        fields = {'number': self.cursor.expect_text()}
        fields['kind'] = PadKind(self._keyword_field(head, 'kind', PAD_KINDS, line))
        fields['shape'] = PadShape(self._keyword_field(head, 'shape', PAD_SHAPES, line))

        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'at':
                fields['position'], fields['rotation'] = self._position()
            elif word == 'size':
                fields['size'] = self._point()
            elif word == 'drill':
                fields['drill'] = self._drill()
            elif word == 'layers':
                fields['layers'] = self._text_list()
            elif word == 'net':
                fields['net'] = self._net()
            elif word == 'roundrect_rratio':
                fields['roundrect_ratio'] = self._number()
            else:
                self.cursor.skip_balanced_form()
        _require(fields, head, ('position', 'size'), line)
        return Pad(**fields)

    def _text_record(self, head: str) -> Text:
        line = self.cursor.line
        fields = {}
        if head == 'fp_text':
            if not self.cursor.at_text():
                raise MissingFieldError(head, 'kind', line)
            fields['kind'] = self.cursor.expect_text()
        if not self.cursor.at_text():
            raise MissingFieldError(head, 'text', line)
        fields['text'] = self.cursor.expect_text()

        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'at':
                fields['position'], fields['rotation'] = self._position()
            elif word == 'layer':
                fields['layer'] = self._text()
            elif word == 'effects':
                fields['effects'] = self._effects()
            else:
                self.cursor.skip_balanced_form()
        _require(fields, head, ('position',), line)
        return Text(**fields)

    def _effects(self) -> TextEffects:
        fields = {}
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word == 'font':
                fields.update(self._font())
            elif word == 'justify':
                fields['justify'] = ' '.join(self._text_list()) or None
            else:
                self.cursor.skip_balanced_form()
        return TextEffects(**fields)

    def _font(self) -> dict:
        fields = {}
        for word, is_form in self.cursor.iter_fields():
            if word in ('bold', 'italic'):
                fields[word] = self._flag() if is_form else True
            elif not is_form:
                continue
            elif word == 'size':
                fields['font_size'] = self._point()
            elif word == 'thickness':
                fields['thickness'] = self._number()
            else:
                self.cursor.skip_balanced_form()
        return fields

    def _graphic(self, head: str) -> Graphic:
        line = self.cursor.line
        fields = {}
        for word, is_form in self.cursor.iter_fields():
            if not is_form:
                continue
            if word in ('start', 'mid', 'end', 'center'):
                fields[word] = self._point()
            elif word == 'angle':
                fields['angle'] = self._number()
            elif word == 'layer':
                fields['layer'] = self._text()
            elif word == 'width':
                fields['width'] = self._number()
            elif word == 'stroke':
                fields['width'] = self._stroke_width()
            elif word == 'fill':
                fields['filled'] = self._fill()
            elif word == 'pts':
                fields['pts'] = self._points()
            else:
                self.cursor.skip_balanced_form()

        shape = head.split('_', 1)[1]
        width = fields.get('width') or 0.0
        filled = fields.get('filled', False)

        if shape == 'line':
            _require(fields, head, ('start', 'end', 'layer'), line)
            return Line(fields['start'], fields['end'], fields['layer'], width)
        if shape == 'circle':
            _require(fields, head, ('center', 'end', 'layer'), line)
            center, end = fields['center'], fields['end']
            radius = math.hypot(end.x - center.x, end.y - center.y)
            return Circle(center, radius, fields['layer'], width, filled)
        if shape == 'arc':
            _require(fields, head, ('start', 'end', 'layer'), line)
            if fields.get('mid') is not None:
                return Arc(fields['start'], fields['mid'], fields['end'], fields['layer'], width)
            _require(fields, head, ('angle',), line)
            start, mid, end = _legacy_arc(fields['start'], fields['end'], fields['angle'])
            return Arc(start, mid, end, fields['layer'], width)
        if shape == 'rect':
            _require(fields, head, ('start', 'end', 'layer'), line)
            return Rect(fields['start'], fields['end'], fields['layer'], width, filled)
        _require(fields, head, ('pts', 'layer'), line)
        return Polygon(fields['pts'], fields['layer'], width, filled)


def _rotate(point: Point, center: Point, degrees: float) -> Point:
    rad = math.radians(degrees)
    dx, dy = point.x - center.x, point.y - center.y
    return Point(center.x + dx * math.cos(rad) - dy * math.sin(rad),
                 center.y + dx * math.sin(rad) + dy * math.cos(rad))


def _legacy_arc(center: Point, start: Point, angle: float) -> Tuple[Point, Point, Point]:
    """Convert a KiCad 5 arc (start=center, end=arc start, angle) to three points."""
    return start, _rotate(start, center, angle / 2), _rotate(start, center, angle)


def parse_layout_document(text: str) -> LayoutDocument:
    """Parse the full text of a .kicad_pcb file.

    Args:
        text: Complete file contents

    Returns:
        LayoutDocument snapshot

    Raises:
        InvalidFormatError: the text is empty or not a kicad_pcb document
        UnexpectedTokenError: a record the parser reads is malformed
        MissingFieldError: a record lacks a mandatory field
    """
    return LayoutParser(text).parse()
