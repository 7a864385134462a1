"""
Typed data model for KiCad board layouts (.kicad_pcb).

Every entity is a frozen dataclass built once per parse call. Sequences are
tuples; the ``layers`` and ``properties`` mappings are read-only views over
a copy owned by the snapshot, and are left out of the hash.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from ..keywords import EDGE_CUTS_LAYER


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> Optional['BoundingBox']:
        points = list(points)
        if not points:
            return None
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    def union(self, other: 'BoundingBox') -> 'BoundingBox':
        return BoundingBox(min(self.min_x, other.min_x), min(self.min_y, other.min_y),
                           max(self.max_x, other.max_x), max(self.max_y, other.max_y))


@dataclass(frozen=True)
class Layer:
    """One entry of the board layer table."""
    id: int
    name: str
    category: str  # signal, power, mixed, jumper or user
    display_name: Optional[str] = None


class PadKind(Enum):
    THRU_HOLE = 'thru_hole'
    SMD = 'smd'
    NP_THRU_HOLE = 'np_thru_hole'
    CONNECT = 'connect'


class PadShape(Enum):
    RECT = 'rect'
    CIRCLE = 'circle'
    OVAL = 'oval'
    ROUNDRECT = 'roundrect'
    TRAPEZOID = 'trapezoid'
    CUSTOM = 'custom'


@dataclass(frozen=True)
class Pad:
    number: str
    kind: PadKind
    shape: PadShape
    position: Point
    size: Point
    rotation: float = 0.0
    drill: Optional[float] = None
    layers: Tuple[str, ...] = ()
    net: Optional[str] = None
    roundrect_ratio: Optional[float] = None  # only meaningful for ROUNDRECT


@dataclass(frozen=True)
class TextEffects:
    font_size: Point = Point(1.0, 1.0)
    thickness: Optional[float] = None
    bold: bool = False
    italic: bool = False
    justify: Optional[str] = None


@dataclass(frozen=True)
class Text:
    """Board text (gr_text) or footprint text (fp_text)."""
    text: str
    position: Point
    layer: str = ''
    rotation: float = 0.0
    effects: TextEffects = TextEffects()
    kind: Optional[str] = None  # reference, value or user for footprint text


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    layer: str
    width: float = 0.0

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points((self.start, self.end))


@dataclass(frozen=True)
class Circle:
    center: Point
    radius: float
    layer: str
    width: float = 0.0
    filled: bool = False

    def bounding_box(self) -> BoundingBox:
        c, r = self.center, self.radius
        return BoundingBox(c.x - r, c.y - r, c.x + r, c.y + r)


# Angle in degrees and unit offset of each axis extreme of a circle.
_AXES = ((0, 1, 0), (90, 0, 1), (180, -1, 0), (270, 0, -1))


@dataclass(frozen=True)
class Arc:
    """Three-point arc, from ``start`` through ``mid`` to ``end``."""
    start: Point
    mid: Point
    end: Point
    layer: str
    width: float = 0.0

    @property
    def center(self) -> Optional[Point]:
        """Circumcenter of the three points, or None when they are collinear."""
        (ax, ay), (bx, by), (cx, cy) = ((p.x, p.y) for p in (self.start, self.mid, self.end))
        d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
        if abs(d) < 1e-12:
            return None
        a2, b2, c2 = ax * ax + ay * ay, bx * bx + by * by, cx * cx + cy * cy
        ux = (a2 * (by - cy) + b2 * (cy - ay) + c2 * (ay - by)) / d
        uy = (a2 * (cx - bx) + b2 * (ax - cx) + c2 * (bx - ax)) / d
        return Point(ux, uy)

    @property
    def radius(self) -> float:
        center = self.center
        if center is None:
            return 0.0
        return math.hypot(self.start.x - center.x, self.start.y - center.y)

    def bounding_box(self) -> BoundingBox:
        """Box of the end points plus every axis extreme the arc sweeps through."""
        points = [self.start, self.mid, self.end]
        center = self.center
        if center is None:
            return BoundingBox.from_points(points)

        def angle(p: Point) -> float:
            return math.degrees(math.atan2(p.y - center.y, p.x - center.x))

        a_start, a_mid, a_end = angle(self.start), angle(self.mid), angle(self.end)
        span = (a_end - a_start) % 360
        if (a_mid - a_start) % 360 <= span:
            first = a_start
        else:
            # Sweeps the other way round: the same arc, counter-clockwise from the end.
            first, span = a_end, 360 - span

        r = self.radius
        for axis, dx, dy in _AXES:
            if (axis - first) % 360 <= span:
                points.append(Point(center.x + r * dx, center.y + r * dy))
        return BoundingBox.from_points(points)


@dataclass(frozen=True)
class Rect:
    start: Point
    end: Point
    layer: str
    width: float = 0.0
    filled: bool = False

    def bounding_box(self) -> BoundingBox:
        return BoundingBox.from_points((self.start, self.end))


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Point, ...]
    layer: str
    width: float = 0.0
    filled: bool = False

    def bounding_box(self) -> Optional[BoundingBox]:
        return BoundingBox.from_points(self.points)


Graphic = Union[Line, Circle, Arc, Rect, Polygon]


def bounding_box_of(graphics: Iterable[Graphic]) -> Optional[BoundingBox]:
    """Merged bounding box of ``graphics``; None if there is nothing to measure."""
    box = None
    for graphic in graphics:
        other = graphic.bounding_box()
        if other is None:
            continue
        box = other if box is None else box.union(other)
    return box


@dataclass(frozen=True)
class Footprint:
    name: str
    position: Point = Point(0.0, 0.0)
    rotation: float = 0.0
    layer: str = ''
    uuid: str = ''
    locked: bool = False
    placed: bool = False
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)
    pads: Tuple[Pad, ...] = ()
    graphics: Tuple[Graphic, ...] = ()
    texts: Tuple[Text, ...] = ()
    models: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'properties', MappingProxyType(dict(self.properties)))

    @property
    def reference(self) -> str:
        """Reference designator from the property table or the reference text."""
        if 'Reference' in self.properties:
            return self.properties['Reference']
        for text in self.texts:
            if text.kind == 'reference':
                return text.text
        return ''

    @property
    def value(self) -> Optional[str]:
        if 'Value' in self.properties:
            return self.properties['Value']
        for text in self.texts:
            if text.kind == 'value':
                return text.text
        return None


@dataclass(frozen=True)
class Track:
    start: Point
    end: Point
    width: float
    layer: str
    net: Optional[str] = None


@dataclass(frozen=True)
class Via:
    position: Point
    size: float
    drill: float
    layers: Tuple[str, str]
    net: Optional[str] = None


@dataclass(frozen=True)
class Zone:
    layer: str
    polygon: Tuple[Point, ...]
    net: Optional[str] = None
    priority: int = 0
    connect_pads: bool = False


@dataclass(frozen=True)
class LayoutDocument:
    """Parsed board layout."""
    version: str = ''
    generator: str = ''
    board_thickness: Optional[float] = None
    paper_size: Optional[str] = None
    layers: Mapping[int, Layer] = field(default_factory=dict, hash=False)
    footprints: Tuple[Footprint, ...] = ()
    tracks: Tuple[Track, ...] = ()
    vias: Tuple[Via, ...] = ()
    zones: Tuple[Zone, ...] = ()
    texts: Tuple[Text, ...] = ()
    graphics: Tuple[Graphic, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'layers', MappingProxyType(dict(self.layers)))

    def footprints_on_layer(self, layer_name: str) -> Tuple[Footprint, ...]:
        return tuple(f for f in self.footprints if f.layer == layer_name)

    def tracks_on_layer(self, layer_name: str) -> Tuple[Track, ...]:
        return tuple(t for t in self.tracks if t.layer == layer_name)

    def graphics_on_layer(self, layer_name: str) -> Tuple[Graphic, ...]:
        return tuple(g for g in self.graphics if g.layer == layer_name)

    def board_outline(self) -> Optional[BoundingBox]:
        """Bounding box of the board-level Edge.Cuts graphics."""
        return bounding_box_of(self.graphics_on_layer(EDGE_CUTS_LAYER))
