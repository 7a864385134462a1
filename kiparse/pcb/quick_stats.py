"""Best-effort statistics computed directly on raw .kicad_pcb text.

These regex counts are fast but approximate. ``(via`` also matches inside
unrelated records, and outlines only consider single-line ``gr_line``
records. Prefer ``LayoutDocument.board_outline()`` when accuracy matters.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .types import BoundingBox

MM_PER_INCH = 25.4

_FOOTPRINT_RE = re.compile(r'\((?:footprint|module)\s')
_SEGMENT_RE = re.compile(r'\(segment\s')
_VIA_RE = re.compile(r'\(via\s')
_EDGE_CUTS_RE = re.compile(
    r'\(gr_line\s*\(start\s+([\d.+-]+)\s+([\d.+-]+)\)\s*\(end\s+([\d.+-]+)\s+([\d.+-]+)\)'
    r'[^()]*(?:\([^()]*(?:\([^()]*\)[^()]*)*\)[^()]*)*?\(layer\s+"?Edge\.Cuts"?\)',
    re.DOTALL,
)


@dataclass(frozen=True)
class QuickStats:
    footprints: int
    tracks: int
    vias: int
    file_size: int
    outline: Optional[BoundingBox] = None

    @property
    def area_mm2(self) -> float:
        if self.outline is None:
            return 0.0
        return self.outline.width * self.outline.height


def mm_to_mils(mm: float) -> float:
    return mm / MM_PER_INCH * 1000.0


def mm2_to_sq_in(mm2: float) -> float:
    return mm2 / (MM_PER_INCH * MM_PER_INCH)


def quick_stats(text: str) -> QuickStats:
    """Count records and measure the Edge.Cuts outline without parsing."""
    box = None
    for match in _EDGE_CUTS_RE.finditer(text):
        try:
            x1, y1, x2, y2 = (float(v) for v in match.groups())
        except ValueError:
            continue
        segment = BoundingBox(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))
        box = segment if box is None else box.union(segment)

    return QuickStats(
        footprints=len(_FOOTPRINT_RE.findall(text)),
        tracks=len(_SEGMENT_RE.findall(text)),
        vias=len(_VIA_RE.findall(text)),
        file_size=len(text.encode('utf-8')),
        outline=box,
    )
