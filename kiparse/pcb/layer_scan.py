"""
Fast layer-table extraction for KiCad board files.

Reads only the ``(layers ...)`` section, line by line, without tokenizing
the rest of the file. A layer line looks like::

    (layers
        (0 "F.Cu" signal)
        (31 "B.Cu" signal)
        (32 "B.Adhes" user "B.Adhesive")
        ...

Entries that span several lines are not understood here; use
``parse_layout_document`` when that matters.
"""

import logging
from typing import Optional

from .types import Layer, LayoutDocument

logger = logging.getLogger(__name__)

FAST_PASS_VERSION = 'unknown'
FAST_PASS_GENERATOR = 'fast_layer_scan'

LAYERS_MARKER = '(layers'


def parse_layer_line(line: str) -> Optional[Layer]:
    """Parse one ``(ID "Name" type ["User Name"])`` line; None if it is not one."""
    body = line.strip().lstrip('(').rstrip(')')
    parts = body.split()
    if len(parts) < 3:
        return None
    try:
        layer_id = int(parts[0])
    except ValueError:
        return None

    display_name = None
    if len(parts) > 3:
        display_name = ' '.join(parts[3:]).strip('"')

    return Layer(
        id=layer_id,
        name=parts[1].strip('"'),
        category=parts[2].strip('"'),
        display_name=display_name,
    )


def parse_layers_only(text: str) -> LayoutDocument:
    """Extract just the layer table from .kicad_pcb text.

    The returned document has every other collection empty and its
    version/generator set to FAST_PASS_VERSION/FAST_PASS_GENERATOR.
    Malformed layer lines are skipped.
    """
    layers = {}
    start = text.find(LAYERS_MARKER)

    if start < 0:
        logger.warning("No layer table found")
    else:
        for raw_line in text[start:].splitlines():
            line = raw_line.strip()
            if line.startswith('(') and '"' in line and not line.startswith(LAYERS_MARKER):
                layer = parse_layer_line(line)
                if layer is None:
                    logger.debug(f"Skipping malformed layer line: {line!r}")
                    continue
                layers[layer.id] = layer
            elif line.startswith(')') and layers:
                break

    logger.info(f"Fast layer scan found {len(layers)} layers")
    return LayoutDocument(version=FAST_PASS_VERSION, generator=FAST_PASS_GENERATOR, layers=layers)
