"""Formatters for outputting parsed layout and symbol data."""

import json
from pathlib import PurePosixPath
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO

import sexpdata

from .pcb import LayoutDocument, Footprint, QuickStats, mm_to_mils, mm2_to_sq_in
from .symbol import Symbol

Row = Dict[str, Any]

MODEL_TYPES = {
    '.wrl': 'wrl',
    '.step': 'step',
    '.stp': 'step',
    '.igs': 'iges',
    '.iges': 'iges',
}


def model_type(path: str) -> str:
    """Classify a 3-D model path by extension: wrl, step, iges or other."""
    return MODEL_TYPES.get(PurePosixPath(path.replace('\\', '/')).suffix.lower(), 'other')


def layer_rows(doc: LayoutDocument) -> List[Row]:
    return [
        {'id': layer.id, 'name': layer.name, 'category': layer.category,
         'display_name': layer.display_name}
        for _, layer in sorted(doc.layers.items())
    ]


def symbol_rows(symbols: Iterable[Symbol]) -> List[Row]:
    return [{'name': s.name, 'description': s.description} for s in symbols]


def position_rows(footprints: Iterable[Footprint]) -> List[Row]:
    rows = []
    for fp in footprints:
        rows.append({
            'reference': fp.reference,
            'value': fp.value,
            'footprint': fp.name,
            'x': fp.position.x,
            'y': fp.position.y,
            'rotation': fp.rotation,
            'layer': fp.layer,
        })
    return rows


def model_rows(footprints: Iterable[Footprint]) -> List[Row]:
    rows = []
    for fp in footprints:
        for path in fp.models:
            rows.append({'reference': fp.reference, 'footprint': fp.name,
                         'model': path, 'type': model_type(path)})
    return rows


def model_summary(footprints: Sequence[Footprint]) -> Row:
    with_model = sum(1 for fp in footprints if fp.models)
    total = len(footprints)
    return {
        'footprints': total,
        'with_model': with_model,
        'without_model': total - with_model,
        'coverage_percent': round(with_model / total * 100, 1) if total else 0.0,
    }


def _outline_summary(width: float, height: float, footprints: int) -> Row:
    area = width * height
    summary = {
        'width_mm': width,
        'height_mm': height,
        'width_mils': round(mm_to_mils(width), 1),
        'height_mils': round(mm_to_mils(height), 1),
        'area_mm2': area,
        'area_sq_in': round(mm2_to_sq_in(area), 3),
    }
    if area > 0 and footprints:
        summary['density_per_sq_in'] = round(footprints / mm2_to_sq_in(area), 1)
    return summary


def document_summary(doc: LayoutDocument) -> Row:
    """Structured statistics for a fully parsed layout."""
    summary = {
        'version': doc.version,
        'generator': doc.generator,
        'board_thickness': doc.board_thickness,
        'layers': len(doc.layers),
        'signal_layers': sum(1 for layer in doc.layers.values() if layer.category == 'signal'),
        'footprints': len(doc.footprints),
        'pads': sum(len(fp.pads) for fp in doc.footprints),
        'tracks': len(doc.tracks),
        'vias': len(doc.vias),
        'zones': len(doc.zones),
        'texts': len(doc.texts),
        'graphics': len(doc.graphics),
    }
    outline = doc.board_outline()
    if outline is not None:
        summary.update(_outline_summary(outline.width, outline.height, len(doc.footprints)))
    return summary


def quick_summary(stats: QuickStats, layers: LayoutDocument) -> Row:
    """Approximate statistics from the fast layer scan plus raw-text counts."""
    summary = {
        'layers': len(layers.layers),
        'signal_layers': sum(1 for layer in layers.layers.values() if layer.category == 'signal'),
        'file_size_kb': round(stats.file_size / 1024.0, 2),
        'footprints': stats.footprints,
        'tracks': stats.tracks,
        'vias': stats.vias,
    }
    if stats.outline is not None:
        summary.update(_outline_summary(stats.outline.width, stats.outline.height, stats.footprints))
    return summary


def _cell(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


class TextFormatter:
    """Plain aligned tables for terminal output."""

    @staticmethod
    def write_table(title: str, rows: List[Row], output: TextIO):
        output.write(f"{title}\n{'=' * len(title)}\n")
        if not rows:
            output.write("(none)\n")
            return
        columns = list(rows[0])
        widths = {c: max(len(c), *(len(_cell(r[c])) for r in rows)) for c in columns}
        output.write("  ".join(c.ljust(widths[c]) for c in columns).rstrip() + "\n")
        output.write("  ".join('-' * widths[c] for c in columns) + "\n")
        for row in rows:
            output.write("  ".join(_cell(row[c]).ljust(widths[c]) for c in columns).rstrip() + "\n")

    @staticmethod
    def write_summary(title: str, summary: Row, output: TextIO):
        output.write(f"{title}\n{'=' * len(title)}\n")
        width = max((len(k) for k in summary), default=0)
        for key, value in summary.items():
            output.write(f"{key.replace('_', ' ').capitalize().ljust(width)}  {_cell(value)}\n")


class MarkdownFormatter:
    """Markdown tables, for pasting into documentation."""

    @staticmethod
    def write_table(title: str, rows: List[Row], output: TextIO):
        output.write(f"# {title}\n\n")
        if not rows:
            output.write("_None_\n")
            return
        columns = list(rows[0])
        output.write("| " + " | ".join(columns) + " |\n")
        output.write("|" + "|".join('-' * (len(c) + 2) for c in columns) + "|\n")
        for row in rows:
            output.write("| " + " | ".join(_cell(row[c]).replace('|', '\\|') for c in columns) + " |\n")

    @staticmethod
    def write_summary(title: str, summary: Row, output: TextIO):
        output.write(f"# {title}\n\n")
        for key, value in summary.items():
            output.write(f"- **{key}**: {_cell(value)}\n")


class JsonFormatter:
    """JSON documents."""

    @staticmethod
    def write_table(title: str, rows: List[Row], output: TextIO):
        json.dump({title.lower().replace(' ', '_'): rows}, output, indent=2)
        output.write("\n")

    @staticmethod
    def write_summary(title: str, summary: Row, output: TextIO):
        json.dump(summary, output, indent=2)
        output.write("\n")


def _sexpr_value(value: Any) -> Optional[Any]:
    if isinstance(value, bool):
        return sexpdata.Symbol('yes' if value else 'no')
    return value


def _sexpr_row(head: str, row: Row) -> list:
    form = [sexpdata.Symbol(head)]
    for key, value in row.items():
        if value is not None:
            form.append([sexpdata.Symbol(key), _sexpr_value(value)])
    return form


class SexprFormatter:
    """S-expressions in the same dialect the input files use."""

    @staticmethod
    def _head(title: str) -> str:
        return title.lower().replace(' ', '_')

    @staticmethod
    def write_table(title: str, rows: List[Row], output: TextIO):
        head = SexprFormatter._head(title)
        item = head[:-1] if head.endswith('s') else 'item'
        form = [sexpdata.Symbol(head)] + [_sexpr_row(item, row) for row in rows]
        output.write(sexpdata.dumps(form) + "\n")

    @staticmethod
    def write_summary(title: str, summary: Row, output: TextIO):
        output.write(sexpdata.dumps(_sexpr_row(SexprFormatter._head(title), summary)) + "\n")


FORMATTERS = {
    'text': TextFormatter,
    'markdown': MarkdownFormatter,
    'json': JsonFormatter,
    'sexpr': SexprFormatter,
}


def get_formatter(name: str):
    """Look up a formatter class by name."""
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ValueError(f"Unknown output format: {name}") from None
