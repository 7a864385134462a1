"""Command-line interface for kiparse."""

import io
import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import ENV_PREFIX, load_settings
from .errors import KicadError
from .formatter import (
    FORMATTERS, document_summary, get_formatter, layer_rows, model_rows, model_summary,
    position_rows, quick_summary, symbol_rows,
)
from .pcb import parse_layers_only, parse_layout_document, quick_stats
from .symbol import parse_symbol_library
from .watcher import LayoutWatcher

PCB_SUFFIXES = ('.kicad_pcb',)
SYMBOL_SUFFIXES = ('.kicad_sym', '.kicad_sch')


def render_layers(text, formatter, output, full=False):
    doc = parse_layout_document(text) if full else parse_layers_only(text)
    formatter.write_table('Layers', layer_rows(doc), output)


def render_details(text, formatter, output, fast=False):
    if fast:
        summary = quick_summary(quick_stats(text), parse_layers_only(text))
        formatter.write_summary('PCB quick statistics', summary, output)
    else:
        formatter.write_summary('PCB details', document_summary(parse_layout_document(text)), output)


def render_positions(text, formatter, output):
    doc = parse_layout_document(text)
    formatter.write_table('Positions', position_rows(doc.footprints), output)


def render_models(text, formatter, output, summary=False):
    doc = parse_layout_document(text)
    if summary:
        formatter.write_summary('3D model coverage', model_summary(doc.footprints), output)
    else:
        formatter.write_table('Models', model_rows(doc.footprints), output)


def render_symbols(text, formatter, output):
    formatter.write_table('Symbols', symbol_rows(parse_symbol_library(text)), output)


RENDERERS = {
    'layers': (PCB_SUFFIXES, render_layers),
    'details': (PCB_SUFFIXES, render_details),
    'positions': (PCB_SUFFIXES, render_positions),
    'models': (PCB_SUFFIXES, render_models),
    'symbols': (SYMBOL_SUFFIXES, render_symbols),
}


def _fail(message: str):
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _render(ctx: click.Context, command: str, path: Path, **options) -> str:
    """Read ``path`` and render it with the named command; returns the output text."""
    suffixes, renderer = RENDERERS[command]
    if path.suffix not in suffixes:
        _fail(f"{command} command requires a {' or '.join(suffixes)} file")

    # utf-8-sig drops the byte order mark some editors write.
    with open(path, 'r', encoding='utf-8-sig') as f:
        text = f.read()

    output = io.StringIO()
    renderer(text, ctx.obj['formatter'], output, **options)
    return output.getvalue()


def _run(ctx: click.Context, command: str, path: str, **options):
    try:
        click.echo(_render(ctx, command, Path(path), **options), nl=False)
    except (KicadError, OSError, UnicodeDecodeError) as e:
        _fail(f"{path}: {e}")


@click.group()
@click.option('--format', '-f', 'output_format', type=click.Choice(sorted(FORMATTERS)),
              default=None, help='Output format (default from settings, else text)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              default=None, help='Settings file (default: ~/.kiparse/settings.json)')
@click.version_option(__version__, prog_name='kiparse')
@click.pass_context
def cli(ctx, output_format, verbose, config_path):
    """kiparse - Parse KiCad board layouts and symbol libraries."""
    settings = load_settings(Path(config_path) if config_path else None)
    try:
        formatter = get_formatter(output_format or settings.output_format)
    except ValueError as e:
        _fail(f"{e} (check {config_path or 'the settings file'})")

    logging.basicConfig(
        level=logging.DEBUG if verbose or settings.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
        stream=sys.stderr,
    )

    ctx.ensure_object(dict)
    ctx.obj['formatter'] = formatter
    ctx.obj['settings'] = settings


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--full', is_flag=True, help='Use the full grammar instead of the fast line scan')
@click.pass_context
def layers(ctx, path, full):
    """Extract the layer table of a .kicad_pcb file."""
    _run(ctx, 'layers', path, full=full)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--fast', is_flag=True, help='Approximate statistics from raw text, without a full parse')
@click.pass_context
def details(ctx, path, fast):
    """Summarize the contents of a .kicad_pcb file."""
    _run(ctx, 'details', path, fast=fast)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def positions(ctx, path):
    """List footprint references, values and placements."""
    _run(ctx, 'positions', path)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--summary', is_flag=True, help='Show coverage statistics instead of the model list')
@click.pass_context
def models(ctx, path, summary):
    """Analyze 3D model coverage of footprints."""
    _run(ctx, 'models', path, summary=summary)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def symbols(ctx, path):
    """List symbols and descriptions of a .kicad_sym library."""
    _run(ctx, 'symbols', path)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', '-o', type=click.Path(dir_okay=False), required=True,
              help='File rewritten on every change')
@click.option('--command', '-c', 'command', type=click.Choice(sorted(RENDERERS)),
              default='details', help='What to render (default: details)')
@click.option('--interval', '-i', type=float, default=None,
              help='Minimum seconds between updates (default from settings)')
@click.pass_context
def watch(ctx, path, output, command, interval):
    """Watch a KiCad file and re-render it on every change."""
    source = Path(path)
    output_path = Path(output)
    settings = ctx.obj['settings']
    if interval is None:
        interval = settings.update_interval

    suffixes, _ = RENDERERS[command]
    if source.suffix not in suffixes:
        _fail(f"{command} command requires a {' or '.join(suffixes)} file")

    def generate():
        output_path.write_text(_render(ctx, command, source), encoding='utf-8')
        click.echo(f"Updated {output_path}", err=True)

    click.echo(f"Watching {source} for changes...", err=True)
    click.echo(f"Output: {output_path}", err=True)
    click.echo("Press Ctrl+C to stop\n", err=True)

    try:
        LayoutWatcher(source, generate, interval).run()
    except KeyboardInterrupt:
        click.echo("\nStopping watcher...", err=True)


def main():
    """Main entry point."""
    cli(auto_envvar_prefix=ENV_PREFIX)


if __name__ == '__main__':
    main()
