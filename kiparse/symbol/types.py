"""Typed data model for KiCad symbol libraries (.kicad_sym)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Symbol:
    """One logical part of a symbol library."""
    name: str  # base name, cut at the first '_'
    description: str = ''
