"""Offline output package for cropsy (CSV tables and layout previews)."""

from .preview import render_layout_preview
from .table import build_panner_table, export_panner_table

__all__ = ["build_panner_table", "export_panner_table", "render_layout_preview"]
