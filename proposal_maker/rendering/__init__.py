"""HTML rendering for proposal documents."""

from .themes import THEMES, ThemeStyle, resolve_theme
from .section_renderer import render_section
from .document_renderer import page_count, render_document

__all__ = [
    "THEMES",
    "ThemeStyle",
    "resolve_theme",
    "render_section",
    "page_count",
    "render_document",
]
