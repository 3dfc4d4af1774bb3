"""Standalone HTML export."""

from .exporter import DocumentExporter, ExportedDocument, get_exporter, sanitize_filename

__all__ = [
    "DocumentExporter",
    "ExportedDocument",
    "get_exporter",
    "sanitize_filename",
]
