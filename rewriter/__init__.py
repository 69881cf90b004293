"""Annotation of cross-file fragments and rewriting of their documents."""

from .annotator import add_export_directive, annotate_document
from .writer import render_document, write_annotations, write_document
from .pipeline import export_fragments

__all__ = [
    "add_export_directive",
    "annotate_document",
    "render_document",
    "write_annotations",
    "write_document",
    "export_fragments",
]
