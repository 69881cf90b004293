"""Scanner module for document discovery and parsing."""

from .discovery import iter_files
from .parser import load_document, parse_document

__all__ = [
    "iter_files",
    "load_document",
    "parse_document",
]
