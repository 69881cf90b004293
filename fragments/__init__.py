"""Fragment model, per-document indexing and cross-file resolution."""

from .errors import (
    ConfigError,
    DiscoveryError,
    DocumentParseError,
    DuplicateFragmentError,
    FragmentExportError,
    WriteError,
)
from .index import index_document
from .model import (
    EXPORT_DIRECTIVE,
    DocumentAnnotation,
    FragmentIndex,
    RunReport,
    SourceDocument,
)
from .resolver import find_duplicate_fragments, resolve_required

__all__ = [
    "EXPORT_DIRECTIVE",
    "ConfigError",
    "DiscoveryError",
    "DocumentAnnotation",
    "DocumentParseError",
    "DuplicateFragmentError",
    "FragmentExportError",
    "FragmentIndex",
    "RunReport",
    "SourceDocument",
    "WriteError",
    "find_duplicate_fragments",
    "index_document",
    "resolve_required",
]
