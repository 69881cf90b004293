"""Error types raised while exporting fragments."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from graphql import GraphQLError


class FragmentExportError(Exception):
    """Base class for all errors surfaced by a fragment export run."""


class ConfigError(FragmentExportError):
    """Raised when the configuration file cannot be parsed."""


class DiscoveryError(FragmentExportError):
    """Raised when part of the directory tree cannot be listed."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot scan '{path}': {reason}")


class DocumentParseError(FragmentExportError):
    """
    Raised when a matched file is not a valid GraphQL document.

    Unreadable files are reported the same way, with ``error`` left as None.
    """

    def __init__(self, path: Path, error: Optional[GraphQLError] = None, reason: str = ""):
        self.path = path
        self.error = error
        if error is not None:
            reason = error.message
            if error.locations:
                location = error.locations[0]
                reason = f"{reason} (line {location.line}, column {location.column})"
        self.reason = reason
        super().__init__(f"Cannot parse '{path}': {reason}")


class WriteError(FragmentExportError):
    """
    Raised when a rewritten document cannot be stored.

    Writes are not transactional across files, so ``written`` lists every
    file that was replaced before the failure.
    """

    def __init__(self, path: Path, reason: str, written: Sequence[Path] = ()):
        self.path = path
        self.reason = reason
        self.written: List[Path] = list(written)
        super().__init__(f"Cannot write '{path}': {reason}")


class DuplicateFragmentError(FragmentExportError):
    """Raised when a fragment name is defined in more than one document."""

    def __init__(self, duplicates: Dict[str, List[Path]]):
        self.duplicates = duplicates
        names = ", ".join(sorted(duplicates))
        super().__init__(f"Fragments defined in more than one file: {names}")
