"""Data model for documents, fragment indices and run reports."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Iterator, List, Set, Tuple

from graphql import DocumentNode, FragmentDefinitionNode


EXPORT_DIRECTIVE = "export"


@dataclass(frozen=True)
class SourceDocument:
    """A GraphQL file as read from disk, with its parsed tree."""

    path: Path
    text: str
    tree: DocumentNode = field(repr=False)


@dataclass(frozen=True)
class FragmentIndex:
    """
    Fragment names defined, exported and referenced in a single document.

    Attributes:
        path: Path of the indexed document.
        defined: Every fragment definition in the document, keyed by name.
        exported: The subset of ``defined`` already carrying ``@export``.
        external_refs: Spread names that are not defined in the document.
    """

    path: Path
    defined: Dict[str, FragmentDefinitionNode] = field(default_factory=dict)
    exported: Dict[str, FragmentDefinitionNode] = field(default_factory=dict)
    external_refs: FrozenSet[str] = frozenset()


@dataclass(frozen=True)
class DocumentAnnotation:
    """The result of annotating one document."""

    document: SourceDocument
    tree: DocumentNode = field(repr=False)
    annotated: Tuple[str, ...] = ()

    @property
    def path(self) -> Path:
        return self.document.path

    @property
    def changed(self) -> bool:
        """True when at least one fragment gained the export marker."""
        return bool(self.annotated)


class RunReport:
    """
    Outcome of a fragment export run.

    Tracks which files were scanned, which fragment names had to be exported,
    which fragments were annotated in which file, and which files were
    actually written.
    """

    def __init__(self, root: Path, dry_run: bool = False):
        self.root = root
        self.dry_run = dry_run
        self.required: FrozenSet[str] = frozenset()
        self._scanned: List[Path] = []
        self._annotated: Dict[Path, Tuple[str, ...]] = {}
        self._written: List[Path] = []
        self._skipped: Dict[Path, str] = {}  # path -> reason
        self._duplicates: Dict[str, List[Path]] = {}

    @property
    def scanned(self) -> List[Path]:
        """Return the files that were parsed and indexed, in scan order."""
        return list(self._scanned)

    @property
    def annotated(self) -> Dict[Path, Tuple[str, ...]]:
        """Return changed files mapped to the fragment names that gained the marker."""
        return dict(self._annotated)

    @property
    def written(self) -> List[Path]:
        """Return the files that were overwritten, in write order."""
        return list(self._written)

    @property
    def skipped(self) -> Dict[Path, str]:
        """Return files skipped because they could not be parsed."""
        return dict(self._skipped)

    @property
    def duplicates(self) -> Dict[str, List[Path]]:
        """Return fragment names defined in more than one file."""
        return {k: list(v) for k, v in self._duplicates.items()}

    def add_scanned(self, path: Path) -> None:
        self._scanned.append(path)

    def add_annotation(self, annotation: DocumentAnnotation) -> None:
        """Record an annotation; unchanged documents are ignored."""
        if annotation.changed:
            self._annotated[annotation.path] = annotation.annotated

    def add_written(self, path: Path) -> None:
        self._written.append(path)

    def add_skipped(self, path: Path, reason: str) -> None:
        self._skipped[path] = reason

    def set_duplicates(self, duplicates: Dict[str, List[Path]]) -> None:
        self._duplicates = {k: list(v) for k, v in duplicates.items()}

    def iter_annotations(self) -> Iterator[Tuple[Path, str]]:
        """Iterate over all annotations as (path, fragment name) tuples."""
        for path in sorted(self._annotated):
            for name in self._annotated[path]:
                yield path, name

    def pending(self) -> Set[Path]:
        """Return changed files that have not been written (all of them in a dry run)."""
        return set(self._annotated) - set(self._written)

    def has_changes(self) -> bool:
        """Check if any file needed the export marker added."""
        return bool(self._annotated)

    def __repr__(self) -> str:
        annotation_count = sum(len(names) for names in self._annotated.values())
        return (
            f"RunReport(scanned={len(self._scanned)}, required={len(self.required)}, "
            f"annotated={annotation_count}, written={len(self._written)}, "
            f"skipped={len(self._skipped)}, duplicates={len(self._duplicates)})"
        )
