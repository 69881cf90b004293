"""End-to-end fragment export run."""

from pathlib import Path
from typing import Optional

from config import ExportSettings
from fragments.errors import DuplicateFragmentError, WriteError
from fragments.model import RunReport
from fragments.resolver import find_duplicate_fragments, resolve_required
from logconfig import get_logger
from scanner.builder import load_documents
from scanner.discovery import get_relative_path
from .annotator import annotate_document
from .writer import write_annotations

logger = get_logger(__name__)


def export_fragments(
    root: Path,
    settings: Optional[ExportSettings] = None,
    dry_run: bool = False,
) -> RunReport:
    """
    Add ``@export`` to every fragment used outside its defining file.
    
    Every document is read and indexed before the required set is computed,
    and every document is annotated against that single set. Only documents
    that changed are written.
    
    Args:
        root: Root directory to scan.
        settings: Run settings (default: ExportSettings()).
        dry_run: If True, compute annotations without writing anything.
    
    Returns:
        RunReport describing the run.
    
    Raises:
        DiscoveryError: If the tree cannot be listed.
        DocumentParseError: If a document is invalid and invalid files are not skipped.
        DuplicateFragmentError: If duplicate fragment names are configured as errors.
        WriteError: If a file cannot be written; ``written`` lists completed files.
    """
    if settings is None:
        settings = ExportSettings()
    root = root.resolve()
    report = RunReport(root, dry_run=dry_run)
    
    loaded = load_documents(root, settings, report)
    indices = [index for _, index in loaded]
    
    duplicates = find_duplicate_fragments(indices)
    if duplicates:
        report.set_duplicates(duplicates)
        if settings.duplicates == "error":
            raise DuplicateFragmentError(duplicates)
        for name, paths in sorted(duplicates.items()):
            logger.warning(
                "Fragment %s is defined in %d files: %s",
                name,
                len(paths),
                ", ".join(str(get_relative_path(p, root)) for p in paths),
            )
    
    report.required = resolve_required(indices)
    logger.debug("%d fragment names must be exported", len(report.required))
    
    annotations = []
    for document, index in loaded:
        annotation = annotate_document(document, report.required, index)
        report.add_annotation(annotation)
        annotations.append(annotation)
    
    if dry_run:
        for path, names in sorted(report.annotated.items()):
            logger.info("Would export %s in %s", ", ".join(names), get_relative_path(path, root))
        return report
    
    try:
        written = write_annotations(annotations)
    except WriteError as e:
        for path in e.written:
            report.add_written(path)
        raise
    for path in written:
        report.add_written(path)
    
    logger.info("Rewrote %d of %d files", len(written), len(loaded))
    return report
