"""Document loading that orchestrates discovery, parsing and indexing."""

from pathlib import Path
from typing import List, Optional, Tuple

from config import ExportSettings
from fragments.errors import DocumentParseError
from fragments.index import index_document
from fragments.model import FragmentIndex, RunReport, SourceDocument
from logconfig import get_logger
from .discovery import iter_files, get_relative_path
from .parser import load_document

logger = get_logger(__name__)


def load_documents(
    root: Path,
    settings: Optional[ExportSettings] = None,
    report: Optional[RunReport] = None,
) -> List[Tuple[SourceDocument, FragmentIndex]]:
    """
    Discover, parse and index every GraphQL document under a root.
    
    All files are read here, before anything is written.
    
    Args:
        root: Root directory to scan.
        settings: Scan settings (default: ExportSettings()).
        report: Optional report recording scanned and skipped files.
    
    Returns:
        List of (document, fragment index) pairs in scan order.
    
    Raises:
        DiscoveryError: If the tree cannot be listed.
        DocumentParseError: If a file is invalid and invalid files are not skipped.
    """
    if settings is None:
        settings = ExportSettings()
    root = root.resolve()
    
    loaded: List[Tuple[SourceDocument, FragmentIndex]] = []
    for file_path in iter_files(
        root=root,
        include_ext=settings.extensions,
        exclude_dirs=settings.exclude_dirs,
        max_depth=settings.max_depth,
    ):
        try:
            document = load_document(file_path)
        except DocumentParseError as e:
            if not settings.skip_invalid:
                raise
            logger.warning("Skipping %s: %s", get_relative_path(file_path, root), e.reason)
            if report is not None:
                report.add_skipped(file_path, e.reason)
            continue
        
        index = index_document(document)
        logger.debug(
            "Indexed %s: %d defined, %d exported, %d external",
            get_relative_path(file_path, root),
            len(index.defined),
            len(index.exported),
            len(index.external_refs),
        )
        if report is not None:
            report.add_scanned(file_path)
        loaded.append((document, index))
    
    logger.debug("Loaded %d documents under %s", len(loaded), root)
    return loaded
