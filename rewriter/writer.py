"""Writes annotated documents back to disk."""

import shutil
import tempfile
from pathlib import Path
from typing import Iterable, List

from graphql import print_ast

from fragments.errors import WriteError
from fragments.model import DocumentAnnotation
from logconfig import get_logger

logger = get_logger(__name__)


def render_document(annotation: DocumentAnnotation) -> str:
    """Print an annotated document tree as GraphQL text."""
    return print_ast(annotation.tree) + "\n"


def write_document(annotation: DocumentAnnotation) -> Path:
    """
    Overwrite a document's file with its annotated tree.

    The text goes to a temporary file in the same directory which then
    replaces the original, so the file is either fully rewritten or left
    as it was.

    Raises:
        WriteError: If the file cannot be replaced.
    """
    path = annotation.path
    text = render_document(annotation)
    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=path.suffix,
            prefix=f".{path.stem}.",
            dir=path.parent,
            delete=False,
            encoding="utf-8",
            newline="",
        ) as f:
            temp_path = Path(f.name)
            f.write(text)
        shutil.copymode(path, temp_path)
        temp_path.replace(path)
    except OSError as e:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise WriteError(path, e.strerror or str(e)) from e

    return path


def write_annotations(annotations: Iterable[DocumentAnnotation]) -> List[Path]:
    """
    Write every changed document once; unchanged documents are not touched.

    Returns:
        Paths written, in order.

    Raises:
        WriteError: On the first failure, listing the files already written.
    """
    written: List[Path] = []
    for annotation in annotations:
        if not annotation.changed:
            continue
        try:
            write_document(annotation)
        except WriteError as e:
            raise WriteError(e.path, e.reason, written) from e.__cause__
        logger.info("Exported %s in %s", ", ".join(annotation.annotated), annotation.path)
        written.append(annotation.path)
    return written
