"""Reading and parsing GraphQL documents from disk."""

from pathlib import Path

from graphql import GraphQLError, parse

from fragments.errors import DocumentParseError
from fragments.model import SourceDocument


def read_document(file_path: Path) -> str:
    """
    Read the text of a GraphQL file.
    
    Raises:
        DocumentParseError: If the file cannot be read or is not UTF-8.
    """
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DocumentParseError(file_path, reason=f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise DocumentParseError(file_path, reason=e.strerror or str(e)) from e


def parse_document(file_path: Path, text: str) -> SourceDocument:
    """
    Parse GraphQL text into a source document.
    
    Args:
        file_path: Path the text was read from, used for error reporting.
        text: Raw document text.
    
    Returns:
        SourceDocument holding the text and its parsed tree.
    
    Raises:
        DocumentParseError: If the text is not a valid GraphQL document.
    """
    try:
        tree = parse(text)
    except GraphQLError as e:
        raise DocumentParseError(file_path, e) from e
    
    return SourceDocument(path=file_path, text=text, tree=tree)


def load_document(file_path: Path) -> SourceDocument:
    """Read and parse a single GraphQL file."""
    return parse_document(file_path, read_document(file_path))
