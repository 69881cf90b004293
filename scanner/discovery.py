"""File discovery utilities for scanning GraphQL document trees."""

from pathlib import Path
from typing import Iterator, Set, Optional

from fragments.errors import DiscoveryError


DEFAULT_EXTENSIONS = {".graphql"}
DEFAULT_EXCLUDE_DIRS = {
    ".git", ".hg", ".svn",
    "node_modules", "__pycache__", ".tox", ".nox",
    "venv", ".venv", "env", ".env",
    ".idea", ".vscode",
    "*.egg-info",
}


def iter_files(
    root: Path,
    include_ext: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    max_depth: Optional[int] = None,
) -> Iterator[Path]:
    """
    Iterate over matching files in a directory tree, depth-first in lexical order.
    
    Symlinked directories and files are followed, but every directory is
    walked and every file yielded at most once, by its resolved path.
    
    Args:
        root: Root directory to scan.
        include_ext: Set of file extensions to include (e.g., {'.graphql'}).
                    If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Set of directory names to skip.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        max_depth: Maximum depth to descend. None means unlimited.
    
    Yields:
        Resolved Path objects for matching files.
    
    Raises:
        DiscoveryError: If the root is not a directory or any directory
            in the tree cannot be listed.
    """
    if include_ext is None:
        include_ext = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS
    include_ext = {ext.lower() for ext in include_ext}
    
    root = root.resolve()
    if not root.is_dir():
        raise DiscoveryError(root, "not a directory")
    
    # resolved paths already seen, so symlinks never yield a file twice
    visited_dirs: Set[Path] = {root}
    seen_files: Set[Path] = set()
    
    def _walk(current: Path, depth: int) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            raise DiscoveryError(current, e.strerror or str(e)) from e
        
        for entry in entries:
            if entry.is_dir():
                if _is_excluded(entry.name, exclude_dirs):
                    continue
                if max_depth is not None and depth + 1 > max_depth:
                    continue
                target = entry.resolve()
                if target in visited_dirs:
                    continue
                visited_dirs.add(target)
                yield from _walk(target, depth + 1)
            elif entry.is_file():
                if entry.suffix.lower() not in include_ext:
                    continue
                target = entry.resolve()
                if target in seen_files:
                    continue
                seen_files.add(target)
                yield target
    
    yield from _walk(root, 0)


def _is_excluded(name: str, exclude_dirs: Set[str]) -> bool:
    """Check a directory name against plain names and '*suffix' patterns."""
    if name in exclude_dirs:
        return True
    return any(name.endswith(pat.lstrip("*")) for pat in exclude_dirs if pat.startswith("*"))


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Get the path relative to root, handling edge cases."""
    try:
        return file_path.resolve().relative_to(root.resolve())
    except ValueError:
        return file_path
