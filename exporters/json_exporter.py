"""JSON exporter for run reports (machine-friendly format)."""

import json
from pathlib import Path
from typing import Optional, Dict, List, Any

from fragments.model import RunReport


def to_json(
    report: RunReport,
    root: Path,
    base: Optional[Path] = None,
    indent: int = 2,
) -> str:
    """
    Convert a run report to JSON format.
    
    Args:
        report: The report to export.
        root: Scan root for relative paths.
        base: Optional base path for relative path display.
        indent: JSON indentation level.
    
    Returns:
        JSON string representation of the report.
    """
    if base is None:
        base = root
    
    annotated: Dict[str, List[str]] = {}
    for path, names in sorted(report.annotated.items()):
        annotated[_get_path_str(path, base, root)] = list(names)
    
    duplicates: Dict[str, List[str]] = {}
    for name, paths in sorted(report.duplicates.items()):
        duplicates[name] = [_get_path_str(p, base, root) for p in paths]
    
    data: Dict[str, Any] = {
        "dry_run": report.dry_run,
        "scanned": sorted(_get_path_str(p, base, root) for p in report.scanned),
        "required": sorted(report.required),
        "annotated": annotated,
        "written": [_get_path_str(p, base, root) for p in report.written],
        "skipped": {
            _get_path_str(p, base, root): reason
            for p, reason in sorted(report.skipped.items())
        },
        "duplicates": duplicates,
    }
    
    return json.dumps(data, indent=indent)


def _get_path_str(path: Path, base: Path, root: Path) -> str:
    """Get the string representation of a path."""
    try:
        rel_path = path.resolve().relative_to(base.resolve())
        return str(rel_path).replace("\\", "/")
    except ValueError:
        try:
            rel_path = path.resolve().relative_to(root.resolve())
            return str(rel_path).replace("\\", "/")
        except ValueError:
            return str(path).replace("\\", "/")
