"""Human-readable summary exporter for run reports."""

from pathlib import Path
from typing import Optional, List, Tuple

from fragments.model import RunReport
from .json_exporter import _get_path_str


# Unicode tree characters
UNICODE_BRANCH = "├── "
UNICODE_LAST = "└── "

# ASCII fallback characters
ASCII_BRANCH = "|-- "
ASCII_LAST = "\\-- "


def to_text(
    report: RunReport,
    root: Path,
    base: Optional[Path] = None,
    style: str = "tree",
) -> str:
    """
    Convert a run report to a short text summary.
    
    Each changed file is listed with the fragments that gained the marker
    beneath it, followed by skipped files and duplicate fragment names.
    
    Args:
        report: The report to export.
        root: Scan root for relative paths.
        base: Optional base path for relative path display.
        style: Output style - "tree" (Unicode) or "ascii" (pure ASCII).
    
    Returns:
        Summary string.
    """
    if base is None:
        base = root
    
    if style == "ascii":
        chars = (ASCII_BRANCH, ASCII_LAST)
    else:
        chars = (UNICODE_BRANCH, UNICODE_LAST)
    
    lines: List[str] = []
    annotated = sorted(report.annotated.items())
    written = set(report.written)
    
    for path, names in annotated:
        label = _get_path_str(path, base, root)
        if not report.dry_run and path not in written:
            label += " (not written)"
        lines.append(label)
        lines.extend(_render_children([f"@export {name}" for name in names], chars))
    
    if report.skipped:
        if lines:
            lines.append("")
        lines.append("Skipped:")
        lines.extend(_render_children(
            [f"{_get_path_str(p, base, root)}: {reason}" for p, reason in sorted(report.skipped.items())],
            chars,
        ))
    
    if report.duplicates:
        if lines:
            lines.append("")
        lines.append("Duplicate fragments:")
        lines.extend(_render_children(
            [
                f"{name}: " + ", ".join(_get_path_str(p, base, root) for p in paths)
                for name, paths in sorted(report.duplicates.items())
            ],
            chars,
        ))
    
    if lines:
        lines.append("")
    verb = "would be rewritten" if report.dry_run else "rewritten"
    count = len(annotated) if report.dry_run else len(report.written)
    lines.append(f"{count} of {len(report.scanned)} files {verb}")
    
    return "\n".join(lines)


def _render_children(items: List[str], chars: Tuple[str, str]) -> List[str]:
    """Render items as the children of the preceding line."""
    branch, last = chars
    return [
        ("    " + (last if i == len(items) - 1 else branch) + item)
        for i, item in enumerate(items)
    ]
