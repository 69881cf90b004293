"""Cross-file resolution of the fragment names that must be exported."""

from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Set

from .model import FragmentIndex


def resolve_required(indices: Iterable[FragmentIndex]) -> FrozenSet[str]:
    """
    Compute the set of fragment names that must carry the export marker.

    A name is required when some document spreads it without defining it.
    Names already exported anywhere stay required, so the marker is never
    dropped once a fragment has been exported.

    Args:
        indices: The fragment index of every document in the run.

    Returns:
        Frozen set of required fragment names.
    """
    required: Set[str] = set()
    for index in indices:
        required.update(index.external_refs)
        required.update(index.exported)
    return frozenset(required)


def find_duplicate_fragments(indices: Iterable[FragmentIndex]) -> Dict[str, List[Path]]:
    """
    Find fragment names defined in more than one document.

    Args:
        indices: The fragment index of every document in the run.

    Returns:
        Mapping of duplicated name to the defining paths, in scan order.
    """
    definitions: Dict[str, List[Path]] = {}
    for index in indices:
        for name in index.defined:
            definitions.setdefault(name, []).append(index.path)

    return {name: paths for name, paths in definitions.items() if len(paths) > 1}
