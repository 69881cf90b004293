"""Per-document extraction of defined, exported and referenced fragment names."""

from typing import Any, Dict, Set

from graphql import DocumentNode, FragmentDefinitionNode, FragmentSpreadNode, Visitor, visit

from .model import EXPORT_DIRECTIVE, FragmentIndex, SourceDocument


class _SpreadCollector(Visitor):
    """Collects the name of every fragment spread in a document."""

    def __init__(self):
        super().__init__()
        self.names: Set[str] = set()

    def enter_fragment_spread(self, node: FragmentSpreadNode, *_args: Any) -> None:
        self.names.add(node.name.value)


def get_fragment_definitions(tree: DocumentNode) -> Dict[str, FragmentDefinitionNode]:
    """
    Map every fragment definition in a document to its name.

    If a name is defined twice in the same document, the last definition wins.
    """
    return {
        definition.name.value: definition
        for definition in tree.definitions
        if isinstance(definition, FragmentDefinitionNode)
    }


def has_export_directive(definition: FragmentDefinitionNode) -> bool:
    """Check if a fragment definition already carries the export marker."""
    return any(
        directive.name.value == EXPORT_DIRECTIVE
        for directive in definition.directives or ()
    )


def collect_spread_names(tree: DocumentNode) -> Set[str]:
    """Return the names of all fragment spreads, at any depth, in a document."""
    collector = _SpreadCollector()
    visit(tree, collector)
    return collector.names


def index_document(document: SourceDocument) -> FragmentIndex:
    """
    Build the fragment index of a parsed document.

    Spreads of fragments defined in the same document, including a fragment
    spreading itself, are not treated as external references.

    Args:
        document: The parsed source document. It is not modified.

    Returns:
        FragmentIndex for the document.
    """
    defined = get_fragment_definitions(document.tree)
    exported = {
        name: definition
        for name, definition in defined.items()
        if has_export_directive(definition)
    }
    external_refs = frozenset(collect_spread_names(document.tree) - set(defined))

    return FragmentIndex(
        path=document.path,
        defined=defined,
        exported=exported,
        external_refs=external_refs,
    )
