"""Adds the export directive to fragments that are used across files."""

from typing import AbstractSet, List, Optional

from graphql import DirectiveNode, DocumentNode, FragmentDefinitionNode, NameNode

from fragments.index import has_export_directive, index_document
from fragments.model import (
    EXPORT_DIRECTIVE,
    DocumentAnnotation,
    FragmentIndex,
    SourceDocument,
)


def export_directive() -> DirectiveNode:
    """Build a bare ``@export`` directive node."""
    return DirectiveNode(name=NameNode(value=EXPORT_DIRECTIVE), arguments=())


def add_export_directive(definition: FragmentDefinitionNode) -> FragmentDefinitionNode:
    """
    Return a copy of a fragment definition with ``@export`` appended.

    The name, type condition, variables and selection set are shared with
    the original node; existing directives keep their order.
    """
    fields = {key: getattr(definition, key) for key in definition.keys}
    fields["directives"] = (*(definition.directives or ()), export_directive())
    return FragmentDefinitionNode(**fields)


def annotate_document(
    document: SourceDocument,
    required: AbstractSet[str],
    index: Optional[FragmentIndex] = None,
) -> DocumentAnnotation:
    """
    Mark the required fragments of one document.

    Definitions that are not fragments, are not required, or already carry
    the marker are passed through as the very same node objects.

    Args:
        document: The parsed document.
        required: Fragment names that must be exported.
        index: The document's fragment index, computed if not given.

    Returns:
        DocumentAnnotation with the new tree and the names that gained the marker.
    """
    if index is None:
        index = index_document(document)

    tree = document.tree
    definitions = []
    annotated: List[str] = []
    for definition in tree.definitions:
        if (
            isinstance(definition, FragmentDefinitionNode)
            and definition.name.value in required
            and definition.name.value not in index.exported
            and not has_export_directive(definition)
        ):
            definitions.append(add_export_directive(definition))
            annotated.append(definition.name.value)
        else:
            definitions.append(definition)

    if not annotated:
        return DocumentAnnotation(document=document, tree=tree)

    new_tree = DocumentNode(
        loc=tree.loc,
        definitions=tuple(definitions),
    )
    return DocumentAnnotation(document=document, tree=new_tree, annotated=tuple(annotated))
