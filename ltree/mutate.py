"""
Mutation engine: apply an edit to a tree by key path.

Pure structural recursion; unchanged subtrees are shared between the input
and the result, nothing is mutated in place.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

from .nodes import ObjectNode, TranslationNode, is_empty_node

logger = logging.getLogger(__name__)


def set_at_path(tree: ObjectNode, path: Sequence[str], node: Optional[TranslationNode]) -> ObjectNode:
    """
    Set, replace or delete the node at `path`.

    • Empty path: the root is replaced only by another object; anything else
      is a no-op.
    • Missing intermediate keys are created as empty objects. A non-object
      on the way makes the call a no-op.
    • `None`, or an empty node over an existing entry, deletes the entry;
      ancestors left without entries are pruned, the root excepted.
    • Otherwise the entry is replaced in place, or appended if new.

    Returns:
        The updated tree, or `tree` itself when nothing changed
    """
    if not path:
        if isinstance(node, ObjectNode):
            return node
        return tree

    updated = _set(tree, tuple(path), node)
    return tree if updated is None else updated


def _set(obj: ObjectNode, path: Tuple[str, ...], node: Optional[TranslationNode]) -> Optional[ObjectNode]:
    """Updated copy of `obj`, or None for a no-op."""
    key, rest = path[0], path[1:]
    current = obj.get(key)

    if rest:
        if current is None:
            if node is None:
                return None
            current = ObjectNode()
        elif not isinstance(current, ObjectNode):
            logger.debug("Cannot descend through non-object %r", key)
            return None

        child = _set(current, rest, node)
        if child is None:
            return None
        if not child.entries:
            # the deletion emptied this object: prune it too
            return obj.without(key)
        return obj.with_entry(key, child)

    if node is None or (current is not None and is_empty_node(node)):
        if current is None:
            return None
        return obj.without(key)

    return obj.with_entry(key, node)


__all__ = ["set_at_path"]
