"""
Merge engine: fold a saved draft over a freshly parsed translation tree.
"""

from __future__ import annotations

from typing import Dict, Optional

from .nodes import Entry, ObjectNode, TranslationNode


def merge(fresh: ObjectNode, draft: Optional[ObjectNode]) -> ObjectNode:
    """
    Combine a fresh tree with a draft of the same file.

    Fresh keys keep their order, draft-only keys are appended in draft order.
    Objects on both sides merge recursively; for anything else the draft
    node wins, since it is what the user typed.
    """
    if draft is None or not draft.entries:
        return fresh

    values: Dict[str, TranslationNode] = {e.key: e.node for e in fresh.entries}
    for entry in draft.entries:
        current = values.get(entry.key)
        if isinstance(current, ObjectNode) and isinstance(entry.node, ObjectNode):
            values[entry.key] = merge(current, entry.node)
        else:
            values[entry.key] = entry.node

    return ObjectNode(tuple(Entry(k, v) for k, v in values.items()))


__all__ = ["merge"]
