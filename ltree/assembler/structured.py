"""
Structured-data assembly: translation tree -> pretty-printed JSON.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from ..nodes import (
    ArrayNode,
    Entry,
    FunctionNode,
    ObjectNode,
    StringLiteral,
    StringTemplate,
    Variable,
)


def sort_nodes(node: ObjectNode, ref: Optional[ObjectNode]) -> ObjectNode:
    """
    Reorder entries to the reference key order, recursively.

    Keys the reference lacks follow in their own order; reference keys the
    tree lacks are skipped.
    """
    if ref is None:
        return node

    ordered_keys: List[str] = list(ref.keys())
    known = set(ordered_keys)
    for key in node.keys():
        if key not in known:
            ordered_keys.append(key)
            known.add(key)

    entries: List[Entry] = []
    for key in ordered_keys:
        val = node.get(key)
        if val is None:
            continue
        ref_val = ref.get(key)
        if isinstance(val, ObjectNode) and isinstance(ref_val, ObjectNode):
            val = sort_nodes(val, ref_val)
        entries.append(Entry(key, val))

    return ObjectNode(tuple(entries))


def to_json_value(node: object) -> Any:
    """
    Plain JSON value of a node. Functions have no JSON form and are dropped
    from their parent object.
    """
    if isinstance(node, ObjectNode):
        result: Dict[str, Any] = {}
        for e in node.entries:
            if isinstance(e.node, FunctionNode):
                continue
            result[e.key] = to_json_value(e.node)
        return result
    if isinstance(node, ArrayNode):
        return [to_json_value(item) for item in node.items]
    if isinstance(node, (StringLiteral, StringTemplate)):
        return node.value
    if isinstance(node, Variable):
        return node.name
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def assemble_structured(tree: ObjectNode, ref: Optional[ObjectNode], indent: int = 4) -> str:
    value = to_json_value(sort_nodes(tree, ref))
    return json.dumps(value, indent=indent, ensure_ascii=False)


__all__ = ["sort_nodes", "to_json_value", "assemble_structured"]
