"""
Tree <-> JSON-compatible dict codec.

Used for drafts on disk and for the JSON the CLI reads and writes.
Object entries are flattened as the node dict plus its "key".
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..errors import CodecError
from .model import (
    UNKNOWN_TYPE,
    ArrayNode,
    BlockExpression,
    Entry,
    FunctionNode,
    ObjectNode,
    Param,
    StringLiteral,
    StringTemplate,
    TranslationNode,
    Variable,
)


def node_to_dict(node: Any) -> Dict[str, Any]:
    if isinstance(node, StringLiteral):
        return {"type": "string", "value": node.value}
    if isinstance(node, StringTemplate):
        return {"type": "string_template", "value": node.value}
    if isinstance(node, Variable):
        return {"type": "variable", "name": node.name}
    if isinstance(node, BlockExpression):
        return {"type": "block", "text": node.text}
    if isinstance(node, ArrayNode):
        return {"type": "array", "items": [node_to_dict(i) for i in node.items]}
    if isinstance(node, ObjectNode):
        return {
            "type": "object",
            "entries": [{"key": e.key, **node_to_dict(e.node)} for e in node.entries],
        }
    if isinstance(node, FunctionNode):
        return {
            "type": "function",
            "params": [{"name": p.name, "type": p.type} for p in node.params],
            "body": node_to_dict(node.body),
        }
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def node_from_dict(data: Any, where: str = "$") -> TranslationNode:
    """
    Rebuild a translation node from its dict form.

    Raises:
        CodecError: If the document does not describe a valid node
    """
    node = _decode(data, where)
    if isinstance(node, BlockExpression):
        raise CodecError(f"{where}: block bodies are only allowed inside functions")
    return node


def object_from_dict(data: Any, where: str = "$") -> ObjectNode:
    node = node_from_dict(data, where)
    if not isinstance(node, ObjectNode):
        raise CodecError(f"{where}: expected an object tree, got {data.get('type')!r}")
    return node


def _decode(data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise CodecError(f"{where}: expected a mapping, got {type(data).__name__}")

    kind = data.get("type")
    if kind == "string":
        return StringLiteral(_text(data, "value", where))
    if kind == "string_template":
        return StringTemplate(_text(data, "value", where))
    if kind == "variable":
        return Variable(_text(data, "name", where))
    if kind == "block":
        return BlockExpression(_text(data, "text", where))
    if kind == "array":
        items = []
        for i, raw in enumerate(_list(data, "items", where)):
            item = _decode(raw, f"{where}.items[{i}]")
            if not isinstance(item, (StringLiteral, StringTemplate, Variable)):
                raise CodecError(f"{where}.items[{i}]: arrays hold only strings and variables")
            items.append(item)
        return ArrayNode(tuple(items))
    if kind == "object":
        entries: List[Entry] = []
        seen = set()
        for i, raw in enumerate(_list(data, "entries", where)):
            key = _text(raw, "key", f"{where}.entries[{i}]") if isinstance(raw, dict) else None
            if key is None:
                raise CodecError(f"{where}.entries[{i}]: expected a keyed node")
            if key in seen:
                raise CodecError(f"{where}.entries[{i}]: duplicate key {key!r}")
            seen.add(key)
            entries.append(Entry(key, node_from_dict(raw, f"{where}.{key}")))
        return ObjectNode(tuple(entries))
    if kind == "function":
        params = []
        for i, raw in enumerate(_list(data, "params", where)):
            if not isinstance(raw, dict):
                raise CodecError(f"{where}.params[{i}]: expected a mapping")
            params.append(Param(
                name=_text(raw, "name", f"{where}.params[{i}]"),
                type=str(raw.get("type", UNKNOWN_TYPE)),
            ))
        body = _decode(data.get("body"), f"{where}.body")
        if isinstance(body, (ObjectNode, FunctionNode)):
            raise CodecError(f"{where}.body: unsupported function body {data['body'].get('type')!r}")
        return FunctionNode(tuple(params), body)

    raise CodecError(f"{where}: unknown node type {kind!r}")


def _text(data: Dict[str, Any], name: str, where: str) -> str:
    val = data.get(name)
    if not isinstance(val, str):
        raise CodecError(f"{where}: field {name!r} must be a string")
    return val


def _list(data: Dict[str, Any], name: str, where: str) -> list:
    val = data.get(name, [])
    if not isinstance(val, list):
        raise CodecError(f"{where}: field {name!r} must be a list")
    return val


__all__ = ["node_to_dict", "node_from_dict", "object_from_dict"]
