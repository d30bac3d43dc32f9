"""
Translation tree node model.

A translation tree is a closed sum of immutable node kinds. Every function
that dispatches over node kinds ends with a fallback arm raising TypeError,
so an unknown variant never slips through silently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

# Parameter type text used when the source carries no annotation
UNKNOWN_TYPE = "unknown"
# Placeholder parameter name for destructured and rest parameters
UNKNOWN_PARAM = "[unknown]"


@dataclass(frozen=True)
class StringLiteral:
    """Plain quoted string."""
    value: str


@dataclass(frozen=True)
class StringTemplate:
    """Template string; value is the raw source between the backticks."""
    value: str


@dataclass(frozen=True)
class Variable:
    """Bare identifier reference. Never rewritten by edits."""
    name: str


@dataclass(frozen=True)
class BlockExpression:
    """Opaque function body: the original statements as source text."""
    text: str


StringNode = Union[StringLiteral, StringTemplate]
ArrayItem = Union[StringLiteral, StringTemplate, Variable]


@dataclass(frozen=True)
class ArrayNode:
    items: Tuple[ArrayItem, ...] = ()


@dataclass(frozen=True)
class Param:
    name: str
    type: str = UNKNOWN_TYPE


FunctionBody = Union[StringLiteral, StringTemplate, Variable, ArrayNode, BlockExpression]


@dataclass(frozen=True)
class FunctionNode:
    params: Tuple[Param, ...]
    body: FunctionBody


@dataclass(frozen=True)
class Entry:
    """Keyed node inside an object."""
    key: str
    node: "TranslationNode"


@dataclass(frozen=True)
class ObjectNode:
    entries: Tuple[Entry, ...] = field(default=())

    def keys(self) -> Tuple[str, ...]:
        return tuple(e.key for e in self.entries)

    def get(self, key: str) -> Optional["TranslationNode"]:
        for e in self.entries:
            if e.key == key:
                return e.node
        return None

    def with_entry(self, key: str, node: "TranslationNode") -> ObjectNode:
        """
        Return a copy with `key` bound to `node`.

        An existing key keeps its position; a new key is appended.
        """
        entries = list(self.entries)
        for i, e in enumerate(entries):
            if e.key == key:
                entries[i] = Entry(key, node)
                return ObjectNode(tuple(entries))
        entries.append(Entry(key, node))
        return ObjectNode(tuple(entries))

    def without(self, key: str) -> ObjectNode:
        return ObjectNode(tuple(e for e in self.entries if e.key != key))


TranslationNode = Union[StringLiteral, StringTemplate, Variable, ArrayNode, ObjectNode, FunctionNode]

EMPTY_OBJECT = ObjectNode()


def node_kind(node: object) -> str:
    """Short kind name used in logs, events and the serialized form."""
    if isinstance(node, StringLiteral):
        return "string"
    if isinstance(node, StringTemplate):
        return "string_template"
    if isinstance(node, Variable):
        return "variable"
    if isinstance(node, ArrayNode):
        return "array"
    if isinstance(node, ObjectNode):
        return "object"
    if isinstance(node, FunctionNode):
        return "function"
    if isinstance(node, BlockExpression):
        return "block"
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


__all__ = [
    "UNKNOWN_TYPE",
    "UNKNOWN_PARAM",
    "StringLiteral",
    "StringTemplate",
    "StringNode",
    "Variable",
    "BlockExpression",
    "ArrayItem",
    "ArrayNode",
    "Param",
    "FunctionBody",
    "FunctionNode",
    "Entry",
    "ObjectNode",
    "TranslationNode",
    "EMPTY_OBJECT",
    "node_kind",
]
