"""
Translation tree: node model, empty-node rules and dict codec.
"""

from .model import (
    UNKNOWN_TYPE,
    UNKNOWN_PARAM,
    StringLiteral,
    StringTemplate,
    StringNode,
    Variable,
    BlockExpression,
    ArrayItem,
    ArrayNode,
    Param,
    FunctionBody,
    FunctionNode,
    Entry,
    ObjectNode,
    TranslationNode,
    EMPTY_OBJECT,
    node_kind,
)
from .empty import empty_node, is_empty_node
from .codec import node_to_dict, node_from_dict, object_from_dict

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
    "empty_node",
    "is_empty_node",
    "node_to_dict",
    "node_from_dict",
    "object_from_dict",
]
