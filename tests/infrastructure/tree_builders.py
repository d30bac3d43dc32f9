"""
Terse constructors for translation trees in tests.
"""

from __future__ import annotations

from ltree.nodes import (
    UNKNOWN_TYPE,
    ArrayNode,
    BlockExpression,
    FunctionNode,
    ObjectNode,
    Param,
    StringLiteral,
    StringTemplate,
    Variable,
)


def s(value: str) -> StringLiteral:
    return StringLiteral(value)


def tpl(value: str) -> StringTemplate:
    return StringTemplate(value)


def var(name: str) -> Variable:
    return Variable(name)


def arr(*items) -> ArrayNode:
    return ArrayNode(tuple(items))


def obj(**entries) -> ObjectNode:
    """Object from keyword arguments, in argument order."""
    tree = ObjectNode()
    for key, node in entries.items():
        tree = tree.with_entry(key, node)
    return tree


def block(text: str) -> BlockExpression:
    return BlockExpression(text)


def param(name: str, type_: str = UNKNOWN_TYPE) -> Param:
    return Param(name, type_)


def fn(body, *params: Param) -> FunctionNode:
    return FunctionNode(tuple(params), body)
