"""
Empty-node synthesis and the emptiness predicate.

Both are shared by the alignment engine (placeholders for keys missing on
one side, "hide translated" filtering), the mutation engine (an empty
value deletes its key) and draft persistence (empty trees are cleared).
"""

from __future__ import annotations

from .model import (
    ArrayItem,
    ArrayNode,
    BlockExpression,
    FunctionBody,
    FunctionNode,
    ObjectNode,
    StringLiteral,
    StringTemplate,
    TranslationNode,
    Variable,
)


# ---------------------------- synthesis ---------------------------- #

def empty_node(node: TranslationNode) -> TranslationNode:
    """
    Same-shape node with all translatable text cleared.

    Variables are returned unchanged: they never change in translation.
    """
    if isinstance(node, (StringLiteral, StringTemplate)):
        return type(node)("")
    if isinstance(node, Variable):
        return node
    if isinstance(node, ArrayNode):
        return _empty_array(node)
    if isinstance(node, ObjectNode):
        return ObjectNode()
    if isinstance(node, FunctionNode):
        return FunctionNode(params=node.params, body=_empty_body(node.body))
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def _empty_array(node: ArrayNode) -> ArrayNode:
    return ArrayNode(tuple(_empty_item(item) for item in node.items))


def _empty_item(item: ArrayItem) -> ArrayItem:
    if isinstance(item, (StringLiteral, StringTemplate)):
        return type(item)("")
    if isinstance(item, Variable):
        return item
    raise TypeError(f"Unsupported array item: {type(item).__name__}")


def _empty_body(body: FunctionBody) -> FunctionBody:
    if isinstance(body, BlockExpression):
        return BlockExpression("")
    if isinstance(body, (StringLiteral, StringTemplate)):
        return type(body)("")
    if isinstance(body, Variable):
        return body
    if isinstance(body, ArrayNode):
        return _empty_array(body)
    raise TypeError(f"Unsupported function body: {type(body).__name__}")


# ---------------------------- predicate ---------------------------- #

def is_empty_node(node: TranslationNode, fn_return: bool = False) -> bool:
    """
    Whether a node carries no translated content.

    Args:
        node: Node to check
        fn_return: Apply the stricter rule for values returned by a function,
                   where a blank string (whitespace only) counts as empty

    Returns:
        True if nothing in the node needs to be kept
    """
    if isinstance(node, (StringLiteral, StringTemplate)):
        if fn_return:
            return not node.value.strip()
        return not node.value
    if isinstance(node, Variable):
        return not node.name
    if isinstance(node, ArrayNode):
        return all(
            is_empty_node(item)
            for item in node.items
            if not isinstance(item, Variable)
        )
    if isinstance(node, ObjectNode):
        return all(is_empty_node(e.node) for e in node.entries)
    if isinstance(node, FunctionNode):
        if isinstance(node.body, BlockExpression):
            return not node.body.text.strip()
        return is_empty_node(node.body, fn_return=True)
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


__all__ = ["empty_node", "is_empty_node"]
