"""
Translation tree -> object-literal source text.
"""

from __future__ import annotations

import json
import re
from typing import Iterable

from ..nodes import (
    UNKNOWN_PARAM,
    UNKNOWN_TYPE,
    ArrayNode,
    BlockExpression,
    FunctionBody,
    FunctionNode,
    ObjectNode,
    Param,
    StringLiteral,
    StringTemplate,
    Variable,
)
from ..parser.strings import toggles_template

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class SourcePrinter:
    """
    Pretty-printer for translation nodes.

    Containers go one item per line with trailing commas; `level` is the
    nesting level of the line the printed value starts on.
    """

    def __init__(self, indent: int = 4):
        self.indent = indent

    def node(self, node: object, level: int = 0) -> str:
        if isinstance(node, ObjectNode):
            return self.object(node, level)
        if isinstance(node, ArrayNode):
            return self.array(node, level)
        if isinstance(node, FunctionNode):
            return self.function(node, level)
        if isinstance(node, (StringLiteral, StringTemplate)):
            return self.string(node)
        if isinstance(node, Variable):
            return node.name
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    def object(self, node: ObjectNode, level: int = 0) -> str:
        if not node.entries:
            return "{}"
        lines = [
            f"{self._pad(level + 1)}{_key(e.key)}: {self.node(e.node, level + 1)},"
            for e in node.entries
        ]
        return "{\n" + "\n".join(lines) + f"\n{self._pad(level)}}}"

    def array(self, node: ArrayNode, level: int = 0) -> str:
        if not node.items:
            return "[]"
        lines = [f"{self._pad(level + 1)}{self.node(item, level + 1)}," for item in node.items]
        return "[\n" + "\n".join(lines) + f"\n{self._pad(level)}]"

    def function(self, node: FunctionNode, level: int = 0) -> str:
        """Arrow function: `(a: T, b) => body`."""
        return f"({_params(node.params)}) => {self._body(node.body, level)}"

    def function_declaration(self, name: str, node: FunctionNode, level: int = 0) -> str:
        """`function name(a: T) { ... }` for exported function declarations."""
        params = _params(node.params)
        if isinstance(node.body, BlockExpression):
            body = self.block(node.body.text, level)
        else:
            value = self._body(node.body, level + 1)
            body = f"{{\n{self._pad(level + 1)}return {value};\n{self._pad(level)}}}"
        return f"function {name}({params}) {body}"

    def block(self, text: str, level: int = 0) -> str:
        """
        Opaque body text re-indented one level deeper than `level`.

        Lines inside a multi-line template literal are literal content and
        are emitted untouched.
        """
        if not text.strip():
            return "{}"

        lines = []
        inside_template = False
        for line in text.split("\n"):
            if inside_template:
                lines.append(line)
            elif line.strip():
                lines.append(f"{self._pad(level + 1)}{line}")
            else:
                lines.append("")
            if toggles_template(line):
                inside_template = not inside_template

        return "{\n" + "\n".join(lines) + f"\n{self._pad(level)}}}"

    @staticmethod
    def string(node: object) -> str:
        if isinstance(node, StringTemplate):
            return f"`{node.value}`"
        if isinstance(node, StringLiteral):
            return json.dumps(node.value, ensure_ascii=False)
        raise TypeError(f"Unsupported string node: {type(node).__name__}")

    def _body(self, body: FunctionBody, level: int) -> str:
        if isinstance(body, BlockExpression):
            return self.block(body.text, level)
        return self.node(body, level)

    def _pad(self, level: int) -> str:
        if level <= 0:
            return ""
        return " " * (level * self.indent)


def _key(key: str) -> str:
    if _IDENTIFIER_RE.match(key):
        return key
    return json.dumps(key, ensure_ascii=False)


def _params(params: Iterable[Param]) -> str:
    parts = []
    for p in params:
        if p.type and p.type != UNKNOWN_TYPE and p.name != UNKNOWN_PARAM:
            parts.append(f"{p.name}: {p.type}")
        else:
            parts.append(p.name)
    return ", ".join(parts)


__all__ = ["SourcePrinter"]
