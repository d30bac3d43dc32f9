"""
Source parser: TypeScript/JavaScript translation module -> translation tree.

Two export shapes are recognised:
  • default export of an object literal (possibly wrapped in `satisfies`,
    `as`, type assertions or parentheses);
  • one or more named exports (`export const X = ...`, `export function X() {}`).

Besides the tree, the parser records where the exported values live in the
text, so the assembler can splice regenerated code into the same spots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..nodes import (
    EMPTY_OBJECT,
    UNKNOWN_PARAM,
    UNKNOWN_TYPE,
    ArrayItem,
    ArrayNode,
    BlockExpression,
    Entry,
    FunctionBody,
    FunctionNode,
    ObjectNode,
    Param,
    StringLiteral,
    StringTemplate,
    TranslationNode,
    Variable,
)
from .document import Node, SourceDocument
from .strings import decode_js_string, toggles_template

logger = logging.getLogger(__name__)

# Expression wrappers that do not change the runtime value
_WRAPPERS = {
    "satisfies_expression",
    "as_expression",
    "parenthesized_expression",
    "non_null_expression",
    "type_assertion",
}

# "function" is the pre-0.21 grammar name of function_expression
_FUNCTION_TYPES = {"arrow_function", "function_expression", "function"}


class ExportShape(str, Enum):
    DEFAULT = "default"
    NAMED = "named"


@dataclass(frozen=True)
class NamedDeclaration:
    """
    Named export recorded for splicing.

    start/end are character offsets of the declarator initializer, or of the
    whole declaration for `export function name() {}`.
    """
    name: str
    start: int
    end: int
    is_function_declaration: bool = False


@dataclass(frozen=True)
class ExportLayout:
    shape: ExportShape
    # Character range of the default-exported object literal
    default_range: Optional[Tuple[int, int]] = None
    declarations: Tuple[NamedDeclaration, ...] = ()


@dataclass(frozen=True)
class ParsedSource:
    tree: ObjectNode
    layout: Optional[ExportLayout]


def parse_source(text: str, ext: str = "ts") -> ParsedSource:
    """
    Parse source text into a translation tree plus its export layout.

    Never raises for bad input: syntax errors, malformed escapes and
    unrecognised export shapes produce an empty tree with no layout.
    """
    doc = SourceDocument(text, ext)
    if doc.has_error():
        logger.debug("Source has syntax errors; treating it as untranslated")
        return ParsedSource(EMPTY_OBJECT, None)

    try:
        return _Extractor(doc).run()
    except ValueError as e:
        logger.debug("Source has a malformed literal (%s); treating it as untranslated", e)
        return ParsedSource(EMPTY_OBJECT, None)


def parse(text: str, ext: str = "ts") -> ObjectNode:
    """Parse source text into a translation tree."""
    return parse_source(text, ext).tree


class _Extractor:

    def __init__(self, doc: SourceDocument):
        self.doc = doc

    def run(self) -> ParsedSource:
        default_obj: Optional[Node] = None
        named: List[Tuple[NamedDeclaration, Node]] = []

        for export, _capture in self.doc.query("exports"):
            if any(child.type == "default" for child in export.children):
                value = export.child_by_field_name("value")
                if value is None:
                    continue
                value = _unwrap(value)
                if value.type == "object":
                    default_obj = value
                continue

            decl = export.child_by_field_name("declaration")
            if decl is not None:
                named.extend(self._named_declarations(decl))

        if default_obj is not None:
            layout = ExportLayout(ExportShape.DEFAULT, default_range=self.doc.get_node_range(default_obj))
            return ParsedSource(self._object(default_obj), layout)

        if named:
            values: Dict[str, TranslationNode] = {}
            for decl, value in named:
                if decl.is_function_declaration:
                    mapped: Optional[TranslationNode] = self._function(value)
                else:
                    mapped = self._expression(value)
                if mapped is None:
                    logger.debug("Export %r has no translatable value; skipped", decl.name)
                    continue
                values[decl.name] = mapped
            layout = ExportLayout(ExportShape.NAMED, declarations=tuple(d for d, _ in named))
            return ParsedSource(_object_of(values), layout)

        logger.debug("No default-exported object or named exports found")
        return ParsedSource(EMPTY_OBJECT, None)

    # ----------------------------- exports ----------------------------- #

    def _named_declarations(self, decl: Node) -> List[Tuple[NamedDeclaration, Node]]:
        result: List[Tuple[NamedDeclaration, Node]] = []

        if decl.type in ("lexical_declaration", "variable_declaration"):
            for declarator in decl.named_children:
                if declarator.type != "variable_declarator":
                    continue
                name = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name is None or name.type != "identifier" or value is None:
                    continue
                start, end = self.doc.get_node_range(value)
                result.append((NamedDeclaration(self.doc.get_node_text(name), start, end), value))

        elif decl.type == "function_declaration":
            name = decl.child_by_field_name("name")
            if name is not None:
                start, end = self.doc.get_node_range(decl)
                named = NamedDeclaration(self.doc.get_node_text(name), start, end, is_function_declaration=True)
                result.append((named, decl))

        return result

    # --------------------------- expressions --------------------------- #

    def _expression(self, expr: Node) -> Optional[TranslationNode]:
        """Map an expression to a node; None if it is not representable."""
        expr = _unwrap(expr)

        if expr.type == "object":
            return self._object(expr)
        if expr.type in _FUNCTION_TYPES:
            return self._function(expr)
        if expr.type == "array":
            return self._array(expr)

        string = self._string(expr)
        if string is not None:
            return string

        return self._variable(expr)

    def _object(self, node: Node) -> ObjectNode:
        values: Dict[str, TranslationNode] = {}

        for child in SourceDocument.named_children(node):
            if child.type == "pair":
                key = self._key(child.child_by_field_name("key"))
                value = child.child_by_field_name("value")
                if key is None or value is None:
                    continue
                mapped = self._expression(value)
                if mapped is None:
                    logger.debug("Dropping key %r: unsupported value %s", key, value.type)
                    continue
                values[key] = mapped

            elif child.type == "shorthand_property_identifier":
                name = self.doc.get_node_text(child)
                values[name] = Variable(name)

        return _object_of(values)

    def _key(self, node: Optional[Node]) -> Optional[str]:
        if node is None:
            return None
        if node.type in ("property_identifier", "identifier"):
            return self.doc.get_node_text(node)
        if node.type == "string":
            return decode_js_string(self.doc.get_node_text(node)[1:-1])
        return None

    def _string(self, node: Node) -> Optional[TranslationNode]:
        if node.type == "string":
            return StringLiteral(decode_js_string(self.doc.get_node_text(node)[1:-1]))

        if node.type == "template_string":
            raw = self.doc.get_node_text(node)[1:-1]
            if any(child.type == "template_substitution" for child in node.children):
                return StringTemplate(raw)
            # no ${} inside: keep it a plain string
            return StringLiteral(decode_js_string(raw))

        return None

    def _variable(self, node: Node) -> Optional[Variable]:
        if node.type != "identifier":
            return None
        return Variable(self.doc.get_node_text(node))

    def _array(self, node: Node) -> Optional[ArrayNode]:
        """
        All-or-nothing: a hole, a spread or any element that is not
        a string, template or identifier rejects the whole array.
        """
        items: List[ArrayItem] = []
        expect_element = True

        for child in node.children:
            if child.type in ("[", "]", "comment"):
                continue
            if child.type == ",":
                if expect_element:
                    return None
                expect_element = True
                continue

            element = _unwrap(child)
            item = self._string(element)
            if item is None:
                item = self._variable(element)
            if item is None:
                return None
            items.append(item)
            expect_element = False

        return ArrayNode(tuple(items))

    # ---------------------------- functions ---------------------------- #

    def _function(self, node: Node) -> FunctionNode:
        body = node.child_by_field_name("body")
        return FunctionNode(params=self._params(node), body=self._body(body))

    def _params(self, fn: Node) -> Tuple[Param, ...]:
        single = fn.child_by_field_name("parameter")
        if single is not None:
            # x => ...
            if single.type == "identifier":
                return (Param(self.doc.get_node_text(single)),)
            return (Param(UNKNOWN_PARAM),)

        formal = fn.child_by_field_name("parameters")
        if formal is None:
            return ()

        params: List[Param] = []
        for p in SourceDocument.named_children(formal):
            if p.type in ("required_parameter", "optional_parameter"):
                pattern = p.child_by_field_name("pattern")
                if pattern is None or pattern.type != "identifier" or p.child_by_field_name("value") is not None:
                    # destructuring, rest and defaulted parameters are not supported
                    params.append(Param(UNKNOWN_PARAM))
                    continue
                params.append(Param(self.doc.get_node_text(pattern), self._annotation(p)))
            elif p.type == "identifier":
                params.append(Param(self.doc.get_node_text(p)))
            else:
                params.append(Param(UNKNOWN_PARAM))

        return tuple(params)

    def _annotation(self, param: Node) -> str:
        annotation = param.child_by_field_name("type")
        if annotation is None:
            return UNKNOWN_TYPE
        inner = SourceDocument.named_children(annotation)
        if not inner:
            return UNKNOWN_TYPE
        return self.doc.get_node_text(inner[0])

    def _body(self, body: Optional[Node]) -> FunctionBody:
        if body is None:
            return BlockExpression("")

        if body.type == "statement_block":
            return BlockExpression(self._block_text(body))

        expr = _unwrap(body)
        if expr.type == "array":
            array = self._array(expr)
            if array is not None:
                return array

        string = self._string(expr)
        if string is not None:
            return string

        variable = self._variable(expr)
        if variable is not None:
            return variable

        # any other expression body keeps its code as a block
        return BlockExpression(f"return {self.doc.get_node_text(body)};")

    def _block_text(self, block: Node) -> str:
        """
        Statements of a block as text, comments included.

        Lines are dedented to the column of the first statement, except
        lines that are literal content of a multi-line template string.
        """
        children = block.named_children
        if not children:
            return ""

        start, _ = self.doc.get_node_range(children[0])
        _, end = self.doc.get_node_range(children[-1])
        base_col = self.doc.get_column(children[0])

        lines = self.doc.text[start:end].split("\n")
        out = [lines[0]]
        inside_template = toggles_template(lines[0])
        for line in lines[1:]:
            out.append(line if inside_template else _strip_indent(line, base_col))
            if toggles_template(line):
                inside_template = not inside_template

        return "\n".join(out)


def _unwrap(node: Node) -> Node:
    """
    Unwrap the real value from TS wrappers,
    e.g. `export default { ... } satisfies Locale;`.
    """
    while node.type in _WRAPPERS:
        inner = SourceDocument.named_children(node)
        if not inner:
            break
        # <T>expr keeps the expression last, the other wrappers keep it first
        node = inner[-1] if node.type == "type_assertion" else inner[0]
    return node


def _object_of(values: Dict[str, TranslationNode]) -> ObjectNode:
    return ObjectNode(tuple(Entry(k, v) for k, v in values.items()))


def _strip_indent(line: str, width: int) -> str:
    i = 0
    while i < width and i < len(line) and line[i] in " \t":
        i += 1
    return line[i:]


__all__ = [
    "ExportShape",
    "NamedDeclaration",
    "ExportLayout",
    "ParsedSource",
    "parse_source",
    "parse",
]
