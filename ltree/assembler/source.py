"""
Source-splice assembly: regenerate only the exported values of a template
module, keeping imports, comments and the rest of the text verbatim.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..nodes import FunctionNode, ObjectNode
from ..parser import ExportShape, parse_source
from .printer import SourcePrinter
from .range_edits import RangeEditor

logger = logging.getLogger(__name__)


def assemble_source(template: str, tree: ObjectNode, ext: str = "ts", indent: int = 4) -> Optional[str]:
    """
    Splice the printed tree into `template`.

    Default-export templates get the whole tree in place of their exported
    object literal. Named-export templates get each export whose name is a
    key of the tree replaced by that entry; the others stay as they are.

    Returns:
        Assembled text, or None if the template has no usable export shape
    """
    parsed = parse_source(template, ext)
    layout = parsed.layout
    if layout is None:
        logger.error("Failed to parse template exports. Cannot assemble translation.")
        return None

    printer = SourcePrinter(indent)
    editor = RangeEditor(template)

    if layout.shape is ExportShape.DEFAULT:
        start, end = layout.default_range
        editor.add_replacement(start, end, printer.object(tree), label="default")

    else:
        for decl in layout.declarations:
            node = tree.get(decl.name)
            if node is None:
                logger.warning("No translation found for exported node %s. Skipping.", decl.name)
                continue

            if decl.is_function_declaration:
                if not isinstance(node, FunctionNode):
                    logger.warning("Export %s is a function declaration but the translation is not a function. Skipping.", decl.name)
                    continue
                code = printer.function_declaration(decl.name, node)
            else:
                code = printer.node(node)

            editor.add_replacement(decl.start, decl.end, code, label=decl.name)

    result, stats = editor.apply_edits()
    logger.debug("Spliced %d export(s)", stats["edits_applied"])
    return result


__all__ = ["assemble_source"]
