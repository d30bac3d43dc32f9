"""
Assembler: edited translation tree -> file text.

Structured-data files are re-serialized in reference key order; source
modules are regenerated by splicing into the existing file or a boilerplate.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..config import AssemblySettings
from ..nodes import ObjectNode
from ..types import FileCategory, FileDescriptor
from .printer import SourcePrinter
from .range_edits import RangeEditor
from .source import assemble_source
from .structured import assemble_structured, sort_nodes, to_json_value
from .templates import BUILTIN_TEMPLATES, resolve_template

logger = logging.getLogger(__name__)


def assemble(
    desc: FileDescriptor,
    tree: ObjectNode,
    *,
    reference: Optional[ObjectNode] = None,
    existing_text: Optional[str] = None,
    settings: Optional[AssemblySettings] = None,
) -> Optional[str]:
    """
    Turn an edited tree back into file text.

    Args:
        desc: Target file
        tree: Edited translation tree
        reference: Reference tree (key order for structured output)
        existing_text: Current text of the target file for this locale, if any
        settings: Assembly settings (defaults if omitted)

    Returns:
        The file text, or None when assembly is impossible (no template,
        unparseable template, unsupported file type). Never partial text.
    """
    settings = settings or AssemblySettings()

    if desc.category is FileCategory.STRUCTURED:
        return assemble_structured(tree, reference, indent=settings.json_indent)

    if desc.category is FileCategory.SOURCE:
        template = resolve_template(desc, existing_text, settings)
        if template is None:
            logger.error("No assembling template found for file %s", desc.filename)
            return None
        return assemble_source(template, tree, ext=desc.ext, indent=settings.indent)

    logger.error("Unsupported file type for assembly: %s", desc.filename)
    return None


__all__ = [
    "assemble",
    "assemble_source",
    "assemble_structured",
    "sort_nodes",
    "to_json_value",
    "resolve_template",
    "BUILTIN_TEMPLATES",
    "SourcePrinter",
    "RangeEditor",
]
