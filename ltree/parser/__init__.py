"""
Parsers turning translation files into translation trees.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..nodes import EMPTY_OBJECT, ObjectNode
from ..types import FileCategory, FileDescriptor
from .source import ExportLayout, ExportShape, NamedDeclaration, ParsedSource, parse, parse_source
from .structured import parse_structured

logger = logging.getLogger(__name__)

EMPTY_SOURCE_TEXT = "export default {};"
EMPTY_STRUCTURED_TEXT = "{}"


def parse_file(filename: str, text: Optional[str]) -> ObjectNode:
    """
    Parse a translation file picking the parser by extension.

    Missing text (file absent for this locale) is treated as an empty
    export; unsupported extensions give an empty tree.
    """
    desc = FileDescriptor.from_filename(filename)

    if desc.category is FileCategory.SOURCE:
        return parse(text if text is not None else EMPTY_SOURCE_TEXT, desc.ext)
    if desc.category is FileCategory.STRUCTURED:
        return parse_structured(text if text is not None else EMPTY_STRUCTURED_TEXT)

    logger.warning("Unsupported translation file type: %s", filename)
    return EMPTY_OBJECT


__all__ = [
    "EMPTY_SOURCE_TEXT",
    "EMPTY_STRUCTURED_TEXT",
    "ExportLayout",
    "ExportShape",
    "NamedDeclaration",
    "ParsedSource",
    "parse",
    "parse_source",
    "parse_structured",
    "parse_file",
]
