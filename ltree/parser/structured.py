"""
Structured-data parser: JSON (JSON5 syntax) translation file -> translation tree.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional, Tuple

import json5

from ..nodes import EMPTY_OBJECT, ArrayNode, Entry, ObjectNode, StringLiteral, TranslationNode

logger = logging.getLogger(__name__)


class _Pairs(list):
    """Object members in declaration order (keeps objects apart from arrays)."""


def parse_structured(text: str) -> ObjectNode:
    """
    Parse JSON/JSON5 text. Scalars become strings the way JavaScript
    stringifies them; arrays keep only their scalar items.

    Malformed text and non-object roots give an empty tree.
    """
    try:
        data = json5.loads(text, object_pairs_hook=_Pairs)
    except ValueError as e:
        logger.debug("Unparseable structured data: %s", e)
        return EMPTY_OBJECT

    if not isinstance(data, _Pairs):
        logger.debug("Structured data root is not an object")
        return EMPTY_OBJECT

    return _object(data)


def _object(pairs: List[Tuple[str, Any]]) -> ObjectNode:
    values = {}
    for key, value in pairs:
        values[key] = _value(value)
    return ObjectNode(tuple(Entry(k, v) for k, v in values.items()))


def _value(value: Any) -> TranslationNode:
    if isinstance(value, _Pairs):
        return _object(value)
    if isinstance(value, list):
        items = []
        for item in value:
            text = _scalar_text(item)
            if text is not None:
                items.append(StringLiteral(text))
        return ArrayNode(tuple(items))
    text = _scalar_text(value)
    return StringLiteral(text if text is not None else "")


def _scalar_text(value: Any) -> Optional[str]:
    """JavaScript String(value) for JSON scalars; None for containers."""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return None


__all__ = ["parse_structured"]
