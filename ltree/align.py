"""
Alignment engine: reference tree + edit tree -> flat sequence of events.

The sequence drives the side-by-side view. Every event carries the key path
the UI hands back to `set_at_path` when the user edits that entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple, Union

from .nodes import ObjectNode, TranslationNode, empty_node, is_empty_node, node_kind, node_to_dict

Path = Tuple[str, ...]


@dataclass(frozen=True)
class ObjectStart:
    key: str
    depth: int
    path: Path
    is_last: bool


@dataclass(frozen=True)
class ObjectEnd:
    key: str
    depth: int
    path: Path
    is_last: bool


@dataclass(frozen=True)
class EntryEvent:
    key: str
    depth: int
    path: Path
    is_last: bool
    ref_node: TranslationNode
    edit_node: TranslationNode


Event = Union[ObjectStart, ObjectEnd, EntryEvent]


def align(ref: ObjectNode, edit: ObjectNode, hide_translated: bool = False) -> List[Event]:
    """
    Align two object trees.

    Keys come in reference order, followed by keys only the edit tree has.
    A key missing on one side gets an empty same-shape placeholder. Nested
    objects yield ObjectStart, their children, ObjectEnd; an object whose
    children produce no events is left out entirely.

    Args:
        ref: Reference (base locale) tree
        edit: Tree being translated
        hide_translated: Skip entries whose edit node already has content

    Returns:
        Ordered list of events
    """
    return _align(ref, edit, 0, (), hide_translated)


def _align(ref: ObjectNode, edit: ObjectNode, depth: int, prefix: Path, hide_translated: bool) -> List[Event]:
    keys = _merged_keys(ref, edit)
    events: List[Event] = []

    for i, key in enumerate(keys):
        is_last = i == len(keys) - 1
        path = prefix + (key,)

        ref_node = ref.get(key)
        edit_node = edit.get(key)
        if edit_node is None:
            edit_node = empty_node(ref_node)
        elif ref_node is None:
            ref_node = empty_node(edit_node)

        if isinstance(ref_node, ObjectNode) and isinstance(edit_node, ObjectNode):
            children = _align(ref_node, edit_node, depth + 1, path, hide_translated)
            if not children:
                continue
            events.append(ObjectStart(key, depth, path, is_last))
            events.extend(children)
            events.append(ObjectEnd(key, depth, path, is_last))
            continue

        if hide_translated and not is_empty_node(edit_node):
            continue

        events.append(EntryEvent(key, depth, path, is_last, ref_node, edit_node))

    return events


def _merged_keys(ref: ObjectNode, edit: ObjectNode) -> List[str]:
    keys = list(ref.keys())
    seen = set(keys)
    for key in edit.keys():
        if key not in seen:
            keys.append(key)
            seen.add(key)
    return keys


def event_to_dict(event: Event) -> Dict[str, Any]:
    """JSON-compatible form of an event (CLI output)."""
    base: Dict[str, Any] = {
        "key": event.key,
        "depth": event.depth,
        "path": list(event.path),
        "isLast": event.is_last,
    }
    if isinstance(event, ObjectStart):
        return {"event": "object_start", **base}
    if isinstance(event, ObjectEnd):
        return {"event": "object_end", **base}
    if isinstance(event, EntryEvent):
        return {
            "event": "entry",
            **base,
            "kind": node_kind(event.ref_node),
            "ref": node_to_dict(event.ref_node),
            "edit": node_to_dict(event.edit_node),
        }
    raise TypeError(f"Unsupported event type: {type(event).__name__}")


__all__ = ["Path", "ObjectStart", "ObjectEnd", "EntryEvent", "Event", "align", "event_to_dict"]
