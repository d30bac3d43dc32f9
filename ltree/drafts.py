"""
Draft persistence: auto-saved partial edits keyed by locale/filename.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Protocol

from .nodes import ObjectNode, is_empty_node, node_to_dict, object_from_dict

logger = logging.getLogger(__name__)

DRAFT_VERSION = 1


class DraftStore(Protocol):
    def load(self, locale: str, filename: str) -> Optional[ObjectNode]: ...

    def save(self, tree: ObjectNode, locale: str, filename: str) -> None: ...

    def clear(self, locale: str, filename: str) -> None: ...


def draft_key(locale: str, filename: str) -> str:
    return f"{locale}/{filename}"


def persist_draft(store: DraftStore, tree: ObjectNode, locale: str, filename: str) -> bool:
    """
    Save a non-empty tree, clear the draft for an empty one.

    Returns:
        True if the tree was saved
    """
    if is_empty_node(tree):
        store.clear(locale, filename)
        return False
    store.save(tree, locale, filename)
    return True


class FileDraftStore:
    """
    One JSON document per draft: <root>/<locale>/<filename>.json.
    Unreadable drafts are reported and treated as absent.
    """

    def __init__(self, root: Path):
        self.root = root

    def path_for(self, locale: str, filename: str) -> Path:
        return self.root / locale / f"{filename}.json"

    def load(self, locale: str, filename: str) -> Optional[ObjectNode]:
        path = self.path_for(locale, filename)
        if not path.is_file():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            if data.get("v") != DRAFT_VERSION:
                logger.warning("Ignoring draft %s: unsupported version %r", draft_key(locale, filename), data.get("v"))
                return None
            return object_from_dict(data.get("tree"))
        except (OSError, ValueError, AttributeError) as e:
            logger.warning("Ignoring unreadable draft %s: %s", draft_key(locale, filename), e)
            return None

    def save(self, tree: ObjectNode, locale: str, filename: str) -> None:
        path = self.path_for(locale, filename)
        data = {
            "v": DRAFT_VERSION,
            "key": draft_key(locale, filename),
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "tree": node_to_dict(tree),
        }
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        try:
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
            tmp.replace(path)
        except (OSError, ValueError):
            tmp.unlink(missing_ok=True)
            raise
        logger.debug("Draft %s saved", draft_key(locale, filename))

    def clear(self, locale: str, filename: str) -> None:
        path = self.path_for(locale, filename)
        if path.exists():
            path.unlink()
            logger.debug("Draft %s cleared", draft_key(locale, filename))


__all__ = ["DRAFT_VERSION", "DraftStore", "FileDraftStore", "draft_key", "persist_draft"]
