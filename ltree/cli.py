from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, List, Optional

from .align import align, event_to_dict
from .assembler import assemble
from .config import Settings, find_config, load_config
from .drafts import FileDraftStore, persist_draft
from .errors import LTUserError
from .merge import merge
from .mutate import set_at_path
from .nodes import ObjectNode, node_from_dict, node_to_dict, object_from_dict
from .parser import parse_file
from .types import FileDescriptor

logger = logging.getLogger("ltree")


def _tool_version() -> str:
    try:
        return metadata.version("locale-tree")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ltree",
        description="Localization tree tool: parse, align, edit and re-assemble translation files",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {_tool_version()}")
    p.add_argument("-d", "--debug", action="store_true", help="verbose logging to stderr")
    p.add_argument("--config", metavar="PATH", help="settings file (default: ./ltree.yaml)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_parse = sub.add_parser("parse", help="Translation file -> tree (JSON)")
    sp_parse.add_argument("file", help="translation file (.ts/.js/.json ...)")

    sp_align = sub.add_parser("align", help="Reference vs. edited file -> display events (JSON)")
    sp_align.add_argument("ref", help="reference locale file")
    sp_align.add_argument("edit", nargs="?", help="file being translated (omit for a new locale)")
    sp_align.add_argument("--hide-translated", action="store_true", help="skip entries that already have a translation")
    sp_align.add_argument("--draft", metavar="LOCALE", help="merge the saved draft of LOCALE over the edited file")

    sp_set = sub.add_parser("set", help="Set or delete a node by key path (tree JSON in, tree JSON out)")
    sp_set.add_argument("tree", help="tree JSON file, or - for stdin")
    sp_set.add_argument("path", help="dot-separated key path, e.g. nav.home.title")
    grp = sp_set.add_mutually_exclusive_group(required=True)
    grp.add_argument("--node", metavar="JSON", help="node JSON, e.g. '{\"type\": \"string\", \"value\": \"Hi\"}'")
    grp.add_argument("--delete", action="store_true", help="delete the node")

    sp_merge = sub.add_parser("merge", help="Fold a draft tree over a translation file (JSON)")
    sp_merge.add_argument("fresh", help="translation file")
    sp_merge.add_argument("draft", help="draft tree JSON file")

    sp_asm = sub.add_parser("assemble", help="Tree -> file text")
    sp_asm.add_argument("ref", help="reference locale file (key order)")
    sp_asm.add_argument("tree", help="edited tree JSON file, or - for stdin")
    sp_asm.add_argument("--existing", metavar="FILE", help="current file of the target locale, used as template")
    sp_asm.add_argument("--name", help="target file name (default: reference file name)")
    sp_asm.add_argument("-o", "--out", metavar="FILE", help="write to FILE instead of stdout")

    sp_draft = sub.add_parser("draft", help="Saved drafts")
    sp_draft.add_argument("action", choices=["show", "save", "clear"])
    sp_draft.add_argument("locale")
    sp_draft.add_argument("filename")
    sp_draft.add_argument("tree", nargs="?", help="tree JSON file for 'save', or - for stdin")

    return p


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug or os.environ.get("LTREE_DEBUG") else logging.INFO
    logger.setLevel(level)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(h)


def _settings(ns: argparse.Namespace) -> Settings:
    path = Path(ns.config) if ns.config else find_config(Path.cwd())
    return load_config(path)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    p = Path(path)
    if not p.is_file():
        raise LTUserError(f"File not found: {p}")
    return p.read_text(encoding="utf-8")


def _read_optional(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    p = Path(path)
    return p.read_text(encoding="utf-8") if p.is_file() else None


def _load_tree(path: str) -> ObjectNode:
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as e:
        raise LTUserError(f"{path}: invalid JSON: {e}") from e
    return object_from_dict(data)


def _parse_path(path: str) -> List[str]:
    return [part for part in path.split(".") if part]


def _emit(data: Any) -> None:
    # compact, non-ASCII verbatim; no trailing newline
    sys.stdout.write(json.dumps(data, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.debug)

    try:
        settings = _settings(ns)
        store = FileDraftStore(Path(settings.drafts.directory))

        if ns.cmd == "parse":
            _emit(node_to_dict(parse_file(ns.file, _read_text(ns.file))))
            return 0

        if ns.cmd == "align":
            ref = parse_file(ns.ref, _read_text(ns.ref))
            edit_name = ns.edit or ns.ref
            edit = parse_file(edit_name, _read_optional(ns.edit))
            if ns.draft:
                edit = merge(edit, store.load(ns.draft, Path(edit_name).name))
            events = align(ref, edit, hide_translated=ns.hide_translated)
            _emit([event_to_dict(e) for e in events])
            return 0

        if ns.cmd == "set":
            tree = _load_tree(ns.tree)
            node = None if ns.delete else node_from_dict(json.loads(ns.node))
            _emit(node_to_dict(set_at_path(tree, _parse_path(ns.path), node)))
            return 0

        if ns.cmd == "merge":
            fresh = parse_file(ns.fresh, _read_text(ns.fresh))
            _emit(node_to_dict(merge(fresh, _load_tree(ns.draft))))
            return 0

        if ns.cmd == "assemble":
            desc = FileDescriptor.from_filename(ns.name or Path(ns.ref).name)
            reference = parse_file(ns.ref, _read_text(ns.ref))
            text = assemble(
                desc,
                _load_tree(ns.tree),
                reference=reference,
                existing_text=_read_optional(ns.existing),
                settings=settings.assembly,
            )
            if text is None:
                sys.stderr.write(f"Failed to assemble {desc.filename}\n")
                return 2
            if ns.out:
                Path(ns.out).write_text(text, encoding="utf-8")
            else:
                sys.stdout.write(text)
            return 0

        if ns.cmd == "draft":
            if ns.action == "show":
                draft = store.load(ns.locale, ns.filename)
                _emit(node_to_dict(draft) if draft is not None else None)
            elif ns.action == "save":
                if not ns.tree:
                    raise LTUserError("draft save needs a tree JSON file")
                saved = persist_draft(store, _load_tree(ns.tree), ns.locale, ns.filename)
                _emit({"saved": saved})
            else:
                store.clear(ns.locale, ns.filename)
                _emit({"cleared": True})
            return 0

    except LTUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
