"""
String helpers shared by the parser and the source printer.
"""

from __future__ import annotations

import re

_ESCAPE_RE = re.compile(
    r"""\\(?:
        u\{(?P<cp>[0-9a-fA-F]+)\}
      | u(?P<u4>[0-9a-fA-F]{4})
      | x(?P<x2>[0-9a-fA-F]{2})
      | (?P<nl>\r\n|[\n\r\u2028\u2029])
      | (?P<ch>.)
    )""",
    re.VERBOSE | re.DOTALL,
)

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_MAX_CODE_POINT = 0x10FFFF

_BACKTICK_RE = re.compile(r"(?<!\\)`")


def decode_js_string(raw: str) -> str:
    """
    Cook the body of a JS string or template literal (without delimiters).

    Handles simple escapes, \\xHH, \\uHHHH (with surrogate pairs), \\u{...}
    and line continuations. Unknown escapes yield the escaped character.

    Raises:
        ValueError: For a \\u{...} code point above U+10FFFF
    """
    if "\\" not in raw:
        return raw

    def repl(m: re.Match) -> str:
        if m.group("cp") is not None:
            code = int(m.group("cp"), 16)
            if code > _MAX_CODE_POINT:
                raise ValueError(f"code point out of range: \\u{{{m.group('cp')}}}")
            return chr(code)
        if m.group("u4") is not None:
            return chr(int(m.group("u4"), 16))
        if m.group("x2") is not None:
            return chr(int(m.group("x2"), 16))
        if m.group("nl") is not None:
            return ""
        ch = m.group("ch")
        return _SIMPLE_ESCAPES.get(ch, ch)

    cooked = _ESCAPE_RE.sub(repl, raw)
    # join surrogate pairs produced by \uD83D\uDE00 style escapes
    return cooked.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def count_unescaped_backticks(line: str) -> int:
    return len(_BACKTICK_RE.findall(line))


def toggles_template(line: str) -> bool:
    """True if the line opens or closes a multi-line template literal."""
    return count_unescaped_backticks(line) % 2 != 0


__all__ = ["decode_js_string", "count_unescaped_backticks", "toggles_template"]
