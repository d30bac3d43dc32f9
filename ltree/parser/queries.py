"""
Tree-sitter query definitions for translation source files.
Contains S-expression queries for locating exports.
"""

from __future__ import annotations

QUERIES = {
    # Top-level export statements only
    "exports": """
    (program
      (export_statement) @export)
    """,
}
