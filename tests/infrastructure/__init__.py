"""
Shared test infrastructure for ltree.

Modules:
- file_utils: writing files in temporary projects
- cli_utils: running the CLI as a subprocess
- tree_builders: terse constructors for translation trees
"""

from .file_utils import write, src
from .cli_utils import run_cli, jload
from .tree_builders import s, tpl, var, arr, obj, fn, block, param

__all__ = [
    "write",
    "src",
    "run_cli",
    "jload",
    "s",
    "tpl",
    "var",
    "arr",
    "obj",
    "fn",
    "block",
    "param",
]
