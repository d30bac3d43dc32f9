"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from LTUserError.

Programming errors and bugs should NOT inherit from LTUserError,
they propagate with full tracebacks.
"""

from __future__ import annotations


class LTUserError(Exception):
    """
    Base class for all user-facing errors in ltree.

    These errors indicate problems that the user can fix:
    invalid configuration, malformed tree documents, missing files, etc.
    """
    pass


class ConfigError(LTUserError):
    """Invalid or incompatible ltree.yaml."""
    pass


class CodecError(LTUserError, ValueError):
    """A serialized tree document does not describe a valid node."""
    pass


__all__ = ["LTUserError", "ConfigError", "CodecError"]
