"""
Range-based text editing for splicing generated code into a template.
Text outside the edited ranges is preserved byte for byte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TextRange:
    """Represents a range in text by character positions."""
    start_char: int
    end_char: int

    def __post_init__(self):
        if self.start_char > self.end_char:
            raise ValueError(f"Invalid range: start_char ({self.start_char}) > end_char ({self.end_char})")

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def overlaps(self, other: TextRange) -> bool:
        """Check if this range overlaps with another."""
        return not (self.end_char <= other.start_char or other.end_char <= self.start_char)


@dataclass
class Edit:
    """Represents a single text replacement using character positions."""
    range: TextRange
    replacement: str
    label: Optional[str]  # export name, for diagnostics


class RangeEditor:
    """
    Unicode-safe range-based text editor that works with character positions.
    """

    def __init__(self, original_text: str):
        self.original_text = original_text
        self.edits: List[Edit] = []

    def add_replacement(self, start_char: int, end_char: int, replacement: str, label: Optional[str] = None) -> None:
        """
        Add a replacement operation.

        Overlaps are resolved by width: a wider edit absorbs narrower ones;
        with equal widths the first edit wins.
        """
        char_range = TextRange(start_char, end_char)
        new_width = char_range.length

        edits_to_remove = []
        for i, existing in enumerate(self.edits):
            if char_range.overlaps(existing.range):
                if new_width > existing.range.length:
                    edits_to_remove.append(i)
                else:
                    return

        # Remove absorbed edits (in reverse order to avoid index shift)
        for i in reversed(edits_to_remove):
            del self.edits[i]

        self.edits.append(Edit(char_range, replacement, label))

    def validate_edits(self) -> List[str]:
        """Validate that all edits are within bounds."""
        errors = []
        for i, edit in enumerate(self.edits):
            if edit.range.start_char < 0:
                errors.append(f"Edit {i}: start_char ({edit.range.start_char}) is negative")
            if edit.range.end_char > len(self.original_text):
                errors.append(f"Edit {i}: end_char ({edit.range.end_char}) exceeds text length ({len(self.original_text)})")
        return errors

    def apply_edits(self) -> Tuple[str, Dict[str, Any]]:
        """
        Apply all edits and return the modified text and statistics.

        Raises:
            ValueError: If an edit is out of bounds
        """
        validation_errors = self.validate_edits()
        if validation_errors:
            raise ValueError(f"Edit validation failed: {'; '.join(validation_errors)}")

        stats = {"edits_applied": len(self.edits), "chars_removed": 0, "chars_added": 0}
        if not self.edits:
            return self.original_text, stats

        # Untouched spans and replacements, in original order
        parts: List[str] = []
        pos = 0
        for edit in sorted(self.edits, key=lambda e: e.range.start_char):
            parts.append(self.original_text[pos:edit.range.start_char])
            parts.append(edit.replacement)
            stats["chars_removed"] += edit.range.length
            stats["chars_added"] += len(edit.replacement)
            pos = edit.range.end_char
        parts.append(self.original_text[pos:])

        return "".join(parts), stats


__all__ = ["TextRange", "Edit", "RangeEditor"]
