from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath


class FileCategory(str, Enum):
    SOURCE = "source"            # scripting-language module, spliced on export
    STRUCTURED = "structured"    # plain data, re-serialized on export
    UNSUPPORTED = "unsupported"


SOURCE_EXTENSIONS = {"ts", "tsx", "mts", "cts", "js", "jsx", "mjs", "cjs"}
STRUCTURED_EXTENSIONS = {"json", "json5"}


@dataclass(frozen=True)
class FileDescriptor:
    """
    Translation file as seen by the assembler: its name and category.
    """
    filename: str
    category: FileCategory

    @property
    def ext(self) -> str:
        """Lower-case extension without the dot ("" if none)."""
        return PurePosixPath(self.filename).suffix.lstrip(".").lower()

    @property
    def stem(self) -> str:
        """File name up to the first dot: 'about.ts' -> 'about'."""
        return PurePosixPath(self.filename).name.split(".")[0]

    @staticmethod
    def from_filename(filename: str) -> FileDescriptor:
        ext = PurePosixPath(filename).suffix.lstrip(".").lower()
        if ext in SOURCE_EXTENSIONS:
            category = FileCategory.SOURCE
        elif ext in STRUCTURED_EXTENSIONS:
            category = FileCategory.STRUCTURED
        else:
            category = FileCategory.UNSUPPORTED
        return FileDescriptor(filename, category)


__all__ = ["FileCategory", "FileDescriptor", "SOURCE_EXTENSIONS", "STRUCTURED_EXTENSIONS"]
