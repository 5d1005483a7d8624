from __future__ import annotations

"""
Logical Module Paths.

A ModulePath is an immutable sequence of segment names locating a module
(or a declaration inside one) in the crate's module tree. It converts
to and from the `a::b::c` textual form and maps onto the two supported
on-disk layouts:

- directory-style: `<base>/a/b/mod.rs`
- file-style:      `<base>/a/b.rs`
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

PATH_SEPARATOR = "::"
INDEX_FILE_NAME = "mod.rs"
SOURCE_EXTENSION = ".rs"
RAW_IDENTIFIER_PREFIX = "r#"

_FORBIDDEN_SEGMENT_CHARS = ("/", "\\", PATH_SEPARATOR)


@dataclass(frozen=True)
class ModulePath:
    """
    Ordered segment names; the empty path is the crate root.

    Equality and hashing are structural, so instances are safe to use as
    catalogue keys.
    """
    segments: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for segment in self.segments:
            if any(ch in segment for ch in _FORBIDDEN_SEGMENT_CHARS):
                raise ValueError(f"Invalid module path segment: '{segment}'")

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    @classmethod
    def root(cls) -> ModulePath:
        return cls(())

    @classmethod
    def parse(cls, text: str) -> ModulePath:
        """
        Build a path from its `a::b::c` form.

        Blank input yields the root path.
        """
        text = text.strip()
        if not text:
            return cls.root()
        return cls(tuple(text.split(PATH_SEPARATOR)))

    # -------------------------------------------------------------------------
    # DERIVED PATHS
    # -------------------------------------------------------------------------

    def join(self, segment: str) -> ModulePath:
        return ModulePath(self.segments + (segment,))

    def parent(self) -> ModulePath:
        return ModulePath(self.segments[:-1])

    def element(self) -> Optional[str]:
        return self.segments[-1] if self.segments else None

    @property
    def is_root(self) -> bool:
        return not self.segments

    # -------------------------------------------------------------------------
    # FILESYSTEM MAPPING
    # -------------------------------------------------------------------------

    def to_file_path(self, base_dir: str, entry_file: str) -> str:
        """
        Compute the file expected to hold this module's declarations.

        The directory-style index file wins when it exists on disk, even
        if a same-named sibling file exists too.

        Args:
            base_dir: Directory holding the crate entry file.
            entry_file: File name of the crate entry (`lib.rs`, `main.rs`).

        Returns:
            str: Path of the module's source file (not checked for existence
                 in the file-style case).
        """
        if self.is_root:
            return os.path.join(base_dir, entry_file)

        module_dir = os.path.join(base_dir, *self.segments)
        index_file = os.path.join(module_dir, INDEX_FILE_NAME)
        if os.path.isfile(index_file):
            return index_file

        last = self.segments[-1]
        if last.startswith(RAW_IDENTIFIER_PREFIX):
            last = last[len(RAW_IDENTIFIER_PREFIX):]
        return os.path.join(os.path.dirname(module_dir), last + SOURCE_EXTENSION)

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)
