from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization, document discovery and output writing for the
rendering pipeline. Wraps 'os' so the pipeline deals only in plain
string paths.
"""

import logging
import os
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

DEFAULT_DOCS_SUBDIR = "docs"
DEFAULT_OUTPUT_SUBDIR = os.path.join("target", "docweave")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def is_file_like(path: str) -> bool:
    """An output path with an extension names a single file."""
    return bool(os.path.splitext(path)[1])


def derive_output_file(document_path: str, docs_root: str, output_path: str) -> str:
    """
    Compute where a rendered document is written.

    Args:
        document_path: Template document being rendered.
        docs_root: Directory the document was discovered under.
        output_path: Output file, or output directory mirroring `docs_root`.

    Returns:
        str: Destination file path.
    """
    if is_file_like(output_path):
        return output_path
    return os.path.join(output_path, os.path.relpath(document_path, docs_root))

# -----------------------------------------------------------------------------
# DISCOVERY & I/O API
# -----------------------------------------------------------------------------

def iter_document_files(docs_dir: str) -> Iterator[str]:
    """
    Yield every file below `docs_dir` in a deterministic (sorted) order.

    Unreadable directories are logged and skipped.
    """
    def _on_error(err: OSError) -> None:
        logger.error(f"Error walking directory: {err}")

    for root, dirs, files in os.walk(docs_dir, onerror=_on_error):
        dirs.sort()
        for file_name in sorted(files):
            yield os.path.join(root, file_name)


def read_text_file(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_file(path: str, content: str) -> None:
    """
    Write `content` to `path`, creating parent directories as needed.

    Raises:
        OSError: If the directory or file cannot be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
