from __future__ import annotations

"""
Domain Error Taxonomy.

Defines the exception hierarchy shared by the resolver, the source parser
and the template engine. Catalogue construction failures are fatal for a
run; directive option failures are always recovered locally.
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE
# -----------------------------------------------------------------------------

class DocweaveError(Exception):
    """Root of every error raised by the documentation pipeline."""


# -----------------------------------------------------------------------------
# CATALOGUE CONSTRUCTION (FATAL)
# -----------------------------------------------------------------------------

class ResolveError(DocweaveError):
    """
    Raised when the module catalogue cannot be built.

    Attributes:
        path: Filesystem path of the module file involved.
    """

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ModuleNotFound(ResolveError):
    """A declared submodule has no file under either layout convention."""


class ParseError(ResolveError):
    """
    A module file could not be read or is not valid declaration syntax.

    Attributes:
        line: 1-based line of the first syntax error, when known.
    """

    def __init__(self, message: str, path: str = "", line: Optional[int] = None) -> None:
        super().__init__(message, path)
        self.line = line


# -----------------------------------------------------------------------------
# DIRECTIVE CONFIGURATION (RECOVERABLE)
# -----------------------------------------------------------------------------

class OptionsParseError(DocweaveError, ValueError):
    """Inline directive options are malformed."""
