from __future__ import annotations

"""
Template Replacer.

Cursor-based scanner over a document. Text outside `<% ... %>` directives
is copied through the renderer unchanged; each directive is resolved
against the catalogue and replaced by the rendered declaration. Directives
that do not resolve are kept verbatim so they remain visible in the output.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from docweave.core.rendering.base import Renderer
from docweave.core.services.resolver import Resolver
from docweave.domain.catalogue_models import Declaration
from docweave.domain.directive_options import DirectiveOptions
from docweave.domain.module_path import ModulePath

logger = logging.getLogger(__name__)

OPEN_MARKER = "<%"
CLOSE_MARKER = "%>"


@dataclass
class ReplaceStats:
    resolved: int = 0
    unresolved: int = 0


class Replacer:
    """
    Drives a renderer over one document.

    The scan is a single left-to-right pass; every step must consume at
    least one character.
    """

    def __init__(self, renderer: Renderer, resolver: Resolver) -> None:
        self._renderer = renderer
        self._resolver = resolver
        self.stats = ReplaceStats()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def replace(self, text: str) -> None:
        """
        Scan `text`, feeding literal runs and rendered directives to the renderer.

        Raises:
            RuntimeError: If a scan step fails to advance the cursor.
        """
        cursor = 0
        while cursor < len(text):
            consumed = self.step(text, cursor)
            if consumed <= 0:
                raise RuntimeError(f"Template scanner stalled at offset {cursor}")
            cursor += consumed

    def step(self, text: str, cursor: int) -> int:
        """
        Process one literal run or one directive starting at `cursor`.

        Returns:
            int: Number of characters consumed.
        """
        if text.startswith(OPEN_MARKER, cursor):
            return self._consume_directive(text, cursor)
        return self._consume_literal(text, cursor)

    def finish(self) -> str:
        return self._renderer.finish()

    # -------------------------------------------------------------------------
    # SCAN MODES
    # -------------------------------------------------------------------------

    def _consume_literal(self, text: str, cursor: int) -> int:
        end = text.find(OPEN_MARKER, cursor)
        if end == -1:
            end = len(text)

        self._renderer.render_text(text[cursor:end])
        return end - cursor

    def _consume_directive(self, text: str, cursor: int) -> int:
        body_start = cursor + len(OPEN_MARKER)
        close = text.find(CLOSE_MARKER, body_start)

        if close == -1:
            logger.warning(f"Unterminated directive at offset {cursor}; copied verbatim")
            self._renderer.render_text(text[cursor:])
            return len(text) - cursor

        end = close + len(CLOSE_MARKER)
        body = text[body_start:close]

        parts = body.split(None, 1)
        path = parts[0] if parts else ""
        raw_options = parts[1] if len(parts) > 1 else ""
        options = DirectiveOptions.parse_or_default(raw_options) if raw_options else DirectiveOptions()

        declaration = self._lookup(path)
        if declaration is None:
            logger.warning(f"Unresolved directive '{path}' kept verbatim")
            self.stats.unresolved += 1
            self._renderer.render_text(text[cursor:end])
        else:
            self.stats.resolved += 1
            self._renderer.render_element(declaration, options)

        return end - cursor

    def _lookup(self, path: str) -> Optional[Declaration]:
        if not path:
            return None
        try:
            module_path = ModulePath.parse(path)
        except ValueError:
            return None
        return self._resolver.resolve_absolute(module_path) or self._resolver.resolve_shorthand(path)
