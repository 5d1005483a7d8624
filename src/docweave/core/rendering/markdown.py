from __future__ import annotations

"""
Markdown Renderer.

Headings are `#` runs of length depth + 1, type annotations are block
quotes, and every heading is separated from preceding content by a blank
line.
"""

from docweave.core.rendering.base import RenderOptions, Renderer

HEADING_MARKER = "#"
_DESCRIPTION_HEADING_PREFIX = "# "


class MarkdownRenderer(Renderer):

    def __init__(self, options: RenderOptions, document: str = "") -> None:
        super().__init__(options)
        self._document = document

    def render_heading(self, text: str, depth: int) -> None:
        # Look back so a heading always follows a blank line
        if self._document and not self._document.endswith("\n\n"):
            self._document += "\n" if self._document.endswith("\n") else "\n\n"

        self._document += f"{HEADING_MARKER * (depth + 1)} {text}\n\n"

    def render_description(self, text: str, depth: int) -> None:
        for line in text.splitlines():
            if line.startswith(_DESCRIPTION_HEADING_PREFIX):
                self.render_heading(line[len(_DESCRIPTION_HEADING_PREFIX):], depth + 1)
            else:
                self._document += f"{line}\n"

    def render_type(self, text: str) -> None:
        self._document += f"> Type: `{text}`\n\n"

    def render_text(self, text: str) -> None:
        self._document += text

    def finish(self) -> str:
        return self._document
