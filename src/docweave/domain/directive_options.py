from __future__ import annotations

"""
Directive Options.

Per-directive rendering configuration parsed from the inline block that
follows the referenced path, e.g. `<% config::Server header=false depth=2 %>`.
The block may also be wrapped in braces: `{ header = false depth = 2 }`.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict

from docweave.domain.errors import OptionsParseError

logger = logging.getLogger(__name__)

DEFAULT_HEADER = True
DEFAULT_DEPTH = 1

_PAIR_RX = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)\s*=\s*([^\s,{}=]+)\s*,?")
_DEPTH_RX = re.compile(r"^[0-9]+$")


@dataclass(frozen=True)
class DirectiveOptions:
    """
    Attributes:
        header: Whether to emit the heading of the referenced declaration.
        depth: Heading depth of the declaration itself; nested headings
               (fields, variants) start one level deeper.
    """
    header: bool = DEFAULT_HEADER
    depth: int = DEFAULT_DEPTH

    @classmethod
    def parse(cls, text: str) -> DirectiveOptions:
        """
        Parse an options block.

        Raises:
            OptionsParseError: On unknown or duplicate keys, invalid values
                               or text that is not a key/value pair.
        """
        body = text.strip()
        if body.startswith("{"):
            if not body.endswith("}"):
                raise OptionsParseError(f"Unclosed options block: '{text}'")
            body = body[1:-1]

        values: Dict[str, Any] = {}
        pos = 0
        while pos < len(body):
            if not body[pos:].strip():
                break
            match = _PAIR_RX.match(body, pos)
            if not match:
                raise OptionsParseError(f"Unexpected text in options: '{body[pos:].strip()}'")

            key, raw = match.group(1), match.group(2)
            if key in values:
                raise OptionsParseError(f"Duplicate option '{key}'")
            values[key] = _convert(key, raw)
            pos = match.end()

        return cls(**values)

    @classmethod
    def parse_or_default(cls, text: str) -> DirectiveOptions:
        """Parse the block, logging and falling back to defaults on failure."""
        try:
            return cls.parse(text)
        except OptionsParseError as e:
            logger.warning(f"Invalid directive options '{text.strip()}': {e}. Using defaults.")
            return cls()


def _convert(key: str, raw: str) -> Any:
    if key == "header":
        if raw == "true":
            return True
        if raw == "false":
            return False
        raise OptionsParseError(f"Option 'header' expects true or false, got '{raw}'")

    if key == "depth":
        if not _DEPTH_RX.match(raw):
            raise OptionsParseError(f"Option 'depth' expects a non-negative integer, got '{raw}'")
        return int(raw)

    raise OptionsParseError(f"Unknown option '{key}'")
