from __future__ import annotations

"""
Serde Rename Rules.

Applies `#[serde(rename_all = "...")]` case conventions to field and variant
names so the rendered documentation shows the serialized spelling.
"""

import re
from enum import Enum
from typing import Iterable, Optional

_RENAME_ALL_RX = re.compile(r"rename_all\s*(?:=\s*|\(\s*\w+\s*=\s*)\"([^\"]*)\"")


class RenameRule(Enum):
    NONE = "none"
    LOWER_CASE = "lowercase"
    UPPER_CASE = "UPPERCASE"
    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    SNAKE_CASE = "snake_case"
    SCREAMING_SNAKE_CASE = "SCREAMING_SNAKE_CASE"
    KEBAB_CASE = "kebab-case"
    SCREAMING_KEBAB_CASE = "SCREAMING-KEBAB-CASE"

    @classmethod
    def from_str(cls, value: str) -> RenameRule:
        """Unknown rule names fall back to NONE."""
        for rule in cls:
            if rule is not cls.NONE and rule.value == value:
                return rule
        return cls.NONE

    # -------------------------------------------------------------------------
    # VARIANTS (source spelling is PascalCase)
    # -------------------------------------------------------------------------

    def apply_to_variant(self, variant: str) -> str:
        if self in (RenameRule.NONE, RenameRule.PASCAL_CASE):
            return variant
        if self is RenameRule.LOWER_CASE:
            return variant.lower()
        if self is RenameRule.UPPER_CASE:
            return variant.upper()
        if self is RenameRule.CAMEL_CASE:
            return variant[:1].lower() + variant[1:]
        if self is RenameRule.SNAKE_CASE:
            snake = []
            for i, ch in enumerate(variant):
                if i > 0 and ch.isupper():
                    snake.append("_")
                snake.append(ch.lower())
            return "".join(snake)
        if self is RenameRule.SCREAMING_SNAKE_CASE:
            return RenameRule.SNAKE_CASE.apply_to_variant(variant).upper()
        if self is RenameRule.KEBAB_CASE:
            return RenameRule.SNAKE_CASE.apply_to_variant(variant).replace("_", "-")
        return RenameRule.SCREAMING_SNAKE_CASE.apply_to_variant(variant).replace("_", "-")

    # -------------------------------------------------------------------------
    # FIELDS (source spelling is snake_case)
    # -------------------------------------------------------------------------

    def apply_to_field(self, field: str) -> str:
        if self in (RenameRule.NONE, RenameRule.LOWER_CASE, RenameRule.SNAKE_CASE):
            return field
        if self in (RenameRule.UPPER_CASE, RenameRule.SCREAMING_SNAKE_CASE):
            return field.upper()
        if self is RenameRule.PASCAL_CASE:
            pascal = []
            capitalize = True
            for ch in field:
                if ch == "_":
                    capitalize = True
                elif capitalize:
                    pascal.append(ch.upper())
                    capitalize = False
                else:
                    pascal.append(ch)
            return "".join(pascal)
        if self is RenameRule.CAMEL_CASE:
            pascal = RenameRule.PASCAL_CASE.apply_to_field(field)
            return pascal[:1].lower() + pascal[1:]
        if self is RenameRule.KEBAB_CASE:
            return field.replace("_", "-")
        return field.upper().replace("_", "-")


def find_rename_rule(attributes: Iterable[str]) -> RenameRule:
    """
    Locate the first `serde` attribute carrying a `rename_all` setting.

    Args:
        attributes: Raw attribute source texts (`#[serde(...)]`).

    Returns:
        RenameRule: The declared rule, or NONE.
    """
    for text in attributes:
        inner = _attribute_body(text)
        if inner is None or not inner.startswith("serde"):
            continue
        match = _RENAME_ALL_RX.search(inner)
        return RenameRule.from_str(match.group(1)) if match else RenameRule.NONE
    return RenameRule.NONE


def _attribute_body(text: str) -> Optional[str]:
    text = text.strip()
    if not (text.startswith("#[") and text.endswith("]")):
        return None
    return text[2:-1].strip()
