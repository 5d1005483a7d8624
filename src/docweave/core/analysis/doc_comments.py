from __future__ import annotations

"""
Doc Comment Extraction.

Turns the outer documentation attached to an item into a single description
string. Sources, in order of appearance:

- `/// line` comments
- `/** block */` comments
- `#[doc = "text"]` attributes (plain or raw string literals)

Each resulting line loses exactly one leading space. Regular comments and
inner doc comments (`//!`, `/*!`) are not documentation for the item.
"""

from typing import Iterable, List, Optional

from tree_sitter import Node

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0", '"': '"', "'": "'", "\\": "\\"}
_CONTINUATION_WHITESPACE = " \t\n\r"


def extract_doc_comment(annotations: Iterable[Node]) -> str:
    """
    Build the description from the comment/attribute nodes preceding an item.

    Args:
        annotations: `line_comment`, `block_comment` and `attribute_item`
                     nodes, in source order.

    Returns:
        str: Newline-joined documentation text (empty if none).
    """
    payloads: List[str] = []
    for node in annotations:
        if node.type == "attribute_item":
            text = doc_attribute_value(node)
        else:
            text = doc_text(node.text.decode("utf-8"))
        if text is not None:
            payloads.append(text)
    return join_doc_lines(payloads)


def join_doc_lines(payloads: Iterable[str]) -> str:
    """Join raw documentation payloads, removing one leading space per line."""
    lines: List[str] = []
    for payload in payloads:
        for line in payload.split("\n"):
            lines.append(line[1:] if line.startswith(" ") else line)
    return "\n".join(lines)


def doc_text(fragment: str) -> Optional[str]:
    """Return the payload of a doc comment, or None for any other comment."""
    fragment = fragment.rstrip("\r\n")

    if fragment.startswith("///"):
        if fragment.startswith("////"):
            return None
        return fragment[3:]

    if fragment.startswith("/**") and fragment.endswith("*/"):
        if fragment.startswith("/***") or fragment == "/**/":
            return None
        return fragment[3:-2]

    return None


# -----------------------------------------------------------------------------
# DOC ATTRIBUTES
# -----------------------------------------------------------------------------

def doc_attribute_value(attribute_item: Node) -> Optional[str]:
    """
    Decode the value of a `#[doc = <literal>]` attribute.

    Returns:
        Optional[str]: The string value, or None for any other attribute
                       (including `#[doc(hidden)]` and non-literal values).
    """
    attribute = next((c for c in attribute_item.named_children if c.type == "attribute"), None)
    if attribute is None or not attribute.named_children:
        return None
    if attribute.named_children[0].text != b"doc":
        return None

    value = attribute.child_by_field_name("value")
    if value is None:
        return None
    if value.type == "raw_string_literal":
        content = next((c for c in value.children if c.type == "string_content"), None)
        return content.text.decode("utf-8") if content is not None else ""
    if value.type == "string_literal":
        return decode_string_literal(value)
    return None


def decode_string_literal(literal: Node) -> str:
    """
    Decode a (non-raw) string literal node into its value.

    Text between escape sequences is copied as-is; a backslash-newline
    continuation drops the newline and the whitespace that follows it.
    """
    raw = literal.text
    base = literal.start_byte
    # Content lies between the opening and closing quote tokens
    pos = literal.children[0].end_byte - base
    end = literal.children[-1].start_byte - base

    parts: List[str] = []
    skip_whitespace = False
    for child in literal.children:
        if child.type != "escape_sequence":
            continue
        start = child.start_byte - base
        parts.append(_gap(raw[pos:start], skip_whitespace))

        sequence = raw[start:child.end_byte - base].decode("utf-8")
        skip_whitespace = sequence[1:] in ("\n", "\r")
        if not skip_whitespace:
            parts.append(_decode_escape(sequence))
        pos = child.end_byte - base

    parts.append(_gap(raw[pos:end], skip_whitespace))
    return "".join(parts)


def _gap(chunk: bytes, skip_whitespace: bool) -> str:
    text = chunk.decode("utf-8")
    return text.lstrip(_CONTINUATION_WHITESPACE) if skip_whitespace else text


def _decode_escape(sequence: str) -> str:
    body = sequence[1:]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1].replace("_", ""), 16))
    if body.startswith("x") and len(body) == 3:
        return chr(int(body[1:], 16))
    return _ESCAPES.get(body, sequence)
