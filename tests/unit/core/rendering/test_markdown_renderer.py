from __future__ import annotations

"""
Unit tests for the Markdown renderer and the shared element walk.
"""

import re

import pytest

from docweave.core.rendering.base import RenderOptions
from docweave.core.rendering.markdown import MarkdownRenderer
from docweave.domain.catalogue_models import (
    Declaration,
    EnumShape,
    FieldInfo,
    StructShape,
    TypeInfo,
    VariantInfo,
)
from docweave.domain.directive_options import DirectiveOptions

POINT = Declaration(
    name="Point",
    description="A point in space.",
    shape=StructShape((
        FieldInfo("x", "X coordinate", TypeInfo("i32")),
        FieldInfo("y", "", TypeInfo("i32")),
    )),
)

SHAPE = Declaration(
    name="Shape",
    description="",
    shape=EnumShape((
        VariantInfo("Circle", "A circle.", (FieldInfo("radius", "", TypeInfo("f64")),)),
        VariantInfo("Empty", ""),
    )),
)


def _renderer(document: str = "", simplified: bool = True) -> MarkdownRenderer:
    return MarkdownRenderer(RenderOptions(simplified_types=simplified), document)


# -----------------------------------------------------------------------------
# PRIMITIVES
# -----------------------------------------------------------------------------

def test_heading_at_document_start_has_no_leading_blank() -> None:
    renderer = _renderer()
    renderer.render_heading("Title", 0)

    assert renderer.finish() == "# Title\n\n"


@pytest.mark.parametrize("prefix", ["text", "text\n", "text\n\n"])
def test_heading_always_follows_blank_line(prefix: str) -> None:
    renderer = _renderer(prefix)
    renderer.render_heading("Title", 1)

    assert renderer.finish() == "text\n\n## Title\n\n"


def test_consecutive_headings_are_separated() -> None:
    renderer = _renderer()
    renderer.render_heading("A", 1)
    renderer.render_heading("B", 2)

    assert renderer.finish() == "## A\n\n### B\n\n"


def test_description_heading_lines_nest_deeper() -> None:
    renderer = _renderer()
    renderer.render_description("Intro\n# Examples\nUse it.", 1)

    assert renderer.finish() == "Intro\n\n### Examples\n\nUse it.\n"


def test_type_annotation_block() -> None:
    renderer = _renderer()
    renderer.render_type("String?")

    assert renderer.finish() == "> Type: `String?`\n\n"


# -----------------------------------------------------------------------------
# ELEMENT WALK
# -----------------------------------------------------------------------------

def test_render_struct_with_default_options() -> None:
    renderer = _renderer()
    renderer.render_element(POINT, DirectiveOptions())

    assert renderer.finish() == (
        "## Point\n\n"
        "A point in space.\n\n"
        "### x\n\n"
        "> Type: `i32`\n\n"
        "X coordinate\n\n"
        "### y\n\n"
        "> Type: `i32`\n\n"
    )


def test_render_without_header_keeps_field_depth() -> None:
    renderer = _renderer()
    renderer.render_element(POINT, DirectiveOptions(header=False, depth=2))

    output = renderer.finish()
    assert "Point" not in output
    assert output.startswith("A point in space.\n\n#### x\n\n")


def test_render_enum_variants_and_fields() -> None:
    renderer = _renderer()
    renderer.render_element(SHAPE, DirectiveOptions(depth=0))

    assert renderer.finish() == (
        "# Shape\n\n"
        "## Circle\n\n"
        "A circle.\n\n"
        "### radius\n\n"
        "> Type: `f64`\n\n"
        "## Empty\n\n"
    )


def test_full_types_option() -> None:
    declaration = Declaration(
        "Config", "", StructShape((FieldInfo("name", "", TypeInfo("Option", (TypeInfo("String"),))),))
    )

    simplified = _renderer()
    simplified.render_element(declaration, DirectiveOptions())
    full = _renderer(simplified=False)
    full.render_element(declaration, DirectiveOptions())

    assert "> Type: `String?`" in simplified.finish()
    assert "> Type: `Option<String>`" in full.finish()


def test_no_heading_without_blank_line_before_it() -> None:
    renderer = _renderer("Leading paragraph")
    renderer.render_element(SHAPE, DirectiveOptions())
    renderer.render_element(POINT, DirectiveOptions())

    lines = renderer.finish().split("\n")
    for i, line in enumerate(lines):
        if re.match(r"^#+ ", line) and i > 0:
            assert lines[i - 1] == ""
