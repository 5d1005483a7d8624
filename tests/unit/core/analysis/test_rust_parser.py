from __future__ import annotations

"""
Unit tests for the tree-sitter Rust declaration parser.

Verifies:
1. Struct, tuple struct and enum extraction with descriptions.
2. Type descriptors for path, generic and non-path types.
3. Submodule discovery, including inline module nesting.
4. Serde rename rules and syntax error reporting.
"""

import logging
from pathlib import Path

import pytest

from docweave.core.analysis.rust_parser import parse_module_file, parse_module_source
from docweave.domain.catalogue_models import EnumShape, StructShape, TypeInfo
from docweave.domain.errors import ModuleNotFound, ParseError
from docweave.domain.module_path import ModulePath

ROOT = ModulePath.root()


def _parse(source: str, path: ModulePath = ROOT):
    return parse_module_source(source, path)


# -----------------------------------------------------------------------------
# STRUCTS
# -----------------------------------------------------------------------------

def test_struct_with_documented_fields() -> None:
    parsed = _parse(
        "/// A point in space.\n"
        "#[derive(Debug)]\n"
        "pub struct Point {\n"
        "    /// X coordinate\n"
        "    pub x: i32,\n"
        "    y: i32,\n"
        "}\n"
    )

    assert len(parsed.declarations) == 1
    point = parsed.declarations[0]
    assert point.name == "Point"
    assert point.description == "A point in space."
    assert isinstance(point.shape, StructShape)

    x, y = point.shape.fields
    assert (x.name, x.description, x.ty) == ("x", "X coordinate", TypeInfo("i32"))
    assert (y.name, y.description) == ("y", "")


def test_tuple_struct_fields_are_positional() -> None:
    parsed = _parse("pub struct Pair(pub u8, /// second\n String);\n")

    fields = parsed.declarations[0].shape.fields
    assert [f.name for f in fields] == ["0", "1"]
    assert fields[0].ty == TypeInfo("u8")
    assert fields[1].description == "second"


def test_unit_struct_has_no_fields() -> None:
    parsed = _parse("struct Marker;\n")

    assert parsed.declarations[0].shape == StructShape()


def test_generic_and_scoped_types() -> None:
    parsed = _parse(
        "struct Holder {\n"
        "    a: Option<Vec<String>>,\n"
        "    b: std::path::PathBuf,\n"
        "    c: HashMap<String, Box<dyn Fn()>>,\n"
        "}\n"
    )

    a, b, c = parsed.declarations[0].shape.fields
    assert str(a.ty) == "Option<Vec<String>>"
    assert b.ty == TypeInfo("std::path::PathBuf")
    assert str(c.ty) == "HashMap<String, Box<Unknown>>"


def test_lifetimes_are_skipped_and_references_unknown() -> None:
    parsed = _parse("struct View<'a> { name: Cow<'a, str>, raw: &'a [u8] }\n")

    name, raw = parsed.declarations[0].shape.fields
    assert str(name.ty) == "Cow<str>"
    assert raw.ty == TypeInfo("Unknown")


# -----------------------------------------------------------------------------
# ENUMS
# -----------------------------------------------------------------------------

def test_enum_variants_of_every_form() -> None:
    parsed = _parse(
        "/// A drawable shape.\n"
        "pub enum Shape {\n"
        "    /// A circle.\n"
        "    Circle { radius: f64 },\n"
        "    Square(f64),\n"
        "    Empty,\n"
        "}\n"
    )

    shape = parsed.declarations[0]
    assert shape.description == "A drawable shape."
    assert isinstance(shape.shape, EnumShape)

    circle, square, empty = shape.shape.variants
    assert circle.name == "Circle"
    assert circle.description == "A circle."
    assert [(f.name, str(f.ty)) for f in circle.fields] == [("radius", "f64")]
    assert [(f.name, str(f.ty)) for f in square.fields] == [("0", "f64")]
    assert empty.fields == ()


def test_serde_rename_all_applies_to_variants_and_fields() -> None:
    parsed = _parse(
        '#[serde(rename_all = "snake_case")]\n'
        "enum Event { KeyPressed { key_code: u32 }, MouseMoved }\n"
        '#[serde(rename_all = "camelCase")]\n'
        "struct Settings { max_width: u32 }\n"
    )

    event, settings = parsed.declarations
    assert [v.name for v in event.shape.variants] == ["key_pressed", "mouse_moved"]
    assert event.shape.variants[0].fields[0].name == "key_code"
    assert settings.shape.fields[0].name == "maxWidth"


# -----------------------------------------------------------------------------
# MODULES
# -----------------------------------------------------------------------------

def test_external_submodules_are_collected() -> None:
    parsed = _parse("pub mod shapes;\nmod config;\n", ModulePath.parse("app"))

    assert parsed.submodules == (
        ModulePath.parse("app::shapes"),
        ModulePath.parse("app::config"),
    )


def test_inline_module_contents_are_merged() -> None:
    parsed = _parse(
        "mod inner {\n"
        "    pub mod deeper;\n"
        "    pub struct Hidden;\n"
        "}\n"
        "struct Visible;\n"
    )

    assert [d.name for d in parsed.declarations] == ["Hidden", "Visible"]
    assert parsed.submodules == (ModulePath.parse("inner::deeper"),)


def test_functions_and_impls_are_ignored() -> None:
    parsed = _parse(
        "fn helper() -> u8 { 1 }\n"
        "impl Foo { fn bar(&self) {} }\n"
        "struct Foo;\n"
    )

    assert [d.name for d in parsed.declarations] == ["Foo"]
    assert parsed.declarations[0].description == ""


def test_comment_before_function_does_not_leak() -> None:
    parsed = _parse(
        "/// Belongs to the function.\n"
        "fn helper() {}\n"
        "struct After;\n"
    )

    assert parsed.declarations[0].description == ""


# -----------------------------------------------------------------------------
# ERRORS
# -----------------------------------------------------------------------------

def test_syntax_error_reports_line() -> None:
    with pytest.raises(ParseError) as info:
        parse_module_source("struct Ok;\nstruct Broken {\n", ROOT, "broken.rs")

    assert info.value.path == "broken.rs"
    assert info.value.line is not None


def test_missing_file_raises_module_not_found(tmp_path: Path) -> None:
    missing = tmp_path / "nope.rs"

    with pytest.raises(ModuleNotFound):
        parse_module_file(str(missing), ModulePath.parse("nope"))


def test_parse_file_reads_utf8(tmp_path: Path) -> None:
    source = tmp_path / "lib.rs"
    source.write_text("/// Größe in Metern.\nstruct Size;\n", encoding="utf-8")

    parsed = parse_module_file(str(source), ROOT)

    assert parsed.declarations[0].description == "Größe in Metern."


def test_undecodable_file_raises_parse_error(tmp_path: Path) -> None:
    source = tmp_path / "latin.rs"
    source.write_bytes(b"struct A;\xff\n")

    with pytest.raises(ParseError) as info:
        parse_module_file(str(source), ModulePath.parse("latin"))

    assert not isinstance(info.value, ModuleNotFound)
    assert info.value.path == str(source)


def test_error_outside_declarations_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    source = (
        "fn broken() { let x = ; }\n"
        "\n"
        "/// Still documented.\n"
        "pub struct After;\n"
    )

    with caplog.at_level(logging.WARNING, logger="docweave.core.analysis.rust_parser"):
        parsed = parse_module_source(source, ROOT, "lenient.rs")

    assert [d.name for d in parsed.declarations] == ["After"]
    assert parsed.declarations[0].description == "Still documented."
    assert "Skipping unparsable code in 'lenient.rs' (line 1)" in caplog.text


def test_error_inside_struct_is_fatal() -> None:
    with pytest.raises(ParseError) as info:
        parse_module_source("struct Ok;\n\nstruct Bad { x: , }\n", ROOT, "bad.rs")

    assert info.value.line == 3
