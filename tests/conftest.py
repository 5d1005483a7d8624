from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A factory fixture that lays out throwaway Rust crates on disk.
"""

import os
import sys
import textwrap
from pathlib import Path
from typing import Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
CrateFactory = Callable[[Dict[str, str]], Path]


@pytest.fixture
def make_crate(tmp_path: Path) -> CrateFactory:
    """
    Return a factory writing `{relative_path: source}` files under a crate root.

    Sources are dedented and stripped of leading newlines, so tests can use indented triple-quoted strings.

    Returns:
        CrateFactory: Callable returning the crate root directory.
    """
    root = tmp_path / "crate"

    def _make(files: Dict[str, str]) -> Path:
        for rel_path, source in files.items():
            target = root / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return root

    return _make


@pytest.fixture
def sample_crate(make_crate: CrateFactory) -> Path:
    """
    A small crate exercising both module layouts.

    Structure:
    src/
      lib.rs          (Point, mod shapes, mod config)
      shapes/mod.rs   (Shape enum, mod util)
      shapes/util.rs  (Scale)
      config.rs       (Config)
    docs/
      guide.md
    """
    return make_crate({
        "src/lib.rs": """
            pub mod shapes;
            mod config;

            /// A point in space.
            pub struct Point {
                /// X coordinate
                pub x: i32,
                pub y: i32,
            }
        """,
        "src/shapes/mod.rs": """
            pub mod util;

            /// A drawable shape.
            pub enum Shape {
                /// A circle.
                Circle { radius: f64 },
                Square(f64),
                Empty,
            }
        """,
        "src/shapes/util.rs": """
            pub struct Scale(pub f32);
        """,
        "src/config.rs": """
            /// Application settings.
            #[derive(Debug)]
            pub struct Config {
                /// Optional display name.
                pub name: Option<String>,
                pub tags: Vec<Box<str>>,
            }
        """,
        "docs/guide.md": """
            # Guide

            <% Point %>

            <% shapes::Shape header=false %>
        """,
    })
