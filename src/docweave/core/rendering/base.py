from __future__ import annotations

"""
Renderer Abstraction.

A backend implements four emission primitives (heading, description, type
annotation, raw text). The element tree-walk is defined once here on top of
those primitives and shared by every backend.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from docweave.domain.catalogue_models import (
    Declaration,
    EnumShape,
    FieldInfo,
    StructShape,
)
from docweave.domain.directive_options import DirectiveOptions


@dataclass(frozen=True)
class RenderOptions:
    """
    Run-wide rendering settings.

    Attributes:
        simplified_types: Render type annotations in simplified form
                          (`Option<T>` as `T?`, wrappers collapsed).
    """
    simplified_types: bool = True


class Renderer(ABC):
    """Accumulates one output document."""

    def __init__(self, options: RenderOptions) -> None:
        self.options = options

    # -------------------------------------------------------------------------
    # PRIMITIVES
    # -------------------------------------------------------------------------

    @abstractmethod
    def render_heading(self, text: str, depth: int) -> None:
        ...

    @abstractmethod
    def render_description(self, text: str, depth: int) -> None:
        """Emit free text; embedded heading markers nest at `depth + 1`."""

    @abstractmethod
    def render_type(self, text: str) -> None:
        ...

    @abstractmethod
    def render_text(self, text: str) -> None:
        ...

    @abstractmethod
    def finish(self) -> str:
        """Return the accumulated document."""

    # -------------------------------------------------------------------------
    # TREE WALK
    # -------------------------------------------------------------------------

    def render_element(self, declaration: Declaration, options: DirectiveOptions) -> None:
        depth = options.depth

        if options.header:
            self.render_heading(declaration.name, depth)

        self.render_description(declaration.description, depth)

        shape = declaration.shape
        if isinstance(shape, StructShape):
            self._render_struct(shape, depth + 1)
        elif isinstance(shape, EnumShape):
            self._render_enum(shape, depth + 1)

    def _render_struct(self, shape: StructShape, depth: int) -> None:
        for field in shape.fields:
            self._render_field(field, depth)

    def _render_enum(self, shape: EnumShape, depth: int) -> None:
        for variant in shape.variants:
            self.render_heading(variant.name, depth)
            self.render_description(variant.description, depth)

            for field in variant.fields:
                self._render_field(field, depth + 1)

    def _render_field(self, field: FieldInfo, depth: int) -> None:
        self.render_heading(field.name, depth)
        self.render_type(field.ty.to_doc_string(self.options.simplified_types))
        self.render_description(field.description, depth)
