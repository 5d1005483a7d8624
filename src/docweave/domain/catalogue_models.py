from __future__ import annotations

"""
Catalogue Domain Data Models.

Defines the immutable records produced by the source parser and stored by
the resolver: type descriptors, fields, variants, struct/enum shapes and
the per-module record that groups them.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

# Wrapper types that vanish from simplified type annotations
_TRANSPARENT_WRAPPERS = frozenset({"Box", "Arc", "Rc", "Cell", "RefCell", "RwLock", "Mutex"})

UNKNOWN_TYPE_NAME = "Unknown"


# -----------------------------------------------------------------------------
# TYPE DESCRIPTORS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeInfo:
    """
    Recursive description of a declared field type.

    Attributes:
        name: `::`-joined type path (e.g. `std::vec::Vec`).
        generics: Type arguments, in declaration order.
    """
    name: str = UNKNOWN_TYPE_NAME
    generics: Tuple[TypeInfo, ...] = ()

    def __str__(self) -> str:
        if not self.generics:
            return self.name
        return f"{self.name}<{', '.join(str(g) for g in self.generics)}>"

    def to_doc_string(self, simplify: bool) -> str:
        """
        Format the type for a documentation annotation.

        Args:
            simplify: Collapse smart-pointer/lock wrappers, render `Option<T>`
                      as `T?` and drop remaining generic arguments.

        Returns:
            str: Human-oriented type label.
        """
        if not simplify:
            return str(self)

        if self.name in _TRANSPARENT_WRAPPERS:
            return self._simplified_generics()
        if self.name == "Option":
            return f"{self._simplified_generics()}?"
        if self.name == "str":
            return "String"
        return self.name

    def _simplified_generics(self) -> str:
        return ", ".join(g.to_doc_string(True) for g in self.generics)


# -----------------------------------------------------------------------------
# SHAPE COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldInfo:
    """A named (or positional) field of a struct or enum variant."""
    name: str
    description: str
    ty: TypeInfo


@dataclass(frozen=True)
class VariantInfo:
    """An enum variant; unit-like variants carry no fields."""
    name: str
    description: str
    fields: Tuple[FieldInfo, ...] = ()


@dataclass(frozen=True)
class StructShape:
    fields: Tuple[FieldInfo, ...] = ()


@dataclass(frozen=True)
class EnumShape:
    variants: Tuple[VariantInfo, ...] = ()


Shape = Union[StructShape, EnumShape]


# -----------------------------------------------------------------------------
# CATALOGUE ENTRIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Declaration:
    """
    A documentable top-level item.

    Attributes:
        name: Item identifier.
        description: Extracted doc comment text (may be empty).
        shape: Exactly one of StructShape or EnumShape.
    """
    name: str
    description: str
    shape: Shape


@dataclass(frozen=True)
class ModuleRecord:
    """
    Declarations found directly in one module file.

    Attributes:
        name: File stem of the module source (`mod`, `lib`, `config`...).
        file_path: Path the declarations were parsed from.
        declarations: Items declared in the file, excluding child modules.
    """
    name: str
    file_path: str
    declarations: Tuple[Declaration, ...] = field(default_factory=tuple)

    def find(self, name: str) -> Union[Declaration, None]:
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None
