from __future__ import annotations

"""
Rust Declaration Parser.

Parses a single Rust source file with tree-sitter and partitions its items
into submodule references and documentable struct/enum declarations. Only
declarations are extracted; function bodies, impls and macros are ignored.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from docweave.core.analysis.doc_comments import extract_doc_comment
from docweave.core.analysis.rename_rule import RenameRule, find_rename_rule
from docweave.domain.catalogue_models import (
    UNKNOWN_TYPE_NAME,
    Declaration,
    EnumShape,
    FieldInfo,
    StructShape,
    TypeInfo,
    VariantInfo,
)
from docweave.domain.errors import ModuleNotFound, ParseError
from docweave.domain.module_path import ModulePath

logger = logging.getLogger(__name__)

RUST_LANGUAGE = Language(tree_sitter_rust.language())

_ANNOTATION_NODES = frozenset({"attribute_item", "line_comment", "block_comment"})
_PATH_TYPE_NODES = frozenset({"type_identifier", "primitive_type", "scoped_type_identifier"})
# Items (and their keywords) whose syntax errors would corrupt the catalogue
_DECLARATION_NODES = frozenset({"mod_item", "struct_item", "enum_item", "mod", "struct", "enum"})


# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParsedModule:
    """
    Items found in one file.

    Attributes:
        submodules: Paths of external (`mod x;`) submodules, including those
                    declared inside inline modules.
        declarations: Structs and enums, including those of inline modules.
    """
    submodules: Tuple[ModulePath, ...]
    declarations: Tuple[Declaration, ...]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_module_file(file_path: str, module_path: ModulePath) -> ParsedModule:
    """
    Read and parse the source file of a module.

    Args:
        file_path: Location of the `.rs` file.
        module_path: Logical path of the module the file defines.

    Returns:
        ParsedModule: Submodule references and declarations.

    Raises:
        ModuleNotFound: If the file does not exist.
        ParseError: If the file cannot be read or decoded, or has syntax errors.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            source = f.read()
    except FileNotFoundError as e:
        raise ModuleNotFound(
            f"Module '{str(module_path) or 'crate'}' not found at '{file_path}'", file_path
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not read '{file_path}': {e}", file_path) from e

    return parse_module_source(source, module_path, file_path)


def parse_module_source(source: str, module_path: ModulePath, file_path: str = "<memory>") -> ParsedModule:
    """
    Parse module source text.

    Raises:
        ParseError: If a syntax error affects a module, struct or enum item.
    """
    parser = Parser(RUST_LANGUAGE)
    tree = parser.parse(source.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        error_node = _declaration_error(root)
        if error_node is not None:
            line = error_node.start_point[0] + 1
            raise ParseError(f"Invalid Rust syntax in '{file_path}' (line {line})", file_path, line)

        # Syntax the grammar does not know, away from any documentable item
        for node in _error_nodes(root):
            logger.warning(
                f"Skipping unparsable code in '{file_path}' (line {node.start_point[0] + 1})"
            )

    submodules: List[ModulePath] = []
    declarations: List[Declaration] = []
    _collect_items(root, module_path, submodules, declarations)

    logger.debug(
        f"Parsed '{file_path}': {len(declarations)} declarations, {len(submodules)} submodules"
    )
    return ParsedModule(tuple(submodules), tuple(declarations))


# -----------------------------------------------------------------------------
# ITEM TRAVERSAL
# -----------------------------------------------------------------------------

def _collect_items(
        container: Node,
        module_path: ModulePath,
        submodules: List[ModulePath],
        declarations: List[Declaration],
) -> None:
    for node, annotations in _annotated_children(container):
        if node.type == "mod_item":
            name = _text(node.child_by_field_name("name"))
            body = node.child_by_field_name("body")
            if body is None:
                submodules.append(module_path.join(name))
            else:
                _collect_items(body, module_path.join(name), submodules, declarations)

        elif node.type == "struct_item":
            declarations.append(_parse_struct(node, annotations))

        elif node.type == "enum_item":
            declarations.append(_parse_enum(node, annotations))


def _annotated_children(container: Node) -> Iterator[Tuple[Node, List[Node]]]:
    """Yield each child with the attribute/comment nodes immediately preceding it."""
    pending: List[Node] = []
    for child in container.children:
        if child.type in _ANNOTATION_NODES:
            pending.append(child)
            continue
        if not child.is_named or child.type == "visibility_modifier":
            continue
        yield child, pending
        pending = []


# -----------------------------------------------------------------------------
# DECLARATIONS
# -----------------------------------------------------------------------------

def _parse_struct(node: Node, annotations: List[Node]) -> Declaration:
    rule = find_rename_rule(_attribute_texts(annotations))
    body = node.child_by_field_name("body")
    fields = _parse_fields(body, rule) if body is not None else ()
    return Declaration(
        name=_text(node.child_by_field_name("name")),
        description=extract_doc_comment(annotations),
        shape=StructShape(fields),
    )


def _parse_enum(node: Node, annotations: List[Node]) -> Declaration:
    rule = find_rename_rule(_attribute_texts(annotations))
    variants: List[VariantInfo] = []

    body = node.child_by_field_name("body")
    if body is not None:
        for child, variant_annotations in _annotated_children(body):
            if child.type != "enum_variant":
                continue
            fields_node = child.child_by_field_name("body")
            variants.append(VariantInfo(
                name=rule.apply_to_variant(_text(child.child_by_field_name("name"))),
                description=extract_doc_comment(variant_annotations),
                fields=_parse_fields(fields_node, rule) if fields_node is not None else (),
            ))

    return Declaration(
        name=_text(node.child_by_field_name("name")),
        description=extract_doc_comment(annotations),
        shape=EnumShape(tuple(variants)),
    )


def _parse_fields(body: Node, rule: RenameRule) -> Tuple[FieldInfo, ...]:
    fields: List[FieldInfo] = []

    if body.type == "field_declaration_list":
        for child, annotations in _annotated_children(body):
            if child.type != "field_declaration":
                continue
            fields.append(FieldInfo(
                name=rule.apply_to_field(_text(child.child_by_field_name("name"))),
                description=extract_doc_comment(annotations),
                ty=parse_type(child.child_by_field_name("type")),
            ))

    # Tuple fields are positional: `(pub A, B)`
    elif body.type == "ordered_field_declaration_list":
        for child, annotations in _annotated_children(body):
            if not _is_type_node(child):
                continue
            fields.append(FieldInfo(
                name=str(len(fields)),
                description=extract_doc_comment(annotations),
                ty=parse_type(child),
            ))

    return tuple(fields)


# -----------------------------------------------------------------------------
# TYPES
# -----------------------------------------------------------------------------

def parse_type(node: Optional[Node]) -> TypeInfo:
    """
    Convert a type node into a descriptor.

    Path types keep their full `::` path and type arguments; any other type
    form is reported as `Unknown`.
    """
    if node is None:
        return TypeInfo()

    if node.type in _PATH_TYPE_NODES:
        return TypeInfo(_text(node))

    if node.type == "generic_type":
        name = _text(node.child_by_field_name("type"))
        arguments = node.child_by_field_name("type_arguments")
        generics: List[TypeInfo] = []
        if arguments is not None:
            for arg in arguments.named_children:
                if _is_type_node(arg):
                    generics.append(parse_type(arg))
        return TypeInfo(name, tuple(generics))

    return TypeInfo(UNKNOWN_TYPE_NAME)


def _is_type_node(node: Node) -> bool:
    return node.type.endswith("_type") or node.type in _PATH_TYPE_NODES


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8")


def _attribute_texts(annotations: List[Node]) -> List[str]:
    return [_text(node) for node in annotations if node.type == "attribute_item"]


def _error_nodes(node: Node) -> Iterator[Node]:
    """Yield the outermost ERROR and MISSING nodes in document order."""
    if node.type == "ERROR" or node.is_missing:
        yield node
        return
    for child in node.children:
        if child.has_error or child.is_missing:
            yield from _error_nodes(child)


def _declaration_error(root: Node) -> Optional[Node]:
    """
    Return the first syntax error that sits inside, or swallows, a module,
    struct or enum item. Errors elsewhere (function bodies, newer item
    syntax the grammar lacks) leave the catalogue intact.
    """
    for node in _error_nodes(root):
        if _inside_declaration(node) or _contains_declaration(node):
            return node
    return None


def _inside_declaration(node: Node) -> bool:
    parent = node.parent
    while parent is not None:
        if parent.type in _DECLARATION_NODES:
            return True
        parent = parent.parent
    return False


def _contains_declaration(node: Node) -> bool:
    stack = list(node.children)
    while stack:
        current = stack.pop()
        if current.type in _DECLARATION_NODES:
            return True
        stack.extend(current.children)
    return False
