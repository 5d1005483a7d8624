from __future__ import annotations

"""
Module Resolution Service.

Builds the crate catalogue by walking the module tree from the entry file,
then answers absolute (`a::b::Item`) and shorthand (`Item`) lookups against
it. The catalogue is built once and is read-only afterwards.
"""

import logging
import os
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from docweave.core.analysis.rust_parser import parse_module_file
from docweave.domain.catalogue_models import Declaration, ModuleRecord
from docweave.domain.module_path import PATH_SEPARATOR, ModulePath

logger = logging.getLogger(__name__)

# Conventional crate entry points, by priority
ENTRY_FILE_CANDIDATES = (
    os.path.join("src", "main.rs"),
    os.path.join("src", "lib.rs"),
    "main.rs",
    "lib.rs",
)


# -----------------------------------------------------------------------------
# RESOLVER
# -----------------------------------------------------------------------------

class Resolver:
    """
    Catalogue of every module reachable from a crate entry file.

    Attributes:
        entry_file: File name of the entry point (`lib.rs` / `main.rs`).
        entry_dir: Directory containing the entry point.
    """

    def __init__(self, entry_path: str) -> None:
        self.entry_dir = os.path.dirname(os.path.abspath(entry_path))
        self.entry_file = os.path.basename(entry_path)
        self._modules: Mapping[ModulePath, ModuleRecord] = MappingProxyType({})

    @property
    def modules(self) -> Mapping[ModulePath, ModuleRecord]:
        """Read-only view of the catalogue."""
        return self._modules

    @property
    def declaration_count(self) -> int:
        return sum(len(record.declarations) for record in self._modules.values())

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    def resolve(self) -> None:
        """
        Walk the whole module tree depth-first and build the catalogue.

        The catalogue is only published once the walk completes, so a
        failure never leaves a partial catalogue behind.

        Raises:
            ModuleNotFound: A declared module has no source file.
            ParseError: A module file is unreadable or syntactically invalid.
        """
        catalogue: Dict[ModulePath, ModuleRecord] = {}
        self._resolve_module(ModulePath.root(), catalogue)
        self._modules = MappingProxyType(catalogue)

        logger.info(
            f"Resolved {len(catalogue)} modules with {self.declaration_count} declarations"
        )

    def _resolve_module(self, module_path: ModulePath, catalogue: Dict[ModulePath, ModuleRecord]) -> None:
        file_path = module_path.to_file_path(self.entry_dir, self.entry_file)
        logger.debug(f"Resolving module '{str(module_path) or 'crate'}' from {file_path}")

        parsed = parse_module_file(file_path, module_path)

        catalogue[module_path] = ModuleRecord(
            name=os.path.splitext(os.path.basename(file_path))[0],
            file_path=file_path,
            declarations=parsed.declarations,
        )

        for submodule in parsed.submodules:
            # Diamond/cycle guard: each module is parsed at most once
            if submodule not in catalogue:
                self._resolve_module(submodule, catalogue)

    # -------------------------------------------------------------------------
    # LOOKUP
    # -------------------------------------------------------------------------

    def resolve_absolute(self, path: ModulePath) -> Optional[Declaration]:
        """
        Find the declaration named by the last segment of `path` inside the
        module named by the preceding segments.

        Returns:
            Optional[Declaration]: The match, or None if the module was never
                                   visited or declares no such item.
        """
        element = path.element()
        if element is None:
            return None

        record = self._modules.get(path.parent())
        if record is None:
            return None
        return record.find(element)

    def resolve_shorthand(self, name: str) -> Optional[Declaration]:
        """
        Find a declaration by bare name anywhere in the catalogue.

        Only a globally unique name resolves; zero or several candidate
        modules both yield None.
        """
        if not name or PATH_SEPARATOR in name:
            return None

        matches: List[Declaration] = []
        for module_path in self._modules:
            found = self.resolve_absolute(module_path.join(name))
            if found is not None:
                matches.append(found)

        if len(matches) == 1:
            return matches[0]
        if matches:
            logger.debug(f"Shorthand '{name}' is ambiguous across {len(matches)} modules")
        return None


# -----------------------------------------------------------------------------
# ENTRY DISCOVERY
# -----------------------------------------------------------------------------

def find_entry_file(project_path: str) -> Optional[str]:
    """
    Locate the crate entry file under a project directory.

    Args:
        project_path: Crate root (the directory holding `Cargo.toml`).

    Returns:
        Optional[str]: Absolute path of the first existing candidate, or None.
    """
    for candidate in ENTRY_FILE_CANDIDATES:
        path = os.path.join(project_path, candidate)
        if os.path.isfile(path):
            return os.path.abspath(path)
    return None
