from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result structures passed from the rendering pipeline to the
interface layer, plus the factory functions that build them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderedFile:
    """
    One template document rendered during a run.

    Attributes:
        source_path: Template document that was read.
        output_path: Destination of the rendered document.
        resolved: Directives replaced by rendered declarations.
        unresolved: Directives kept verbatim.
    """
    source_path: str
    output_path: str
    resolved: int = 0
    unresolved: int = 0


@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result of a rendering run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        project_path: Crate root that was documented.
        entry_file: Crate entry file the catalogue was built from.
        docs_path: Template file or directory.
        output_path: Output file or directory.
        dry_run: Whether writing was skipped.
        modules: Number of modules in the catalogue.
        declarations: Number of declarations in the catalogue.
        rendered_files: Per-document render records.
        elapsed_seconds: Wall time of the run.
    """
    ok: bool
    error: str

    project_path: str
    entry_file: str
    docs_path: str
    output_path: str
    dry_run: bool = False

    modules: int = 0
    declarations: int = 0
    rendered_files: List[RenderedFile] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def resolved_directives(self) -> int:
        return sum(f.resolved for f in self.rendered_files)

    @property
    def unresolved_directives(self) -> int:
        return sum(f.unresolved for f in self.rendered_files)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        cfg: Dict[str, Any],
        entry_file: str = "",
        elapsed_seconds: float = 0.0,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        cfg: The configuration used during the failed run.
        entry_file: Entry file, if it had been located.
        elapsed_seconds: Time spent before failing.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        project_path=cfg.get("project_path", ""),
        entry_file=entry_file,
        docs_path=cfg.get("docs_path", ""),
        output_path=cfg.get("output_path", ""),
        dry_run=bool(cfg.get("dry_run", False)),
        elapsed_seconds=elapsed_seconds,
    )


def create_success_result(
        cfg: Dict[str, Any],
        entry_file: str,
        modules: int,
        declarations: int,
        rendered_files: List[RenderedFile],
        elapsed_seconds: float,
) -> PipelineResult:
    """Create a successful pipeline result instance."""
    return PipelineResult(
        ok=True,
        error="",
        project_path=cfg.get("project_path", ""),
        entry_file=entry_file,
        docs_path=cfg.get("docs_path", ""),
        output_path=cfg.get("output_path", ""),
        dry_run=bool(cfg.get("dry_run", False)),
        modules=modules,
        declarations=declarations,
        rendered_files=rendered_files,
        elapsed_seconds=elapsed_seconds,
    )
