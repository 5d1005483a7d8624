from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates a documentation run:
1. Validates configuration and paths.
2. Locates the crate entry file.
3. Builds the module catalogue once.
4. Renders every template document against the shared catalogue.
5. Writes rendered documents to the output location.
"""

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from docweave.core.pipeline.stages.validator import validate_config
from docweave.core.rendering.base import RenderOptions
from docweave.core.rendering.markdown import MarkdownRenderer
from docweave.core.services.resolver import Resolver, find_entry_file
from docweave.core.template.replacer import Replacer
from docweave.domain.errors import ResolveError
from docweave.domain.pipeline_models import (
    PipelineResult,
    RenderedFile,
    create_error_result,
    create_success_result,
)
from docweave.infra.fs import (
    derive_output_file,
    iter_document_files,
    read_text_file,
    write_text_file,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedDocument:
    text: str
    resolved: int
    unresolved: int


def render_document(text: str, resolver: Resolver, options: RenderOptions) -> RenderedDocument:
    """
    Render one template document against a built catalogue.

    Each call uses its own renderer, so documents share nothing but the
    read-only resolver.
    """
    replacer = Replacer(MarkdownRenderer(options), resolver)
    replacer.replace(text)
    return RenderedDocument(
        text=replacer.finish(),
        resolved=replacer.stats.resolved,
        unresolved=replacer.stats.unresolved,
    )


def run_pipeline(config: Optional[Dict[str, Any]]) -> PipelineResult:
    """
    Execute a full documentation run.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        PipelineResult: Object containing status, counters and rendered files.
    """
    start = time.perf_counter()
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    project_path = cfg["project_path"]
    if not os.path.isdir(project_path):
        msg = f"Project path does not exist: {project_path}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    entry_file = find_entry_file(project_path)
    if entry_file is None:
        msg = f"Could not find a Rust crate entry file under {project_path}"
        logger.error(msg)
        return create_error_result(msg, cfg)

    docs_path = cfg["docs_path"]
    if not os.path.exists(docs_path):
        msg = f"Documentation path does not exist: {docs_path}"
        logger.error(msg)
        return create_error_result(msg, cfg, entry_file)

    # -------------------------------------------------------------------------
    # 2) Catalogue Construction
    # -------------------------------------------------------------------------
    resolver = Resolver(entry_file)
    try:
        resolver.resolve()
    except ResolveError as e:
        msg = f"Failed to resolve crate modules: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, entry_file, time.perf_counter() - start)

    # -------------------------------------------------------------------------
    # 3) Rendering & Deployment
    # -------------------------------------------------------------------------
    options = RenderOptions(simplified_types=cfg["simplified_types"])
    rendered: List[RenderedFile] = []

    try:
        for source, destination in _plan_documents(docs_path, cfg["output_path"]):
            rendered.append(_process_document(source, destination, resolver, options, cfg["dry_run"]))
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to render documentation: {e}"
        logger.error(msg)
        return create_error_result(msg, cfg, entry_file, time.perf_counter() - start)

    elapsed = time.perf_counter() - start
    logger.info(f"Done in {elapsed:.3f} seconds")

    return create_success_result(
        cfg,
        entry_file,
        modules=len(resolver.modules),
        declarations=resolver.declaration_count,
        rendered_files=rendered,
        elapsed_seconds=elapsed,
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _plan_documents(docs_path: str, output_path: str) -> List[Tuple[str, str]]:
    if os.path.isfile(docs_path):
        docs_root = os.path.dirname(docs_path)
        return [(docs_path, derive_output_file(docs_path, docs_root, output_path))]

    return [
        (source, derive_output_file(source, docs_path, output_path))
        for source in iter_document_files(docs_path)
    ]


def _process_document(
        source: str,
        destination: str,
        resolver: Resolver,
        options: RenderOptions,
        dry_run: bool,
) -> RenderedFile:
    logger.info(f"Rendering file: {destination}")

    document = render_document(read_text_file(source), resolver, options)

    if dry_run:
        logger.debug(f"Dry run: not writing {destination}")
    else:
        write_text_file(destination, document.text)

    return RenderedFile(
        source_path=source,
        output_path=destination,
        resolved=document.resolved,
        unresolved=document.unresolved,
    )
