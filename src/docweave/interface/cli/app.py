from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration layering
(defaults, project file, CLI overrides), pre-flight checks, pipeline
execution and result reporting.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from docweave.core.pipeline.engine import run_pipeline
from docweave.core.pipeline.stages.validator import validate_config
from docweave.core.services.resolver import find_entry_file
from docweave.domain.config import get_default_config, load_config
from docweave.domain.pipeline_models import PipelineResult
from docweave.infra.fs import normalize_path
from docweave.infra.logging import LoggingConfig, configure_logging, get_logger
from docweave.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_ENTRY = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console stderr, optional file)
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy
    project_path = normalize_path(args.project_path, os.getcwd())
    if args.use_defaults:
        base_conf = get_default_config()
        base_conf["project_path"] = project_path
    else:
        base_conf = load_config(project_path)

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    # 4. Pre-flight verification
    if not os.path.isdir(clean_conf["project_path"]):
        print("ERROR: Project path does not exist", file=sys.stderr)
        return EXIT_FAILURE

    if find_entry_file(clean_conf["project_path"]) is None:
        print("ERROR: Could not find Rust project at path", file=sys.stderr)
        return EXIT_NO_ENTRY

    if not os.path.exists(clean_conf["docs_path"]):
        print("ERROR: Documentation path does not exist", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED

    # 6. Output rendering phase
    if args.json_output:
        payload = asdict(result)
        payload["resolved_directives"] = result.resolved_directives
        payload["unresolved_directives"] = result.unresolved_directives
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return EXIT_OK if result.ok else EXIT_FAILURE

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    print(f"Catalogue: {result.modules} modules, {result.declarations} declarations")
    verb = "Would render" if result.dry_run else "Rendered"
    print(f"{verb} {len(result.rendered_files)} document(s):")
    for f in result.rendered_files:
        print(f"  - {f.output_path}")

    if result.unresolved_directives:
        print(f"Unresolved directives kept verbatim: {result.unresolved_directives}")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
