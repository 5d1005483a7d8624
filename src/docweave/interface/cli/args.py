from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into configuration overrides.
"""

import argparse
from typing import Any, Dict

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the docweave CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="docweave",
        description="Render Rust struct/enum documentation into template documents.",
    )

    # --- Path Management ---
    p.add_argument(
        "-p", "--project-path",
        dest="project_path",
        default=".",
        help="Path to the crate root. Defaults to the current directory.",
    )
    p.add_argument(
        "-d", "--docs-path",
        dest="docs_path",
        default=None,
        help="Template document or directory. Defaults to <project_path>/docs.",
    )
    p.add_argument(
        "-o", "--output-path",
        dest="output_path",
        default=None,
        help="Rendered document or directory. Defaults to <project_path>/target/docweave.",
    )

    # --- Rendering ---
    p.add_argument(
        "--full-types",
        action="store_true",
        help="Render field types verbatim instead of simplified.",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Render every document without writing output.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore the project's docweave.json.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only options the user actually set are returned, so project
    configuration values survive unless explicitly overridden.
    """
    overrides: Dict[str, Any] = {}

    if args.docs_path is not None:
        overrides["docs_path"] = args.docs_path
    if args.output_path is not None:
        overrides["output_path"] = args.output_path
    if args.full_types:
        overrides["simplified_types"] = False
    if args.dry_run:
        overrides["dry_run"] = True

    return overrides
