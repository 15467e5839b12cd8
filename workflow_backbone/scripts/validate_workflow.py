"""Validate a workflow document and optionally write its normalized form.

Usage:
    validate-workflow workflow.json
    validate-workflow workflow.json --output normalized.json --indent 4

Exit codes: 0 valid, 1 validation failure, 2 unreadable or malformed document.
"""

import argparse
import json
import logging
import sys
from logging import getLogger
from pathlib import Path

from pydantic import ValidationError

from workflow_backbone import config
from workflow_backbone.errors import WorkflowValidationError
from workflow_backbone.models.workflow import Workflow

logger = getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_MALFORMED = 2


def load_workflow(path: Path) -> Workflow:
    """Read a wire-format document from disk and build the workflow."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return Workflow.from_json(data)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="validate-workflow",
        description="Validate a workflow document before it is sent for execution.",
    )
    parser.add_argument("path", type=Path, help="workflow JSON document")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="write the normalized document to this file",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=config.JSON_INDENT,
        help=f"indentation of the written document (default: {config.JSON_INDENT})",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        workflow = load_workflow(args.path)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {args.path}: {e}")
        return EXIT_MALFORMED
    except ValidationError as e:
        logger.error(f"Malformed workflow document {args.path}:\n{e}")
        return EXIT_MALFORMED

    try:
        workflow.validate()
    except WorkflowValidationError as e:
        logger.error(f"Invalid workflow [{e.kind.value}]: {e.message}")
        return EXIT_INVALID

    graph = workflow.graph
    logger.info(
        f"Workflow is valid: {len(graph.nodes)} nodes, {len(graph.edges)} edges, "
        f"entry points: {', '.join(graph.entry_points) or '(none)'}"
    )

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(
            workflow.to_json_string(indent=args.indent) + "\n",
            encoding="utf-8",
        )
        logger.info(f"Normalized workflow written to {args.output}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
