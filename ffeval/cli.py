# ffeval/cli.py
"""
Command-line entry point for ffeval.

Subcommands:
- eval:     evaluate one {flag, context} JSON document (file or stdin)
- vectors:  run every *.json test vector in a directory
- serve:    run the HTTP service
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO

from ffeval.app import run_server
from ffeval.config import configure_logging, load_settings
from ffeval.errors.handlers import BadRequest
from ffeval.services.document import evaluate_document

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    """Create the ``ffeval`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="ffeval",
        description="Deterministic feature flag evaluator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  echo '{"flag": {...}, "context": {...}}' | ffeval eval
  ffeval eval request.json
  ffeval vectors tests/vectors
  ffeval serve
        """,
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides LOG_LEVEL)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    eval_cmd = sub.add_parser("eval", help="Evaluate one JSON document")
    eval_cmd.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Input document (reads stdin when omitted)",
    )

    vectors_cmd = sub.add_parser("vectors", help="Run a directory of vectors")
    vectors_cmd.add_argument("directory", help="Directory holding *.json vectors")

    sub.add_parser("serve", help="Run the HTTP service")

    return parser


def _load_document(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise BadRequest(f"Invalid JSON: {exc}") from exc


def cmd_eval(file: Optional[str], stdin: TextIO, stdout: TextIO) -> int:
    """Read one document, write one result document.

    Returns:
        int: 0 on success, 1 on unreadable or invalid input.
    """
    try:
        if file is None:
            text = stdin.read()
        else:
            text = Path(file).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read input: %s", exc)
        return EXIT_FAILURE

    try:
        result = evaluate_document(_load_document(text))
    except BadRequest as exc:
        logger.error("Rejected input: %s", exc.detail)
        return EXIT_FAILURE

    stdout.write(json.dumps(result, separators=(",", ":")))
    stdout.write("\n")
    return EXIT_OK


def _check_expected(expected: Any, result: dict) -> Optional[str]:
    if not isinstance(expected, dict):
        return "expected must be an object"
    for field in ("enabled", "matchedRule"):
        if field in expected and expected[field] != result[field]:
            return f"{field}: expected {expected[field]!r}, got {result[field]!r}"
    return None


def cmd_vectors(directory: str, stdout: TextIO) -> int:
    """Evaluate every ``*.json`` vector in ``directory``.

    A vector is an evaluation document optionally carrying an ``expected``
    object with ``enabled`` and/or ``matchedRule``.

    Returns:
        int: 0 when every vector is valid and matches, otherwise 1.
    """
    root = Path(directory)
    if not root.is_dir():
        logger.error("Vector directory not found: %s", root)
        return EXIT_FAILURE

    vectors = sorted(root.glob("*.json"))
    if not vectors:
        logger.error("No vectors found in %s", root)
        return EXIT_FAILURE

    failures = 0
    for path in vectors:
        try:
            doc = _load_document(path.read_text(encoding="utf-8"))
            expected = doc.pop("expected", None) if isinstance(doc, dict) else None
            result = evaluate_document(doc)
        except BadRequest as exc:
            failures += 1
            stdout.write(f"ERROR {path.name}: {exc.detail}\n")
            continue
        except (OSError, UnicodeDecodeError) as exc:
            failures += 1
            stdout.write(f"ERROR {path.name}: {exc}\n")
            continue

        problem = None if expected is None else _check_expected(expected, result)
        if problem:
            failures += 1
            stdout.write(f"FAIL  {path.name}: {problem}\n")
        else:
            stdout.write(f"OK    {path.name}: {json.dumps(result)}\n")

    stdout.write(f"{len(vectors) - failures}/{len(vectors)} vectors passed\n")
    return EXIT_FAILURE if failures else EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI and return its exit code."""
    args = build_parser().parse_args(argv)
    settings = load_settings()

    if args.command == "serve":
        if args.log_level:
            settings = replace(settings, log_level=args.log_level.upper())
        run_server(settings)
        return EXIT_OK

    configure_logging(args.log_level or settings.log_level)

    if args.command == "eval":
        return cmd_eval(args.file, sys.stdin, sys.stdout)
    return cmd_vectors(args.directory, sys.stdout)


if __name__ == "__main__":
    sys.exit(main())
