"""
Command-line interface for the adaptive highlighting engine.

Usage:
    # Annotate files (or stdin when no input is given)
    adaptive-highlighter annotate prompt.txt
    echo "golden hour lighting" | adaptive-highlighter annotate

    # Feedback and corrections
    adaptive-highlighter click "golden hour" lighting
    adaptive-highlighter ignore "soft shadow" lighting
    adaptive-highlighter correct "golden hour" --from environment --to lighting

    # State management
    adaptive-highlighter stats
    adaptive-highlighter configure minConfidence=60 max_highlights=10
    adaptive-highlighter reset --yes

State is stored with the configured backend (STATE_BACKEND / STATE_DIR);
--backend and --state-dir override them for one invocation.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from adaptive_highlighter.config import settings
from adaptive_highlighter.logging_config import setup_logging
from adaptive_highlighter.pipeline import AnnotationEngine
from adaptive_highlighter.storage import create_store

logger = structlog.get_logger(__name__)


# ============================================================================
# HELPERS
# ============================================================================

def build_engine(backend: Optional[str] = None, state_dir: Optional[str] = None) -> AnnotationEngine:
    """
    Create an engine over the configured store, with optional overrides.
    """
    overrides = {}
    if backend:
        overrides["state_backend"] = backend
    if state_dir:
        overrides["state_dir"] = state_dir
    store = create_store(settings.model_copy(update=overrides))
    return AnnotationEngine(store=store)


def parse_assignments(pairs: List[str]) -> Dict[str, Any]:
    """
    Parse KEY=VALUE pairs; values are read as JSON when possible.

    Examples:
        >>> parse_assignments(["minConfidence=60", "max_highlights=null"])
        {'minConfidence': 60, 'max_highlights': None}

    Raises:
        ValueError: If a pair has no '='
    """
    options: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        try:
            options[key] = json.loads(raw)
        except ValueError:
            options[key] = raw
    return options


def read_inputs(paths: List[str], text: Optional[str]) -> List[Dict[str, str]]:
    """
    Collect the documents to annotate.

    Directories contribute their *.txt files; with no paths and no --text,
    stdin is read as one document.
    """
    if text is not None:
        return [{"source": "<text>", "text": text}]
    if not paths:
        return [{"source": "<stdin>", "text": sys.stdin.read()}]

    documents = []
    for raw_path in paths:
        path = Path(raw_path)
        files = sorted(path.glob("**/*.txt")) if path.is_dir() else [path]
        for file in files:
            documents.append({"source": str(file), "text": file.read_text(encoding="utf-8")})
    return documents


def emit(payload: Any, output_format: str = "json") -> None:
    if output_format == "jsonl" and isinstance(payload, list):
        for item in payload:
            print(json.dumps(item, ensure_ascii=False, default=str))
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2, default=str))


# ============================================================================
# COMMANDS
# ============================================================================

def cmd_annotate(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    options = parse_assignments(args.option or [])
    results = []
    for document in read_inputs(args.inputs, args.text):
        result = engine.process_detailed(document["text"], options or None)
        results.append(
            {
                "source": document["source"],
                "corrected_text": result.corrected_text,
                "highlights": [h.model_dump() for h in result.highlights],
            }
        )
    emit(results, args.format)
    return 0


def cmd_click(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    emit(engine.record_clicked(args.phrase, args.category).model_dump(mode="json"))
    return 0


def cmd_ignore(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    emit(engine.record_ignored(args.phrase, args.category).model_dump(mode="json"))
    return 0


def cmd_correct(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    correction = engine.apply_correction(args.phrase, args.from_category, args.to_category)
    emit(correction.model_dump(mode="json"))
    return 0


def cmd_stats(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    emit(engine.get_statistics())
    return 0


def cmd_configure(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    result = engine.configure(parse_assignments(args.assignments))
    emit(
        {
            "options": engine.get_configuration().model_dump(),
            "applied": result.applied,
            "rejected": result.rejected,
        }
    )
    return 0 if result.ok else 2


def cmd_reset(engine: AnnotationEngine, args: argparse.Namespace) -> int:
    if not args.yes:
        print("Refusing to reset learned state without --yes", file=sys.stderr)
        return 1
    engine.reset(include_configuration=args.include_configuration)
    print("State reset", file=sys.stderr)
    return 0


COMMANDS = {
    "annotate": cmd_annotate,
    "click": cmd_click,
    "ignore": cmd_ignore,
    "correct": cmd_correct,
    "stats": cmd_stats,
    "configure": cmd_configure,
    "reset": cmd_reset,
}


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="adaptive-highlighter",
        description="Adaptive Highlighter CLI - annotate text and manage learned state",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--backend",
        choices=["memory", "file", "sql"],
        default=None,
        help="State backend override (default: STATE_BACKEND)",
    )
    parser.add_argument(
        "--state-dir", default=None, help="State directory for the file backend"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    annotate = subparsers.add_parser("annotate", help="Highlight phrases in text")
    annotate.add_argument("inputs", nargs="*", help="Text files or directories (default: stdin)")
    annotate.add_argument("--text", "-t", default=None, help="Annotate this text instead of files")
    annotate.add_argument(
        "--option",
        "-o",
        action="append",
        metavar="KEY=VALUE",
        help="Per-call option override (repeatable), e.g. minConfidence=60",
    )
    annotate.add_argument(
        "--format", "-f", choices=["json", "jsonl"], default="json", help="Output format"
    )

    for name, verb in (("click", "clicked"), ("ignore", "ignored")):
        feedback = subparsers.add_parser(name, help=f"Record that a highlight was {verb}")
        feedback.add_argument("phrase")
        feedback.add_argument("category")

    correct = subparsers.add_parser("correct", help="Recategorize a phrase")
    correct.add_argument("phrase")
    correct.add_argument("--from", dest="from_category", default="", help="Current category")
    correct.add_argument("--to", dest="to_category", required=True, help="Correct category")

    subparsers.add_parser("stats", help="Show learned-state statistics")

    configure = subparsers.add_parser("configure", help="Update engine options")
    configure.add_argument("assignments", nargs="+", metavar="KEY=VALUE")

    reset = subparsers.add_parser("reset", help="Forget all learned state")
    reset.add_argument("--yes", action="store_true", help="Confirm the destructive reset")
    reset.add_argument(
        "--include-configuration", action="store_true", help="Also restore default options"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(
        log_level="DEBUG" if args.verbose else "WARNING", json_output=False, stream=sys.stderr
    )

    try:
        engine = build_engine(args.backend, args.state_dir)
        try:
            return COMMANDS[args.command](engine, args)
        finally:
            engine.close()
    except (OSError, ValueError) as e:
        logger.error("cli_failed", command=args.command, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
