"""CLI entrypoints for kado-ai commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import default_settings_path, load_backend_config, load_project_config
from .errors import ConfigError, KadoError
from .llm.client import AIClient
from .logging import configure_logging, get_logger
from .pipeline import Pipeline
from .redaction import Redactor
from .scanner import extract_file_content

logger = get_logger("cli")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kado-ai",
        description="Ask an AI backend for recommendations on redacted infrastructure code.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write timestamped logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Scan, redact and send an IaC directory for analysis.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the IaC root containing terraform/ and ansible/ (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file with AI_API_KEY, AI_MODEL and AI_CLIENT (defaults to ~/.kdconfig).",
    )
    analyze_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Write ai_input.txt for review without contacting the AI backend.",
    )

    redact_parser = subparsers.add_parser(
        "redact",
        help="Print the redacted contents of a single file.",
    )
    _add_verbose_option(redact_parser, suppress_default=True)
    redact_parser.add_argument("file", type=Path, help="File to redact.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for kado-ai commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        log_file=args.log_file,
        scrub=Redactor().redact,
    )

    if args.command == "analyze":
        _run_analyze(parser, args)
    elif args.command == "redact":
        _run_redact(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analyze(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    iac_path = Path(args.path).expanduser()
    try:
        project = load_project_config(iac_path)
        if args.dry_run:
            pipeline = Pipeline(iac_path, project_config=project)
            _, prompt_path = pipeline.prepare()
            print(f"AI input has been saved to {_relativize(prompt_path)} (dry-run)")
            return

        settings_path = args.config or default_settings_path()
        client = AIClient(load_backend_config(settings_path))
        outcome = Pipeline(iac_path, client, project_config=project).run()
    except ConfigError as exc:
        parser.exit(1, f"kado-ai: failed to load config: {exc}\n")
    except KadoError as exc:
        parser.exit(1, f"kado-ai analyze failed: {exc}\nRun with --verbose for more details.\n")

    if outcome.cancelled:
        parser.exit(1, "Operation cancelled by user\n")
    print(outcome.recommendation)


def _run_redact(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        content = extract_file_content(args.file)
    except OSError as exc:
        parser.exit(1, f"kado-ai: cannot read {args.file}: {exc}\n")
    try:
        project = load_project_config(Path.cwd())
    except ConfigError as exc:
        parser.exit(1, f"kado-ai: failed to load config: {exc}\n")
    report = Redactor.from_patterns(project.extra_patterns).redact_with_report(content)
    logger.info("Redacted %d sensitive values in %s", report.total, args.file)
    sys.stdout.write(report.text)


def _relativize(path: Path | None) -> str:
    if path is None:
        return "(not saved)"
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
