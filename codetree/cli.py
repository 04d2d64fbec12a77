"""CLI entrypoints for codetree commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator, ReportWriteError

_FORMAT_CHOICES = ("text", "txt", "json", "markdown", "md", "html")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=default,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=default,
        help="Only log warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codetree",
        description="Generate a project tree, code statistics and file dump report.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Analyze a directory and write the report into it.",
    )
    _add_logging_options(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory to analyze (defaults to current directory).",
    )
    scan_parser.add_argument(
        "-f",
        "--format",
        choices=_FORMAT_CHOICES,
        default=None,
        help="Output format (default: text, or the value from .codetree.yml).",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file name without extension (default: codetree).",
    )
    scan_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .codetree.yml file (defaults to the one in the scanned directory).",
    )
    scan_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not print file processing progress.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service exposing scans over a JSON API.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codetree commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "scan":
        orchestrator = Orchestrator()
        try:
            outcome = orchestrator.run(
                args.path,
                output_format=args.format,
                output_name=args.output,
                progress=False if args.no_progress else None,
                config_path=args.config,
            )
        except (FileNotFoundError, NotADirectoryError, ConfigError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        except ReportWriteError as exc:
            parser.exit(1, f"codetree scan failed: {exc}\n")
        report = outcome.report
        print(report.project_info)
        print(report.statistics.format_stats())
        print(f"Analysis complete! Report written to {_relativize(outcome.path)}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
