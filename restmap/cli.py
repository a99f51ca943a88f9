"""CLI entrypoints for restmap commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(parser: argparse.ArgumentParser, *, subcommand: bool = False) -> None:
    # Subcommands must not reset a -v given before the command name.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if subcommand else False,
        help="Log debug details to stderr.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Project root (defaults to the root detected from the current directory).",
    )


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="restmap",
        description="List the HTTP endpoints declared in a Spring MVC project.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser("scan", help="Print the route table of a project.")
    _add_verbose_option(scan_parser, subcommand=True)
    _add_path_argument(scan_parser)
    scan_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore cached results and rescan the project.",
    )
    scan_parser.add_argument(
        "--json",
        action="store_true",
        help="Print endpoints as a JSON array.",
    )
    scan_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Number of parallel extraction workers.",
    )

    info_parser = subparsers.add_parser("info", help="Show cached scan information.")
    _add_verbose_option(info_parser, subcommand=True)
    _add_path_argument(info_parser)

    clear_parser = subparsers.add_parser("clear", help="Drop cached scan results.")
    _add_verbose_option(clear_parser, subcommand=True)
    _add_path_argument(clear_parser)

    serve_parser = subparsers.add_parser("serve", help="Serve route tables over HTTP.")
    _add_verbose_option(serve_parser, subcommand=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for restmap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    as_json = bool(getattr(args, "json", False))
    configure_logging(verbose=bool(args.verbose), quiet=as_json, log_file=args.log_file)

    if args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
        return

    orchestrator = Orchestrator(workers=getattr(args, "workers", None))

    try:
        if args.command == "scan":
            outcome = orchestrator.run_scan(args.path, refresh=bool(args.refresh))
            if as_json:
                print(json.dumps([record.to_dict() for record in outcome.records], indent=2))
            elif not outcome.records:
                print("No endpoints found")
            else:
                for record in outcome.records:
                    print(record.display())
        elif args.command == "info":
            info = orchestrator.cache_info(args.path)
            print(
                "Cache: {state}, endpoints: {count}, root: {root}, age: {age}s".format(
                    state="present" if info["has_cache"] else "empty",
                    count=info["endpoint_count"],
                    root=info["root_dir"] or "-",
                    age=info["age_seconds"],
                )
            )
        elif args.command == "clear":
            removed = orchestrator.clear_cache(args.path)
            print("Cache cleared" if removed else "Nothing to clear")
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"restmap {args.command} failed: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
