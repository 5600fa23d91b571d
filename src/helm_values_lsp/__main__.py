from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ._logging import setup_colored_logging
from ._version import __version__
from .provider import default_helm_executable

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
helm-values-lsp: Language Server Protocol implementation for Helm values files

Completes keys in values.yaml files from the default values of a chart.
Annotate a top-level key with the chart it configures:

    jenkins: # @jenkins/jenkins

and the keys below it complete from `helm show values jenkins/jenkins`."""


def main():
    """Main entry point for the language server."""
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="helm-values-lsp",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--helm-path",
        type=str,
        default=default_helm_executable(),
        help="Path to the helm executable (default: $HELM_VALUES_LSP_HELM or %(default)s)",
    )
    parser.add_argument(
        "--fetch-timeout",
        type=float,
        default=None,
        help="Seconds to wait for `helm show values` before giving up (default: no limit)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    server_parser = subparsers.add_parser(
        "server",
        help="Start the LSP server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--tcp", action="store_true", help="Use TCP instead of stdio")
    server_parser.add_argument(
        "--port", type=int, default=8080, help="TCP port to listen on (default: %(default)s)"
    )
    server_parser.add_argument("--stdio", action="store_true", help="Use stdio (default)")

    complete_parser = subparsers.add_parser(
        "complete",
        help="Print the completions at a position of a values file",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    complete_parser.add_argument("file", type=str, help="Values file to complete in")
    complete_parser.add_argument("line", type=int, help="1-based line number")
    complete_parser.add_argument("column", type=int, help="1-based column of the cursor")

    args = parser.parse_args()

    if args.command is None:
        parser.error(
            "A subcommand is required. Use 'helm-values-lsp server' to start the LSP server.\n"
            "See 'helm-values-lsp --help' for available commands."
        )

    setup_colored_logging(level=getattr(logging, args.log_level))

    if args.command == "complete":
        sys.exit(_run_complete(args.file, args.line, args.column, args.helm_path, args.fetch_timeout))

    elif args.command == "server":
        if args.tcp and args.stdio:
            parser.error("--tcp and --stdio are mutually exclusive")

        # Import server only when actually needed
        from .server import create_server

        server = create_server(helm_path=args.helm_path, fetch_timeout=args.fetch_timeout)

        if args.tcp:
            logger.info(f"Starting Helm values LSP server ({__version__}) on TCP port {args.port}")
            server.start_tcp("localhost", args.port)
        else:
            logger.info(f"Starting Helm values LSP server ({__version__}) on stdio")
            server.start_io()


def _run_complete(
    file: str, line: int, column: int, helm_path: str, fetch_timeout: float | None
) -> int:
    """Print completions at a 1-based position; returns the exit code."""
    from .models import CompletionContext, NoticeLevel
    from .provider import HelmValuesProvider
    from .source import HelmValuesSource

    path = Path(file)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        return 1

    source = HelmValuesSource(provider=HelmValuesProvider(helm_path, timeout=fetch_timeout))
    if not source.is_applicable(path.name):
        print(f"Not a values file: {path}", file=sys.stderr)
        return 1

    context = CompletionContext(
        document_name=str(path),
        lines=content.split("\n"),
        line=line - 1,
        character=column - 1,
    )
    result = source.get_completions(context)

    yellow = "\033[93m"
    red = "\033[91m"
    reset = "\033[0m"
    for notice in result.notices:
        color = red if notice.level is NoticeLevel.ERROR else yellow
        print(f"{color}{notice.level.value.upper()}{reset}: {notice.message}", file=sys.stderr)

    for candidate in result.candidates:
        print(f"{candidate.label}\t{candidate.insert_text}")

    return 1 if result.has_errors else 0


if __name__ == "__main__":
    main()
