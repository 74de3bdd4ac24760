# src/main.py — v2
"""CLI entry point — analyze, status commands.

Usage:
    resumeai analyze <text-file> [--reference <jd-file>] [--user ID]
    resumeai status

Input files must already be plain text; document extraction happens
upstream.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from resumeai.version import __version__

if TYPE_CHECKING:
    from resumeai.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from resumeai.config.settings import load_settings

    settings = load_settings()
    _setup_logging(args.verbose, settings)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="resumeai",
        description=f"resumeai v{__version__} - AI resume analysis",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging (text format)",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_analyze = subparsers.add_parser("analyze", help="Analyze a resume text file")
    p_analyze.add_argument("file", type=Path, help="Path to resume text")
    p_analyze.add_argument(
        "-r", "--reference", type=Path, default=None,
        help="Job description text file to match against",
    )
    p_analyze.add_argument(
        "-u", "--user", default="cli",
        help="User id charged for the request (default: cli)",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    p_status = subparsers.add_parser("status", help="Show service configuration and state")
    p_status.set_defaults(func=_cmd_status)

    return parser


def _setup_logging(verbose: bool, settings: Settings) -> None:
    from resumeai.logging.logger import setup_logging

    if verbose:
        setup_logging(level="DEBUG", log_format="text")
    else:
        setup_logging(
            level=settings.log_level,
            log_format=settings.log_format,
            log_file=settings.log_file or None,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
        )


async def _cmd_analyze(args: argparse.Namespace, settings: Settings) -> int:
    from resumeai.api.facade import create_service, describe_error
    from resumeai.core.errors import AnalysisError
    from resumeai.dedup.memory_store import InMemoryRecordStore
    from resumeai.logging.context import set_request_context

    if not args.file.is_file():
        print(f"File not found: {args.file}", file=sys.stderr)
        return 1
    text = args.file.read_text(encoding="utf-8")

    reference = None
    if args.reference is not None:
        if not args.reference.is_file():
            print(f"File not found: {args.reference}", file=sys.stderr)
            return 1
        reference = args.reference.read_text(encoding="utf-8")

    service = create_service(settings, record_store=InMemoryRecordStore())
    set_request_context(args.user)

    try:
        if reference is None:
            result = await service.orchestrator.analyze_content(text, args.user)
        else:
            result = await service.orchestrator.analyze_content_against_reference(
                text, reference, args.user
            )
    except AnalysisError as exc:
        error = describe_error(exc)
        print(f"[{error.status_code} {error.error_code}] {error.message}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


async def _cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    from resumeai.api.facade import create_service
    from resumeai.dedup.memory_store import InMemoryRecordStore

    service = create_service(settings, record_store=InMemoryRecordStore())
    status = await service.orchestrator.status()
    print(status.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
