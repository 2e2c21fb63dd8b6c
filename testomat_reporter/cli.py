"""CLI entry point for managing Testomat.io test runs by hand."""

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence

from testomat_reporter.client import ReporterClient
from testomat_reporter.config import ReporterConfig
from testomat_reporter.controller import RunController
from testomat_reporter.errors import ReporterError
from testomat_reporter.transport import AiohttpTransport


async def create(config: ReporterConfig, title: str) -> int:
    """Create a run and print its uid."""
    log = logging.getLogger("testomat_reporter")

    async with AiohttpTransport.open() as transport:
        controller = RunController(ReporterClient(config=config, transport=transport))
        try:
            run = await controller.create_run(title)
        except ReporterError as exc:
            log.error("Cannot create test run: %s", exc)
            return 1

    print(run.uid)
    return 0


async def finish(config: ReporterConfig, uid: str, duration: float) -> int:
    """Finish a run that was left open."""
    log = logging.getLogger("testomat_reporter")

    if not config.has_api_key:
        log.error("Environment variable TESTOMATIO is not set")
        return 1

    async with AiohttpTransport.open() as transport:
        client = ReporterClient(config=config, transport=transport)
        try:
            await client.finish_run(uid, duration)
        except ReporterError as exc:
            log.error("Cannot finish test run %s: %s", uid, exc)
            return 1

    log.info("Test run %s finished. Total duration (s): %s", uid, duration)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Manage Testomat.io test runs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="Create a test run")
    create_parser.add_argument("--title", default="", help="Title of the test run")

    finish_parser = subparsers.add_parser("finish", help="Finish an open test run")
    finish_parser.add_argument("--run", required=True, help="UID of the test run")
    finish_parser.add_argument(
        "--duration",
        type=float,
        default=0.0,
        help="Total duration of the run in seconds",
    )
    return parser


def run(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    """Parse arguments, execute the command and return the exit code."""
    args = build_parser().parse_args(argv)
    config = ReporterConfig.from_env(os.environ if environ is None else environ)

    if args.command == "create":
        return asyncio.run(create(config, args.title))
    return asyncio.run(finish(config, args.run, args.duration))


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    sys.exit(run())


if __name__ == "__main__":  # pragma: no cover
    main()
