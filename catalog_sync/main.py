"""Main entry point for catalog-sync."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import structlog

from catalog_sync import __version__
from catalog_sync.config import Settings, load_config
from catalog_sync.errors import CatalogSyncError, ConfigurationError, StorageError
from catalog_sync.sync import CatalogSync


def setup_logging(debug: bool = False) -> None:
    """Send structlog events to stderr, leaving stdout for the report."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if debug
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="catalog-sync",
        description="Fill missing keys of a translation catalog with machine translations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version", action="version", version=f"catalog-sync {__version__}"
    )
    parser.add_argument("--debug", action="store_true", default=None, help="Enable debug logging")
    parser.add_argument("--config-file", type=Path, help="Env file with settings (default: .env)")

    parser.add_argument("--source", dest="source_document", help="Source document name, e.g. en")
    parser.add_argument("--target", dest="target_document", help="Target document name, e.g. he")
    parser.add_argument("--source-lang", dest="source_language", help="Source language code")
    parser.add_argument("--target-lang", dest="target_language", help="Target language code")
    parser.add_argument("--documents-dir", type=Path, help="Directory holding the documents")
    parser.add_argument("--reports-dir", type=Path, help="Directory for report files")
    parser.add_argument(
        "--format", dest="document_format", choices=["json", "yaml"], help="Document file format"
    )
    parser.add_argument("--max-attempts", type=int, help="Translation attempts per string")

    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    overrides = vars(args).copy()
    config_file = overrides.pop("config_file", None)
    return load_config(config_file, **overrides)


async def run_sync(settings: Settings) -> int:
    """Run one sync and print the report. Returns the process exit code."""
    logger = structlog.get_logger(__name__)

    try:
        sync = CatalogSync.from_settings(settings)
        result = await sync.run()
    except ConfigurationError as e:
        logger.error("Configuration error", **e.to_dict())
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1
    except StorageError as e:
        logger.error("Storage error, sync aborted", **e.to_dict())
        print(f"Error updating translations: {e.message}", file=sys.stderr)
        return 1

    print(result.report_text)
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    """Console script entry point."""
    args = parse_args(argv)
    setup_logging(bool(args.debug))

    try:
        settings = build_settings(args)
    except CatalogSyncError as e:
        structlog.get_logger(__name__).error("Failed to load configuration", **e.to_dict())
        print(f"Configuration error: {e.message}", file=sys.stderr)
        return 1

    if settings.debug and not args.debug:
        setup_logging(True)

    return asyncio.run(run_sync(settings))


if __name__ == "__main__":
    sys.exit(run())
