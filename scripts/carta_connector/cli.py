"""CLI entry point: sync, list, scheduler, validate."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from scripts.carta_connector.config import load_config
from scripts.carta_connector.connector import CartaConnector
from scripts.carta_connector.errors import ConfigError, ConnectorError
from scripts.carta_connector.logging_config import configure_logging
from scripts.carta_connector.output import write_result
from scripts.carta_connector.sync import run_sync

logger = logging.getLogger("connector.cli")

RESOURCE_TYPE_CHOICES = ["issuer", "investor", "portfolio"]


def cmd_sync(args: argparse.Namespace) -> None:
    """Run a full listing pass and write the resource graph."""
    config = load_config()
    connector = CartaConnector.from_config(config.carta)
    result = run_sync(connector, args.resource_type or None)
    destination = args.output or config.output
    write_result(result, destination)
    logger.info("Sync complete: %s", result.counts())


def cmd_list(args: argparse.Namespace) -> None:
    """Print one page of a resource type as JSON."""
    config = load_config()
    connector = CartaConnector.from_config(config.carta)
    syncer = connector.syncer_for(args.resource_type)
    resources, next_token = syncer.list(None, args.page_token)
    print(json.dumps(
        {
            "resources": [r.to_dict() for r in resources],
            "next_page_token": next_token,
        },
        indent=2,
    ))


def cmd_scheduler(args: argparse.Namespace) -> None:
    """Start the APScheduler-based scheduling loop."""
    from scripts.carta_connector.scheduler import start_scheduler

    config = load_config()
    start_scheduler(config, CartaConnector.from_config(config.carta))


def cmd_validate(args: argparse.Namespace) -> None:
    config = load_config()
    connector = CartaConnector.from_config(config.carta)
    connector.validate()
    print(json.dumps(connector.metadata().to_dict(), indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carta-connector",
        description="Carta identity resource connector",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser("sync", help="Run one full sync pass")
    sync_parser.add_argument(
        "--resource-type", "-r",
        choices=RESOURCE_TYPE_CHOICES,
        action="append",
        help="Resource type to sync; repeatable (default: all)",
    )
    sync_parser.add_argument(
        "--output", "-o",
        help="Local path or s3://bucket/key (default: $SYNC_OUTPUT)",
    )
    sync_parser.set_defaults(func=cmd_sync)

    list_parser = subparsers.add_parser("list", help="Print one page of resources")
    list_parser.add_argument(
        "--resource-type", "-r",
        choices=RESOURCE_TYPE_CHOICES,
        required=True,
    )
    list_parser.add_argument(
        "--page-token", "-t",
        default="",
        help="Token returned by a previous list call",
    )
    list_parser.set_defaults(func=cmd_list)

    sched_parser = subparsers.add_parser("scheduler", help="Start scheduled sync loop")
    sched_parser.set_defaults(func=cmd_scheduler)

    validate_parser = subparsers.add_parser("validate", help="Check configuration")
    validate_parser.set_defaults(func=cmd_validate)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    configure_logging()

    args = build_parser().parse_args(argv)
    try:
        args.func(args)
    except (ConfigError, ConnectorError, ValueError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
