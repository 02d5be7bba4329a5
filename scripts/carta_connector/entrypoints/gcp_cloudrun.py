"""GCP Cloud Run Job entry point for the Carta connector.

Deployed as a Cloud Run Job triggered by Cloud Scheduler.

Usage:
  python -m scripts.carta_connector.entrypoints.gcp_cloudrun
  SYNC_RESOURCE_TYPES=issuer,portfolio python -m scripts.carta_connector.entrypoints.gcp_cloudrun
"""

from __future__ import annotations

import logging
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from scripts.carta_connector.config import load_config
from scripts.carta_connector.connector import CartaConnector
from scripts.carta_connector.logging_config import configure_logging
from scripts.carta_connector.output import write_result
from scripts.carta_connector.sync import run_sync

logger = logging.getLogger("connector.cloudrun")


def main() -> None:
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    raw = os.environ.get("SYNC_RESOURCE_TYPES", "")
    resource_types = [s.strip() for s in raw.split(",") if s.strip()] or None
    logger.info("Cloud Run Job started for resource_types=%s", resource_types or "all")

    try:
        config = load_config()
        connector = CartaConnector.from_config(config.carta)
        result = run_sync(connector, resource_types)
        write_result(result, config.output)
        logger.info("Sync complete: %s", result.counts())
    except Exception as exc:
        logger.error("Sync failed: %s", exc, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
