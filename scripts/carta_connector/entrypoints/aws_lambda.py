"""AWS Lambda handler for the Carta connector.

Triggered by an EventBridge schedule. Each invocation runs one sync pass
and writes the result to S3.

Event format (all keys optional):
  {"resource_types": ["issuer", "portfolio"], "output": "s3://bucket/key.json"}
"""

from __future__ import annotations

import json
import logging
import os
import sys

# Ensure the project root is on sys.path for Lambda packaging
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from scripts.carta_connector.config import load_config
from scripts.carta_connector.connector import CartaConnector
from scripts.carta_connector.logging_config import configure_logging
from scripts.carta_connector.output import write_result
from scripts.carta_connector.sync import run_sync

logger = logging.getLogger("connector.lambda")


def handler(event: dict, context) -> dict:
    """Lambda entry point."""
    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    resource_types = event.get("resource_types") or None
    logger.info("Lambda invoked for resource_types=%s", resource_types or "all")

    try:
        config = load_config()
        connector = CartaConnector.from_config(config.carta)
        result = run_sync(connector, resource_types)
        destination = write_result(result, event.get("output") or config.output)
    except Exception as exc:
        logger.error("Sync failed: %s", exc, exc_info=True)
        return {
            "statusCode": 500,
            "body": json.dumps({"error": str(exc)}),
        }

    return {
        "statusCode": 200,
        "body": json.dumps({"output": destination, "counts": result.counts()}),
    }
