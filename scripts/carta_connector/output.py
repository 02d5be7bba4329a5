"""Write a sync result to a local JSON file or an S3 object."""

from __future__ import annotations

import json
import logging
import os
from urllib.parse import urlparse

from scripts.carta_connector.sync import SyncResult

logger = logging.getLogger("connector.output")

_S3_SCHEME = "s3"


def parse_s3_uri(uri: str) -> tuple[str, str]:
    """Split "s3://bucket/key" into (bucket, key)."""
    parsed = urlparse(uri)
    if parsed.scheme != _S3_SCHEME or not parsed.netloc:
        raise ValueError(f"Invalid S3 URI: {uri}")
    key = parsed.path.lstrip("/")
    if not key:
        raise ValueError(f"S3 URI has no object key: {uri}")
    return parsed.netloc, key


def write_result(result: SyncResult, destination: str) -> str:
    """Serialize ``result`` as JSON to ``destination``. Returns the destination."""
    body = json.dumps(result.to_dict(), indent=2, sort_keys=True)

    if destination.startswith(f"{_S3_SCHEME}://"):
        import boto3

        bucket, key = parse_s3_uri(destination)
        client = boto3.client("s3", region_name=os.environ.get("AWS_REGION", "us-east-1"))
        client.put_object(
            Bucket=bucket,
            Key=key,
            Body=body.encode("utf-8"),
            ContentType="application/json",
        )
    else:
        parent = os.path.dirname(os.path.abspath(destination))
        os.makedirs(parent, exist_ok=True)
        with open(destination, "w", encoding="utf-8") as fh:
            fh.write(body)

    logger.info("Wrote sync result to %s", destination, extra={"records": len(result.resources)})
    return destination
