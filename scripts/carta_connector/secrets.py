"""Cloud-native secret resolution for the Carta access token.

A configured value is either a literal token or a reference into AWS
Secrets Manager / GCP Secret Manager.
"""

from __future__ import annotations

import json
import logging
import os

import requests

logger = logging.getLogger("connector.secrets")

_AWS_PREFIX = "aws-secret://"
_GCP_PREFIX = "gcp-secret://"

_GCP_METADATA_PROJECT_URL = (
    "http://metadata.google.internal/computeMetadata/v1/project/project-id"
)


def resolve_secret(value: str) -> str:
    """Resolve a secret reference to its plaintext value.

    Supported formats:
      - "aws-secret://secret-name"         -> AWS Secrets Manager
      - "aws-secret://secret-name#key"     -> AWS Secrets Manager (JSON key)
      - "gcp-secret://project/secret/ver"  -> GCP Secret Manager
      - anything else                      -> returned as-is
    """
    if value.startswith(_AWS_PREFIX):
        logger.info("Resolving secret from AWS Secrets Manager")
        return _resolve_aws_secret(value[len(_AWS_PREFIX):])
    if value.startswith(_GCP_PREFIX):
        logger.info("Resolving secret from GCP Secret Manager")
        return _resolve_gcp_secret(value[len(_GCP_PREFIX):])
    return value


def _resolve_aws_secret(ref: str) -> str:
    """ref format: "secret-name" or "secret-name#json_key"."""
    import boto3

    secret_name, _, json_key = ref.partition("#")
    client = boto3.client(
        "secretsmanager", region_name=os.environ.get("AWS_REGION", "us-east-1")
    )
    secret_string = client.get_secret_value(SecretId=secret_name)["SecretString"]

    if json_key:
        return str(json.loads(secret_string)[json_key])
    return secret_string


def _resolve_gcp_secret(ref: str) -> str:
    """ref format: "projects/P/secrets/N/versions/V" or a bare secret name."""
    from google.cloud import secretmanager

    if ref.startswith("projects/"):
        name = ref
    else:
        project = os.environ.get("GCP_PROJECT_ID", "") or _gcp_project_from_metadata()
        name = f"projects/{project}/secrets/{ref}/versions/latest"

    client = secretmanager.SecretManagerServiceClient()
    response = client.access_secret_version(request={"name": name})
    return response.payload.data.decode("UTF-8")


def _gcp_project_from_metadata() -> str:
    """Project ID from the metadata server (Cloud Run / GCE only)."""
    try:
        resp = requests.get(
            _GCP_METADATA_PROJECT_URL,
            headers={"Metadata-Flavor": "Google"},
            timeout=2,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise RuntimeError(
            "Cannot determine GCP project ID. Set GCP_PROJECT_ID env var."
        ) from exc
    return resp.text
