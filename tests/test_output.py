"""
Unit tests for writing sync results locally and to S3.
"""
import json
from unittest.mock import MagicMock, patch

import pytest

from scripts.carta_connector.graph import ResourceType, Trait
from scripts.carta_connector.output import parse_s3_uri, write_result
from scripts.carta_connector.sync import SyncResult


def _result():
    return SyncResult(resource_types=[ResourceType("issuer", "Issuer", (Trait.USER,))])


@pytest.mark.unit
def test_write_local_file_creates_parents(tmp_path):
    target = tmp_path / "out" / "sync.json"

    write_result(_result(), str(target))

    data = json.loads(target.read_text())
    assert data["resource_types"] == [
        {"id": "issuer", "display_name": "Issuer", "traits": ["user"]}
    ]
    assert data["resources"] == []


@pytest.mark.unit
def test_write_to_s3_uses_put_object():
    s3 = MagicMock()
    with patch("boto3.client", return_value=s3) as client_factory:
        write_result(_result(), "s3://my-bucket/carta/sync.json")

    assert client_factory.call_args.args[0] == "s3"
    kwargs = s3.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "my-bucket"
    assert kwargs["Key"] == "carta/sync.json"
    assert json.loads(kwargs["Body"])["grants"] == []


@pytest.mark.unit
def test_parse_s3_uri():
    assert parse_s3_uri("s3://bucket/a/b.json") == ("bucket", "a/b.json")
    with pytest.raises(ValueError):
        parse_s3_uri("s3://bucket-only")
    with pytest.raises(ValueError):
        parse_s3_uri("https://bucket/key")
