"""
Unit tests for the Lambda handler with configuration and sync patched out.
"""
import json
from unittest.mock import MagicMock, patch

import pytest

from scripts.carta_connector.entrypoints import aws_lambda


@pytest.mark.unit
def test_handler_returns_counts():
    config = MagicMock(output="s3://bucket/default.json")
    result = MagicMock()
    result.counts.return_value = {"resources": 2}
    with patch.object(aws_lambda, "load_config", return_value=config), \
         patch.object(aws_lambda.CartaConnector, "from_config"), \
         patch.object(aws_lambda, "run_sync", return_value=result) as run, \
         patch.object(aws_lambda, "write_result", side_effect=lambda r, d: d):
        resp = aws_lambda.handler({"resource_types": ["issuer"]}, None)

    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert body == {"output": "s3://bucket/default.json", "counts": {"resources": 2}}
    assert run.call_args.args[1] == ["issuer"]


@pytest.mark.unit
def test_handler_reports_failure():
    with patch.object(aws_lambda, "load_config", side_effect=ValueError("no token")):
        resp = aws_lambda.handler({}, None)

    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "no token"}
