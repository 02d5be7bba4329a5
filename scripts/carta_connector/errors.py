"""Exception hierarchy for the Carta client and the connector layer."""

from __future__ import annotations


class CartaError(Exception):
    """Base class for failures talking to the Carta API."""


class CartaTransportError(CartaError):
    """The request never produced an HTTP response (DNS, TLS, connection)."""


class CartaDecodeError(CartaError):
    """The response body was not the expected JSON envelope."""


class CartaHTTPError(CartaError):
    """The API answered with a status code >= 300."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"Request failed with status {status_code}: {url}")
        self.status_code = status_code
        self.url = url


class ConnectorError(Exception):
    """A resource syncer could not produce its page of the resource graph."""


class InvalidPageTokenError(ConnectorError, ValueError):
    """A continuation token could not be parsed."""


class ConfigError(ValueError):
    """Required configuration is missing or malformed."""
