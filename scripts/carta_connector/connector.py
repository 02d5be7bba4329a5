"""Connector facade: syncer registry, metadata, validation."""

from __future__ import annotations

import logging

from scripts.carta_connector.carta.client import CartaClient
from scripts.carta_connector.config import CartaConfig
from scripts.carta_connector.errors import ConfigError
from scripts.carta_connector.graph import ConnectorMetadata
from scripts.carta_connector.syncers import (
    InvestorSyncer,
    IssuerSyncer,
    PortfolioSyncer,
    ResourceSyncer,
)
from scripts.carta_connector.syncers.base_syncer import DEFAULT_PAGE_SIZE

logger = logging.getLogger("connector")


class CartaConnector:
    def __init__(
        self, client: CartaClient, page_size: int = DEFAULT_PAGE_SIZE, access_token: str = ""
    ) -> None:
        self.client = client
        self.page_size = page_size
        self._access_token = access_token

    @classmethod
    def from_config(cls, config: CartaConfig) -> "CartaConnector":
        client = CartaClient(
            config.access_token,
            base_url=config.api_base_url,
            timeout=config.request_timeout,
            portfolio_issuers_page_size=config.portfolio_issuers_page_size,
        )
        return cls(client, page_size=config.page_size, access_token=config.access_token)

    def resource_syncers(self) -> list[ResourceSyncer]:
        return [
            IssuerSyncer(self.client, self.page_size),
            InvestorSyncer(self.client, self.page_size),
            PortfolioSyncer(self.client, self.page_size),
        ]

    def syncer_for(self, resource_type_id: str) -> ResourceSyncer:
        for syncer in self.resource_syncers():
            if syncer.resource_type().id == resource_type_id:
                return syncer
        raise ValueError(f"Unknown resource type: {resource_type_id}")

    def metadata(self) -> ConnectorMetadata:
        return ConnectorMetadata(
            display_name="Carta",
            description="Issuers, investor firms and portfolios from Carta",
            resource_types=tuple(s.resource_type() for s in self.resource_syncers()),
        )

    def validate(self) -> None:
        """Check local configuration only; no request is made."""
        if not self._access_token:
            raise ConfigError("Carta access token is not configured")
        logger.info("Connector configuration is valid")
