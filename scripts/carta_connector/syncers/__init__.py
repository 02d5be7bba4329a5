"""Per-resource-type syncers translating Carta records into graph resources."""

from scripts.carta_connector.syncers.base_syncer import ResourceSyncer
from scripts.carta_connector.syncers.investor import InvestorSyncer
from scripts.carta_connector.syncers.issuer import IssuerSyncer
from scripts.carta_connector.syncers.portfolio import PortfolioSyncer

__all__ = ["ResourceSyncer", "InvestorSyncer", "IssuerSyncer", "PortfolioSyncer"]
