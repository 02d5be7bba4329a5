"""Carta REST API client and wire models."""

from scripts.carta_connector.carta.client import CartaClient
from scripts.carta_connector.carta.models import (
    InvestorFirm,
    Issuer,
    Page,
    PaginationParams,
    Portfolio,
)

__all__ = [
    "CartaClient",
    "InvestorFirm",
    "Issuer",
    "Page",
    "PaginationParams",
    "Portfolio",
]
