"""Portfolios as group-like resources with issuer membership grants."""

from __future__ import annotations

import logging
from typing import Optional

from scripts.carta_connector.carta.models import Portfolio
from scripts.carta_connector.errors import CartaError, ConnectorError
from scripts.carta_connector.graph import (
    Entitlement,
    Grant,
    PortfolioProfile,
    Resource,
    ResourceId,
    ResourceType,
    Trait,
    new_assignment_entitlement,
    new_grant,
    new_group_resource,
)
from scripts.carta_connector.syncers.base_syncer import ResourceSyncer
from scripts.carta_connector.syncers.issuer import RESOURCE_TYPE_ISSUER, issuer_resource

logger = logging.getLogger("connector.portfolio")

MEMBER_ENTITLEMENT = "member"

RESOURCE_TYPE_PORTFOLIO = ResourceType(
    id="portfolio",
    display_name="Portfolio",
    traits=(Trait.GROUP,),
)


def portfolio_resource(portfolio: Portfolio, parent_id: Optional[ResourceId] = None) -> Resource:
    return new_group_resource(
        portfolio.legal_name,
        RESOURCE_TYPE_PORTFOLIO,
        portfolio.id,
        PortfolioProfile(
            portfolio_id=portfolio.id,
            portfolio_legal_name=portfolio.legal_name,
            portfolio_issuer_ids=tuple(portfolio.issuer_ids),
        ),
        parent_resource_id=parent_id,
    )


class PortfolioSyncer(ResourceSyncer):
    RESOURCE_TYPE = RESOURCE_TYPE_PORTFOLIO

    def list(
        self, parent_id: Optional[ResourceId], page_token: str
    ) -> tuple[list[Resource], str]:
        return self._list_page(
            self.client.get_portfolios, portfolio_resource, parent_id, page_token
        )

    def entitlements(self, resource: Resource, page_token: str) -> tuple[list[Entitlement], str]:
        member = new_assignment_entitlement(
            resource,
            MEMBER_ENTITLEMENT,
            grantable_to=(RESOURCE_TYPE_ISSUER,),
            display_name=f"{resource.display_name} Portfolio {MEMBER_ENTITLEMENT}",
            description=f"Access to {resource.display_name} portfolio in Carta",
        )
        return [member], ""

    def grants(self, resource: Resource, page_token: str) -> tuple[list[Grant], str]:
        profile = resource.profile
        if not isinstance(profile, PortfolioProfile):
            raise ConnectorError(
                f"carta-connector: resource {resource.id.resource} has no portfolio profile"
            )

        rv: list[Grant] = []
        for issuer_id in profile.portfolio_issuer_ids:
            try:
                issuer = self.client.get_issuer(issuer_id)
            except CartaError as exc:
                raise ConnectorError(
                    f"carta-connector: failed to fetch issuer {issuer_id}: {exc}"
                ) from exc
            rv.append(new_grant(resource, MEMBER_ENTITLEMENT, issuer_resource(issuer).id))

        logger.debug(
            "Built grants for portfolio %s", profile.portfolio_id,
            extra={"resource_type": self.RESOURCE_TYPE.id, "records": len(rv)},
        )
        return rv, ""
