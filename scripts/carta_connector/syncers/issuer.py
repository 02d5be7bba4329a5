"""Issuers (companies to invest in) as user-like resources."""

from __future__ import annotations

from typing import Optional

from scripts.carta_connector.carta.models import Issuer
from scripts.carta_connector.graph import (
    IssuerProfile,
    Resource,
    ResourceId,
    ResourceType,
    Trait,
    UserStatus,
    new_user_resource,
)
from scripts.carta_connector.syncers.base_syncer import ResourceSyncer

RESOURCE_TYPE_ISSUER = ResourceType(
    id="issuer",
    display_name="Issuer",
    traits=(Trait.USER,),
)


def issuer_resource(issuer: Issuer, parent_id: Optional[ResourceId] = None) -> Resource:
    return new_user_resource(
        issuer.legal_name,
        RESOURCE_TYPE_ISSUER,
        issuer.id,
        IssuerProfile(
            issuer_id=issuer.id,
            issuer_legal_name=issuer.legal_name,
            website=issuer.website,
        ),
        status=UserStatus.UNSPECIFIED,
        parent_resource_id=parent_id,
    )


class IssuerSyncer(ResourceSyncer):
    RESOURCE_TYPE = RESOURCE_TYPE_ISSUER

    def list(
        self, parent_id: Optional[ResourceId], page_token: str
    ) -> tuple[list[Resource], str]:
        return self._list_page(self.client.get_issuers, issuer_resource, parent_id, page_token)
