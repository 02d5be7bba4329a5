"""Investor firms as user-like resources."""

from __future__ import annotations

from typing import Optional

from scripts.carta_connector.carta.models import InvestorFirm
from scripts.carta_connector.graph import (
    InvestorProfile,
    Resource,
    ResourceId,
    ResourceType,
    Trait,
    UserStatus,
    new_user_resource,
)
from scripts.carta_connector.syncers.base_syncer import ResourceSyncer

RESOURCE_TYPE_INVESTOR = ResourceType(
    id="investor",
    display_name="Investor",
    traits=(Trait.USER,),
)


def investor_resource(firm: InvestorFirm, parent_id: Optional[ResourceId] = None) -> Resource:
    return new_user_resource(
        firm.name,
        RESOURCE_TYPE_INVESTOR,
        firm.id,
        InvestorProfile(investor_id=firm.id, login=firm.name),
        status=UserStatus.UNSPECIFIED,
        parent_resource_id=parent_id,
    )


class InvestorSyncer(ResourceSyncer):
    RESOURCE_TYPE = RESOURCE_TYPE_INVESTOR

    def list(
        self, parent_id: Optional[ResourceId], page_token: str
    ) -> tuple[list[Resource], str]:
        return self._list_page(self.client.get_investors, investor_resource, parent_id, page_token)
