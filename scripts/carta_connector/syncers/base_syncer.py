"""Abstract base class for all resource syncers."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from scripts.carta_connector.carta.client import CartaClient
from scripts.carta_connector.carta.models import Page, PaginationParams
from scripts.carta_connector.errors import CartaError, ConnectorError
from scripts.carta_connector.graph import (
    Entitlement,
    Grant,
    Resource,
    ResourceId,
    ResourceType,
)
from scripts.carta_connector.pagination import ContinuationState

logger = logging.getLogger("connector.syncer")

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 50


class ResourceSyncer(ABC):
    """Each syncer declares RESOURCE_TYPE and overrides list()."""

    RESOURCE_TYPE: ResourceType

    def __init__(self, client: CartaClient, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.client = client
        self.page_size = page_size

    def resource_type(self) -> ResourceType:
        return self.RESOURCE_TYPE

    @abstractmethod
    def list(
        self, parent_id: Optional[ResourceId], page_token: str
    ) -> tuple[list[Resource], str]:
        """One page of resources and the token for the next page ("" = done)."""

    def entitlements(self, resource: Resource, page_token: str) -> tuple[list[Entitlement], str]:
        return [], ""

    def grants(self, resource: Resource, page_token: str) -> tuple[list[Grant], str]:
        return [], ""

    # ------------------------------------------------------------------
    # Pagination helper
    # ------------------------------------------------------------------

    def _list_page(
        self,
        fetch: Callable[[PaginationParams], Page[T]],
        to_resource: Callable[[T, Optional[ResourceId]], Resource],
        parent_id: Optional[ResourceId],
        page_token: str,
    ) -> tuple[list[Resource], str]:
        type_id = self.RESOURCE_TYPE.id
        state = ContinuationState.from_token(page_token)

        start = time.monotonic()
        try:
            page = fetch(PaginationParams(size=self.page_size, after=state.cursor_for(type_id)))
        except CartaError as exc:
            raise ConnectorError(f"carta-connector: failed to list {type_id}s: {exc}") from exc

        # The returned token carries only this type's cursor, so a
        # collection that fits on one page always finishes with "".
        next_token = ContinuationState().advance(type_id, page.next_token)
        resources = [to_resource(item, parent_id) for item in page.items]
        logger.debug(
            "Listed %s page", type_id,
            extra={
                "resource_type": type_id,
                "records": len(resources),
                "duration_s": round(time.monotonic() - start, 3),
            },
        )
        return resources, next_token
