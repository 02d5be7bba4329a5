"""A full listing pass over every resource syncer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, TypeVar

from scripts.carta_connector.connector import CartaConnector
from scripts.carta_connector.graph import Entitlement, Grant, Resource, ResourceType
from scripts.carta_connector.syncers.base_syncer import ResourceSyncer

logger = logging.getLogger("connector.sync")

T = TypeVar("T")


@dataclass
class SyncResult:
    resource_types: list[ResourceType] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)
    entitlements: list[Entitlement] = field(default_factory=list)
    grants: list[Grant] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        return {
            "resource_types": len(self.resource_types),
            "resources": len(self.resources),
            "entitlements": len(self.entitlements),
            "grants": len(self.grants),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource_types": [rt.to_dict() for rt in self.resource_types],
            "resources": [r.to_dict() for r in self.resources],
            "entitlements": [e.to_dict() for e in self.entitlements],
            "grants": [g.to_dict() for g in self.grants],
        }


def run_sync(
    connector: CartaConnector, resource_types: Optional[Iterable[str]] = None
) -> SyncResult:
    """Drain every syncer, then entitlements and grants for each resource.

    Runs serially. The first error aborts the pass and nothing is returned.
    """
    syncers = connector.resource_syncers()
    wanted = set(resource_types) if resource_types else None
    if wanted is not None:
        unknown = wanted - {s.resource_type().id for s in syncers}
        if unknown:
            raise ValueError(f"Unknown resource types: {', '.join(sorted(unknown))}")
    result = SyncResult()

    for syncer in syncers:
        rt = syncer.resource_type()
        if wanted is not None and rt.id not in wanted:
            continue
        start = time.monotonic()
        before = result.counts()

        result.resource_types.append(rt)
        resources = _list_all(syncer)
        result.resources.extend(resources)
        for resource in resources:
            result.entitlements.extend(_drain(syncer.entitlements, resource))
            result.grants.extend(_drain(syncer.grants, resource))

        after = result.counts()
        logger.info(
            "Synced %s: %d resources, %d entitlements, %d grants",
            rt.id,
            after["resources"] - before["resources"],
            after["entitlements"] - before["entitlements"],
            after["grants"] - before["grants"],
            extra={
                "resource_type": rt.id,
                "records": after["resources"] - before["resources"],
                "duration_s": round(time.monotonic() - start, 3),
            },
        )

    return result


def _list_all(syncer: ResourceSyncer) -> list[Resource]:
    resources: list[Resource] = []
    token = ""
    while True:
        page, token = syncer.list(None, token)
        resources.extend(page)
        if not token:
            return resources


def _drain(
    fetch: Callable[[Resource, str], tuple[list[T], str]], resource: Resource
) -> list[T]:
    items: list[T] = []
    token = ""
    while True:
        page, token = fetch(resource, token)
        items.extend(page)
        if not token:
            return items
