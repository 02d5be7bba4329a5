"""Generic identity resource graph: resources, entitlements, grants.

Profiles are typed per resource kind instead of free-form attribute maps.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class Trait(str, Enum):
    USER = "user"
    GROUP = "group"


class UserStatus(str, Enum):
    UNSPECIFIED = "unspecified"
    ENABLED = "enabled"
    DISABLED = "disabled"


@dataclass(frozen=True)
class ResourceType:
    id: str
    display_name: str
    traits: tuple[Trait, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "traits": [t.value for t in self.traits],
        }


@dataclass(frozen=True)
class ResourceId:
    resource_type: str
    resource: str

    def to_dict(self) -> dict[str, str]:
        return {"resource_type": self.resource_type, "resource": self.resource}


@dataclass(frozen=True)
class IssuerProfile:
    issuer_id: str
    issuer_legal_name: str
    website: str = ""


@dataclass(frozen=True)
class InvestorProfile:
    investor_id: str
    login: str


@dataclass(frozen=True)
class PortfolioProfile:
    portfolio_id: str
    portfolio_legal_name: str
    portfolio_issuer_ids: tuple[str, ...] = ()


Profile = Union[IssuerProfile, InvestorProfile, PortfolioProfile]


@dataclass(frozen=True)
class Resource:
    id: ResourceId
    display_name: str
    trait: Trait
    profile: Profile
    parent_resource_id: Optional[ResourceId] = None
    status: Optional[UserStatus] = None

    def to_dict(self) -> dict[str, Any]:
        profile = asdict(self.profile)
        for key, val in profile.items():
            if isinstance(val, tuple):
                profile[key] = list(val)
        return {
            "id": self.id.to_dict(),
            "display_name": self.display_name,
            "trait": self.trait.value,
            "profile": profile,
            "parent_resource_id": (
                self.parent_resource_id.to_dict() if self.parent_resource_id else None
            ),
            "status": self.status.value if self.status else None,
        }


@dataclass(frozen=True)
class Entitlement:
    id: str
    resource_id: ResourceId
    slug: str
    display_name: str = ""
    description: str = ""
    grantable_to: tuple[str, ...] = ()
    purpose: str = "assignment"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "resource_id": self.resource_id.to_dict(),
            "slug": self.slug,
            "display_name": self.display_name,
            "description": self.description,
            "grantable_to": list(self.grantable_to),
            "purpose": self.purpose,
        }


@dataclass(frozen=True)
class Grant:
    id: str
    entitlement_id: str
    principal: ResourceId

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "entitlement_id": self.entitlement_id,
            "principal": self.principal.to_dict(),
        }


def entitlement_id(resource: Resource, slug: str) -> str:
    return f"{resource.id.resource_type}:{resource.id.resource}:{slug}"


def new_user_resource(
    name: str,
    resource_type: ResourceType,
    object_id: str,
    profile: Profile,
    status: UserStatus = UserStatus.UNSPECIFIED,
    parent_resource_id: Optional[ResourceId] = None,
) -> Resource:
    if not object_id:
        raise ValueError(f"{resource_type.id} resource requires an id")
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=object_id),
        display_name=name,
        trait=Trait.USER,
        profile=profile,
        parent_resource_id=parent_resource_id,
        status=status,
    )


def new_group_resource(
    name: str,
    resource_type: ResourceType,
    object_id: str,
    profile: Profile,
    parent_resource_id: Optional[ResourceId] = None,
) -> Resource:
    if not object_id:
        raise ValueError(f"{resource_type.id} resource requires an id")
    return Resource(
        id=ResourceId(resource_type=resource_type.id, resource=object_id),
        display_name=name,
        trait=Trait.GROUP,
        profile=profile,
        parent_resource_id=parent_resource_id,
    )


def new_assignment_entitlement(
    resource: Resource,
    slug: str,
    grantable_to: tuple[ResourceType, ...] = (),
    display_name: str = "",
    description: str = "",
) -> Entitlement:
    return Entitlement(
        id=entitlement_id(resource, slug),
        resource_id=resource.id,
        slug=slug,
        display_name=display_name,
        description=description,
        grantable_to=tuple(rt.id for rt in grantable_to),
    )


def new_grant(resource: Resource, slug: str, principal: ResourceId) -> Grant:
    ent_id = entitlement_id(resource, slug)
    return Grant(
        id=f"{ent_id}:{principal.resource_type}:{principal.resource}",
        entitlement_id=ent_id,
        principal=principal,
    )


@dataclass(frozen=True)
class ConnectorMetadata:
    display_name: str
    description: str = ""
    resource_types: tuple[ResourceType, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "display_name": self.display_name,
            "description": self.description,
            "resource_types": [rt.to_dict() for rt in self.resource_types],
        }
