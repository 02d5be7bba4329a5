"""Wire models for the Carta API.

Fields missing from a payload decode to empty values, matching how the
API omits unset attributes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _text(value: Any) -> str:
    """Missing values decode to ""; anything else is coerced to str."""
    return "" if value is None else str(value)


@dataclass(frozen=True)
class Issuer:
    """A company available for investment."""

    id: str
    legal_name: str = ""
    website: str = ""

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Issuer":
        return cls(
            id=_text(payload.get("id")),
            legal_name=_text(payload.get("legalName")),
            website=_text(payload.get("website")),
        )


@dataclass(frozen=True)
class InvestorFirm:
    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "InvestorFirm":
        return cls(
            id=_text(payload.get("id")),
            name=_text(payload.get("name")),
        )


@dataclass
class Portfolio:
    """A named grouping of issuers.

    ``issuer_ids`` is empty when decoded and filled once by the client
    after the nested issuer collection has been drained.
    """

    id: str
    legal_name: str = ""
    issuer_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "Portfolio":
        return cls(
            id=_text(payload.get("id")),
            legal_name=_text(
                payload.get("legalName")
                if payload.get("legalName") is not None
                else payload.get("name")
            ),
        )


@dataclass(frozen=True)
class PaginationParams:
    """``size`` 0 lets the server choose; ``after`` "" requests the first page."""

    size: int = 0
    after: str = ""


@dataclass
class Page(Generic[T]):
    items: list[T]
    next_token: str = ""

    @property
    def has_more(self) -> bool:
        return self.next_token != ""


def build_pagination_query(size: int, after: str) -> dict[str, str]:
    """Query parameters for one page request, omitting unset values."""
    query: dict[str, str] = {}
    if size != 0:
        query["pageSize"] = str(size)
    if after != "":
        query["pageToken"] = after
    return query
