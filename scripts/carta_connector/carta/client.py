"""Carta REST client: paginated fetches and portfolio issuer aggregation."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from scripts.carta_connector.carta.models import (
    InvestorFirm,
    Issuer,
    Page,
    PaginationParams,
    Portfolio,
    build_pagination_query,
)
from scripts.carta_connector.config import DEFAULT_API_BASE_URL
from scripts.carta_connector.errors import (
    CartaDecodeError,
    CartaHTTPError,
    CartaTransportError,
)

logger = logging.getLogger("connector.carta")

T = TypeVar("T")

PORTFOLIO_ISSUERS_PAGE_SIZE = 100


class CartaClient:
    """Synchronous client; every call is exactly one HTTP round trip,
    except ``get_portfolios`` which also drains each portfolio's issuers.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 30.0,
        portfolio_issuers_page_size: int = PORTFOLIO_ISSUERS_PAGE_SIZE,
    ) -> None:
        self._base = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._portfolio_issuers_page_size = portfolio_issuers_page_size
        self._session = session or requests.Session()
        self._session.headers.update({
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        })

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def get_issuers(self, params: PaginationParams) -> Page[Issuer]:
        """All issuers (companies to invest in) visible to the caller."""
        return self._get_page("issuers", "issuers", Issuer.from_dict, params)

    def get_issuer(self, issuer_id: str) -> Issuer:
        data = self._get(f"issuers/{issuer_id}")
        payload = data.get("issuer")
        if not isinstance(payload, dict):
            raise CartaDecodeError("Field 'issuer' is missing or not an object")
        return Issuer.from_dict(payload)

    def get_investors(self, params: PaginationParams) -> Page[InvestorFirm]:
        """All investor firms visible to the caller."""
        return self._get_page("investors/firms", "firms", InvestorFirm.from_dict, params)

    def get_issuers_for_portfolio(
        self, portfolio_id: str, params: PaginationParams
    ) -> Page[Issuer]:
        return self._get_page(
            f"portfolios/{portfolio_id}/issuers", "issuers", Issuer.from_dict, params
        )

    def get_portfolios(self, params: PaginationParams) -> Page[Portfolio]:
        """One page of portfolios, each with its full issuer id list.

        Issuers are drained serially per portfolio; any failure aborts
        the whole page.
        """
        page = self._get_page("portfolios", "portfolios", Portfolio.from_dict, params)
        for portfolio in page.items:
            portfolio.issuer_ids = [
                issuer.id for issuer in self._drain_portfolio_issuers(portfolio.id)
            ]
        return page

    def _drain_portfolio_issuers(self, portfolio_id: str) -> list[Issuer]:
        issuers: list[Issuer] = []
        after = ""
        while True:
            page = self.get_issuers_for_portfolio(
                portfolio_id,
                PaginationParams(size=self._portfolio_issuers_page_size, after=after),
            )
            issuers.extend(page.items)
            if not page.has_more:
                break
            after = page.next_token
        logger.debug(
            "Portfolio %s has %d issuers", portfolio_id, len(issuers),
            extra={"resource_type": "portfolio", "records": len(issuers)},
        )
        return issuers

    # ------------------------------------------------------------------
    # Request helpers
    # ------------------------------------------------------------------

    def _get_page(
        self,
        path: str,
        items_key: str,
        decode: Callable[[dict[str, Any]], T],
        params: PaginationParams,
    ) -> Page[T]:
        data = self._get(path, build_pagination_query(params.size, params.after))

        raw_items = data.get(items_key)
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list) or not all(
            isinstance(item, dict) for item in raw_items
        ):
            raise CartaDecodeError(f"Field '{items_key}' is not a list of objects")
        next_token = data.get("nextPageToken")
        if next_token is None:
            next_token = ""
        if not isinstance(next_token, str):
            raise CartaDecodeError("Field 'nextPageToken' is not a string")

        # A service echoing the request cursor back would loop forever.
        # The remaining pages are dropped, not reported as an error.
        if next_token and next_token == params.after:
            logger.warning(
                "Cursor for %s unchanged after fetch, stopping pagination",
                path,
                extra={"url": self._base + path},
            )
            next_token = ""

        return Page(items=[decode(item) for item in raw_items], next_token=next_token)

    def _get(self, path: str, query: Optional[dict[str, str]] = None) -> dict[str, Any]:
        url = self._base + path
        try:
            resp = self._session.get(url, params=query or None, timeout=self._timeout)
        except requests.RequestException as exc:
            raise CartaTransportError(f"GET {url} failed: {exc}") from exc

        if resp.status_code >= 300:
            logger.error(
                "Carta request failed",
                extra={"url": url, "status_code": resp.status_code},
            )
            raise CartaHTTPError(resp.status_code, url)

        try:
            data = resp.json()
        except ValueError as exc:
            raise CartaDecodeError(f"Invalid JSON from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise CartaDecodeError(f"Expected a JSON object from {url}")
        return data
