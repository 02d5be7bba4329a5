"""
Unit tests for resource syncers: list pagination through continuation
tokens, error wrapping, and portfolio entitlements/grants.
"""
from unittest.mock import MagicMock

import pytest

from scripts.carta_connector.carta.client import CartaClient
from scripts.carta_connector.carta.models import (
    InvestorFirm,
    Issuer,
    Page,
    PaginationParams,
    Portfolio,
)
from scripts.carta_connector.errors import CartaHTTPError, ConnectorError
from scripts.carta_connector.graph import (
    InvestorProfile,
    IssuerProfile,
    PortfolioProfile,
    ResourceId,
    Trait,
    UserStatus,
)
from scripts.carta_connector.syncers import InvestorSyncer, IssuerSyncer, PortfolioSyncer


@pytest.fixture
def carta():
    return MagicMock(spec=CartaClient)


@pytest.mark.unit
def test_issuer_list_threads_cursor_through_token(carta):
    carta.get_issuers.side_effect = [
        Page(items=[Issuer(id="i1", legal_name="Acme", website="acme.test")], next_token="c2"),
        Page(items=[Issuer(id="i2", legal_name="Beta")], next_token=""),
    ]
    syncer = IssuerSyncer(carta, page_size=25)

    first, token = syncer.list(None, "")
    second, final = syncer.list(None, token)

    assert token != ""
    assert final == ""
    assert carta.get_issuers.call_args_list[0].args[0] == PaginationParams(size=25, after="")
    assert carta.get_issuers.call_args_list[1].args[0] == PaginationParams(size=25, after="c2")

    resource = first[0]
    assert resource.id == ResourceId(resource_type="issuer", resource="i1")
    assert resource.display_name == "Acme"
    assert resource.trait is Trait.USER
    assert resource.status is UserStatus.UNSPECIFIED
    assert resource.profile == IssuerProfile(
        issuer_id="i1", issuer_legal_name="Acme", website="acme.test"
    )
    assert [r.id.resource for r in second] == ["i2"]


@pytest.mark.unit
def test_parent_id_is_attached(carta):
    carta.get_investors.return_value = Page(items=[InvestorFirm(id="f1", name="Seed")])
    parent = ResourceId(resource_type="org", resource="o1")

    resources, token = InvestorSyncer(carta).list(parent, "")

    assert token == ""
    assert resources[0].parent_resource_id == parent
    assert resources[0].profile == InvestorProfile(investor_id="f1", login="Seed")


@pytest.mark.unit
def test_client_error_is_wrapped(carta):
    carta.get_investors.side_effect = CartaHTTPError(404, "https://carta.test/investors/firms")

    with pytest.raises(ConnectorError) as exc_info:
        InvestorSyncer(carta).list(None, "")

    assert "failed to list investors" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, CartaHTTPError)


@pytest.mark.unit
def test_user_syncers_have_no_entitlements_or_grants(carta):
    carta.get_issuers.return_value = Page(items=[Issuer(id="i1", legal_name="Acme")])
    syncer = IssuerSyncer(carta)
    resources, _ = syncer.list(None, "")

    assert syncer.entitlements(resources[0], "") == ([], "")
    assert syncer.grants(resources[0], "") == ([], "")


def _portfolio_resource(carta, issuer_ids):
    carta.get_portfolios.return_value = Page(
        items=[Portfolio(id="p1", legal_name="Fund I", issuer_ids=list(issuer_ids))]
    )
    syncer = PortfolioSyncer(carta)
    resources, _ = syncer.list(None, "")
    return syncer, resources[0]


@pytest.mark.unit
def test_portfolio_resource_is_group_with_issuer_ids(carta):
    _, resource = _portfolio_resource(carta, ["a", "b"])

    assert resource.trait is Trait.GROUP
    assert resource.profile == PortfolioProfile(
        portfolio_id="p1", portfolio_legal_name="Fund I", portfolio_issuer_ids=("a", "b")
    )


@pytest.mark.unit
def test_portfolio_member_entitlement(carta):
    syncer, resource = _portfolio_resource(carta, [])

    entitlements, token = syncer.entitlements(resource, "")

    assert token == ""
    assert len(entitlements) == 1
    ent = entitlements[0]
    assert ent.id == "portfolio:p1:member"
    assert ent.slug == "member"
    assert ent.display_name == "Fund I Portfolio member"
    assert ent.description == "Access to Fund I portfolio in Carta"
    assert ent.grantable_to == ("issuer",)
    assert ent.purpose == "assignment"


@pytest.mark.unit
def test_portfolio_grants_one_per_issuer(carta):
    syncer, resource = _portfolio_resource(carta, ["a", "b"])
    carta.get_issuer.side_effect = lambda issuer_id: Issuer(id=issuer_id, legal_name=issuer_id.upper())

    grants, token = syncer.grants(resource, "")

    assert token == ""
    assert [g.id for g in grants] == [
        "portfolio:p1:member:issuer:a",
        "portfolio:p1:member:issuer:b",
    ]
    assert all(g.entitlement_id == "portfolio:p1:member" for g in grants)
    assert grants[1].principal == ResourceId(resource_type="issuer", resource="b")


@pytest.mark.unit
def test_portfolio_without_issuers_has_no_grants(carta):
    syncer, resource = _portfolio_resource(carta, [])

    assert syncer.grants(resource, "") == ([], "")
    carta.get_issuer.assert_not_called()


@pytest.mark.unit
def test_portfolio_grant_failure_is_wrapped(carta):
    syncer, resource = _portfolio_resource(carta, ["a"])
    carta.get_issuer.side_effect = CartaHTTPError(500, "https://carta.test/issuers/a")

    with pytest.raises(ConnectorError):
        syncer.grants(resource, "")


@pytest.mark.unit
def test_foreign_cursor_in_token_does_not_keep_listing(carta):
    from scripts.carta_connector.pagination import ContinuationState

    carta.get_issuers.return_value = Page(items=[Issuer(id="i1", legal_name="Acme")])
    syncer = IssuerSyncer(carta)

    token = ContinuationState(cursors={"investor": "c9"}).to_token()
    resources, token = syncer.list(None, token)

    assert [r.id.resource for r in resources] == ["i1"]
    assert token == ""
    assert carta.get_issuers.call_args.args[0] == PaginationParams(size=50, after="")


@pytest.mark.unit
def test_list_token_only_carries_own_cursor(carta):
    from scripts.carta_connector.pagination import ContinuationState

    carta.get_issuers.return_value = Page(items=[Issuer(id="i1")], next_token="c2")
    token = ContinuationState(cursors={"investor": "c9"}).to_token()

    _, next_token = IssuerSyncer(carta).list(None, token)

    assert ContinuationState.from_token(next_token).cursors == {"issuer": "c2"}
