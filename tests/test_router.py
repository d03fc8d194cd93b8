"""目的地路由与提交上下文构建。"""
import httpx
import pytest

from talentsift.submission import SubmissionContext
from talentsift.submission.delivery import AutomationDelivery, TicketingDelivery, route


@pytest.fixture
def http():
    return httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))


@pytest.mark.parametrize("destination,expected", [
    ("ticketing", TicketingDelivery),
    ("automation", AutomationDelivery),
    ("  Automation ", AutomationDelivery),
    ("TICKETING", TicketingDelivery),
])
def test_known_destinations(http, destination, expected):
    strategy = route(SubmissionContext(destination=destination), http)
    assert isinstance(strategy, expected)
    assert strategy.http is http


@pytest.mark.parametrize("destination", ["", "   ", "servicenow-legacy", "email"])
def test_unknown_destination_means_no_delivery(http, destination):
    assert route(SubmissionContext(destination=destination), http) is None


class TestSubmissionContext:
    def test_defaults(self):
        ctx = SubmissionContext.from_params()
        assert ctx.destination == ""
        assert ctx.organization_id == 1

    @pytest.mark.parametrize("raw,expected", [("12", 12), (5, 5), ("", 1), (None, 1), ("abc", 1)])
    def test_org_id(self, raw, expected):
        assert SubmissionContext.from_params("ticketing", raw).organization_id == expected

    def test_default_org_from_env(self, monkeypatch):
        monkeypatch.setenv("TALENTSIFT_DEFAULT_ORG_ID", "9")
        assert SubmissionContext.from_params(" automation ", None) == SubmissionContext(
            destination="automation", organization_id=9
        )
