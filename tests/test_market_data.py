"""
Marketplace listing lookups.

Validates:
1. Unconfigured sources return nothing without network access
2. SeatGeek token -> event -> listings flow
3. HTTP failures degrade to an empty result
"""

import logging

import httpx
import pytest

from seatledger.market_data.services.market_data_service import MarketDataService


def seatgeek_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/2/oauth/token":
        return httpx.Response(200, json={"access_token": "tok"})
    assert request.headers["Authorization"] == "Bearer tok"
    if request.url.path == "/2/events":
        assert request.url.params["performers.slug"] == "city-hawks"
        return httpx.Response(200, json={"events": [{"id": 42}]})
    if request.url.path == "/2/events/42/listings":
        section = request.url.params["section"]
        price = {"101": 120.0, "100": 90.0, "102": 150.0}[section]
        return httpx.Response(200, json={"listings": [
            {"section": section, "row": "5", "price": price, "quantity": 2, "url": f"https://example.test/{section}"},
        ]})
    return httpx.Response(404)


@pytest.fixture
def seatgeek():
    client = httpx.Client(transport=httpx.MockTransport(seatgeek_handler))
    service = MarketDataService(seatgeek_client_id="id", seatgeek_client_secret="secret", stubhub_api_key="", client=client)
    yield service
    service.close()


class TestConfiguration:

    def test_unconfigured_returns_empty(self):
        calls = []
        client = httpx.Client(transport=httpx.MockTransport(lambda request: calls.append(request)))
        service = MarketDataService(seatgeek_client_id="", seatgeek_client_secret="", stubhub_api_key="", client=client)

        assert service.fetch_seatgeek_listings("City Hawks", "Rivals", "2024-10-01", "101") == []
        assert service.fetch_stubhub_listings("City Hawks", "Rivals", "2024-10-01", "101") == []
        assert service.configuration_status() == {"seatgeek": False, "stubhub": False, "any_configured": False}
        assert calls == []

    def test_partial_configuration(self):
        service = MarketDataService(seatgeek_client_id="id", seatgeek_client_secret="", stubhub_api_key="key")
        assert service.configuration_status() == {"seatgeek": False, "stubhub": True, "any_configured": True}
        service.close()


class TestSeatGeek:

    def test_listings_for_section(self, seatgeek):
        [listing] = seatgeek.fetch_seatgeek_listings("City Hawks", "Rivals", "2024-10-01", "101")

        assert listing.section == "101"
        assert listing.row == "5"
        assert listing.price == 120.0
        assert listing.quantity == 2
        assert listing.marketplace == "seatgeek"

    def test_game_market_data_includes_adjacent_sections(self, seatgeek):
        market = seatgeek.get_market_data_for_game("City Hawks", "Rivals", "2024-10-01", "101")

        assert market.venue == "City Hawks Stadium"
        assert [listing.price for listing in market.listings] == [90.0, 120.0, 150.0]

    def test_server_error_degrades_to_empty(self, caplog):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
        service = MarketDataService(seatgeek_client_id="id", seatgeek_client_secret="secret", stubhub_api_key="", client=client)

        with caplog.at_level(logging.WARNING):
            assert service.fetch_seatgeek_listings("City Hawks", "Rivals", "2024-10-01", "101") == []
        assert "SeatGeek lookup failed" in caplog.text


    def test_unexpected_payload_shape_degrades_to_empty(self, caplog):
        def handler(request):
            if request.url.path == "/2/oauth/token":
                return httpx.Response(200, json={"access_token": "tok"})
            return httpx.Response(200, json=[{"unexpected": "array"}])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        service = MarketDataService(seatgeek_client_id="id", seatgeek_client_secret="secret", stubhub_api_key="", client=client)

        with caplog.at_level(logging.WARNING):
            market = service.get_market_data_for_game("Hawks", "Rivals", "2024-10-01", "101")

        assert market.listings == []
        assert "SeatGeek lookup failed" in caplog.text


class TestStubHub:

    def test_listings(self):
        def handler(request):
            if request.url.path == "/search/catalog/events/v3":
                return httpx.Response(200, json={"events": [{"id": 7}]})
            return httpx.Response(200, json={"listing": [
                {"sectionName": "101", "row": "B", "currentPrice": {"amount": 80}, "quantity": 4},
            ]})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        service = MarketDataService(seatgeek_client_id="", seatgeek_client_secret="", stubhub_api_key="key", client=client)

        [listing] = service.fetch_stubhub_listings("City Hawks", "Rivals", "2024-10-01", "101")

        assert (listing.section, listing.row, listing.price, listing.quantity) == ("101", "B", 80.0, 4)
        assert listing.marketplace == "stubhub"


    def test_price_not_an_object_degrades_to_empty(self):
        def handler(request):
            if request.url.path == "/search/catalog/events/v3":
                return httpx.Response(200, json={"events": [{"id": 7}]})
            return httpx.Response(200, json={"listing": [{"sectionName": "101", "currentPrice": 80}]})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        service = MarketDataService(seatgeek_client_id="", seatgeek_client_secret="", stubhub_api_key="key", client=client)

        assert service.fetch_stubhub_listings("Hawks", "Rivals", "2024-10-01", "101") == []


class TestAdjacentSections:

    def test_numeric(self):
        assert MarketDataService.adjacent_sections("112") == ["111", "113"]

    def test_non_numeric(self):
        assert MarketDataService.adjacent_sections("Club A") == []
