import logging
import httpx
from seatledger.core.config import settings
from seatledger.market_data.models.market_listing import MarketListing, GameMarketData

logger = logging.getLogger(__name__)


class MarketDataService:
    """Live resale listings from SeatGeek and StubHub.

    Optional: with no credentials every lookup returns an empty list, and any
    HTTP failure is logged and treated the same way.
    """

    SEATGEEK_TOKEN_URL = "https://api.seatgeek.com/2/oauth/token"
    SEATGEEK_EVENTS_URL = "https://api.seatgeek.com/2/events"
    SEATGEEK_LISTINGS_URL = "https://api.seatgeek.com/2/events/{event_id}/listings"
    STUBHUB_EVENTS_URL = "https://api.stubhub.com/search/catalog/events/v3"
    STUBHUB_INVENTORY_URL = "https://api.stubhub.com/search/inventory/v2"

    def __init__(
        self,
        seatgeek_client_id: str | None = None,
        seatgeek_client_secret: str | None = None,
        stubhub_api_key: str | None = None,
        client: httpx.Client | None = None,
    ):
        self.seatgeek_client_id = settings.SEATGEEK_CLIENT_ID if seatgeek_client_id is None else seatgeek_client_id
        self.seatgeek_client_secret = (
            settings.SEATGEEK_CLIENT_SECRET if seatgeek_client_secret is None else seatgeek_client_secret
        )
        self.stubhub_api_key = settings.STUBHUB_API_KEY if stubhub_api_key is None else stubhub_api_key
        self.client = client or httpx.Client(timeout=settings.MARKET_DATA_TIMEOUT)

    def close(self):
        self.client.close()

    def seatgeek_configured(self) -> bool:
        return bool(self.seatgeek_client_id and self.seatgeek_client_secret)

    def stubhub_configured(self) -> bool:
        return bool(self.stubhub_api_key)

    def is_configured(self) -> bool:
        return self.seatgeek_configured() or self.stubhub_configured()

    def configuration_status(self) -> dict:
        return {
            "seatgeek": self.seatgeek_configured(),
            "stubhub": self.stubhub_configured(),
            "any_configured": self.is_configured(),
        }

    def _seatgeek_access_token(self) -> str:
        resp = self.client.post(
            self.SEATGEEK_TOKEN_URL,
            data={
                "grant_type": "client_credentials",
                "client_id": self.seatgeek_client_id,
                "client_secret": self.seatgeek_client_secret,
            },
        )
        resp.raise_for_status()
        return resp.json()["access_token"]

    def fetch_seatgeek_listings(self, team_name: str, opponent: str, game_date: str, section: str) -> list[MarketListing]:
        if not self.seatgeek_configured():
            return []
        try:
            token = self._seatgeek_access_token()
            headers = {"Authorization": f"Bearer {token}"}

            resp = self.client.get(
                self.SEATGEEK_EVENTS_URL,
                params={
                    "performers.slug": "-".join(team_name.lower().split()),
                    "datetime_utc.gte": game_date,
                    "datetime_utc.lte": game_date,
                },
                headers=headers,
            )
            resp.raise_for_status()
            events = resp.json().get("events") or []
            if not events:
                return []

            resp = self.client.get(
                self.SEATGEEK_LISTINGS_URL.format(event_id=events[0]["id"]),
                params={"section": section},
                headers=headers,
            )
            resp.raise_for_status()
            return [
                MarketListing(
                    section=item.get("section") or section,
                    row=item.get("row") or "Unknown",
                    price=float(item.get("price") or 0),
                    quantity=int(item.get("quantity") or 1),
                    seller="SeatGeek",
                    marketplace="seatgeek",
                    url=item.get("url"),
                )
                for item in resp.json().get("listings") or []
            ]
        except Exception as e:
            logger.warning(f"SeatGeek lookup failed for {team_name} vs {opponent} on {game_date}: {e}")
            return []

    def fetch_stubhub_listings(self, team_name: str, opponent: str, game_date: str, section: str) -> list[MarketListing]:
        if not self.stubhub_configured():
            return []
        try:
            headers = {"Authorization": f"Bearer {self.stubhub_api_key}", "Accept": "application/json"}

            resp = self.client.get(
                self.STUBHUB_EVENTS_URL,
                params={"performers": team_name, "minDate": game_date, "maxDate": game_date},
                headers=headers,
            )
            resp.raise_for_status()
            events = resp.json().get("events") or []
            if not events:
                return []

            resp = self.client.get(
                self.STUBHUB_INVENTORY_URL,
                params={"eventId": str(events[0]["id"]), "section": section},
                headers=headers,
            )
            resp.raise_for_status()
            return [
                MarketListing(
                    section=item.get("sectionName") or section,
                    row=item.get("row") or "Unknown",
                    price=float((item.get("currentPrice") or {}).get("amount") or 0),
                    quantity=int(item.get("quantity") or 1),
                    seller="StubHub",
                    marketplace="stubhub",
                    url=item.get("webUrl"),
                )
                for item in resp.json().get("listing") or []
            ]
        except Exception as e:
            logger.warning(f"StubHub lookup failed for {team_name} vs {opponent} on {game_date}: {e}")
            return []

    @staticmethod
    def adjacent_sections(section: str) -> list[str]:
        """Numeric neighbours of a section, e.g. '112' -> ['111', '113']."""
        if not section.strip().isdigit():
            return []
        number = int(section)
        return [str(number - 1), str(number + 1)]

    def fetch_similar_section_listings(
        self, team_name: str, opponent: str, game_date: str, section: str, adjacent_sections=None
    ) -> list[MarketListing]:
        listings = []
        for target in [section, *(adjacent_sections or [])]:
            listings.extend(self.fetch_seatgeek_listings(team_name, opponent, game_date, target))
            listings.extend(self.fetch_stubhub_listings(team_name, opponent, game_date, target))
        return sorted(listings, key=lambda listing: listing.price)

    def get_market_data_for_game(self, team_name: str, opponent: str, game_date: str, section: str) -> GameMarketData:
        listings = self.fetch_similar_section_listings(
            team_name, opponent, game_date, section, self.adjacent_sections(section)
        )
        return GameMarketData(
            game_date=game_date,
            opponent=opponent,
            venue=f"{team_name} Stadium",
            listings=listings,
        )
