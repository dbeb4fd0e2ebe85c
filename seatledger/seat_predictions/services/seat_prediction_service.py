import logging
from datetime import date, datetime, timedelta
from sqlalchemy.orm import Session
from seatledger.core.config import settings
from seatledger.core.utils import generate_custom_id, utc_now
from seatledger.core.db_utils import run_upsert
from seatledger.ledger.services.ledger_reader import LedgerReader
from seatledger.market_data.services.market_data_service import MarketDataService
from seatledger.seat_predictions.models.seat_value_prediction_model import SeatValuePrediction
from seatledger.seat_predictions.models.similar_prices import SimilarSeatPrice, GameSimilarPrices
from seatledger.seat_predictions.services.prediction_cache import PredictionCache
from seatledger.seat_predictions.services import value_model
from seatledger.team_performance.services.team_performance_service import TeamPerformanceService, profile_from_row

logger = logging.getLogger(__name__)


class SeatPredictionService:
    def __init__(self, db: Session, market_data: MarketDataService | None = None):
        self.db = db
        self.reader = LedgerReader(db)
        self.team_performance_service = TeamPerformanceService(db)
        self.market_data = market_data
        self.cache = PredictionCache(
            load=lambda key: self._load_prediction(*key),
            recompute=lambda key: self.calculate_seat_value_predictions(key[1]),
            ttl=timedelta(days=settings.PREDICTION_TTL_DAYS),
        )

    def get_seat_value_predictions(self, seat_id: str | None = None, season_id: str | None = None) -> list[SeatValuePrediction]:
        query = self.db.query(SeatValuePrediction)
        if seat_id:
            query = query.filter(SeatValuePrediction.seat_id == seat_id)
        if season_id:
            query = query.filter(SeatValuePrediction.season_id == season_id)
        return query.order_by(SeatValuePrediction.prediction_id).all()

    def get_predicted_seat_value(self, seat_id: str, season_id: str, now: datetime | None = None) -> SeatValuePrediction | None:
        """Stored prediction while valid; otherwise the season is recomputed first."""
        return self.cache.get_or_recompute((seat_id, season_id), now=now)

    def calculate_seat_value_predictions(self, season_id: str, today: date | None = None,
                                         now: datetime | None = None) -> list[SeatValuePrediction]:
        """Predict and store a value for every seat of the season's team."""
        season = self.reader.get_season(season_id)
        if not season:
            raise LookupError(f"Season {season_id} not found")

        today = today or date.today()
        now = now or utc_now()

        stored = self.team_performance_service.get_team_performance(season.team_id, season_id)
        if stored:
            performance_row = stored[0]
        else:
            performance_row = self.team_performance_service.calculate_team_performance(season.team_id, season_id)
        performance = profile_from_row(performance_row)

        seats = self.reader.list_seats(season.team_id)
        seats_by_id = {seat.seat_id: seat for seat in seats}
        season_pricing = [p for p in self.reader.list_game_pricing(season_id=season_id) if p.seat_id in seats_by_id]

        own_pricing = value_model.summarize_seat_pricing(season_pricing)
        seat_stats = value_model.summarize_similar_seat_stats(season_pricing, seats_by_id, today)
        opponents = value_model.summarize_opponent_pricing(self.reader.list_game_pricing(team_id=season.team_id))

        predictions = []
        for seat in seats:
            estimate = value_model.predict_seat_value(
                seat,
                own_pricing.get(seat.seat_id),
                value_model.summarize_similar_seats(seat, seat_stats),
                opponents,
                performance,
            )
            predictions.append(self.save_prediction(season_id, estimate, now))

        logger.info(f"Calculated {len(predictions)} seat value predictions for season {season_id}")
        return predictions

    def save_prediction(self, season_id: str, estimate: value_model.SeatValueEstimate, now: datetime) -> SeatValuePrediction:
        """Upsert on (seat_id, season_id); a concurrent writer of the same key is overwritten."""
        return run_upsert(self.db, lambda: self._write_prediction(season_id, estimate, now))

    def _write_prediction(self, season_id: str, estimate: value_model.SeatValueEstimate, now: datetime) -> SeatValuePrediction:
        prediction = self._load_prediction(estimate.seat_id, season_id)
        if prediction is None:
            prediction = SeatValuePrediction(
                prediction_id=generate_custom_id(self.db, SeatValuePrediction, "SVP", "prediction_id"),
                seat_id=estimate.seat_id,
                season_id=season_id,
            )
            self.db.add(prediction)

        prediction.predicted_value = estimate.predicted_value
        prediction.confidence_score = estimate.confidence_score
        prediction.baseline_value = estimate.baseline_value
        prediction.performance_multiplier = estimate.performance_multiplier
        prediction.demand_multiplier = estimate.demand_multiplier
        prediction.similar_seats_multiplier = estimate.similar_seats_multiplier
        prediction.factors_considered = list(estimate.factors_considered)
        prediction.calculated_at = now
        prediction.valid_until = self.cache.valid_until(now)

        self.db.commit()
        self.db.refresh(prediction)
        return prediction

    def get_similar_ticket_prices(self, seat_id: str, season_id: str) -> list[GameSimilarPrices]:
        """Prices of comparable seats for each game of the season, with live listings when available."""
        target = self.reader.get_seat(seat_id)
        if not target:
            return []

        team_seats = {seat.seat_id: seat for seat in self.reader.list_seats(target.team_id)}
        pricing = self.reader.list_game_pricing(season_id=season_id)

        games = []
        for game in self.reader.list_games(season_id):
            similar = []
            for row in pricing:
                seat = team_seats.get(row.seat_id)
                if row.game_id != game.game_id or seat is None or not value_model.is_similar_seat(seat, target):
                    continue
                similar.append(SimilarSeatPrice(
                    seat_id=seat.seat_id,
                    section=seat.section,
                    row=seat.row,
                    number=seat.number,
                    current_price=row.cost,
                    sold=row.is_sale,
                ))
            if similar:
                games.append(GameSimilarPrices(
                    game_id=game.game_id,
                    game_date=game.date.isoformat(),
                    opponent=game.opponent,
                    similar_seats=similar,
                ))

        if self.market_data is not None and self.market_data.is_configured():
            self._add_market_listings(games, target, season_id)
        return games

    def _add_market_listings(self, games, target, season_id: str):
        season = self.reader.get_season(season_id)
        if not season or not season.team_name:
            return
        for game in games:
            market = self.market_data.get_market_data_for_game(
                season.team_name, game.opponent, game.game_date, target.section
            )
            if not market.listings:
                continue
            game.similar_seats.extend(
                SimilarSeatPrice(
                    seat_id=None,
                    section=listing.section,
                    row=listing.row,
                    number=f"{listing.quantity} tickets",
                    current_price=listing.price,
                    sold=False,
                    marketplace=listing.marketplace,
                    seller=listing.seller,
                    url=listing.url,
                )
                for listing in market.listings
            )
            game.similar_seats.sort(key=lambda s: s.current_price)

    def _load_prediction(self, seat_id: str, season_id: str) -> SeatValuePrediction | None:
        return (
            self.db.query(SeatValuePrediction)
            .filter(
                SeatValuePrediction.seat_id == seat_id,
                SeatValuePrediction.season_id == season_id,
            )
            .first()
        )
