import logging
from sqlalchemy.orm import Session
from seatledger.core.config import settings
from seatledger.core.utils import generate_custom_id, utc_now
from seatledger.core.db_utils import run_upsert
from seatledger.ledger.services.ledger_reader import LedgerReader
from seatledger.team_performance.models.team_performance_model import TeamPerformance
from seatledger.team_performance.services.performance_calculator import (
    PerformanceProfile,
    compute_team_performance,
)

logger = logging.getLogger(__name__)


class TeamPerformanceService:
    def __init__(self, db: Session):
        self.db = db
        self.reader = LedgerReader(db)

    def get_team_performance(self, team_id: str | None = None, season_id: str | None = None) -> list[TeamPerformance]:
        query = self.db.query(TeamPerformance)
        if team_id:
            query = query.filter(TeamPerformance.team_id == team_id)
        if season_id:
            query = query.filter(TeamPerformance.season_id == season_id)
        return query.order_by(TeamPerformance.team_performance_id).all()

    def calculate_team_performance(self, team_id: str, season_id: str) -> TeamPerformance:
        """Recompute the profile for a team season and overwrite the stored row."""
        games = self.reader.list_games(season_id)
        counts = self.reader.attendance_counts(game.game_id for game in games)
        profile = compute_team_performance(
            (counts[game.game_id] for game in games),
            win_threshold=settings.WIN_ATTENDANCE_THRESHOLD,
        )
        logger.info(
            "Team %s season %s: %s-%s over %s games",
            team_id, season_id, profile.wins, profile.losses, len(games),
        )
        return self.save_team_performance(team_id, season_id, profile)

    def save_team_performance(self, team_id: str, season_id: str, profile: PerformanceProfile) -> TeamPerformance:
        """Upsert on (team_id, season_id); a concurrent writer of the same key is overwritten."""
        return run_upsert(self.db, lambda: self._write_performance(team_id, season_id, profile))

    def _write_performance(self, team_id: str, season_id: str, profile: PerformanceProfile) -> TeamPerformance:
        performance = self._load_performance(team_id, season_id)
        if performance is None:
            performance = TeamPerformance(
                team_performance_id=generate_custom_id(self.db, TeamPerformance, "TP", "team_performance_id"),
                team_id=team_id,
                season_id=season_id,
            )
            self.db.add(performance)

        self._apply(performance, profile)
        self.db.commit()
        self.db.refresh(performance)
        return performance

    def _load_performance(self, team_id: str, season_id: str) -> TeamPerformance | None:
        return (
            self.db.query(TeamPerformance)
            .filter(
                TeamPerformance.team_id == team_id,
                TeamPerformance.season_id == season_id,
            )
            .first()
        )

    @staticmethod
    def _apply(row: TeamPerformance, profile: PerformanceProfile):
        row.wins = profile.wins
        row.losses = profile.losses
        row.win_percentage = profile.win_percentage
        row.average_attendance = profile.average_attendance
        row.market_demand = profile.market_demand
        row.playoff_probability = profile.playoff_probability
        row.last_updated = utc_now()


def profile_from_row(row: TeamPerformance | None) -> PerformanceProfile:
    if row is None:
        return PerformanceProfile()
    return PerformanceProfile(
        wins=row.wins or 0,
        losses=row.losses or 0,
        win_percentage=row.win_percentage or 0.0,
        average_attendance=row.average_attendance or 0,
        market_demand=row.market_demand or 0.0,
        playoff_probability=row.playoff_probability or 0.0,
    )
