from dataclasses import dataclass
from seatledger.core.utils import clamp

MAX_RECORD = 999
MAX_AVERAGE_ATTENDANCE = 100000


@dataclass(frozen=True)
class PerformanceProfile:
    wins: int = 0
    losses: int = 0
    win_percentage: float = 0.0
    average_attendance: int = 0
    market_demand: float = 0.0
    playoff_probability: float = 0.0

    @property
    def games_recorded(self) -> int:
        return self.wins + self.losses


def compute_team_performance(attendance_per_game, win_threshold: int = 3) -> PerformanceProfile:
    """
    Build a win/loss/demand profile from attendance counts, one count per game.

    There is no score data, so a game with at least ``win_threshold`` attendance
    rows is recorded as a win and anything below as a loss.
    """
    wins = 0
    losses = 0
    total_attendance = 0
    game_count = 0

    for attendance_count in attendance_per_game:
        total_attendance += attendance_count
        game_count += 1
        if attendance_count >= win_threshold:
            wins += 1
        else:
            losses += 1

    games_played = wins + losses
    win_percentage = wins / games_played if games_played > 0 else 0.0
    average_attendance = (
        int(clamp(int(total_attendance / game_count + 0.5), 0, MAX_AVERAGE_ATTENDANCE)) if game_count > 0 else 0
    )
    market_demand = clamp(win_percentage * 5 + min(average_attendance / 100, 5), 0, 10)
    playoff_probability = clamp(win_percentage * 100 + market_demand * 2, 0, 100)

    return PerformanceProfile(
        wins=min(wins, MAX_RECORD),
        losses=min(losses, MAX_RECORD),
        win_percentage=round(win_percentage, 3),
        average_attendance=average_attendance,
        market_demand=round(market_demand, 2),
        playoff_probability=round(playoff_probability, 2),
    )
