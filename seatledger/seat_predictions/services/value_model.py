"""
Heuristic seat valuation.

A seat's baseline starts at its license cost and is blended, in order, with
comparable-seat pricing, the seat's own sales and opponent pricing trends. The
baseline is then scaled by team performance, demand and comparable-seat sales
activity. The confidence score is an additive scorecard of which inputs had data.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from seatledger.core.utils import safe_mean
from seatledger.team_performance.services.performance_calculator import PerformanceProfile

DEFAULT_BASELINE = 100.0
RECENT_SALES_WINDOW_DAYS = 30
MIN_GAMES_PER_OPPONENT = 2
MIN_QUALIFYING_OPPONENTS = 3

CURRENT_PRICE_WEIGHT = 0.3
RECENT_PRICE_WEIGHT = 0.2
SIMILAR_WEIGHT_PER_SEAT = 0.2
MAX_SIMILAR_WEIGHT = 0.4
OWN_WEIGHT_PER_SALE = 0.1
MAX_OWN_WEIGHT = 0.6
OPPONENT_WEIGHT = 0.15

FACTOR_TAGS = (
    "team_performance",
    "historical_pricing",
    "similar_seats_data",
    "current_market_pricing",
    "recent_pricing_trends",
    "opponent_specific_data",
    "market_demand",
    "attendance_data",
)


@dataclass(frozen=True)
class SeatPricingSummary:
    seat_id: str
    has_history: bool = False
    avg_cost: float = 0.0
    avg_sold_price: float | None = None
    max_sold_price: float | None = None
    sales_count: int = 0


@dataclass(frozen=True)
class SimilarSeatStats:
    seat_id: str
    section: str
    row: str
    avg_sold_price: float = 0.0
    avg_current_price: float = 0.0
    recent_avg_price: float = 0.0
    sales_count: int = 0


@dataclass(frozen=True)
class SimilarSeatsSummary:
    count: int = 0
    avg_sold_price: float = 0.0
    avg_current_price: float = 0.0
    recent_avg_price: float = 0.0
    sales_count: int = 0


@dataclass(frozen=True)
class OpponentPricing:
    opponent: str
    avg_sold_price: float = 0.0
    avg_cost: float = 0.0
    sales_count: int = 0
    game_count: int = 0


@dataclass(frozen=True)
class SeatValueEstimate:
    seat_id: str
    predicted_value: float = 0.0
    confidence_score: float = 0.0
    baseline_value: float = 0.0
    performance_multiplier: float = 1.0
    demand_multiplier: float = 1.0
    similar_seats_multiplier: float = 1.0
    factors_considered: list[str] = field(default_factory=list)


def _group_by_seat(pricing_rows) -> dict:
    grouped = defaultdict(list)
    for row in pricing_rows:
        grouped[row.seat_id].append(row)
    return grouped


def _sold_prices(rows) -> list[float]:
    return [row.sold_price for row in rows if row.sold_price is not None]


def summarize_seat_pricing(pricing_rows) -> dict[str, SeatPricingSummary]:
    summaries = {}
    for seat_id, rows in _group_by_seat(pricing_rows).items():
        sold = _sold_prices(rows)
        summaries[seat_id] = SeatPricingSummary(
            seat_id=seat_id,
            has_history=True,
            avg_cost=safe_mean(row.cost for row in rows),
            avg_sold_price=safe_mean(sold) if sold else None,
            max_sold_price=max(sold) if sold else None,
            sales_count=sum(1 for row in rows if row.is_sale),
        )
    return summaries


def summarize_similar_seat_stats(pricing_rows, seats_by_id, today: date) -> list[SimilarSeatStats]:
    """Per-seat pricing stats for every priced seat that is known to ``seats_by_id``."""
    recent_cutoff = today - timedelta(days=RECENT_SALES_WINDOW_DAYS)
    stats = []
    for seat_id, rows in _group_by_seat(pricing_rows).items():
        seat = seats_by_id.get(seat_id)
        if seat is None:
            continue
        recent = _sold_prices(r for r in rows if r.game_date is not None and r.game_date >= recent_cutoff)
        stats.append(SimilarSeatStats(
            seat_id=seat_id,
            section=seat.section,
            row=seat.row,
            avg_sold_price=safe_mean(_sold_prices(rows)),
            avg_current_price=safe_mean(row.cost for row in rows),
            recent_avg_price=safe_mean(recent),
            sales_count=sum(1 for row in rows if row.is_sale),
        ))
    return stats


def is_similar_seat(candidate, target) -> bool:
    """Another seat in the target's section; adjacent rows of that section are included."""
    return candidate.seat_id != target.seat_id and candidate.section == target.section


def summarize_similar_seats(target, seat_stats) -> SimilarSeatsSummary:
    similar = [s for s in seat_stats if is_similar_seat(s, target)]
    if not similar:
        return SimilarSeatsSummary()
    return SimilarSeatsSummary(
        count=len(similar),
        avg_sold_price=safe_mean(s.avg_sold_price for s in similar),
        avg_current_price=safe_mean(s.avg_current_price for s in similar),
        recent_avg_price=safe_mean(s.recent_avg_price for s in similar),
        sales_count=sum(s.sales_count for s in similar),
    )


def summarize_opponent_pricing(pricing_rows) -> list[OpponentPricing]:
    """Sold-price averages per opponent, kept only for opponents seen in enough games."""
    by_opponent = defaultdict(list)
    for row in pricing_rows:
        if row.sold_price is None:
            continue
        by_opponent[row.opponent].append(row)

    opponents = []
    for opponent, rows in sorted(by_opponent.items()):
        game_count = len({row.game_id for row in rows})
        if game_count < MIN_GAMES_PER_OPPONENT:
            continue
        opponents.append(OpponentPricing(
            opponent=opponent,
            avg_sold_price=safe_mean(row.sold_price for row in rows),
            avg_cost=safe_mean(row.cost for row in rows),
            sales_count=sum(1 for row in rows if row.is_sale),
            game_count=game_count,
        ))
    return opponents


def blend(base: float, source: float, weight: float) -> float:
    return base * (1 - weight) + source * weight


def blend_baseline(license_cost, own: SeatPricingSummary, similar: SimilarSeatsSummary, opponents) -> float:
    baseline = DEFAULT_BASELINE if license_cost is None else license_cost

    if similar.avg_current_price > 0 and similar.recent_avg_price > 0:
        baseline = (
            baseline * (1 - CURRENT_PRICE_WEIGHT - RECENT_PRICE_WEIGHT)
            + similar.avg_current_price * CURRENT_PRICE_WEIGHT
            + similar.recent_avg_price * RECENT_PRICE_WEIGHT
        )
    elif similar.avg_sold_price > 0:
        weight = min(similar.count * SIMILAR_WEIGHT_PER_SEAT, MAX_SIMILAR_WEIGHT)
        baseline = blend(baseline, similar.avg_sold_price, weight)

    if own.avg_sold_price is not None:
        weight = min(own.sales_count * OWN_WEIGHT_PER_SALE, MAX_OWN_WEIGHT)
        baseline = blend(baseline, own.avg_sold_price, weight)

    opponent_avg = safe_mean(o.avg_sold_price for o in opponents)
    if opponent_avg > 0 and len(opponents) >= MIN_QUALIFYING_OPPONENTS:
        baseline = blend(baseline, opponent_avg, OPPONENT_WEIGHT)

    return baseline


def performance_multiplier(performance: PerformanceProfile) -> float:
    return 1 + performance.win_percentage * 0.5 + performance.market_demand * 0.1


def demand_multiplier(performance: PerformanceProfile) -> float:
    return 1 + performance.market_demand * 0.15 + performance.average_attendance * 0.01


def similar_seats_multiplier(similar: SimilarSeatsSummary) -> float:
    return 1 + similar.sales_count * 0.02 if similar.sales_count > 0 else 1.0


def evaluate_factors(own, similar, opponents, performance) -> dict[str, bool]:
    return {
        "team_performance": performance.games_recorded > 0,
        "historical_pricing": own.has_history,
        "similar_seats_data": similar.count > 0,
        "current_market_pricing": similar.avg_current_price > 0,
        "recent_pricing_trends": similar.recent_avg_price > 0,
        "opponent_specific_data": len(opponents) >= MIN_QUALIFYING_OPPONENTS,
        "market_demand": performance.market_demand > 0,
        "attendance_data": performance.average_attendance > 0,
    }


def compute_confidence(own, similar, opponents, performance) -> float:
    """Additive scorecard; the caps add up to 100 and the sum is not clamped."""
    factors = evaluate_factors(own, similar, opponents, performance)
    score = 0
    if factors["historical_pricing"]:
        score += min(own.sales_count * 4, 20)
    if factors["similar_seats_data"]:
        score += min(similar.count * 8, 25)
    if factors["current_market_pricing"]:
        score += 15
    if factors["recent_pricing_trends"]:
        score += 10
    if factors["opponent_specific_data"]:
        score += 15
    if factors["team_performance"]:
        score += 10
    if factors["attendance_data"]:
        score += 5
    return float(score)


def predict_seat_value(seat, own, similar, opponents, performance) -> SeatValueEstimate:
    own = own or SeatPricingSummary(seat_id=seat.seat_id)
    baseline = blend_baseline(seat.license_cost, own, similar, opponents)
    perf_mult = performance_multiplier(performance)
    demand_mult = demand_multiplier(performance)
    similar_mult = similar_seats_multiplier(similar)
    factors = evaluate_factors(own, similar, opponents, performance)

    return SeatValueEstimate(
        seat_id=seat.seat_id,
        predicted_value=round(baseline * perf_mult * demand_mult * similar_mult, 2),
        confidence_score=round(compute_confidence(own, similar, opponents, performance), 2),
        baseline_value=round(baseline, 2),
        performance_multiplier=round(perf_mult, 3),
        demand_multiplier=round(demand_mult, 3),
        similar_seats_multiplier=round(similar_mult, 3),
        factors_considered=[tag for tag in FACTOR_TAGS if factors[tag]],
    )
