"""
Seat valuation heuristics.

Validates:
1. Baseline blending order and weights
2. Multipliers and factor tags
3. Confidence scorecard
"""

from datetime import date

import pytest

from seatledger.ledger.models.ledger_records import PricingRow, SeatRow
from seatledger.seat_predictions.services.value_model import (
    DEFAULT_BASELINE,
    FACTOR_TAGS,
    OpponentPricing,
    SeatPricingSummary,
    SimilarSeatsSummary,
    blend_baseline,
    compute_confidence,
    predict_seat_value,
    summarize_opponent_pricing,
    summarize_seat_pricing,
    summarize_similar_seat_stats,
    summarize_similar_seats,
)
from seatledger.team_performance.services.performance_calculator import PerformanceProfile

TODAY = date(2024, 11, 1)


def seat(seat_id="ST1", section="101", row="1", license_cost=None):
    return SeatRow(seat_id=seat_id, team_id="T1", section=section, row=row, number="1", license_cost=license_cost)


def opponents(avg=200.0, count=3):
    return [OpponentPricing(opponent=f"Opp{i}", avg_sold_price=avg, game_count=2) for i in range(count)]


class TestBlendBaseline:

    def test_no_data_uses_default(self):
        baseline = blend_baseline(None, SeatPricingSummary("ST1"), SimilarSeatsSummary(), [])
        assert baseline == DEFAULT_BASELINE

    def test_license_cost_is_starting_point(self):
        assert blend_baseline(750.0, SeatPricingSummary("ST1"), SimilarSeatsSummary(), []) == 750.0

    def test_full_blend(self):
        similar = SimilarSeatsSummary(count=2, avg_current_price=50.0, recent_avg_price=40.0)
        own = SeatPricingSummary("ST1", has_history=True, avg_sold_price=200.0, sales_count=3)

        assert blend_baseline(1000.0, SeatPricingSummary("ST1"), similar, []) == pytest.approx(523.0)
        assert blend_baseline(1000.0, own, similar, []) == pytest.approx(426.1)
        assert blend_baseline(1000.0, own, similar, opponents()) == pytest.approx(392.185)

    def test_sold_price_fallback_when_no_current_or_recent(self):
        similar = SimilarSeatsSummary(count=1, avg_sold_price=80.0)
        assert blend_baseline(None, SeatPricingSummary("ST1"), similar, []) == pytest.approx(96.0)

    def test_similar_weight_is_capped(self):
        similar = SimilarSeatsSummary(count=10, avg_sold_price=200.0)
        assert blend_baseline(100.0, SeatPricingSummary("ST1"), similar, []) == pytest.approx(140.0)

    def test_own_weight_is_capped(self):
        own = SeatPricingSummary("ST1", has_history=True, avg_sold_price=200.0, sales_count=20)
        assert blend_baseline(100.0, own, SimilarSeatsSummary(), []) == pytest.approx(160.0)

    def test_too_few_opponents_ignored(self):
        assert blend_baseline(100.0, SeatPricingSummary("ST1"), SimilarSeatsSummary(), opponents(count=2)) == 100.0


class TestSummaries:

    def test_seat_pricing_summary(self):
        rows = [
            PricingRow("G1", "ST1", "S1", cost=50.0, sold_price=80.0),
            PricingRow("G2", "ST1", "S1", cost=70.0, sold_price=None),
        ]
        summary = summarize_seat_pricing(rows)["ST1"]
        assert summary.has_history
        assert summary.avg_cost == 60.0
        assert summary.avg_sold_price == 80.0
        assert summary.max_sold_price == 80.0
        assert summary.sales_count == 1

    def test_similar_stats_recent_window(self):
        rows = [
            PricingRow("G1", "ST2", "S1", game_date=date(2024, 10, 20), cost=60.0, sold_price=90.0),
            PricingRow("G2", "ST2", "S1", game_date=date(2024, 8, 1), cost=40.0, sold_price=50.0),
            PricingRow("G1", "ST9", "S1", game_date=date(2024, 10, 20), cost=10.0, sold_price=10.0),
        ]
        seats_by_id = {"ST2": seat("ST2", row="2")}

        [stats] = summarize_similar_seat_stats(rows, seats_by_id, TODAY)

        assert stats.seat_id == "ST2"
        assert stats.avg_sold_price == 70.0
        assert stats.avg_current_price == 50.0
        assert stats.recent_avg_price == 90.0
        assert stats.sales_count == 2

    def test_similar_seats_exclude_target_and_other_sections(self):
        rows = [
            PricingRow("G1", "ST1", "S1", game_date=TODAY, cost=100.0, sold_price=100.0),
            PricingRow("G1", "ST2", "S1", game_date=TODAY, cost=60.0, sold_price=80.0),
            PricingRow("G1", "ST3", "S1", game_date=TODAY, cost=500.0, sold_price=500.0),
        ]
        seats_by_id = {
            "ST1": seat("ST1"),
            "ST2": seat("ST2", row="2"),
            "ST3": seat("ST3", section="300"),
        }
        stats = summarize_similar_seat_stats(rows, seats_by_id, TODAY)

        summary = summarize_similar_seats(seats_by_id["ST1"], stats)

        assert summary.count == 1
        assert summary.avg_current_price == 60.0
        assert summary.sales_count == 1

    def test_opponent_needs_two_games(self):
        rows = [
            PricingRow("G1", "ST1", "S1", opponent="Bears", cost=10.0, sold_price=100.0),
            PricingRow("G2", "ST1", "S1", opponent="Bears", cost=10.0, sold_price=200.0),
            PricingRow("G3", "ST1", "S1", opponent="Lions", cost=10.0, sold_price=300.0),
            PricingRow("G4", "ST1", "S1", opponent="Lions", cost=10.0, sold_price=None),
        ]
        [bears] = summarize_opponent_pricing(rows)
        assert bears.opponent == "Bears"
        assert bears.avg_sold_price == 150.0
        assert bears.game_count == 2


class TestPrediction:

    def test_no_data_at_all(self):
        estimate = predict_seat_value(seat(), None, SimilarSeatsSummary(), [], PerformanceProfile())

        assert estimate.baseline_value == 100.0
        assert estimate.predicted_value == 100.0
        assert estimate.performance_multiplier == 1.0
        assert estimate.demand_multiplier == 1.0
        assert estimate.similar_seats_multiplier == 1.0
        assert estimate.confidence_score == 0.0
        assert estimate.factors_considered == []

    def test_multipliers(self):
        performance = PerformanceProfile(wins=2, losses=2, win_percentage=0.5, average_attendance=3, market_demand=2.53)
        similar = SimilarSeatsSummary(count=1, avg_sold_price=80.0, sales_count=5)

        estimate = predict_seat_value(seat(license_cost=100.0), None, similar, [], performance)

        assert estimate.performance_multiplier == pytest.approx(1.503)
        assert estimate.demand_multiplier == pytest.approx(1.4095, abs=0.001)
        assert estimate.similar_seats_multiplier == pytest.approx(1.1)
        assert estimate.predicted_value == pytest.approx(96.0 * 1.503 * 1.4095 * 1.1, abs=0.01)

    def test_factor_tags_follow_canonical_order(self):
        performance = PerformanceProfile(wins=4, losses=0, win_percentage=1.0, average_attendance=5, market_demand=5.05)
        own = SeatPricingSummary("ST1", has_history=True, avg_sold_price=100.0, sales_count=5)
        similar = SimilarSeatsSummary(count=4, avg_current_price=90.0, recent_avg_price=95.0, sales_count=8)

        estimate = predict_seat_value(seat(license_cost=500.0), own, similar, opponents(), performance)

        assert estimate.factors_considered == list(FACTOR_TAGS)
        assert estimate.confidence_score == 100.0


class TestConfidence:

    def test_partial_scorecard(self):
        own = SeatPricingSummary("ST1", has_history=True, avg_sold_price=80.0, sales_count=1)
        similar = SimilarSeatsSummary(count=1, avg_current_price=60.0)

        score = compute_confidence(own, similar, [], PerformanceProfile())

        assert score == 4 + 8 + 15

    def test_history_without_sales_scores_zero_points(self):
        own = SeatPricingSummary("ST1", has_history=True, sales_count=0)
        assert compute_confidence(own, SimilarSeatsSummary(), [], PerformanceProfile()) == 0.0

    def test_team_performance_counts_only_with_games(self):
        recorded = PerformanceProfile(wins=0, losses=3)
        assert compute_confidence(SeatPricingSummary("ST1"), SimilarSeatsSummary(), [], recorded) == 10.0
        assert compute_confidence(SeatPricingSummary("ST1"), SimilarSeatsSummary(), [], PerformanceProfile()) == 0.0
