import pytest

from src.workplus_analytics.workplus_analytics.analytics.rates import clamp, safe_rate, safe_ratio
from src.workplus_analytics.workplus_analytics.analytics.scoring import (
    HR_PERFORMANCE_WEIGHTS,
    HR_RATING_BANDS,
    PRODUCTIVITY_RATING_BANDS,
    PRODUCTIVITY_WEIGHTS,
    ScoreComponent,
    ScoreWeights,
    composite_score,
)


@pytest.mark.parametrize("denominator", [0, 0.0, None])
def test_zero_denominator_gives_exactly_zero(denominator):
    assert safe_rate(5, denominator) == 0
    assert safe_ratio(5, denominator) == 0


def test_safe_rate_is_a_percentage():
    assert safe_rate(1, 4) == 25.0


def test_clamp_bounds():
    assert clamp(-3) == 0
    assert clamp(150, 0, 100) == 100
    assert clamp(150) == 150


def test_hr_score_clamps_at_100_for_maximal_inputs():
    score = composite_score({"attendance_rate": 250, "leave_days": 0, "late_rate": 0}, HR_PERFORMANCE_WEIGHTS)

    assert score == pytest.approx(100)
    assert score <= 100


def test_productivity_score_clamps_at_100():
    score = composite_score(
        {"hourly_rate": 10_000, "jobs_per_month": 500, "total_earnings": 10_000_000},
        PRODUCTIVITY_WEIGHTS,
    )

    assert score == 100


def test_hr_score_weights():
    # 80% attendance, 15 leave days of 30, 10% late
    score = composite_score({"attendance_rate": 80, "leave_days": 15, "late_rate": 10}, HR_PERFORMANCE_WEIGHTS)

    assert score == pytest.approx(80 * 0.6 + 50 * 0.2 + 90 * 0.2)


def test_inverted_components_never_go_negative():
    score = composite_score({"attendance_rate": 0, "leave_days": 90, "late_rate": 300}, HR_PERFORMANCE_WEIGHTS)

    assert score == 0


def test_productivity_score_formula():
    score = composite_score(
        {"hourly_rate": 50, "jobs_per_month": 4, "total_earnings": 5000}, PRODUCTIVITY_WEIGHTS
    )

    assert score == pytest.approx(50 / 100 * 40 + 4 / 10 * 30 + 5000 / 10000 * 30)


def test_missing_components_count_as_zero():
    weights = ScoreWeights(components=(ScoreComponent("x", 1.0),))

    assert composite_score({}, weights) == 0


def test_rating_bands():
    assert HR_RATING_BANDS.rate(90) == "Excellent"
    assert HR_RATING_BANDS.rate(89.9) == "Good"
    assert HR_RATING_BANDS.rate(60) == "Average"
    assert HR_RATING_BANDS.rate(10) == "Needs Improvement"
    assert PRODUCTIVITY_RATING_BANDS.rate(80) == "Excellent"
    assert PRODUCTIVITY_RATING_BANDS.rate(40) == "Average"
