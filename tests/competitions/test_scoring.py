"""Tests for workout points calculation.

Tests cover:
- Threshold flooring per unit family
- Session/Class units worth exactly one occurrence
- Daily cap headroom and exhaustion
- Configuration errors for mismatched or invalid rules
"""

from datetime import date

import pytest
from pydantic import ValidationError

from fitcomp.competitions.errors import InvalidRuleError, RuleMismatchError, UnknownActivityTypeError
from fitcomp.competitions.models import Rule
from fitcomp.competitions.scoring import compute_points, extract_value, find_rule, points_on_day, preview_points


@pytest.mark.parametrize(
    ("minutes", "expected"),
    [(25, 2), (9.9, 0), (30, 3), (45, 4), (0, 0)],
)
def test_minute_rule_floors_partial_thresholds(minute_rule, make_submission, minutes, expected):
    submission = make_submission(duration=minutes)
    assert compute_points(minute_rule, submission) == expected


def test_kilometre_rule(km_rule, make_submission):
    """3.5 km at 1 km = 2 points earns floor(3.5) * 2."""
    submission = make_submission(activity_type="Running", distance=3.5)
    assert compute_points(km_rule, submission) == 6


def test_hour_rule_reads_duration_in_minutes(make_submission):
    rule = Rule(activity_type="Cycling", unit="Hour", points_per_unit=5, units_per_point=1)
    assert compute_points(rule, make_submission(activity_type="Cycling", duration=90)) == 5
    assert compute_points(rule, make_submission(activity_type="Cycling", duration=120)) == 10
    assert compute_points(rule, make_submission(activity_type="Cycling", duration=59)) == 0


def test_calorie_rule_reads_calories(make_submission):
    rule = Rule(activity_type="HIIT", unit="Calorie", points_per_unit=1, units_per_point=100)
    submission = make_submission(activity_type="HIIT", duration=30, distance=5000, calories=450)
    assert compute_points(rule, submission) == 4


def test_count_units_read_distance_field(make_submission):
    rule = Rule(activity_type="Pushups", unit="Rep", points_per_unit=1, units_per_point=10)
    assert compute_points(rule, make_submission(activity_type="Pushups", duration=5, distance=35)) == 3


def test_custom_unit_scored_as_count(make_submission):
    rule = Rule(activity_type="Climbing", unit="Route", points_per_unit=3, units_per_point=1)
    assert compute_points(rule, make_submission(activity_type="Climbing", duration=60, distance=4)) == 12


def test_missing_quantity_defaults_to_zero(km_rule, make_submission):
    assert compute_points(km_rule, make_submission(activity_type="Running", duration=30)) == 0


@pytest.mark.parametrize("unit", ["Session", "Class"])
def test_occurrence_units_ignore_quantities(make_submission, unit):
    rule = Rule(activity_type="Yoga", unit=unit, points_per_unit=15, units_per_point=1)
    submission = make_submission(activity_type="Yoga", duration=240, distance=12, calories=900)
    assert extract_value(unit, submission) == 1
    assert compute_points(rule, submission) == 15


def test_decimal_thresholds_do_not_drift(make_submission):
    """0.3 km at 0.1 km per point is exactly 3 thresholds."""
    rule = Rule(activity_type="Swim", unit="Kilometre", points_per_unit=0.1, units_per_point=0.1)
    assert compute_points(rule, make_submission(activity_type="Swim", distance=0.3)) == 0.3


def test_cap_truncates_to_headroom(make_submission):
    """Cap 10 with 8 already earned leaves 2 of a 5 point workout."""
    rule = Rule(activity_type="Walking", unit="Minute", points_per_unit=1, units_per_point=10)
    submission = make_submission(duration=50)
    assert compute_points(rule, submission, prior_points_today=8, daily_cap=10) == 2


def test_exhausted_cap_awards_zero(minute_rule, make_submission):
    submission = make_submission(duration=50)
    assert compute_points(minute_rule, submission, prior_points_today=10, daily_cap=10) == 0
    assert compute_points(minute_rule, submission, prior_points_today=14, daily_cap=10) == 0


def test_cap_does_not_raise_small_awards(minute_rule, make_submission):
    submission = make_submission(duration=30)
    assert compute_points(minute_rule, submission, prior_points_today=0, daily_cap=10) == 3


def test_no_cap_ignores_prior_points(minute_rule, make_submission):
    submission = make_submission(duration=300)
    assert compute_points(minute_rule, submission, prior_points_today=1000) == 30


@pytest.mark.parametrize("prior", [0, 3, 7.5, 9, 10, 25])
@pytest.mark.parametrize("minutes", [0, 15, 60, 200])
def test_award_bounded_by_headroom_and_raw(minute_rule, make_submission, prior, minutes):
    breakdown = preview_points(minute_rule, make_submission(duration=minutes), prior, daily_cap=10)
    assert 0 <= breakdown.awarded_points <= max(0, 10 - prior)
    assert breakdown.awarded_points <= breakdown.raw_points


def test_same_inputs_same_result(km_rule, make_submission):
    submission = make_submission(activity_type="Running", distance=7.2)
    first = compute_points(km_rule, submission, 3, 10)
    second = compute_points(km_rule, submission, 3, 10)
    assert first == second == 7


def test_breakdown_reports_cap(minute_rule, make_submission):
    breakdown = preview_points(minute_rule, make_submission(duration=50), prior_points_today=8, daily_cap=10)
    assert breakdown.value == 50
    assert breakdown.thresholds == 5
    assert breakdown.raw_points == 5
    assert breakdown.awarded_points == 2
    assert breakdown.headroom == 2
    assert breakdown.capped is True
    assert breakdown.formula == "Minute ÷ 10 × 1"


def test_breakdown_without_cap(minute_rule, make_submission):
    breakdown = preview_points(minute_rule, make_submission(duration=50))
    assert breakdown.headroom is None
    assert breakdown.capped is False


def test_mismatched_rule_raises(km_rule, make_submission):
    with pytest.raises(RuleMismatchError) as exc_info:
        compute_points(km_rule, make_submission(activity_type="Walking", duration=30))
    assert exc_info.value.code == "RULE_MISMATCH"


def test_non_positive_threshold_raises(make_submission):
    """Rules normally cannot hold zero, so bypass validation the way a corrupt record would."""
    rule = Rule.model_construct(activity_type="Walking", unit="Minute", points_per_unit=1, units_per_point=0)
    with pytest.raises(InvalidRuleError) as exc_info:
        compute_points(rule, make_submission(duration=30))
    assert exc_info.value.code == "INVALID_RULE"


def test_negative_points_per_unit_raises(make_submission):
    rule = Rule.model_construct(activity_type="Walking", unit="Minute", points_per_unit=-1, units_per_point=10)
    with pytest.raises(InvalidRuleError):
        compute_points(rule, make_submission(duration=30))


def test_find_rule(competition):
    assert find_rule(competition, "Running").unit == "Kilometre"
    with pytest.raises(UnknownActivityTypeError):
        find_rule(competition, "running")


def test_points_on_day_filters_user_competition_and_day(make_submission):
    submissions = [
        make_submission(points=3, day=3),
        make_submission(points=4.5, day=3),
        make_submission(points=5, day=4),
        make_submission(points=7, day=3, user_id="bob"),
        make_submission(points=9, day=3, competition_id="comp-2"),
    ]
    assert points_on_day(submissions, "alice", "comp-1", date(2026, 3, 3)) == 7.5
    assert points_on_day(submissions, "alice", "comp-1", date(2026, 3, 5)) == 0


def test_non_finite_quantities_rejected_at_model_boundary(make_submission):
    with pytest.raises(ValidationError):
        make_submission(activity_type="Running", distance=float("inf"))
    with pytest.raises(ValidationError):
        make_submission(duration=float("nan"))
    with pytest.raises(ValidationError):
        Rule(activity_type="Walking", unit="Minute", points_per_unit=float("inf"), units_per_point=10)
    with pytest.raises(ValidationError):
        Rule.model_validate_json('{"type": "Walking", "unit": "Minute", "pointsPerUnit": 1, "unitsPerPoint": Infinity}')
