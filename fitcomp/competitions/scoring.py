"""Points calculation for logged workouts.

A rule converts one quantity of a submission into points:

    points = floor(value / units_per_point) * points_per_unit

Partial thresholds earn nothing. When the competition has a daily cap, the
award is truncated to whatever headroom remains for that user and day:

    awarded = max(0, min(points, daily_cap - prior_points_today))

Arithmetic runs on Decimal built from the decimal string of each input, so
values such as 0.3 km at 0.1 km per point floor to 3 rather than 2.

Everything here is pure: the caller supplies prior same-day points and the
rule lookup, and nothing is read from storage or the clock.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loguru import logger

from fitcomp.competitions.errors import InvalidRuleError, RuleMismatchError, UnknownActivityTypeError
from fitcomp.competitions.models import Competition, Rule, Submission
from fitcomp.competitions.units import QuantityKind, quantity_kind

MINUTES_PER_HOUR = Decimal(60)


@dataclass(frozen=True)
class PointsBreakdown:
    """Every intermediate of one points calculation.

    Used for the pre-submit preview; `capped` tells the caller the daily
    limit cut the award so a warning can be shown.
    """

    activity_type: str
    unit: str
    value: float
    units_per_point: float
    points_per_unit: float
    thresholds: int
    raw_points: float
    awarded_points: float
    headroom: float | None

    @property
    def capped(self) -> bool:
        return self.awarded_points < self.raw_points

    @property
    def formula(self) -> str:
        return f"{self.unit} ÷ {_format_number(self.units_per_point)} × {_format_number(self.points_per_unit)}"


def _format_number(number: float) -> str:
    return f"{number:g}"


def _decimal(number: float) -> Decimal:
    return Decimal(str(number))


def _quantity(unit: str, submission: Submission) -> Decimal:
    kind = quantity_kind(unit)
    if kind is QuantityKind.DISTANCE:
        return _decimal(submission.distance)
    if kind is QuantityKind.DURATION_MINUTES:
        return _decimal(submission.duration)
    if kind is QuantityKind.DURATION_HOURS:
        return _decimal(submission.duration) / MINUTES_PER_HOUR
    if kind is QuantityKind.CALORIES:
        return _decimal(submission.calories)
    return Decimal(1)


def extract_value(unit: str, submission: Submission) -> float:
    """Read the quantity a unit scores from a submission.

    Distance and count units read `distance`, Minute reads `duration`, Hour
    reads `duration` converted from minutes, Calorie reads `calories`, and
    Session/Class count as exactly one regardless of the other fields.
    """
    return float(_quantity(unit, submission))


def _check_rule(rule: Rule, submission: Submission) -> None:
    if rule.activity_type != submission.activity_type:
        logger.error(
            f"Rule/submission mismatch: rule={rule.activity_type!r} submission={submission.activity_type!r} "
            f"competition={submission.competition_id}"
        )
        raise RuleMismatchError(rule.activity_type, submission.activity_type)
    if rule.units_per_point <= 0:
        logger.error(f"Rule {rule.activity_type!r} has non-positive units_per_point={rule.units_per_point}")
        raise InvalidRuleError(rule.activity_type, f"units_per_point must be positive, got {rule.units_per_point}")
    if rule.points_per_unit <= 0:
        logger.error(f"Rule {rule.activity_type!r} has non-positive points_per_unit={rule.points_per_unit}")
        raise InvalidRuleError(rule.activity_type, f"points_per_unit must be positive, got {rule.points_per_unit}")


def preview_points(
    rule: Rule,
    submission: Submission,
    prior_points_today: float = 0.0,
    daily_cap: float | None = None,
) -> PointsBreakdown:
    """Score a submission and return the full breakdown.

    Args:
        rule: Rule whose activity type matches the submission
        submission: Workout carrying the raw quantities
        prior_points_today: Points already awarded to this user in this
            competition for the submission's calendar day
        daily_cap: Competition daily cap, or None for unlimited

    Returns:
        PointsBreakdown with the raw and awarded points

    Raises:
        RuleMismatchError: Rule is for a different activity type
        InvalidRuleError: Rule threshold or multiplier is not positive
    """
    _check_rule(rule, submission)

    value = _quantity(rule.unit, submission)
    thresholds = math.floor(value / _decimal(rule.units_per_point))
    raw_points = Decimal(thresholds) * _decimal(rule.points_per_unit)

    headroom: Decimal | None = None
    awarded = raw_points
    if daily_cap is not None:
        headroom = max(Decimal(0), _decimal(daily_cap) - _decimal(prior_points_today))
        awarded = min(raw_points, headroom)
        if awarded < raw_points:
            logger.debug(
                f"Daily cap reached for user={submission.user_id} day={submission.day}: "
                f"raw={raw_points} headroom={headroom} awarded={awarded}"
            )

    return PointsBreakdown(
        activity_type=rule.activity_type,
        unit=rule.unit,
        value=float(value),
        units_per_point=rule.units_per_point,
        points_per_unit=rule.points_per_unit,
        thresholds=thresholds,
        raw_points=float(raw_points),
        awarded_points=float(awarded),
        headroom=float(headroom) if headroom is not None else None,
    )


def compute_points(
    rule: Rule,
    submission: Submission,
    prior_points_today: float = 0.0,
    daily_cap: float | None = None,
) -> float:
    """Points to award a submission.

    Never negative. A cap that is already exhausted yields 0 rather than an
    error. See `preview_points` for arguments and raised errors.
    """
    return preview_points(rule, submission, prior_points_today, daily_cap).awarded_points


def find_rule(competition: Competition, activity_type: str) -> Rule:
    """Look up a competition's rule by exact activity type.

    Raises:
        UnknownActivityTypeError: No rule matches
    """
    for rule in competition.rules:
        if rule.activity_type == activity_type:
            return rule
    logger.error(f"No rule for activity {activity_type!r} in competition {competition.id}")
    raise UnknownActivityTypeError(competition.id, activity_type)


def points_on_day(
    submissions: Iterable[Submission],
    user_id: str,
    competition_id: str,
    day: date,
) -> float:
    """Sum of stored points for one user, competition and calendar day."""
    total = sum(
        (
            _decimal(submission.points)
            for submission in submissions
            if submission.user_id == user_id
            and submission.competition_id == competition_id
            and submission.day == day
        ),
        Decimal(0),
    )
    return float(total)
