"""Competition creation checks.

All checks run before anything is built so the caller gets every problem
in one `CompetitionValidationError` instead of the first one only.
"""

from __future__ import annotations

import math
import uuid
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta
from typing import Any

from loguru import logger

from fitcomp.competitions.errors import CompetitionValidationError
from fitcomp.competitions.models import Competition, Rule, as_utc

RuleInput = Rule | Mapping[str, Any]


def _rule_field(rule: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in rule:
            return rule[key]
    return None


def _positive(value: Any) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def validate_rule_inputs(rules: Sequence[RuleInput]) -> list[str]:
    """Collect problems with a set of rule inputs (empty list when valid)."""
    errors: list[str] = []
    if not rules:
        errors.append("At least one activity rule is required")
        return errors

    seen: set[str] = set()
    for index, rule in enumerate(rules, start=1):
        if isinstance(rule, Rule):
            activity_type = rule.activity_type
            unit = rule.unit
            points_per_unit = rule.points_per_unit
            units_per_point = rule.units_per_point
        else:
            activity_type = _rule_field(rule, "activityType", "activity_type", "type")
            unit = _rule_field(rule, "unit")
            points_per_unit = _rule_field(rule, "pointsPerUnit", "points_per_unit", "points")
            units_per_point = _rule_field(rule, "unitsPerPoint", "units_per_point")

        label = activity_type or f"rule {index}"
        if not activity_type or not str(activity_type).strip():
            errors.append(f"Rule {index}: activity type is required")
        elif activity_type in seen:
            errors.append(f"{label}: duplicate activity type")
        else:
            seen.add(activity_type)
        if not unit or not str(unit).strip():
            errors.append(f"{label}: unit is required")
        if not _positive(points_per_unit) or not _positive(units_per_point):
            errors.append(f"{label}: points and units-per-point must both be positive")
    return errors


def _build_rule(rule: RuleInput) -> Rule:
    if isinstance(rule, Rule):
        return rule
    return Rule(
        activity_type=_rule_field(rule, "activityType", "activity_type", "type"),
        unit=_rule_field(rule, "unit"),
        points_per_unit=float(_rule_field(rule, "pointsPerUnit", "points_per_unit", "points")),
        units_per_point=float(_rule_field(rule, "unitsPerPoint", "units_per_point")),
    )


def create_competition(
    owner_id: str,
    name: str,
    rules: Sequence[RuleInput],
    start_date: datetime,
    end_date: datetime | None = None,
    daily_cap: float | None = None,
    invitees: Iterable[str] = (),
    description: str = "",
    competition_id: str | None = None,
    default_days: int = 7,
) -> Competition:
    """Validate inputs and build a new competition.

    The owner is the only participant; invitees are pending until they accept.

    Args:
        owner_id: Creating user
        name: Competition name (required)
        rules: Rule models or rule documents
        start_date: Start of the submission window
        end_date: End of the window; defaults to `default_days` after start
        daily_cap: Optional positive per-user per-day points ceiling
        invitees: User ids to invite
        description: Free text
        competition_id: Id to use; a UUID is generated when omitted
        default_days: Window length when `end_date` is omitted

    Returns:
        New Competition

    Raises:
        CompetitionValidationError: One or more inputs are invalid
    """
    errors: list[str] = []
    if not name or not name.strip():
        errors.append("Competition name is required")

    errors.extend(validate_rule_inputs(rules))

    start_date = as_utc(start_date)
    if end_date is None:
        end_date = start_date + timedelta(days=default_days)
    end_date = as_utc(end_date)
    if end_date <= start_date:
        errors.append("End date must be after start date")

    if daily_cap is not None and not _positive(daily_cap):
        errors.append("Daily cap must be positive when set")

    pending: list[str] = []
    for invitee in invitees:
        if invitee == owner_id:
            errors.append("You cannot invite yourself")
        elif invitee in pending:
            errors.append(f"{invitee}: already invited")
        else:
            pending.append(invitee)

    if errors:
        logger.info(f"Rejected competition {name!r} from owner={owner_id}: {errors}")
        raise CompetitionValidationError(errors)

    competition = Competition(
        id=competition_id or str(uuid.uuid4()),
        name=name.strip(),
        description=description,
        owner_id=owner_id,
        rules=[_build_rule(rule) for rule in rules],
        daily_cap=float(daily_cap) if daily_cap is not None else None,
        start_date=start_date,
        end_date=end_date,
        participants=[owner_id],
        pending_participants=pending,
    )
    logger.info(f"Created competition id={competition.id} rules={len(competition.rules)} invited={len(pending)}")
    return competition
