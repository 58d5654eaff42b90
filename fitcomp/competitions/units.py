"""Measurement units for activity rules.

A rule's unit decides which submission quantity is scored. Units outside the
standard catalogue are allowed (users type their own) and are scored as
counts read from the distance field.
"""

from __future__ import annotations

from enum import StrEnum


class Unit(StrEnum):
    """Standard measurement units offered when creating a rule."""

    MINUTE = "Minute"
    HOUR = "Hour"
    KILOMETRE = "Kilometre"
    MILE = "Mile"
    METER = "Meter"
    YARD = "Yard"
    STEP = "Step"
    REP = "Rep"
    SET = "Set"
    CALORIE = "Calorie"
    SESSION = "Session"
    CLASS = "Class"


class QuantityKind(StrEnum):
    """Which submission field a unit reads."""

    DISTANCE = "distance"
    DURATION_MINUTES = "duration_minutes"
    DURATION_HOURS = "duration_hours"
    CALORIES = "calories"
    OCCURRENCE = "occurrence"


_QUANTITY_KINDS: dict[Unit, QuantityKind] = {
    Unit.KILOMETRE: QuantityKind.DISTANCE,
    Unit.MILE: QuantityKind.DISTANCE,
    Unit.METER: QuantityKind.DISTANCE,
    Unit.YARD: QuantityKind.DISTANCE,
    Unit.STEP: QuantityKind.DISTANCE,
    Unit.REP: QuantityKind.DISTANCE,
    Unit.SET: QuantityKind.DISTANCE,
    Unit.MINUTE: QuantityKind.DURATION_MINUTES,
    Unit.HOUR: QuantityKind.DURATION_HOURS,
    Unit.CALORIE: QuantityKind.CALORIES,
    Unit.SESSION: QuantityKind.OCCURRENCE,
    Unit.CLASS: QuantityKind.OCCURRENCE,
}

_INPUT_LABELS: dict[Unit, str] = {
    Unit.KILOMETRE: "Distance (km)",
    Unit.MILE: "Distance (miles)",
    Unit.METER: "Distance (meters)",
    Unit.YARD: "Distance (yards)",
    Unit.STEP: "Steps",
    Unit.REP: "Reps",
    Unit.SET: "Sets",
}

_RULE_HINTS: dict[Unit, str] = {
    Unit.MINUTE: "e.g., 10 minutes = 1 point",
    Unit.HOUR: "e.g., 1 hour = 5 points",
    Unit.KILOMETRE: "e.g., 1 km = 1 point",
    Unit.MILE: "e.g., 1 mile = 2 points",
    Unit.METER: "e.g., 100 meters = 1 point",
    Unit.YARD: "e.g., 100 yards = 1 point",
    Unit.STEP: "e.g., 1000 steps = 1 point",
    Unit.REP: "e.g., 10 reps = 1 point",
    Unit.SET: "e.g., 1 set = 2 points",
    Unit.CALORIE: "e.g., 100 calories = 1 point",
    Unit.SESSION: "e.g., 1 session = 10 points",
    Unit.CLASS: "e.g., 1 class = 15 points",
}


def parse_unit(unit: str) -> Unit | None:
    """Return the standard unit for a label, or None for a custom unit."""
    try:
        return Unit(unit)
    except ValueError:
        return None


def quantity_kind(unit: str) -> QuantityKind:
    """Map a unit label to the submission quantity it reads.

    Custom labels are treated as counts (distance field).
    """
    standard = parse_unit(unit)
    if standard is None:
        return QuantityKind.DISTANCE
    return _QUANTITY_KINDS[standard]


def input_label(unit: str) -> str:
    """Label for the quantity input shown next to a distance/count unit."""
    standard = parse_unit(unit)
    if standard is None:
        return "Value"
    return _INPUT_LABELS.get(standard, "Value")


def rule_hint(unit: str) -> str:
    """Placeholder text shown when entering a rule for this unit."""
    standard = parse_unit(unit)
    if standard is None:
        return "Enter points value"
    return _RULE_HINTS[standard]


def points_label(unit: str) -> str:
    return f"Points per {unit.lower()}"
