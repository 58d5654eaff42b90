"""Competition domain models.

Field names are snake_case in Python and camelCase in stored documents
(`activityType`, `pointsPerUnit`, `dailyCap`, ...). Models are frozen:
the scoring core only reads them, and updates produce new copies.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored (Z-suffixed) dates."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


class CompetitionModel(BaseModel):
    """Base model with document-compatible aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        allow_inf_nan=False,
    )


class Rule(CompetitionModel):
    """Scoring rule for one activity type.

    `units_per_point` is the threshold size; every full threshold earns
    `points_per_unit` points.
    """

    activity_type: str = Field(
        min_length=1,
        validation_alias=AliasChoices("activityType", "activity_type", "type"),
        serialization_alias="type",
        description="Activity label, possibly user-entered; stored under the `type` key",
    )
    unit: str = Field(min_length=1, description="Standard unit name or a custom label")
    points_per_unit: float = Field(gt=0, description="Points awarded per threshold crossed")
    units_per_point: float = Field(gt=0, description="Size of one threshold in the rule's unit")


class Competition(CompetitionModel):
    id: str
    name: str
    description: str = ""
    owner_id: str
    rules: list[Rule] = Field(default_factory=list)
    daily_cap: float | None = Field(default=None, gt=0, description="Per-user per-day points ceiling; None means unlimited")
    start_date: datetime
    end_date: datetime
    participants: list[str] = Field(default_factory=list)
    pending_participants: list[str] = Field(default_factory=list)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_window(cls, value: datetime) -> datetime:
        return as_utc(value)

    @model_validator(mode="after")
    def check_unique_activity_types(self) -> Competition:
        seen: set[str] = set()
        for rule in self.rules:
            if rule.activity_type in seen:
                raise ValueError(f"duplicate rule for activity type '{rule.activity_type}'")
            seen.add(rule.activity_type)
        return self

    @property
    def activity_types(self) -> list[str]:
        return [rule.activity_type for rule in self.rules]

    def accepts(self, moment: datetime) -> bool:
        """Whether a workout dated `moment` falls inside the competition window."""
        return self.start_date <= as_utc(moment) <= self.end_date


class Submission(CompetitionModel):
    """One logged workout.

    `duration` is in minutes. `distance` doubles as the count field for
    steps, reps, sets and custom units. `points` is written once when the
    submission is created and never recomputed.
    """

    id: str | None = None
    competition_id: str
    user_id: str
    activity_type: str
    duration: float = Field(default=0.0, ge=0)
    distance: float = Field(default=0.0, ge=0)
    calories: float = Field(default=0.0, ge=0)
    unit: str | None = None
    points: float = Field(default=0.0, ge=0)
    notes: str = ""
    date: datetime
    created_at: datetime | None = None

    @field_validator("date", "created_at")
    @classmethod
    def normalize_dates(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @property
    def day(self) -> date:
        """Calendar day the workout counts toward."""
        return self.date.date()


class Standing(CompetitionModel):
    """Leaderboard row for one user. Derived, never stored."""

    user_id: str
    display_name: str
    total_points: float
    rank: int = Field(ge=1)
