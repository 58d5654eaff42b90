"""Turning a logged workout into a scored submission.

`build_submission` is what runs when a user presses submit: validate the
draft against the competition, look up the rule, and freeze the awarded
points onto a new Submission.

Daily-cap headroom comes from the prior submissions the caller passes in.
Two concurrent builds for the same user and day can both see the same
headroom; callers that need exact cap enforcement should funnel drafts
through `score_in_order` (or a store transaction) so each one sees the
points awarded before it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from loguru import logger
from pydantic import Field, field_validator

from fitcomp.competitions.errors import SubmissionValidationError
from fitcomp.competitions.models import Competition, CompetitionModel, Submission, as_utc
from fitcomp.competitions.scoring import PointsBreakdown, find_rule, points_on_day, preview_points


class SubmissionDraft(CompetitionModel):
    """Workout as entered, before scoring."""

    user_id: str
    activity_type: str
    duration: float = Field(default=0.0, ge=0)
    distance: float = Field(default=0.0, ge=0)
    calories: float = Field(default=0.0, ge=0)
    notes: str = ""
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        return as_utc(value)


def _as_submission(competition: Competition, draft: SubmissionDraft, **extra) -> Submission:
    return Submission(
        competition_id=competition.id,
        user_id=draft.user_id,
        activity_type=draft.activity_type,
        duration=draft.duration,
        distance=draft.distance,
        calories=draft.calories,
        notes=draft.notes,
        date=draft.date,
        **extra,
    )


def _validate_draft(competition: Competition, draft: SubmissionDraft) -> None:
    if draft.user_id != competition.owner_id and draft.user_id not in competition.participants:
        raise SubmissionValidationError(f"User {draft.user_id} is not a participant in {competition.name}")
    if draft.duration <= 0:
        raise SubmissionValidationError("Please enter workout duration")
    if not competition.accepts(draft.date):
        raise SubmissionValidationError(
            f"Workout date {draft.date.date().isoformat()} is outside the competition window "
            f"({competition.start_date.date().isoformat()} to {competition.end_date.date().isoformat()})"
        )


def preview_draft(
    competition: Competition,
    draft: SubmissionDraft,
    prior_submissions: Iterable[Submission] = (),
) -> PointsBreakdown:
    """Points a draft would earn right now, without validating or building it."""
    rule = find_rule(competition, draft.activity_type)
    prior = points_on_day(prior_submissions, draft.user_id, competition.id, draft.date.date())
    return preview_points(rule, _as_submission(competition, draft), prior, competition.daily_cap)


def build_submission(
    competition: Competition,
    draft: SubmissionDraft,
    prior_submissions: Iterable[Submission] = (),
    created_at: datetime | None = None,
    submission_id: str | None = None,
) -> Submission:
    """Validate and score a draft.

    Args:
        competition: Competition the workout is logged against
        draft: Workout as entered
        prior_submissions: Existing submissions; only the same user, competition
            and day count toward the cap
        created_at: Creation timestamp to record (left empty for the store to fill)
        submission_id: Id to record, if already allocated

    Returns:
        New Submission with `unit` and `points` set

    Raises:
        SubmissionValidationError: Non-participant, missing duration, or date outside the window
        UnknownActivityTypeError: Competition has no rule for the activity
    """
    _validate_draft(competition, draft)
    breakdown = preview_draft(competition, draft, prior_submissions)
    if breakdown.capped:
        logger.info(
            f"Submission for user={draft.user_id} competition={competition.id} capped "
            f"from {breakdown.raw_points:g} to {breakdown.awarded_points:g}"
        )
    return _as_submission(
        competition,
        draft,
        id=submission_id,
        unit=breakdown.unit,
        points=breakdown.awarded_points,
        created_at=created_at,
    )


def score_in_order(
    competition: Competition,
    drafts: Sequence[SubmissionDraft],
    prior_submissions: Iterable[Submission] = (),
) -> list[Submission]:
    """Build a batch of drafts one after another.

    Each draft sees the points awarded to the drafts before it, so a single
    writer draining a queue never exceeds the daily cap.
    """
    history = list(prior_submissions)
    built: list[Submission] = []
    for draft in drafts:
        submission = build_submission(competition, draft, history)
        history.append(submission)
        built.append(submission)
    return built
