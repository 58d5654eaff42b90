"""Tests for building scored submissions."""

from datetime import UTC, datetime

import pytest

from fitcomp.competitions.errors import SubmissionValidationError, UnknownActivityTypeError
from fitcomp.competitions.submissions import SubmissionDraft, build_submission, preview_draft, score_in_order


def _draft(activity_type="Walking", user_id="bob", day=3, **fields) -> SubmissionDraft:
    return SubmissionDraft(
        user_id=user_id,
        activity_type=activity_type,
        date=datetime(2026, 3, day, 18, 30, tzinfo=UTC),
        **fields,
    )


def test_build_submission_freezes_points_and_unit(competition):
    created = datetime(2026, 3, 3, 19, 0, tzinfo=UTC)
    submission = build_submission(
        competition, _draft(duration=45, notes="lunch walk"), created_at=created, submission_id="s-1"
    )

    assert submission.id == "s-1"
    assert submission.competition_id == "comp-1"
    assert submission.unit == "Minute"
    assert submission.points == 4
    assert submission.notes == "lunch walk"
    assert submission.created_at == created


def test_prior_points_same_day_count_toward_cap(competition, make_submission):
    prior = [
        make_submission(user_id="bob", points=8, day=3),
        make_submission(user_id="bob", points=8, day=2),
        make_submission(user_id="carol", points=8, day=3),
    ]
    submission = build_submission(competition, _draft(activity_type="Running", duration=30, distance=5), prior)
    assert submission.points == 2


def test_capped_to_zero_still_built(competition, make_submission):
    prior = [make_submission(user_id="bob", points=10, day=3)]
    submission = build_submission(competition, _draft(duration=60), prior)
    assert submission.points == 0


def test_preview_draft_reports_cap(competition, make_submission):
    prior = [make_submission(user_id="bob", points=9, day=3)]
    breakdown = preview_draft(competition, _draft(duration=60), prior)
    assert breakdown.raw_points == 6
    assert breakdown.awarded_points == 1
    assert breakdown.capped


def test_owner_may_submit(competition):
    submission = build_submission(competition, _draft(user_id="alice", activity_type="Yoga", duration=60))
    assert submission.points == 10  # class worth 15, capped at 10


def test_non_participant_rejected(competition):
    with pytest.raises(SubmissionValidationError, match="not a participant"):
        build_submission(competition, _draft(user_id="dave", duration=30))


def test_duration_required(competition):
    with pytest.raises(SubmissionValidationError, match="duration"):
        build_submission(competition, _draft(activity_type="Running", distance=5))


def test_date_outside_window_rejected(competition):
    with pytest.raises(SubmissionValidationError, match="outside the competition window"):
        build_submission(competition, _draft(duration=30, day=12))


def test_unknown_activity_is_configuration_error(competition):
    with pytest.raises(UnknownActivityTypeError):
        build_submission(competition, _draft(activity_type="Rowing", duration=30))


def test_score_in_order_serializes_cap(competition):
    drafts = [_draft(duration=60), _draft(duration=60), _draft(duration=60, day=4)]
    built = score_in_order(competition, drafts)
    assert [s.points for s in built] == [6, 4, 6]


def test_naive_draft_date_treated_as_utc(competition):
    draft = SubmissionDraft(user_id="bob", activity_type="Walking", duration=30, date=datetime(2026, 3, 3, 12, 0))
    submission = build_submission(competition, draft)
    assert submission.date == datetime(2026, 3, 3, 12, 0, tzinfo=UTC)
    assert submission.points == 3


def test_naive_draft_date_outside_window_rejected(competition):
    draft = SubmissionDraft(user_id="bob", activity_type="Walking", duration=30, date=datetime(2026, 3, 20, 12, 0))
    with pytest.raises(SubmissionValidationError, match="outside the competition window"):
        build_submission(competition, draft)


def test_window_check_accepts_naive_moment(competition):
    assert competition.accepts(datetime(2026, 3, 4))
    assert not competition.accepts(datetime(2026, 2, 1))
