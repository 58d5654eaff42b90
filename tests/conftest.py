"""Root conftest for all tests.

Shared competition fixtures. Everything under test is pure, so fixtures
build models directly and no store is involved.
"""

from datetime import UTC, datetime

import pytest

from fitcomp.competitions.models import Competition, Rule, Submission

START = datetime(2026, 3, 2, tzinfo=UTC)
END = datetime(2026, 3, 9, tzinfo=UTC)


@pytest.fixture
def minute_rule() -> Rule:
    """10 minutes = 1 point."""
    return Rule(activity_type="Walking", unit="Minute", points_per_unit=1, units_per_point=10)


@pytest.fixture
def km_rule() -> Rule:
    return Rule(activity_type="Running", unit="Kilometre", points_per_unit=2, units_per_point=1)


@pytest.fixture
def competition(minute_rule: Rule, km_rule: Rule) -> Competition:
    return Competition(
        id="comp-1",
        name="March Madness",
        owner_id="alice",
        rules=[
            minute_rule,
            km_rule,
            Rule(activity_type="Yoga", unit="Class", points_per_unit=15, units_per_point=1),
        ],
        daily_cap=10,
        start_date=START,
        end_date=END,
        participants=["alice", "bob", "carol"],
        pending_participants=["dave"],
    )


@pytest.fixture
def make_submission():
    """Factory for submissions with sensible defaults."""

    def _make(
        activity_type: str = "Walking",
        user_id: str = "alice",
        points: float = 0.0,
        day: int = 3,
        **fields,
    ) -> Submission:
        return Submission(
            competition_id=fields.pop("competition_id", "comp-1"),
            user_id=user_id,
            activity_type=activity_type,
            points=points,
            date=fields.pop("date", datetime(2026, 3, day, 12, 0, tzinfo=UTC)),
            **fields,
        )

    return _make
