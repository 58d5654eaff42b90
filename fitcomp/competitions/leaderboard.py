"""Leaderboard standings from stored submission points.

Totals are sums of each submission's stored `points`; nothing is
rescored here. Ranks are strictly sequential (1..N, no shared ranks).
Ties keep roster order, followed by submitters missing from the roster in
order of their first submission.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from decimal import Decimal

from loguru import logger

from fitcomp.competitions.models import Standing, Submission

UNKNOWN_USER_NAME = "Unknown User"

DisplayNameLookup = Callable[[str], str | None] | Mapping[str, str]


def _resolve_name(display_name_of: DisplayNameLookup, user_id: str, placeholder: str) -> str:
    if isinstance(display_name_of, Mapping):
        name = display_name_of.get(user_id)
    else:
        try:
            name = display_name_of(user_id)
        except LookupError:
            name = None
    if not name:
        logger.warning(f"No display name for user={user_id}, using placeholder")
        return placeholder
    return name


def total_points_by_user(submissions: Iterable[Submission]) -> dict[str, float]:
    """Sum stored points per user id, in order of first submission."""
    totals: dict[str, Decimal] = {}
    for submission in submissions:
        totals[submission.user_id] = totals.get(submission.user_id, Decimal(0)) + Decimal(str(submission.points))
    return {user_id: float(total) for user_id, total in totals.items()}


def rank(
    participant_ids: Sequence[str],
    submissions: Iterable[Submission],
    display_name_of: DisplayNameLookup,
    placeholder_name: str = UNKNOWN_USER_NAME,
) -> list[Standing]:
    """Build ranked standings for a competition.

    Args:
        participant_ids: Competition roster; everyone appears, even at 0 points
        submissions: All submissions for the competition, already scored
        display_name_of: User id to display name, as a callable or mapping
        placeholder_name: Name used when a display name is missing

    Returns:
        Standings sorted by total points descending, ranks 1..N
    """
    totals = total_points_by_user(submissions)

    ordered_ids: list[str] = []
    seen: set[str] = set()
    for user_id in participant_ids:
        if user_id not in seen:
            ordered_ids.append(user_id)
            seen.add(user_id)

    for user_id in totals:
        if user_id not in seen:
            logger.warning(f"Submission from user={user_id} who is not on the roster, including in standings")
            ordered_ids.append(user_id)
            seen.add(user_id)

    # sorted() is stable, so equal totals keep roster order
    ordered_ids = sorted(ordered_ids, key=lambda user_id: totals.get(user_id, 0.0), reverse=True)

    return [
        Standing(
            user_id=user_id,
            display_name=_resolve_name(display_name_of, user_id, placeholder_name),
            total_points=totals.get(user_id, 0.0),
            rank=position,
        )
        for position, user_id in enumerate(ordered_ids, start=1)
    ]


def podium(standings: Sequence[Standing], size: int = 3) -> list[Standing]:
    """Top `size` standings, in rank order."""
    return sorted(standings, key=lambda standing: standing.rank)[:size]


def standing_for(standings: Iterable[Standing], user_id: str) -> Standing | None:
    """The standing of one user, or None when they are not on the board."""
    for standing in standings:
        if standing.user_id == user_id:
            return standing
    return None
