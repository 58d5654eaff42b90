"""Competition invitations.

Each operation returns an updated copy of the competition; persisting it
(an array-union / array-remove in the document store) is up to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from fitcomp.competitions.errors import InvitationError
from fitcomp.competitions.models import Competition


def invite(competition: Competition, user_id: str) -> Competition:
    if user_id in competition.participants:
        raise InvitationError(user_id, "already a participant")
    if user_id in competition.pending_participants:
        raise InvitationError(user_id, "already invited")
    logger.debug(f"Inviting user={user_id} to competition={competition.id}")
    return competition.model_copy(
        update={"pending_participants": [*competition.pending_participants, user_id]}
    )


def accept_invite(competition: Competition, user_id: str) -> Competition:
    """Move a user from pending to participants."""
    if user_id not in competition.pending_participants:
        raise InvitationError(user_id, "no pending invitation")
    logger.info(f"User={user_id} joined competition={competition.id}")
    return competition.model_copy(
        update={
            "participants": [*competition.participants, user_id],
            "pending_participants": [p for p in competition.pending_participants if p != user_id],
        }
    )


def decline_invite(competition: Competition, user_id: str) -> Competition:
    if user_id not in competition.pending_participants:
        raise InvitationError(user_id, "no pending invitation")
    logger.info(f"User={user_id} declined competition={competition.id}")
    return competition.model_copy(
        update={"pending_participants": [p for p in competition.pending_participants if p != user_id]}
    )


@dataclass
class UserCompetitions:
    active: list[Competition] = field(default_factory=list)
    pending: list[Competition] = field(default_factory=list)


def competitions_for_user(
    competitions: Iterable[Competition],
    user_id: str,
    search: str = "",
) -> UserCompetitions:
    """Split competitions into those a user is in and those they are invited to.

    Owners count as participants. `search` filters by case-insensitive name match.
    """
    needle = search.strip().lower()
    result = UserCompetitions()
    for competition in competitions:
        if needle and needle not in competition.name.lower():
            continue
        if user_id == competition.owner_id or user_id in competition.participants:
            result.active.append(competition)
        elif user_id in competition.pending_participants:
            result.pending.append(competition)
    return result
