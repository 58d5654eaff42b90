"""Conversion between store documents and competition models.

Documents use the document-store field names: camelCase keys, ISO-8601
date strings, and the document id kept outside the body. Rule documents
store the activity under `type`; `activityType` is accepted on read too.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fitcomp.competitions.models import Competition, Submission

SUBMISSION_FIELDS = (
    "competitionId",
    "userId",
    "activityType",
    "duration",
    "distance",
    "calories",
    "unit",
    "points",
    "notes",
    "date",
    "createdAt",
)


def competition_from_document(document: Mapping[str, Any], competition_id: str | None = None) -> Competition:
    """Build a Competition from a stored document.

    A zero or empty `dailyCap` means no cap, as the app writes null for a blank cap field.
    """
    data = dict(document)
    if competition_id is not None:
        data["id"] = competition_id
    if not data.get("dailyCap"):
        data["dailyCap"] = None
    return Competition.model_validate(data)


def competition_to_document(competition: Competition) -> dict[str, Any]:
    return competition.model_dump(mode="json", by_alias=True, exclude={"id"})


def submission_from_document(document: Mapping[str, Any], submission_id: str | None = None) -> Submission:
    data = dict(document)
    if submission_id is not None:
        data["id"] = submission_id
    # blank numeric inputs are stored as null by older clients
    for key in ("duration", "distance", "calories", "points"):
        if data.get(key) is None:
            data[key] = 0.0
    return Submission.model_validate(data)


def submission_to_document(submission: Submission) -> dict[str, Any]:
    """Serialize a submission to the stored field set (id excluded)."""
    document = submission.model_dump(mode="json", by_alias=True, exclude={"id"})
    return {key: document[key] for key in SUBMISSION_FIELDS}
