"""Competition scoring - points per workout and leaderboard standings."""

from fitcomp.competitions.errors import (
    CompetitionValidationError,
    InvalidRuleError,
    InvitationError,
    RuleMismatchError,
    ScoringConfigurationError,
    SubmissionValidationError,
    UnknownActivityTypeError,
)
from fitcomp.competitions.leaderboard import podium, rank, standing_for
from fitcomp.competitions.models import Competition, Rule, Standing, Submission
from fitcomp.competitions.scoring import PointsBreakdown, compute_points, find_rule, points_on_day, preview_points
from fitcomp.competitions.units import Unit

__all__ = [
    "Competition",
    "CompetitionValidationError",
    "InvalidRuleError",
    "InvitationError",
    "PointsBreakdown",
    "Rule",
    "RuleMismatchError",
    "ScoringConfigurationError",
    "Standing",
    "Submission",
    "SubmissionValidationError",
    "Unit",
    "UnknownActivityTypeError",
    "compute_points",
    "find_rule",
    "points_on_day",
    "podium",
    "preview_points",
    "rank",
    "standing_for",
]
