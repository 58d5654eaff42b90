"""Error types for competition scoring.

Configuration errors signal an upstream data-integrity bug (a competition
saved with a bad rule, a submission pointing at a rule that no longer
exists). Validation errors are user-facing and carry readable messages.

Running out of daily-cap headroom is never an error: it yields zero points.
"""


class ScoringConfigurationError(RuntimeError):
    """Raised when the scoring core receives malformed configuration.

    Attributes:
        code: Error code (e.g., "RULE_MISMATCH", "INVALID_RULE", "UNKNOWN_ACTIVITY")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class RuleMismatchError(ScoringConfigurationError):
    """Raised when a rule is applied to a submission for another activity type."""

    def __init__(self, rule_activity: str, submission_activity: str):
        self.rule_activity = rule_activity
        self.submission_activity = submission_activity
        super().__init__(
            "RULE_MISMATCH",
            [f"rule activity '{rule_activity}' does not match submission activity '{submission_activity}'"],
        )


class InvalidRuleError(ScoringConfigurationError):
    """Raised when a rule with a non-positive threshold or multiplier reaches the engine."""

    def __init__(self, activity_type: str, message: str):
        self.activity_type = activity_type
        super().__init__("INVALID_RULE", [f"{activity_type}: {message}"])


class UnknownActivityTypeError(ScoringConfigurationError):
    """Raised when a competition has no rule for the requested activity type."""

    def __init__(self, competition_id: str, activity_type: str):
        self.competition_id = competition_id
        self.activity_type = activity_type
        super().__init__(
            "UNKNOWN_ACTIVITY",
            [f"competition '{competition_id}' has no rule for activity '{activity_type}'"],
        )


class CompetitionValidationError(ValueError):
    """Raised when a new competition fails creation checks.

    This is a user-facing error; `details` holds one message per failed check.
    """

    def __init__(self, details: list[str]):
        self.details = details
        super().__init__("; ".join(details))


class SubmissionValidationError(ValueError):
    """Raised when a workout cannot be logged against a competition."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvitationError(ValueError):
    """Raised for invalid invite, accept or decline requests."""

    def __init__(self, user_id: str, message: str):
        self.user_id = user_id
        self.message = message
        super().__init__(f"{user_id}: {message}")
