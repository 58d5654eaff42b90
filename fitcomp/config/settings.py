from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fitcomp.competitions.leaderboard import UNKNOWN_USER_NAME


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="FITCOMP_LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="FITCOMP_LOG_FILE")
    unknown_user_name: str = Field(
        default=UNKNOWN_USER_NAME,
        validation_alias="FITCOMP_UNKNOWN_USER_NAME",
        description="Display name used on leaderboards when a profile cannot be resolved",
    )
    podium_size: int = Field(default=3, ge=1, validation_alias="FITCOMP_PODIUM_SIZE")
    default_competition_days: int = Field(
        default=7,
        ge=1,
        validation_alias="FITCOMP_DEFAULT_COMPETITION_DAYS",
        description="Window length used when a competition is created without an end date",
    )
    invite_popups: bool = Field(default=True, validation_alias="FITCOMP_INVITE_POPUPS")
    sound_alerts: bool = Field(default=True, validation_alias="FITCOMP_SOUND_ALERTS")
    badge_counters: bool = Field(default=True, validation_alias="FITCOMP_BADGE_COUNTERS")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(sorted(valid_levels))}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("unknown_user_name")
    @classmethod
    def validate_unknown_user_name(cls, value: str) -> str:
        """Fall back to the stock placeholder when configured blank."""
        if not value.strip():
            logger.warning(f"FITCOMP_UNKNOWN_USER_NAME is blank. Using '{UNKNOWN_USER_NAME}'.")
            return UNKNOWN_USER_NAME
        return value

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
