"""Notification preferences.

Preferences are loaded once (from settings or a stored profile) and passed
to whatever needs them. Nothing here reads storage while handling a
notification.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fitcomp.config.settings import Settings


class NotificationPreferences(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    invite_popups: bool = True
    sound_alerts: bool = True
    badge_counters: bool = True
    muted_competitions: frozenset[str] = Field(default_factory=frozenset)

    @classmethod
    def from_settings(cls, settings: Settings) -> NotificationPreferences:
        return cls(
            invite_popups=settings.invite_popups,
            sound_alerts=settings.sound_alerts,
            badge_counters=settings.badge_counters,
        )

    def merged(self, stored: Mapping[str, Any] | None) -> NotificationPreferences:
        """Overlay a stored preferences document on these defaults.

        Unknown keys in the stored document are ignored.
        """
        if not stored:
            return self
        data = self.model_dump()
        for name, field_info in type(self).model_fields.items():
            if field_info.alias in stored:
                data[name] = stored[field_info.alias]
            elif name in stored:
                data[name] = stored[name]
        return type(self).model_validate(data)

    def mute(self, competition_id: str) -> NotificationPreferences:
        return self.model_copy(update={"muted_competitions": self.muted_competitions | {competition_id}})

    def unmute(self, competition_id: str) -> NotificationPreferences:
        return self.model_copy(update={"muted_competitions": self.muted_competitions - {competition_id}})


@dataclass(frozen=True)
class NotificationBehavior:
    should_show_alert: bool
    should_play_sound: bool
    should_set_badge: bool


def notification_behavior(
    preferences: NotificationPreferences,
    competition_id: str | None = None,
) -> NotificationBehavior:
    """How an incoming notification should be presented.

    A muted competition suppresses alert and sound but still counts on the badge.
    """
    muted = competition_id is not None and competition_id in preferences.muted_competitions
    return NotificationBehavior(
        should_show_alert=preferences.invite_popups and not muted,
        should_play_sound=preferences.sound_alerts and not muted,
        should_set_badge=preferences.badge_counters,
    )
