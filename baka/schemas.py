from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


# Upstream marks unset timestamps with the zero instant
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Explicit JSON nulls decode to the field default"""
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class MediaType(_ApiModel):
    """Media-type tag (e.g. TV, ONA)"""
    name: str = ""
    route: str = ""


class Streams(_ApiModel):
    """Streaming links keyed by provider"""
    crunchyroll: str | None = None
    amazon: str | None = None
    hidive: str | None = None
    youtube: str | None = None
    apple: str | None = None
    netflix: str | None = None
    hulu: str | None = None

    def available(self) -> dict[str, str]:
        """Return the providers that carry a link."""
        return {name: url for name, url in self.model_dump().items() if url}


class ScheduleEntry(_ApiModel):
    """One broadcast occurrence from the weekly timetable.

    Only title, episode number, episode date and air type are interpreted;
    the rest is presentation metadata carried through untouched.
    """
    title: str = ""
    route: str = ""
    romaji: str | None = None
    english: str | None = None
    native: str | None = None
    delayed_text: str | None = None
    delayed_from: datetime = ZERO_TIME
    delayed_until: datetime = ZERO_TIME
    status: str = ""
    episode_date: datetime = Field(ZERO_TIME, description="Timezone-normalized air time")
    episode_number: int = Field(0, ge=0)
    subtracted_episode_number: int | None = None
    episodes: int = 0
    length_min: int = 0
    donghua: bool = False
    air_type: str = ""
    media_types: list[MediaType] = Field(default_factory=list)
    image_version_route: str = ""
    streams: Streams = Field(default_factory=Streams)
    airing_status: str = ""

    @field_validator("episode_date", "delayed_from", "delayed_until")
    @classmethod
    def ensure_aware(cls, value: datetime) -> datetime:
        """Timestamps without an offset are taken as UTC"""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def has_timestamp(self) -> bool:
        """False when the upstream left the episode date unset."""
        return self.episode_date != ZERO_TIME
