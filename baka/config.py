from pathlib import Path
import logging

from platformdirs import user_log_dir
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)

APP_NAME = "baka"
DEFAULT_API_URL = "https://animeschedule.net/api/v3/timetables"
AIR_TYPES = {"sub", "dub", "raw", "all"}


class CustomSettings(BaseSettings):
    """Application settings loaded from environment variables and `.env`.

    The API token is optional here: it is only required once a network
    fetch is needed, so a fresh cache can be browsed without one.
    """

    animeschedule_token: str | None = None
    animeschedule_api_url: str = DEFAULT_API_URL
    air_type: str = "sub"
    request_timeout_sec: float = 10.0
    schedule_week: int | None = None
    schedule_year: int | None = None

    log_level: str = "INFO"
    log_file: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("animeschedule_token", mode="before")
    @classmethod
    def normalize_token(cls, value):
        """Treat blank tokens as unset."""
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("animeschedule_api_url")
    @classmethod
    def validate_api_url(cls, value: str) -> str:
        """Validate the timetable endpoint is HTTP/HTTPS."""
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"API URL must be HTTP/HTTPS: {value}")
        return value.rstrip("/")

    @field_validator("air_type")
    @classmethod
    def validate_air_type(cls, value: str) -> str:
        """Validate the air-type filter."""
        normalized = value.strip().lower()
        if normalized not in AIR_TYPES:
            raise ValueError(f"air_type must be one of {sorted(AIR_TYPES)}")
        return normalized

    @field_validator("request_timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate HTTP timeout (seconds)."""
        if value <= 0:
            raise ValueError("request_timeout_sec must be > 0")
        return value

    @field_validator("schedule_week")
    @classmethod
    def validate_week(cls, value: int | None) -> int | None:
        """Validate ISO week number."""
        if value is not None and not 1 <= value <= 53:
            raise ValueError("schedule_week must be between 1 and 53")
        return value

    @field_validator("schedule_year")
    @classmethod
    def validate_year(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("schedule_year must be > 0")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"Invalid log level: {value}")
        return normalized

    @model_validator(mode="after")
    def validate_schedule_target(self):
        """Validate cross-field configuration."""
        if self.schedule_week is not None and self.schedule_year is None:
            logger.warning(
                "schedule_week set without schedule_year - the API will assume the current year"
            )
        return self

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Configuration loaded:")
        logger.info("  API URL: %s", self.animeschedule_api_url)
        logger.info("  API Token: %s", "set" if self.animeschedule_token else "not set")
        logger.info("  Air Type: %s", self.air_type)
        logger.info("  Request Timeout: %ss", self.request_timeout_sec)
        logger.info(
            "  Target Week: %s",
            f"{self.schedule_week}/{self.schedule_year or 'current'}"
            if self.schedule_week else "current",
        )

    def resolved_log_file(self) -> Path:
        """Return the log file path, defaulting to the per-user log directory."""
        if self.log_file:
            return Path(self.log_file)
        return Path(user_log_dir(APP_NAME)) / f"{APP_NAME}.log"


settings = CustomSettings()


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure application logging.

    The terminal belongs to the TUI, so records go to a file.
    """
    log_path = log_file or settings.resolved_log_file()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        filename=str(log_path),
        encoding="utf-8",
    )
