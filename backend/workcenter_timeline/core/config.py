from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "Work-Center Timeline"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Timeline geometry
    TIMELINE_GRID_WIDTH_PX: float = Field(default=1299, gt=0)
    TIMELINE_DEFAULT_ZOOM: float = Field(default=50, ge=0, le=100)
    TIMELINE_GRID_GRAIN: Literal["hour", "half_day", "day"] = "hour"
    CARD_HEIGHT_PX: float = Field(default=82, ge=0)
    CARD_GAP_PX: float = Field(default=16, ge=0)
    TIMEZONE: str = "UTC"

    # Order source
    ORDER_SOURCE_CSV: str | None = None

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # "json" or "console"
    ENABLE_METRICS: bool = True

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        if v not in {"json", "console"}:
            raise ValueError("LOG_FORMAT must be 'json' or 'console'")
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def slot_pitch_px(self) -> float:
        """Vertical distance between two stacked order cards."""
        return self.CARD_HEIGHT_PX + self.CARD_GAP_PX


settings = Settings()  # type: ignore
