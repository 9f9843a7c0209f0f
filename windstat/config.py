"""Service configuration."""
from typing import Optional
from pydantic_settings import BaseSettings

from windstat.schemas.card import CardConfig, load_card_config


class Settings(BaseSettings):
    """Application settings."""

    # History source
    history_url: str = "http://localhost:8123"
    history_token: Optional[str] = None
    request_timeout: float = 10.0

    # Window and scale
    max_speed: float = 60.0
    grid_step: float = 5.0
    reveal_step_delay: float = 0.05  # seconds between reveal commits

    # Card
    minutes: int = 30
    graph_height_units: float = 100.0
    autoscale: bool = True
    multiplier: float = 1.0
    wind_series_id: Optional[str] = None
    gust_series_id: Optional[str] = None
    direction_series_id: Optional[str] = None

    # API settings
    api_title: str = "Wind Stat API"
    api_version: str = "1.0.0"
    cors_origins: list = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_prefix = "WINDSTAT_"

    def card_config(self) -> CardConfig:
        """Build the validated card configuration from these settings."""
        return load_card_config({
            "minutes": self.minutes,
            "graph_height_units": self.graph_height_units,
            "autoscale": self.autoscale,
            "multiplier": self.multiplier,
            "wind_series_id": self.wind_series_id,
            "gust_series_id": self.gust_series_id,
            "direction_series_id": self.direction_series_id,
        })


settings = Settings()
