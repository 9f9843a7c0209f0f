"""Pydantic schemas for card configuration."""
from typing import Any, Mapping, Optional
from pydantic import BaseModel, Field, ValidationError

from windstat.errors import ConfigurationError

SERIES_ID_FIELDS = ("wind_series_id", "gust_series_id", "direction_series_id")


class CardConfig(BaseModel):
    """Validated configuration of one wind stat card."""

    minutes: int = Field(default=30, gt=0, description="Number of one-minute slots in the window")
    graph_height_units: float = Field(default=100.0, gt=0, description="Axis ceiling of the bar graph")
    autoscale: bool = Field(default=True, description="Scale bars to the observed maximum gust")
    multiplier: float = Field(default=1.0, gt=0, description="Units per knot when autoscale is off")
    wind_series_id: str
    gust_series_id: str
    direction_series_id: str

    @property
    def series_ids(self) -> list:
        """Series ids in fetch order: wind, gust, direction."""
        return [self.wind_series_id, self.gust_series_id, self.direction_series_id]


def load_card_config(raw: Mapping[str, Any]) -> CardConfig:
    """
    Validate a raw card configuration mapping.

    Raises:
        ConfigurationError: if a series id is absent or a value is invalid
    """
    missing = [name for name in SERIES_ID_FIELDS if not _present(raw.get(name))]
    if missing:
        raise ConfigurationError(
            "wind_series_id, gust_series_id and direction_series_id must be set "
            f"(missing: {', '.join(missing)})"
        )

    values = {k: v for k, v in raw.items() if v is not None}
    try:
        return CardConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid card configuration: {e}") from e


def _present(value: Optional[Any]) -> bool:
    return value is not None and str(value).strip() != ""
