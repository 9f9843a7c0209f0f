"""Pydantic schemas for the displayed window."""
from pydantic import BaseModel
from typing import List, Optional


class SlotResponse(BaseModel):
    """One minute of the displayed window."""

    wind: float  # knots
    gust: float  # knots
    direction: float  # degrees [0, 360)
    wind_height: float
    gust_height: float  # stacked on top of wind_height


class ScaleResponse(BaseModel):
    """Scale of the bar graph."""

    autoscale: bool
    max_gust: float
    grid_levels: List[float]  # positions (fractions when autoscaled, units otherwise)
    grid_labels: List[float]  # knots


class SnapshotResponse(BaseModel):
    """Response schema for the current display state."""

    minutes: int
    slots: List[SlotResponse]
    scale: ScaleResponse
    current_direction: float
    last_updated: Optional[str]
    generation: int
    no_data: bool
    no_data_reason: Optional[str] = None
