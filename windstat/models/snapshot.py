"""Snapshots emitted to the renderer."""
from datetime import datetime
from typing import Optional
from attrs import frozen

from .window import ScaleState, Window


@frozen
class Snapshot:
    """Observable state of the displayed window after one commit."""

    displayed: Window
    scale: ScaleState
    last_updated: Optional[datetime]
    generation: int
    no_data: bool = False


class Renderer:
    """Consumer of snapshots and no-data signals."""

    def render(self, snapshot: Snapshot) -> None:
        raise NotImplementedError

    def render_no_data(self, last_updated: datetime, reason: str) -> None:
        raise NotImplementedError
