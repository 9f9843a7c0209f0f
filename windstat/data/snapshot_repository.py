"""In-memory repository for the latest display state."""
from datetime import datetime
from typing import Optional
from attrs import define

from windstat.models.snapshot import Renderer, Snapshot


@define
class NoDataSignal:
    """Display state replacing the window when nothing can be shown."""

    last_updated: datetime
    reason: str  # "no_data" or "fetch_failed"


class SnapshotRepository(Renderer):
    """Renderer that keeps the latest snapshot for the HTTP API."""

    def __init__(self):
        self.snapshot: Optional[Snapshot] = None
        self.no_data: Optional[NoDataSignal] = None
        self.configuration_error: Optional[str] = None
        self.render_count = 0

    def render(self, snapshot: Snapshot) -> None:
        self.snapshot = snapshot
        self.render_count += 1
        if not snapshot.no_data:
            self.no_data = None

    def render_no_data(self, last_updated: datetime, reason: str) -> None:
        self.no_data = NoDataSignal(last_updated=last_updated, reason=reason)

    def set_configuration_error(self, message: str) -> None:
        """Record a setup error; it replaces any display state."""
        self.configuration_error = message
