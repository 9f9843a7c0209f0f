"""Service for presenting the display state."""
from typing import Optional

from windstat.data.snapshot_repository import SnapshotRepository
from windstat.schemas.snapshot import ScaleResponse, SlotResponse, SnapshotResponse
from windstat.services.scale_computer import ScaleComputer


class SnapshotService:
    """Service for turning the latest snapshot into a response."""

    def __init__(self, snapshot_repo: SnapshotRepository = None):
        self.snapshot_repo = snapshot_repo or SnapshotRepository()

    def get_configuration_error(self) -> Optional[str]:
        return self.snapshot_repo.configuration_error

    def get_snapshot(self) -> Optional[SnapshotResponse]:
        """
        Get the current display state.

        A pending no-data signal is reported next to the last snapshot so the
        client can tell quiet sensors from unreachable ones.

        Returns:
            SnapshotResponse, or None if nothing has been rendered yet
        """
        snapshot = self.snapshot_repo.snapshot
        no_data = self.snapshot_repo.no_data
        if snapshot is None and no_data is None:
            return None

        if snapshot is None:
            # Fetch failed before the first window was built
            return SnapshotResponse(
                minutes=0,
                slots=[],
                scale=ScaleResponse(autoscale=True, max_gust=0.0, grid_levels=[], grid_labels=[]),
                current_direction=0.0,
                last_updated=no_data.last_updated.isoformat(),
                generation=0,
                no_data=True,
                no_data_reason=no_data.reason,
            )

        scale = snapshot.scale
        slots = []
        for slot in snapshot.displayed.slots:
            heights = ScaleComputer.bar_heights(slot, scale)
            slots.append(SlotResponse(
                wind=round(slot.wind, 1),
                gust=round(slot.gust, 1),
                direction=round(slot.direction, 1),
                wind_height=heights.wind_height,
                gust_height=heights.gust_height,
            ))

        last_updated = no_data.last_updated if no_data is not None else snapshot.last_updated
        return SnapshotResponse(
            minutes=len(snapshot.displayed),
            slots=slots,
            scale=ScaleResponse(
                autoscale=scale.autoscale,
                max_gust=scale.max_gust,
                grid_levels=list(scale.grid_levels),
                grid_labels=list(scale.grid_labels),
            ),
            current_direction=snapshot.displayed.newest.direction,
            last_updated=last_updated.isoformat() if last_updated is not None else None,
            generation=snapshot.generation,
            no_data=no_data is not None,
            no_data_reason=no_data.reason if no_data is not None else None,
        )
