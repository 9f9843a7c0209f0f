"""FastAPI dependencies for dependency injection."""
from functools import lru_cache

from windstat.config import settings
from windstat.data.history_repository import HistoryRepository
from windstat.data.snapshot_repository import SnapshotRepository
from windstat.services.snapshot_service import SnapshotService
from windstat.services.wind_stat_card import WindStatCard


@lru_cache()
def get_snapshot_repository() -> SnapshotRepository:
    """Get cached snapshot repository instance."""
    return SnapshotRepository()


@lru_cache()
def get_history_repository() -> HistoryRepository:
    """Get cached history repository instance."""
    return HistoryRepository()


@lru_cache()
def get_wind_stat_card() -> WindStatCard:
    """
    Get cached card instance.

    Raises:
        ConfigurationError: if the card configuration is incomplete
    """
    return WindStatCard(
        config=settings.card_config(),
        source=get_history_repository(),
        renderer=get_snapshot_repository(),
        max_speed=settings.max_speed,
        grid_step=settings.grid_step,
        reveal_step_delay=settings.reveal_step_delay,
    )


def get_snapshot_service() -> SnapshotService:
    """Get snapshot service instance."""
    return SnapshotService(
        snapshot_repo=get_snapshot_repository(),
    )
