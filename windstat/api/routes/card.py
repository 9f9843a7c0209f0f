"""API routes for the wind stat card."""
from fastapi import APIRouter, Depends, HTTPException

from windstat.schemas.snapshot import SnapshotResponse
from windstat.services.snapshot_service import SnapshotService
from windstat.api.dependencies import get_snapshot_service

router = APIRouter(prefix="/card", tags=["card"])


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot(
    snapshot_service: SnapshotService = Depends(get_snapshot_service),
) -> SnapshotResponse:
    """
    Get the currently displayed wind window.

    Returns per-minute wind, gust and direction with bar heights and grid
    levels, plus the no-data state when the last cycle had nothing to show.
    """
    error = snapshot_service.get_configuration_error()
    if error is not None:
        raise HTTPException(status_code=500, detail=error)

    result = snapshot_service.get_snapshot()
    if result is None:
        raise HTTPException(status_code=503, detail="No data fetched yet")
    return result
