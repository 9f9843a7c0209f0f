"""Repository for fetching sensor history."""
import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence
import pandas as pd
import requests

from windstat.config import settings
from windstat.errors import FetchFailure
from windstat.models.sample import Sample

logger = logging.getLogger(__name__)


class HistoryRepository:
    """Repository for timestamped readings served by a REST history endpoint.

    The endpoint answers `GET /api/history/period/<start>` with one list of
    state changes per requested entity; with `minimal_response` only the first
    item of each list carries the entity id.
    """

    def __init__(
        self,
        base_url: str = None,
        token: Optional[str] = None,
        timeout: float = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = (base_url or settings.history_url).rstrip("/")
        self.token = token if token is not None else settings.history_token
        self.timeout = timeout or settings.request_timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, series_ids: Sequence[str], start: datetime, end: datetime) -> list:
        url = f"{self.base_url}/api/history/period/{start.isoformat()}"
        params = {
            "filter_entity_id": ",".join(series_ids),
            "end_time": end.isoformat(),
            "minimal_response": "",
            "no_attributes": "",
        }
        try:
            response = self.session.get(
                url, params=params, headers=self._headers(), timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise FetchFailure(f"History request failed: {e}") from e
        except ValueError as e:
            raise FetchFailure(f"History response is not JSON: {e}") from e

        if not isinstance(payload, list):
            raise FetchFailure(f"Unexpected history payload type: {type(payload).__name__}")
        return payload

    def parse_history(self, payload: list, series_ids: Sequence[str]) -> Dict[str, List[Sample]]:
        """
        Convert a history payload into samples per requested series.

        Series absent from the payload map to an empty list. States that are
        not numbers ("unavailable", "unknown") become NaN values.
        """
        result: Dict[str, List[Sample]] = {series_id: [] for series_id in series_ids}

        for entity_states in payload:
            if not entity_states:
                continue
            series_id = entity_states[0].get("entity_id")
            if series_id not in result:
                continue

            frame = pd.DataFrame({
                "state": [item.get("state") for item in entity_states],
                "changed": [item.get("last_changed") or item.get("last_updated")
                            for item in entity_states],
            })
            values = pd.to_numeric(frame["state"], errors="coerce")
            timestamps = pd.to_datetime(frame["changed"], utc=True, errors="coerce", format="ISO8601")

            for ts, value in zip(timestamps, values):
                if pd.isna(ts):
                    continue
                result[series_id].append(Sample(
                    series_id=series_id,
                    timestamp=ts.to_pydatetime(),
                    value=float(value),
                ))

        return result

    def fetch_history_sync(
        self, series_ids: Sequence[str], start: datetime, end: datetime,
    ) -> Dict[str, List[Sample]]:
        """Blocking variant of fetch_history."""
        payload = self._get(series_ids, start, end)
        history = self.parse_history(payload, series_ids)
        logger.debug(
            "Fetched history %s",
            {series_id: len(samples) for series_id, samples in history.items()},
        )
        return history

    async def fetch_history(
        self, series_ids: Sequence[str], start: datetime, end: datetime,
    ) -> Dict[str, List[Sample]]:
        """
        Fetch samples for each series between start and end.

        Raises:
            FetchFailure: if the request fails or the payload is unreadable
        """
        return await asyncio.to_thread(self.fetch_history_sync, series_ids, start, end)
