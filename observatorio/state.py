"""
Dashboard session state.

A DashboardState is an immutable snapshot: loading, ready (with the raw
tables and the processed dataset) or failed (with one error message).
DashboardStore owns the current snapshot and replaces it wholly on every
transition, so readers never see a half-loaded dataset.
"""
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from typing import Callable, Optional, Sequence, Tuple
import logging

from pydantic import BaseModel, ConfigDict

from observatorio.analysis.processor import process_data
from observatorio.config.constants import TARGET_VARIANTS
from observatorio.exceptions import DataLoadError
from observatorio.models import Coautor, DashboardData, Diputado, ProcessedData

logger = logging.getLogger(__name__)


class LoadStatus(str, Enum):
    """Where the dashboard is in its load lifecycle."""
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class DashboardState(BaseModel):
    """
    Snapshot consumed by the pages.

    Only READY states carry data; ERROR states carry a message and no data.
    """
    model_config = ConfigDict(frozen=True)

    status: LoadStatus
    raw: Optional[DashboardData] = None
    data: Optional[ProcessedData] = None
    error: Optional[str] = None
    loaded_at: Optional[datetime] = None

    @classmethod
    def loading(cls) -> "DashboardState":
        return cls(status=LoadStatus.LOADING)

    @classmethod
    def ready(cls, raw: DashboardData, variants: Sequence[str] = TARGET_VARIANTS) -> "DashboardState":
        """Process raw tables into a ready state."""
        return cls(
            status=LoadStatus.READY,
            raw=raw,
            data=process_data(raw, variants),
            loaded_at=datetime.now(timezone.utc),
        )

    @classmethod
    def failed(cls, message: str) -> "DashboardState":
        return cls(status=LoadStatus.ERROR, error=message)

    @property
    def is_loading(self) -> bool:
        return self.status == LoadStatus.LOADING

    @property
    def is_ready(self) -> bool:
        return self.status == LoadStatus.READY

    def is_stale(self, max_age_seconds: int) -> bool:
        """True if a ready state is older than max_age_seconds."""
        if not self.is_ready or self.loaded_at is None:
            return False
        age = datetime.now(timezone.utc) - self.loaded_at
        return age.total_seconds() > max_age_seconds

    @property
    def coautores(self) -> Tuple[Coautor, ...]:
        """Raw co-authorship rows (empty until ready)."""
        return self.raw.coautores if self.raw else ()

    @property
    def diputados(self) -> Tuple[Diputado, ...]:
        """Raw deputy rows (empty until ready)."""
        return self.raw.diputados if self.raw else ()


class DashboardStore:
    """
    Owner of the current DashboardState.

    Lifecycle: begin_load() -> complete() or fail() -> ... -> clear().
    Each transition swaps in a new state object; nothing is patched in place.
    _lock guards the published state, _load_lock serializes reloads.
    """

    def __init__(self, variants: Sequence[str] = TARGET_VARIANTS):
        self.variants = list(variants)
        self._lock = Lock()
        self._load_lock = Lock()
        self._state = DashboardState.loading()

    @property
    def state(self) -> DashboardState:
        return self._state

    def _replace(self, state: DashboardState) -> DashboardState:
        with self._lock:
            self._state = state
        return state

    def begin_load(self) -> DashboardState:
        return self._replace(DashboardState.loading())

    def complete(self, raw: DashboardData) -> DashboardState:
        """Process freshly loaded tables and publish the result."""
        return self._replace(DashboardState.ready(raw, self.variants))

    def fail(self, message: str) -> DashboardState:
        logger.error(f"Dashboard load failed: {message}")
        return self._replace(DashboardState.failed(message))

    def clear(self) -> DashboardState:
        return self.begin_load()

    def reload(self, loader: Callable[[], DashboardData]) -> DashboardState:
        """
        Run a full load.

        Only one load runs at a time. A caller that arrives while another
        load is in progress waits for it and returns its result instead of
        fetching again. A READY state stays published until the new one
        replaces it.

        Args:
            loader: Callable returning fresh DashboardData; may raise
                DataLoadError

        Returns:
            The new state (READY or ERROR)
        """
        seen = self._state
        with self._load_lock:
            if self._state is not seen:
                return self._state

            if not self._state.is_ready:
                self.begin_load()
            try:
                return self.complete(loader())
            except DataLoadError as e:
                return self.fail(e.message)
            except Exception as e:
                logger.error(f"Unexpected error loading dashboard data: {e}", exc_info=True)
                return self.fail(str(e) or type(e).__name__)
