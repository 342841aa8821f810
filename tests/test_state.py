"""Tests for the dashboard state store."""

import threading
import time
from datetime import datetime, timedelta, timezone

from observatorio.exceptions import DataLoadError
from observatorio.models import DashboardData
from observatorio.state import DashboardState, DashboardStore, LoadStatus


class TestDashboardState:
    """Tests for DashboardState snapshots."""

    def test_loading_has_no_data(self):
        state = DashboardState.loading()
        assert state.is_loading
        assert state.data is None
        assert state.coautores == ()

    def test_ready(self, dashboard_data):
        state = DashboardState.ready(dashboard_data)
        assert state.is_ready
        assert state.data.total == 3
        assert state.error is None
        assert len(state.coautores) == 9
        assert len(state.diputados) == 3

    def test_failed(self):
        state = DashboardState.failed("sin conexión")
        assert state.status == LoadStatus.ERROR
        assert state.error == "sin conexión"
        assert state.data is None

    def test_stale(self, dashboard_data):
        state = DashboardState.ready(dashboard_data)
        assert not state.is_stale(3600)

        old = state.model_copy(update={"loaded_at": datetime.now(timezone.utc) - timedelta(hours=2)})
        assert old.is_stale(3600)

    def test_loading_never_stale(self):
        assert not DashboardState.loading().is_stale(0)


class TestDashboardStore:
    """Tests for DashboardStore transitions."""

    def test_starts_loading(self):
        assert DashboardStore().state.is_loading

    def test_complete(self, dashboard_data):
        store = DashboardStore()
        state = store.complete(dashboard_data)
        assert store.state is state
        assert state.is_ready

    def test_reload_success(self, dashboard_data):
        store = DashboardStore()
        state = store.reload(lambda: dashboard_data)
        assert state.is_ready
        assert state.data.found_name == "Jose Antonio Kast Rist"

    def test_reload_failure(self, dashboard_data):
        """A failed reload replaces the ready state with an error and no data."""
        store = DashboardStore()
        store.complete(dashboard_data)

        def loader():
            raise DataLoadError("Error al leer 'mociones': timeout")

        state = store.reload(loader)
        assert state.status == LoadStatus.ERROR
        assert state.error == "Error al leer 'mociones': timeout"
        assert state.data is None
        assert state.raw is None

    def test_failure_is_logged(self, caplog):
        DashboardStore().fail("boom")
        assert "boom" in caplog.text

    def test_states_replaced_wholly(self, dashboard_data):
        """Transitions swap state objects instead of mutating them."""
        store = DashboardStore()
        first = store.complete(dashboard_data)
        store.fail("boom")
        assert first.is_ready
        assert first.data.total == 3

    def test_clear(self, dashboard_data):
        store = DashboardStore()
        store.complete(dashboard_data)
        assert store.clear().is_loading

    def test_custom_variants(self, dashboard_data):
        store = DashboardStore(variants=["Ena von Baer"])
        assert store.complete(dashboard_data).data.found_name == "Ena von Baer"

    def test_empty_data(self):
        state = DashboardStore().complete(DashboardData())
        assert state.is_ready
        assert state.data.total == 0

    def test_unexpected_error_fails_load(self, dashboard_data):
        """Errors other than DataLoadError still end in a single error state."""
        store = DashboardStore()
        store.complete(dashboard_data)

        def loader():
            raise RuntimeError("cursor already closed")

        state = store.reload(loader)
        assert state.status == LoadStatus.ERROR
        assert state.error == "cursor already closed"
        assert store.state is state
        assert store.reload(lambda: dashboard_data).is_ready

    def test_ready_state_served_during_reload(self, dashboard_data):
        """Readers keep the previous dataset while a refresh is running."""
        store = DashboardStore()
        previous = store.complete(dashboard_data)
        seen = []

        def loader():
            seen.append(store.state)
            return dashboard_data

        store.reload(loader)
        assert seen == [previous]


class TestConcurrentReload:
    """Tests for reloads started from several sessions at once."""

    def test_loader_runs_once(self, dashboard_data):
        store = DashboardStore()
        previous = store.complete(dashboard_data)
        started = threading.Event()
        release = threading.Event()
        calls = []
        seen_during_load = []

        def loader():
            calls.append(1)
            started.set()
            release.wait(timeout=5)
            return dashboard_data

        results = []

        def session():
            results.append(store.reload(loader))

        first = threading.Thread(target=session)
        first.start()
        assert started.wait(timeout=5)

        others = [threading.Thread(target=session) for _ in range(2)]
        for thread in others:
            thread.start()
        # Give the waiting sessions time to queue behind the running load
        time.sleep(0.2)
        seen_during_load.append(store.state)
        release.set()

        for thread in [first] + others:
            thread.join(timeout=5)

        assert len(calls) == 1
        assert seen_during_load == [previous]
        assert len(results) == 3
        assert all(state is results[0] for state in results)
        assert results[0].is_ready
        assert results[0] is not previous
