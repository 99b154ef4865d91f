"""Tests for the per-control pagination binding."""

import pytest

from src.core.binding import PaginationBinding
from src.core.navigation import Direction
from src.core.pagination_store import PaginationStore


class TestReadFields:
    """Binding fields mirror the store's current snapshot."""

    def test_initial_fields(self, store: PaginationStore[str], pages: list[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.pages is pages
            assert binding.current_page == 0
            assert binding.total_pages == 4
            assert binding.progress == 0.0
            assert binding.history == (0,)
            assert binding.loop is False

    def test_fields_follow_other_bindings(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as reader, PaginationBinding(store) as writer:
            writer.snap_to_page(3)
            assert reader.current_page == 3
            assert reader.progress == 1.0


class TestPeeks:
    """Tests for next_page and previous_page."""

    def test_next_page_none_at_edges(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.next_page(Direction.LEFT) is None
            assert binding.next_page() == 1
            binding.snap_to_page(3)
            assert binding.next_page(Direction.RIGHT) is None

    def test_previous_page_tracks_history(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.previous_page() is None
            binding.snap_to_progress(1.0)
            assert binding.previous_page() == 0


class TestOperations:
    """Binding operations dispatch through the shared store."""

    def test_operations_report_changes(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.snap_to_next_page() is True
            assert binding.snap_to_page(1) is False
            assert binding.snap_to_progress(1.0) is True
            assert binding.snap_to_previous_page() is True
            assert binding.current_page == 1

    def test_on_change_called_for_every_update(
        self, store: PaginationStore[str], recorder
    ) -> None:
        rendered = recorder()
        with PaginationBinding(store, on_change=rendered) as binding:
            binding.snap_to_next_page("right")
            binding.snap_to_next_page("right")
            binding.snap_to_next_page("left")
        assert rendered.pages_seen == [1, 2, 1]

    def test_non_finite_progress_is_ignored(self, store: PaginationStore[str], recorder) -> None:
        rendered = recorder()
        with PaginationBinding(store, on_change=rendered) as binding:
            binding.snap_to_page(1)
            assert binding.snap_to_progress(float("nan")) is False
            assert binding.snap_to_progress(float("inf")) is False
            assert binding.current_page == 1
        assert rendered.pages_seen == [1]


class TestOnChangePage:
    """Tests for reconciling page changes reported by the container."""

    def test_matching_report_is_ignored(self, store: PaginationStore[str], recorder) -> None:
        rendered = recorder()
        with PaginationBinding(store, on_change=rendered) as binding:
            assert binding.on_change_page(0) is False
        assert rendered.states == []

    def test_differing_report_snaps(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.on_change_page(2) is True
            assert binding.current_page == 2
            assert binding.history == (0, 0)

    def test_container_echo_does_not_loop(self, store: PaginationStore[str]) -> None:
        """A container that reports every page it is shown settles after one update."""
        calls: list[int] = []
        container: dict[str, PaginationBinding[str]] = {}

        def show_page(state) -> None:
            calls.append(state.current_page)
            # The container reports the page it now displays
            container["binding"].on_change_page(state.current_page)

        with PaginationBinding(store, on_change=show_page) as binding:
            container["binding"] = binding
            with PaginationBinding(store) as next_button:
                next_button.snap_to_next_page()
        assert calls == [1]


class TestTeardown:
    """Bindings release their subscription on every exit path."""

    def test_close_unsubscribes(self, store: PaginationStore[str]) -> None:
        binding = PaginationBinding(store)
        assert store.listener_count == 1
        binding.close()
        binding.close()
        assert binding.closed
        assert store.listener_count == 0

    def test_context_manager_closes_on_error(self, store: PaginationStore[str]) -> None:
        with pytest.raises(RuntimeError):
            with PaginationBinding(store):
                raise RuntimeError("unmounted abnormally")
        assert store.listener_count == 0

    def test_closed_binding_ignores_operations(
        self, store: PaginationStore[str], recorder
    ) -> None:
        rendered = recorder()
        binding = PaginationBinding(store, on_change=rendered)
        binding.close()
        assert binding.snap_to_next_page() is False
        assert binding.on_change_page(2) is False
        assert binding.sync_pages(["X"]) is False
        assert store.get_state().current_page == 0
        assert rendered.states == []

    def test_closed_binding_stops_receiving(self, store: PaginationStore[str], recorder) -> None:
        rendered = recorder()
        binding = PaginationBinding(store, on_change=rendered)
        binding.close()
        with PaginationBinding(store) as other:
            other.snap_to_page(2)
        assert rendered.states == []


class TestSyncPages:
    """Tests for forwarding the container's pages."""

    def test_sync_new_pages(self, store: PaginationStore[str]) -> None:
        with PaginationBinding(store) as binding:
            binding.snap_to_page(3)
            assert binding.sync_pages(["A", "B", "C"]) is True
            assert binding.total_pages == 3
            assert binding.current_page == 2

    def test_sync_same_pages_is_noop(self, store: PaginationStore[str], pages: list[str]) -> None:
        with PaginationBinding(store) as binding:
            assert binding.sync_pages(pages) is False
