"""Shared pytest fixtures for pagination store tests."""

from collections.abc import Callable

import pytest

from src.core.config import PaginationConfig
from src.core.navigation import PaginationState
from src.core.pagination_store import PaginationStore, create_store


@pytest.fixture(autouse=True)
def clean_pagination_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep PAGINATION_* variables from the host environment out of tests."""
    monkeypatch.delenv("PAGINATION_LOOP", raising=False)
    monkeypatch.delenv("PAGINATION_HISTORY_LIMIT", raising=False)


@pytest.fixture
def pages() -> list[str]:
    """Four page references, as in the bounded navigation scenarios."""
    return ["A", "B", "C", "D"]


@pytest.fixture
def store(pages: list[str]) -> PaginationStore[str]:
    """A bounded store starting on the first page."""
    return create_store(pages, config=PaginationConfig())


@pytest.fixture
def loop_store() -> PaginationStore[str]:
    """A looping store over three pages starting on the first page."""
    return create_store(["A", "B", "C"], config=PaginationConfig(), loop=True)


class Recorder:
    """Listener that keeps every snapshot it is called with."""

    def __init__(self) -> None:
        self.states: list[PaginationState[str]] = []

    def __call__(self, state: PaginationState[str]) -> None:
        self.states.append(state)

    @property
    def pages_seen(self) -> list[int]:
        return [state.current_page for state in self.states]


@pytest.fixture
def recorder() -> Callable[[], Recorder]:
    """Factory for recording listeners.

    Example:
        def test_notifies(store, recorder):
            listener = recorder()
            store.subscribe(listener)
    """
    return Recorder
