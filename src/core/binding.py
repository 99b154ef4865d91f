"""Per-control facade over a shared PaginationStore.

Each UI control that reads or drives the pagination state owns one
``PaginationBinding``. The binding subscribes to the store on construction
and must be closed on the control's teardown path; using it as a context
manager guarantees that:

    with PaginationBinding(store, on_change=button.refresh) as binding:
        binding.snap_to_next_page(Direction.RIGHT)
"""

from collections.abc import Callable, Sequence
from types import TracebackType
from typing import Any, Generic, TypeVar

from src.core import navigation
from src.core.logging import get_logger
from src.core.navigation import Direction, PaginationState
from src.core.pagination_store import PaginationStore, Subscription

logger = get_logger(__name__)

T = TypeVar("T")


class PaginationBinding(Generic[T]):
    """Read fields and navigation operations for one consuming control.

    Read fields always reflect the store's current snapshot. Operations
    return whether the state changed; after ``close()`` they are ignored.
    """

    def __init__(
        self,
        store: PaginationStore[T],
        on_change: Callable[[PaginationState[T]], None] | None = None,
    ) -> None:
        """Subscribe to ``store``.

        Args:
            store: The store shared by every control of one container.
            on_change: Called with each new snapshot so the owning control
                can re-render.
        """
        self._store = store
        self._on_change = on_change
        self._subscription: Subscription = store.subscribe(self._handle_update)
        self._closed = False

    def __enter__(self) -> "PaginationBinding[T]":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _handle_update(self, state: PaginationState[T]) -> None:
        if self._on_change is not None:
            self._on_change(state)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Unsubscribe from the store. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._subscription.unsubscribe()
        logger.debug("binding_closed", store_id=self._store.store_id)

    # Read fields

    @property
    def state(self) -> PaginationState[T]:
        return self._store.get_state()

    @property
    def pages(self) -> Sequence[T]:
        return self.state.pages

    @property
    def current_page(self) -> int:
        return self.state.current_page

    @property
    def total_pages(self) -> int:
        return self.state.total_pages

    @property
    def progress(self) -> float:
        return self.state.progress

    @property
    def history(self) -> tuple[int, ...]:
        return self.state.history

    @property
    def loop(self) -> bool:
        return self.state.loop

    # Peeks

    def next_page(self, direction: Direction | str = Direction.RIGHT) -> int | None:
        """Page one step in ``direction``, or None at a bounded edge."""
        state = self.state
        return navigation.next_page_index(
            state.pages, state.loop, state.current_page, direction
        )

    def previous_page(self) -> int | None:
        """Page the undo control would return to, or None if nothing to undo."""
        return navigation.previous_page(self.state)

    # Operations

    def _dispatch(self, operation: Callable[..., PaginationState[Any]], *args: Any) -> bool:
        if self._closed:
            logger.warning(
                "binding_closed_operation_ignored",
                store_id=self._store.store_id,
                operation=operation.__name__,
            )
            return False
        return self._store.dispatch(operation, *args)

    def snap_to_next_page(self, direction: Direction | str = Direction.RIGHT) -> bool:
        return self._dispatch(navigation.snap_to_next_page, direction)

    def snap_to_page(self, index: int) -> bool:
        return self._dispatch(navigation.snap_to_page, index)

    def snap_to_previous_page(self) -> bool:
        return self._dispatch(navigation.snap_to_previous_page)

    def snap_to_progress(self, progress: float) -> bool:
        return self._dispatch(navigation.snap_to_progress, progress)

    def on_change_page(self, observed_page: int) -> bool:
        """Reconcile a page change reported by the pagination container.

        The container reports every page change, including the ones this
        store just caused. Reports matching the current page are ignored,
        which breaks the container -> store -> container notification loop.
        """
        if observed_page == self.current_page:
            return False
        return self.snap_to_page(observed_page)

    def sync_pages(self, pages: Sequence[T]) -> bool:
        """Forward the container's current pages to the store."""
        if self._closed:
            logger.warning(
                "binding_closed_operation_ignored",
                store_id=self._store.store_id,
                operation="sync_pages",
            )
            return False
        return self._store.set_pages(pages)
