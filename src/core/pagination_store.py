"""Publish/subscribe container for a paginated view's navigation state.

One ``PaginationStore`` is created per pagination container with
``create_store``. Controls never mutate state themselves: they hand an
operation from ``src.core.navigation`` to ``dispatch``, and the store merges
the result and notifies every subscriber with the new snapshot.

Example:
    store = create_store(pages, current_page=0, loop=False)
    subscription = store.subscribe(lambda state: print(state.current_page))
    store.dispatch(snap_to_next_page, Direction.RIGHT)   # prints 1
    subscription()                                       # stop listening
"""

import itertools
import weakref
from collections.abc import Callable, Sequence
from dataclasses import dataclass, fields, replace
from typing import Any, Generic, TypeVar
from uuid import uuid4

from src.core.config import MIN_HISTORY_LIMIT, PaginationConfig, PaginationOptions
from src.core.errors import ConfigurationError
from src.core.logging import get_logger
from src.core.navigation import PaginationState, validate_index

logger = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[PaginationState[Any]], None]
Operation = Callable[..., PaginationState[Any]]


@dataclass(frozen=True)
class StatePatch:
    """Fields to merge into the current state. ``None`` means "leave as is".

    There is no ``progress`` field: progress is derived from
    ``current_page`` and ``pages`` every time a snapshot is built.
    """

    pages: Sequence[Any] | None = None
    current_page: int | None = None
    history: Sequence[int] | None = None
    loop: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Return the fields this patch sets."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @classmethod
    def diff(cls, before: PaginationState[Any], after: PaginationState[Any]) -> "StatePatch":
        """Patch that turns ``before`` into ``after``."""
        return cls(
            pages=after.pages if after.pages is not before.pages else None,
            current_page=(
                after.current_page
                if after.current_page != before.current_page
                else None
            ),
            history=after.history if after.history != before.history else None,
            loop=after.loop if after.loop != before.loop else None,
        )


class Subscription:
    """Handle returned by ``PaginationStore.subscribe``.

    Calling the handle (or ``unsubscribe()``) removes the listener. Removal is
    idempotent and still safe after the store itself has been discarded.
    """

    def __init__(self, store: "PaginationStore[Any]", token: int) -> None:
        self._store_ref = weakref.ref(store)
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active and self._store_ref() is not None

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        store = self._store_ref()
        if store is not None:
            store._remove_listener(self._token)

    def __call__(self) -> None:
        self.unsubscribe()


class PaginationStore(Generic[T]):
    """Holds the canonical PaginationState and notifies subscribers.

    ``set_state`` is the only way state changes. Every call merges a patch,
    rebuilds the snapshot (recomputing progress) and synchronously calls each
    registered listener with it. Listener order is not part of the contract.

    A listener may itself update the store. The nested update notifies every
    listener with the newer snapshot, and the outer pass stops early so no
    listener sees an older snapshot after a newer one.
    """

    def __init__(
        self,
        pages: Sequence[T],
        current_page: int = 0,
        loop: bool = False,
        history: Sequence[int] | None = None,
        history_limit: int | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            pages: The container's page references, held by reference.
            current_page: Initially active page; normalized into range.
            loop: Whether navigation wraps around at either end.
            history: Initial undo stack, oldest first. Defaults to
                ``[current_page]``.
            history_limit: Maximum history length, None for unbounded.

        Raises:
            ConfigurationError: If history_limit is below MIN_HISTORY_LIMIT.
        """
        if history_limit is not None and history_limit < MIN_HISTORY_LIMIT:
            raise ConfigurationError(
                f"history_limit must be at least {MIN_HISTORY_LIMIT}, got {history_limit}",
                field="history_limit",
            )
        start = validate_index(pages, loop, current_page)
        self._state: PaginationState[T] = PaginationState(
            pages=pages,
            current_page=start,
            loop=loop,
            history=tuple(history) if history else (start,),
            history_limit=history_limit,
        )
        self._listeners: dict[int, Listener] = {}
        self._tokens = itertools.count(1)
        self._version = 0
        self.store_id = uuid4().hex[:12]
        self._log = logger.bind(store_id=self.store_id)
        self._log.debug(
            "store_created",
            total_pages=len(pages),
            current_page=start,
            loop=loop,
            history_limit=history_limit,
        )

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def get_state(self) -> PaginationState[T]:
        """Return the current immutable snapshot."""
        return self._state

    def set_state(self, patch: StatePatch) -> PaginationState[T]:
        """Merge ``patch``, recompute derived fields and notify listeners.

        Bounds are not checked here; patches are expected to come from the
        navigation functions, which normalize indices first.

        Returns:
            The new snapshot.
        """
        changes = patch.changes()
        state = replace(self._state, **changes)
        self._state = state
        self._version += 1
        version = self._version
        self._log.debug(
            "state_updated",
            fields=sorted(changes),
            current_page=state.current_page,
            progress=state.progress,
            history_depth=len(state.history),
        )

        for token, listener in list(self._listeners.items()):
            if self._version != version:
                # A listener already triggered a newer notification pass
                break
            if token not in self._listeners:
                continue
            listener(state)
        return state

    def subscribe(self, listener: Listener) -> Subscription:
        """Call ``listener`` with every new snapshot until unsubscribed."""
        token = next(self._tokens)
        self._listeners[token] = listener
        self._log.debug("listener_subscribed", token=token, listeners=len(self._listeners))
        return Subscription(self, token)

    def _remove_listener(self, token: int) -> None:
        if self._listeners.pop(token, None) is not None:
            self._log.debug(
                "listener_unsubscribed", token=token, listeners=len(self._listeners)
            )

    def dispatch(self, operation: Operation, *args: Any) -> bool:
        """Apply a navigation operation to the current snapshot.

        Args:
            operation: A function from ``src.core.navigation`` taking the
                snapshot as its first argument.
            *args: Remaining arguments for the operation.

        Returns:
            True if the state changed and listeners were notified.
        """
        current = self._state
        result = operation(current, *args)
        if result is current:
            self._log.debug(
                "navigation_ignored",
                operation=getattr(operation, "__name__", repr(operation)),
                current_page=current.current_page,
            )
            return False
        self.set_state(StatePatch.diff(current, result))
        return True

    def set_pages(self, pages: Sequence[T]) -> bool:
        """Replace the page sequence with the container's current pages.

        A sequence equal to the current one is ignored, so containers can
        call this on every render pass without triggering notifications. If
        the page count shrinks below the current page, the current page is
        clamped to the new last page.

        Returns:
            True if the pages were replaced.
        """
        current = self._state
        if pages is current.pages or list(pages) == list(current.pages):
            return False
        count = len(pages)
        page = min(current.current_page, count - 1) if count else 0
        self.set_state(StatePatch(pages=pages, current_page=page))
        self._log.debug("pages_synced", total_pages=count, current_page=page)
        return True


def create_store(
    pages: Sequence[T],
    options: PaginationOptions | dict[str, Any] | None = None,
    config: PaginationConfig | None = None,
    **overrides: Any,
) -> PaginationStore[T]:
    """Create the store for one pagination container.

    Settings are resolved in order of precedence: keyword overrides, then
    ``options``, then ``config`` (read from the environment when omitted).

    Args:
        pages: The container's page references.
        options: Initial configuration from the container.
        config: Process-wide defaults.
        **overrides: Individual PaginationOptions fields.

    Returns:
        A new PaginationStore.

    Raises:
        ConfigurationError: If the resolved options are invalid.
    """
    if config is None:
        config = PaginationConfig.from_env()

    data: dict[str, Any] = {"loop": config.loop, "history_limit": config.history_limit}
    if isinstance(options, PaginationOptions):
        data.update(options.model_dump(exclude_unset=True))
    elif options:
        data.update(options)
    data.update(overrides)
    resolved = PaginationOptions.parse(data)

    return PaginationStore(
        pages,
        current_page=resolved.current_page,
        loop=resolved.loop,
        history=resolved.history,
        history_limit=resolved.history_limit,
    )
