"""Pagination navigation logic - platform agnostic.

Pure functions over an immutable ``PaginationState`` snapshot. Operations
that move the current page return a new snapshot; when a request would not
change anything the input snapshot itself is returned, so callers detect a
no-op with ``result is state``.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class Direction(str, Enum):
    """Direction of a single-step navigation."""

    RIGHT = "right"
    LEFT = "left"

    @property
    def offset(self) -> int:
        return 1 if self is Direction.RIGHT else -1


def compute_progress(current_page: int, page_count: int) -> float:
    """Map a page index onto [0, 1]. Zero when there is at most one page."""
    if page_count <= 1:
        return 0.0
    return current_page / (page_count - 1)


@dataclass(frozen=True)
class PaginationState(Generic[T]):
    """Snapshot of a paginated container's navigation state.

    Attributes:
        pages: The container's page references. Held by reference, never
            copied, since the container owns them.
        current_page: Index of the active page.
        loop: Whether navigation wraps around at either end.
        history: Previously visited pages, oldest first. The last entry is
            the top of the undo stack. Never empty.
        history_limit: Maximum history length, or None for unbounded.
        progress: Derived position of current_page within pages. Recomputed
            whenever a snapshot is built and never accepted as input.
    """

    pages: Sequence[T] = ()
    current_page: int = 0
    loop: bool = False
    history: tuple[int, ...] = ()
    history_limit: int | None = None
    progress: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        history = tuple(self.history) or (self.current_page,)
        if self.history_limit is not None and len(history) > self.history_limit:
            history = history[-self.history_limit :]
        object.__setattr__(self, "history", history)
        object.__setattr__(
            self, "progress", compute_progress(self.current_page, len(self.pages))
        )

    @property
    def total_pages(self) -> int:
        return len(self.pages)


def _as_direction(direction: Direction | str) -> Direction:
    return direction if isinstance(direction, Direction) else Direction(direction)


def _push_history(
    history: tuple[int, ...], page: int, limit: int | None
) -> tuple[int, ...]:
    pushed = (*history, page)
    if limit is not None and len(pushed) > limit:
        pushed = pushed[-limit:]
    return pushed


def validate_index(pages: Sequence[object], loop: bool, index: int) -> int:
    """Bring an index back into range.

    Looping stores wrap using add-length-then-modulo, which handles the
    one-step-negative indices produced by left navigation. Bounded stores
    clamp to the first/last page. An empty page sequence always yields 0.
    """
    count = len(pages)
    if count == 0:
        return 0
    if loop:
        return (count + index) % count
    return max(0, min(index, count - 1))


def next_page_index(
    pages: Sequence[object],
    loop: bool,
    current_page: int,
    direction: Direction | str = Direction.RIGHT,
) -> int | None:
    """Index one step away from current_page, or None if there is none.

    Looping stores always have a neighbour. Bounded stores return None at
    the edge in the requested direction, which controls use to render a
    disabled affordance.
    """
    count = len(pages)
    if count == 0:
        return None
    target = current_page + _as_direction(direction).offset
    if loop:
        return (count + target) % count
    if target < 0 or target > count - 1:
        return None
    return target


def snap_to_page(state: PaginationState[T], index: int) -> PaginationState[T]:
    """Move to ``index``, pushing the page being left onto the history."""
    target = validate_index(state.pages, state.loop, index)
    if target == state.current_page:
        return state
    return replace(
        state,
        current_page=target,
        history=_push_history(state.history, state.current_page, state.history_limit),
    )


def snap_to_next_page(
    state: PaginationState[T], direction: Direction | str = Direction.RIGHT
) -> PaginationState[T]:
    """Step one page in ``direction``; unchanged at a bounded edge."""
    target = next_page_index(state.pages, state.loop, state.current_page, direction)
    if target is None:
        return state
    return snap_to_page(state, target)


def previous_page(state: PaginationState[T]) -> int | None:
    """Peek at the page snap_to_previous_page would return to."""
    if len(state.history) <= 1:
        return None
    return validate_index(state.pages, state.loop, state.history[-1])


def snap_to_previous_page(state: PaginationState[T]) -> PaginationState[T]:
    """Undo the most recent navigation by popping the history stack.

    The bottom entry is the store's origin and is never popped. A popped
    entry that equals the current page is still consumed, so repeated calls
    always make progress through duplicate entries.
    """
    if len(state.history) <= 1:
        return state
    remaining = state.history[:-1]
    target = validate_index(state.pages, state.loop, state.history[-1])
    if target == state.current_page:
        return replace(state, history=remaining)
    return replace(state, current_page=target, history=remaining)


def snap_to_progress(state: PaginationState[T], progress: float) -> PaginationState[T]:
    """Jump to the page nearest ``progress`` (0.0 first page, 1.0 last)."""
    if not math.isfinite(progress):
        return state
    # Half-up rounding; built-in round() rounds halves to even.
    index = math.floor(progress * (len(state.pages) - 1) + 0.5)
    return snap_to_page(state, index)
