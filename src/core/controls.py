"""Headless pagination controls.

Each control owns a PaginationBinding and turns the shared state into plain
output values (enabled flag, opacity, text, progress) for whatever rendering
layer draws it. Controls recompute their output on every store notification
and pass it to ``on_render`` if one was given.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from src.core.binding import PaginationBinding
from src.core.navigation import Direction, PaginationState
from src.core.pagination_store import PaginationStore

ENABLED_OPACITY = 1.0
DISABLED_OPACITY = 0.4

CURRENT_PAGE_ICON = "◆"
OTHER_PAGE_ICON = "◇"


@dataclass(frozen=True)
class ControlOutput:
    """Values handed to the rendering layer."""

    enabled: bool = True
    opacity: float = ENABLED_OPACITY
    text: str = ""
    progress: float = 0.0


def _opacity(enabled: bool) -> float:
    return ENABLED_OPACITY if enabled else DISABLED_OPACITY


class PaginationControl(ABC):
    """Base for controls bound to a pagination store."""

    def __init__(
        self,
        store: PaginationStore[Any],
        on_render: Callable[[ControlOutput], None] | None = None,
    ) -> None:
        self._on_render = on_render
        self.binding: PaginationBinding[Any] = PaginationBinding(
            store, on_change=self._refresh
        )
        self.output = self.compute()

    def __enter__(self) -> "PaginationControl":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @abstractmethod
    def compute(self) -> ControlOutput:
        """Output values for the current state."""

    def _refresh(self, state: PaginationState[Any]) -> None:
        self.output = self.compute()
        if self._on_render is not None:
            self._on_render(self.output)

    def close(self) -> None:
        self.binding.close()


class NextButton(PaginationControl):
    """Steps one page in a fixed direction; dimmed at a bounded edge."""

    def __init__(
        self,
        store: PaginationStore[Any],
        direction: Direction | str = Direction.RIGHT,
        on_render: Callable[[ControlOutput], None] | None = None,
    ) -> None:
        self.direction = Direction(direction)
        super().__init__(store, on_render)

    def compute(self) -> ControlOutput:
        enabled = self.binding.next_page(self.direction) is not None
        text = ">" if self.direction is Direction.RIGHT else "<"
        return ControlOutput(enabled=enabled, opacity=_opacity(enabled), text=text)

    def press(self) -> bool:
        return self.binding.snap_to_next_page(self.direction)


class PreviousButton(PaginationControl):
    """Undo control: returns to the page visited before the last navigation."""

    def compute(self) -> ControlOutput:
        enabled = self.binding.previous_page() is not None
        return ControlOutput(enabled=enabled, opacity=_opacity(enabled), text="Back")

    def press(self) -> bool:
        return self.binding.snap_to_previous_page()


class PageIndicator(PaginationControl):
    """Shows "<page> / <total>" and a dot per page."""

    def compute(self) -> ControlOutput:
        total = self.binding.total_pages
        if total == 0:
            return ControlOutput(enabled=False, opacity=DISABLED_OPACITY, text="0 / 0")
        return ControlOutput(
            text=f"{self.binding.current_page + 1} / {total}",
            progress=self.binding.progress,
        )

    def dots(self) -> str:
        current = self.binding.current_page
        return "".join(
            CURRENT_PAGE_ICON if i == current else OTHER_PAGE_ICON
            for i in range(self.binding.total_pages)
        )

    def select(self, index: int) -> bool:
        return self.binding.snap_to_page(index)


class ProgressBar(PaginationControl):
    """Reports progress through the pages and seeks by progress."""

    def compute(self) -> ControlOutput:
        enabled = self.binding.total_pages > 1
        return ControlOutput(
            enabled=enabled,
            opacity=_opacity(enabled),
            text=f"{round(self.binding.progress * 100)}%",
            progress=self.binding.progress,
        )

    def seek(self, progress: float) -> bool:
        return self.binding.snap_to_progress(progress)
