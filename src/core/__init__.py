"""Shared pagination state for independently wired UI controls.

This package contains the navigation logic, the publish/subscribe store that
applies it, and the per-control bindings and headless controls built on top.
"""

from src.core.binding import PaginationBinding
from src.core.config import PaginationConfig, PaginationOptions
from src.core.controls import (
    ControlOutput,
    NextButton,
    PageIndicator,
    PaginationControl,
    PreviousButton,
    ProgressBar,
)
from src.core.errors import ConfigurationError, PaginationError
from src.core.logging import (
    bind_contextvars,
    clear_contextvars,
    configure_logging,
    get_logger,
    unbind_contextvars,
)
from src.core.navigation import (
    Direction,
    PaginationState,
    compute_progress,
    next_page_index,
    previous_page,
    snap_to_next_page,
    snap_to_page,
    snap_to_previous_page,
    snap_to_progress,
    validate_index,
)
from src.core.pagination_store import (
    PaginationStore,
    StatePatch,
    Subscription,
    create_store,
)

__all__ = [
    # Binding
    "PaginationBinding",
    # Configuration
    "PaginationConfig",
    "PaginationOptions",
    # Controls
    "ControlOutput",
    "NextButton",
    "PageIndicator",
    "PaginationControl",
    "PreviousButton",
    "ProgressBar",
    # Errors
    "ConfigurationError",
    "PaginationError",
    # Logging
    "bind_contextvars",
    "clear_contextvars",
    "configure_logging",
    "get_logger",
    "unbind_contextvars",
    # Navigation
    "Direction",
    "PaginationState",
    "compute_progress",
    "next_page_index",
    "previous_page",
    "snap_to_next_page",
    "snap_to_page",
    "snap_to_previous_page",
    "snap_to_progress",
    "validate_index",
    # Store
    "PaginationStore",
    "StatePatch",
    "Subscription",
    "create_store",
]
