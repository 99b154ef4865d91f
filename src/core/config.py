"""Store configuration.

``PaginationOptions`` validates the initial configuration a pagination
container hands to ``create_store``. ``PaginationConfig`` supplies
process-wide defaults from the environment:

    PAGINATION_LOOP           "true" / "false" (default: false)
    PAGINATION_HISTORY_LIMIT  positive integer, or empty for unbounded
"""

import os
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from src.core.errors import ConfigurationError

# The origin entry plus one page to return to
MIN_HISTORY_LIMIT = 2

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class PaginationOptions(BaseModel):
    """Initial configuration supplied by a pagination container."""

    current_page: int = Field(0, description="Initially active page index")
    loop: bool = Field(False, description="Wrap around at either end")
    history: list[int] | None = Field(
        None,
        description="Initial undo stack, oldest first. Defaults to [current_page]",
    )
    history_limit: int | None = Field(
        None,
        ge=MIN_HISTORY_LIMIT,
        description="Maximum history length; None keeps every entry",
    )

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "current_page": 0,
                "loop": False,
                "history": [0],
                "history_limit": 50,
            }
        },
    )

    @classmethod
    def parse(cls, data: dict[str, Any]) -> "PaginationOptions":
        """Validate ``data``, raising ConfigurationError on failure."""
        try:
            return cls.model_validate(data)
        except ValidationError as ex:
            errors = ex.errors()
            field = str(errors[0]["loc"][0]) if errors and errors[0]["loc"] else None
            raise ConfigurationError.from_exception(ex, field=field) from ex


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", field=name)


def _parse_limit(name: str, raw: str) -> int | None:
    value = raw.strip()
    if not value:
        return None
    try:
        limit = int(value)
    except ValueError as ex:
        raise ConfigurationError.from_exception(ex, field=name) from ex
    if limit < MIN_HISTORY_LIMIT:
        raise ConfigurationError(
            f"{name} must be at least {MIN_HISTORY_LIMIT}, got {limit}", field=name
        )
    return limit


@dataclass
class PaginationConfig:
    """Process-wide store defaults.

    Attributes:
        loop: Default navigation mode for new stores.
        history_limit: Default history cap for new stores, None for unbounded.
    """

    loop: bool = False
    history_limit: int | None = None

    @classmethod
    def from_env(cls) -> "PaginationConfig":
        """Read defaults from PAGINATION_* environment variables."""
        return cls(
            loop=_parse_bool("PAGINATION_LOOP", os.getenv("PAGINATION_LOOP", "false")),
            history_limit=_parse_limit(
                "PAGINATION_HISTORY_LIMIT", os.getenv("PAGINATION_HISTORY_LIMIT", "")
            ),
        )

    def options(self, **overrides: Any) -> PaginationOptions:
        """Build store options from these defaults plus explicit overrides."""
        data: dict[str, Any] = {"loop": self.loop, "history_limit": self.history_limit}
        data.update(overrides)
        return PaginationOptions.parse(data)
