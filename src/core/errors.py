"""Errors raised while configuring a pagination store.

Navigation itself never raises: out-of-range and redundant requests are
clamped, wrapped or treated as no-ops. The only failures surfaced to callers
are configuration problems that cannot be normalized, for example a history
limit below one or an unparsable environment variable.

Example:
    from src.core.errors import ConfigurationError

    try:
        config = PaginationConfig.from_env()
    except ConfigurationError as ex:
        logger.error("bad_pagination_config", field=ex.field, error=str(ex))
        raise
"""


class PaginationError(Exception):
    """Base class for errors raised by this package."""


class ConfigurationError(PaginationError):
    """Store options could not be validated or parsed.

    Attributes:
        field: Name of the offending option, if known.
        original_error: The underlying exception (pydantic ValidationError
            or ValueError), if any.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.field = field
        self.original_error = original_error

    @classmethod
    def from_exception(
        cls,
        ex: Exception,
        field: str | None = None,
    ) -> "ConfigurationError":
        """Wrap an existing exception."""
        return cls(message=str(ex), field=field, original_error=ex)
