"""Unified exception taxonomy for the tile registry.

Every domain exception inherits from ``TileRegistryError`` and carries
structured context fields (stage, code, retryability) so callers can
decide whether to abort or skip.

Taxonomy categories
-------------------
- ``ValidationError``: malformed input or configuration, never retryable.
- ``ParseError``: malformed tile-map or KML input (a ``ValidationError``).

I/O faults are not part of this hierarchy: they surface as
the built-in ``OSError`` raised by the failing stream or file call.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for logging.
"""

from __future__ import annotations


class TileRegistryError(Exception):
    """Base exception for all tile-registry errors.

    Attributes:
        message: Human-readable error description.
        stage: Operation where the error occurred
            (e.g. ``"read"``, ``"ingest_kml"``).
        code: Machine-readable error code (e.g. ``"TILE_MAP_PARSE_FAILED"``).
        retryable: Whether repeating the operation could succeed.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ValidationError):
            return "validation"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(TileRegistryError):
    """Input or configuration validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class ParseError(ValidationError):
    """Raised when registry input (tile map or KML) is malformed."""

    default_code = "PARSE_FAILED"


class TileMapParseError(ParseError):
    """Raised when a tile-map line does not follow the persisted grammar.

    Attributes:
        line_number: 1-based line number of the offending line (0 if unknown).
        field: Name of the failing field (``"tile_id"``, ``"x"``, ...),
            empty when the whole line is at fault.
    """

    default_stage = "read"
    default_code = "TILE_MAP_PARSE_FAILED"

    def __init__(
        self,
        message: str = "",
        *,
        line_number: int = 0,
        field: str = "",
        **kwargs: object,
    ) -> None:
        self.line_number = line_number
        self.field = field
        super().__init__(message, **kwargs)

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["line_number"] = self.line_number
        payload["field"] = self.field
        return payload
