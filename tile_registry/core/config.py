"""Registry configuration loaded from environment variables.

All configuration values have sensible defaults, so ``RegistryConfig()``
is usable as-is. ``from_env()`` reads the ``TILE_REGISTRY_*`` variables.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any value is outside
    its allowed set, so bad configuration is caught at startup instead of
    on the first KML ingest.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from tile_registry.core.constants import (
    KML_BACKEND_LXML,
    KNOWN_KML_BACKENDS,
    KNOWN_MISSIONS,
    SENTINEL2,
    CornerConvention,
)
from tile_registry.core.exceptions import ValidationError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(ValidationError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
        reason: Human-readable description of the valid range.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid configuration {key}={value!r}: {reason}")


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Immutable registry configuration.

    Attributes:
        mission: Default mission grid for ``create_registry()``.
        kml_backend: KML parser to use (``lxml`` or ``fiona``).
        corner_convention: Default convention for four-corner AOI queries.
        strict_kml: Fail the whole ingest on an invalid tile placemark
            instead of logging and skipping it.
        validate_coordinates: Reject KML coordinates outside WGS 84 bounds.
    """

    mission: str = SENTINEL2
    kml_backend: str = KML_BACKEND_LXML
    corner_convention: CornerConvention = CornerConvention.LITERAL
    strict_kml: bool = True
    validate_coordinates: bool = True

    def __post_init__(self) -> None:
        if self.kml_backend not in KNOWN_KML_BACKENDS:
            raise ConfigValidationError(
                "kml_backend",
                self.kml_backend,
                f"must be one of {sorted(KNOWN_KML_BACKENDS)}",
            )

    @classmethod
    def from_env(cls) -> RegistryConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If any value is not one of its allowed
                choices.
        """
        mission = os.getenv("TILE_REGISTRY_MISSION", SENTINEL2).strip().lower()
        backend = os.getenv("TILE_REGISTRY_KML_BACKEND", KML_BACKEND_LXML).strip().lower()
        convention_raw = os.getenv("TILE_REGISTRY_CORNER_CONVENTION", "literal").strip().lower()

        try:
            convention = CornerConvention(convention_raw)
        except ValueError:
            raise ConfigValidationError(
                "TILE_REGISTRY_CORNER_CONVENTION",
                convention_raw,
                f"must be one of {sorted(c.value for c in CornerConvention)}",
            ) from None

        _validate(mission, backend)
        return cls(
            mission=mission,
            kml_backend=backend,
            corner_convention=convention,
            strict_kml=_parse_bool("TILE_REGISTRY_STRICT_KML", default=True),
            validate_coordinates=_parse_bool("TILE_REGISTRY_VALIDATE_COORDINATES", default=True),
        )


def _parse_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be a boolean (true/false, 1/0, yes/no, on/off)")


def _validate(mission: str, backend: str) -> None:
    """Validate environment choices.  Raises ``ConfigValidationError``."""
    if mission not in KNOWN_MISSIONS:
        raise ConfigValidationError(
            "TILE_REGISTRY_MISSION",
            mission,
            f"must be one of {sorted(KNOWN_MISSIONS)}",
        )

    if backend not in KNOWN_KML_BACKENDS:
        raise ConfigValidationError(
            "TILE_REGISTRY_KML_BACKEND",
            backend,
            f"must be one of {sorted(KNOWN_KML_BACKENDS)}",
        )
