"""Tests for registry configuration.

Covers:
- Default values
- Loading from TILE_REGISTRY_* environment variables
- Boolean coercion
- Fail-fast validation of mission, backend and corner convention
"""

from __future__ import annotations

import dataclasses
import os
from unittest.mock import patch

import pytest

from tile_registry.core.config import ConfigValidationError, RegistryConfig
from tile_registry.core.constants import CornerConvention
from tile_registry.core.exceptions import ValidationError

_ENV_KEYS = (
    "TILE_REGISTRY_MISSION",
    "TILE_REGISTRY_KML_BACKEND",
    "TILE_REGISTRY_CORNER_CONVENTION",
    "TILE_REGISTRY_STRICT_KML",
    "TILE_REGISTRY_VALIDATE_COORDINATES",
)


def _clean_env(**overrides: str) -> dict[str, str]:
    env = {k: v for k, v in os.environ.items() if k not in _ENV_KEYS}
    env.update(overrides)
    return env


class TestRegistryConfigDefaults:
    """Verify default configuration values."""

    def test_defaults(self) -> None:
        cfg = RegistryConfig()
        assert cfg.mission == "sentinel2"
        assert cfg.kml_backend == "lxml"
        assert cfg.corner_convention is CornerConvention.LITERAL
        assert cfg.strict_kml is True
        assert cfg.validate_coordinates is True

    def test_frozen(self) -> None:
        cfg = RegistryConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.mission = "landsat8"  # type: ignore[misc]

    def test_from_env_without_variables_matches_defaults(self) -> None:
        with patch.dict(os.environ, _clean_env(), clear=True):
            assert RegistryConfig.from_env() == RegistryConfig()


class TestRegistryConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        env = _clean_env(
            TILE_REGISTRY_MISSION="landsat8",
            TILE_REGISTRY_KML_BACKEND="fiona",
            TILE_REGISTRY_CORNER_CONVENTION="corrected",
            TILE_REGISTRY_STRICT_KML="false",
            TILE_REGISTRY_VALIDATE_COORDINATES="0",
        )
        with patch.dict(os.environ, env, clear=True):
            cfg = RegistryConfig.from_env()

        assert cfg.mission == "landsat8"
        assert cfg.kml_backend == "fiona"
        assert cfg.corner_convention is CornerConvention.CORRECTED
        assert cfg.strict_kml is False
        assert cfg.validate_coordinates is False

    def test_values_are_case_and_space_insensitive(self) -> None:
        env = _clean_env(
            TILE_REGISTRY_MISSION="  Landsat8 ",
            TILE_REGISTRY_CORNER_CONVENTION="CORRECTED",
            TILE_REGISTRY_STRICT_KML=" Off ",
        )
        with patch.dict(os.environ, env, clear=True):
            cfg = RegistryConfig.from_env()
        assert cfg.mission == "landsat8"
        assert cfg.corner_convention is CornerConvention.CORRECTED
        assert cfg.strict_kml is False

    @pytest.mark.parametrize("raw", ["1", "true", "YES", "on"])
    def test_true_values(self, raw: str) -> None:
        with patch.dict(os.environ, _clean_env(TILE_REGISTRY_STRICT_KML=raw), clear=True):
            assert RegistryConfig.from_env().strict_kml is True

    def test_blank_boolean_uses_default(self) -> None:
        with patch.dict(
            os.environ, _clean_env(TILE_REGISTRY_VALIDATE_COORDINATES="  "), clear=True
        ):
            assert RegistryConfig.from_env().validate_coordinates is True


class TestRegistryConfigValidation:
    """Fail-fast validation of environment values."""

    def test_unknown_mission(self) -> None:
        with (
            patch.dict(os.environ, _clean_env(TILE_REGISTRY_MISSION="sentinel1"), clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            RegistryConfig.from_env()
        assert exc_info.value.key == "TILE_REGISTRY_MISSION"
        assert exc_info.value.value == "sentinel1"

    def test_unknown_backend(self) -> None:
        with (
            patch.dict(os.environ, _clean_env(TILE_REGISTRY_KML_BACKEND="gdal"), clear=True),
            pytest.raises(ConfigValidationError, match="TILE_REGISTRY_KML_BACKEND"),
        ):
            RegistryConfig.from_env()

    def test_unknown_corner_convention(self) -> None:
        env = _clean_env(TILE_REGISTRY_CORNER_CONVENTION="swapped")
        with (
            patch.dict(os.environ, env, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            RegistryConfig.from_env()
        assert "corrected" in exc_info.value.reason
        assert "literal" in exc_info.value.reason

    def test_invalid_boolean(self) -> None:
        with (
            patch.dict(os.environ, _clean_env(TILE_REGISTRY_STRICT_KML="maybe"), clear=True),
            pytest.raises(ConfigValidationError, match="must be a boolean"),
        ):
            RegistryConfig.from_env()

    def test_direct_construction_rejects_unknown_backend(self) -> None:
        with pytest.raises(ConfigValidationError) as exc_info:
            RegistryConfig(kml_backend="bogus")
        assert exc_info.value.key == "kml_backend"
        assert exc_info.value.value == "bogus"

    def test_direct_construction_accepts_fiona(self) -> None:
        assert RegistryConfig(kml_backend="fiona").kml_backend == "fiona"

    def test_error_is_validation_error(self) -> None:
        err = ConfigValidationError("KEY", "v", "bad")
        assert isinstance(err, ValidationError)
        assert err.stage == "config"
        assert err.code == "CONFIG_VALIDATION_FAILED"
        assert str(err) == "Invalid configuration KEY='v': bad"
