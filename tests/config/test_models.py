"""Tests for configuration section models."""

import pytest
from pydantic import ValidationError

from gamecat.config.models import OutputConfig, RegistryConfig


class TestRegistryConfig:
    def test_defaults(self) -> None:
        config = RegistryConfig()
        assert config.games is None
        assert config.load_plugins is True

    def test_frozen(self) -> None:
        config = RegistryConfig()
        with pytest.raises(ValidationError):
            config.load_plugins = False  # type: ignore[misc]


class TestOutputConfig:
    def test_max_issues_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            OutputConfig(max_issues_shown=0)

