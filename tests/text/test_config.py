"""Tests for the TextConfig frozen dataclass.

Covers:
- Default values (escapes=False, single_quotes=True, max_depth=256,
  strict_terminators=True)
- Immutability (FrozenInstanceError on assignment)
- Validation of max_depth
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from json_value.text.config import TextConfig


class TestTextConfigDefaults:
    def test_default_escapes(self) -> None:
        assert TextConfig().escapes is False

    def test_default_single_quotes(self) -> None:
        assert TextConfig().single_quotes is True

    def test_default_max_depth(self) -> None:
        assert TextConfig().max_depth == 256

    def test_default_strict_terminators(self) -> None:
        assert TextConfig().strict_terminators is True


class TestTextConfigImmutability:
    def test_cannot_assign(self) -> None:
        config = TextConfig()
        with pytest.raises(FrozenInstanceError):
            config.escapes = True  # type: ignore[misc]

    def test_equal_configs_compare_equal(self) -> None:
        assert TextConfig(max_depth=3) == TextConfig(max_depth=3)


class TestTextConfigValidation:
    def test_max_depth_one_is_valid(self) -> None:
        assert TextConfig(max_depth=1).max_depth == 1

    @pytest.mark.parametrize("depth", [0, -1])
    def test_max_depth_must_be_positive(self, depth: int) -> None:
        with pytest.raises(ValueError, match="max_depth must be >= 1"):
            TextConfig(max_depth=depth)

    @pytest.mark.parametrize("depth", [1.5, True, "3"])
    def test_max_depth_must_be_int(self, depth: object) -> None:
        with pytest.raises(ValueError, match="max_depth must be an int"):
            TextConfig(max_depth=depth)  # type: ignore[arg-type]
