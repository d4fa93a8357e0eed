"""
Tests for the Result[P] envelope.

Validates:
    - Generic type parameter works with arbitrary payload types
    - Frozen immutability
    - Default factories (warnings, provenance)
    - has_warning() method
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pywls.core.result import Result, _default_provenance


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**kwargs):
    defaults = dict(
        params=FakeParams(value=1.0),
        info={},
        timing=None,
        backend_name="cpu_normal",
    )
    defaults.update(kwargs)
    return Result(**defaults)


class TestResultConstruction:
    """Result can be created with any payload type."""

    def test_basic_creation(self):
        result = _result(
            params=FakeParams(value=42.0),
            info={"method": "normal_equations"},
            timing={"total_seconds": 0.01},
        )
        assert result.params.value == 42.0
        assert result.info["method"] == "normal_equations"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_normal"

    def test_timing_none(self):
        assert _result().timing is None


class TestDefaults:
    """Default values for warnings and provenance."""

    def test_warnings_default_empty(self):
        result = _result()
        assert result.warnings == ()
        assert isinstance(result.warnings, tuple)

    def test_provenance_auto_generated(self):
        provenance = _result().provenance
        assert "pywls_version" in provenance
        assert "numpy_version" in provenance
        assert "scipy_version" in provenance

    def test_provenance_explicit_override(self):
        result = _result(provenance={"custom": "metadata"})
        assert result.provenance == {"custom": "metadata"}

    def test_default_provenance_is_fresh_dict(self):
        assert _default_provenance() is not _default_provenance()


class TestImmutability:
    """Result is frozen: no attribute mutation allowed."""

    def test_cannot_set_params(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=2.0)

    def test_cannot_set_warnings(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.warnings = ("new warning",)


class TestHasWarning:
    """has_warning() checks for substring in any warning."""

    def test_no_warnings_returns_false(self):
        assert _result().has_warning("anything") is False

    def test_substring_match(self):
        result = _result(warnings=("off-diagonal weights are ignored",))
        assert result.has_warning("off-diagonal") is True
        assert result.has_warning("diagonal weights") is True

    def test_no_match(self):
        result = _result(warnings=("off-diagonal weights are ignored",))
        assert result.has_warning("singular") is False
