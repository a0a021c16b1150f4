"""
Tests for StringConfig / AnalysisSettings validation.
"""

import math
import pytest

from harmonic_pickups.core.string_config import (
    HARMONICS,
    DEFAULT_HARMONIC_WEIGHTS,
    DEFAULT_STRING_LENGTH_MM,
    AnalysisSettings,
    InvalidConfigurationError,
    StringConfig,
    normalize_weights,
)


# ══════════════════════════════════════════════════════════════════════════════
# TEST: STRING CONFIG
# ══════════════════════════════════════════════════════════════════════════════

class TestStringConfig:
    """Construction and invariants of StringConfig."""

    def test_create_uses_front_end_defaults(self):
        """Default config: 650 mm, half-length search, default weights."""
        config = StringConfig.create()
        assert config.length == DEFAULT_STRING_LENGTH_MM
        assert config.search_limit == DEFAULT_STRING_LENGTH_MM / 2
        assert config.harmonic_weights == DEFAULT_HARMONIC_WEIGHTS

    def test_weights_from_mapping(self):
        """Missing harmonics in a mapping get weight 0."""
        config = StringConfig(648.0, 648.0, {2: 1.0, 5: 0.5})
        assert config.harmonic_weights == (1.0, 0.0, 0.0, 0.5, 0.0, 0.0)
        assert config.weight(2) == 1.0
        assert config.weight(5) == 0.5
        assert config.active_harmonics == (2, 5)

    def test_weights_by_harmonic(self):
        config = StringConfig(648.0, 300.0, [1, 2, 3, 4, 5, 6])
        assert config.weights_by_harmonic() == {2: 1.0, 3: 2.0, 4: 3.0, 5: 4.0, 6: 5.0, 7: 6.0}

    def test_search_limit_equal_to_length_allowed(self):
        config = StringConfig(648.0, 648.0, DEFAULT_HARMONIC_WEIGHTS)
        assert config.search_limit == config.length

    @pytest.mark.parametrize("length", [0.0, -10.0, math.nan, math.inf])
    def test_invalid_length(self, length):
        with pytest.raises(InvalidConfigurationError):
            StringConfig(length, 100.0, DEFAULT_HARMONIC_WEIGHTS)

    @pytest.mark.parametrize("limit", [0.0, -1.0, 648.5, math.nan])
    def test_invalid_search_limit(self, limit):
        with pytest.raises(InvalidConfigurationError):
            StringConfig(648.0, limit, DEFAULT_HARMONIC_WEIGHTS)

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigurationError, match="harmonic 4"):
            StringConfig(648.0, 300.0, [1, 1, -0.1, 1, 1, 1])

    def test_wrong_weight_count_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            StringConfig(648.0, 300.0, [1, 1, 1])

    def test_unknown_harmonic_rejected(self):
        with pytest.raises(InvalidConfigurationError, match="Unknown harmonic"):
            StringConfig(648.0, 300.0, {8: 1.0})

    def test_weight_lookup_outside_range(self):
        config = StringConfig.create()
        with pytest.raises(InvalidConfigurationError):
            config.weight(1)

    def test_error_is_value_error(self):
        """Callers catching ValueError also catch invalid configs."""
        with pytest.raises(ValueError):
            StringConfig(-1.0, 1.0, DEFAULT_HARMONIC_WEIGHTS)

    def test_with_changes_revalidates(self):
        config = StringConfig(648.0, 300.0, DEFAULT_HARMONIC_WEIGHTS)
        assert config.with_changes(search_limit=200.0).search_limit == 200.0
        with pytest.raises(InvalidConfigurationError):
            config.with_changes(search_limit=700.0)

    def test_frozen(self):
        config = StringConfig.create()
        with pytest.raises(AttributeError):
            config.length = 700.0

    def test_to_dict(self):
        data = StringConfig(648.0, 324.0, {2: 1.0}).to_dict()
        assert data["length_mm"] == 648.0
        assert data["search_limit_mm"] == 324.0
        assert data["harmonic_weights"]["2"] == 1.0
        assert set(data["harmonic_weights"]) == {str(h) for h in HARMONICS}

    def test_normalize_weights_converts_to_float(self):
        assert normalize_weights([1, 0, 0, 0, 0, 2]) == (1.0, 0.0, 0.0, 0.0, 0.0, 2.0)


# ══════════════════════════════════════════════════════════════════════════════
# TEST: ANALYSIS SETTINGS
# ══════════════════════════════════════════════════════════════════════════════

class TestAnalysisSettings:
    """Tunables and their guards."""

    def test_defaults(self):
        settings = AnalysisSettings()
        assert settings.search_resolution == 1000
        assert settings.min_separation(648.0) == pytest.approx(64.8)
        assert settings.falloff_width(648.0, 2) == pytest.approx(162.0)

    def test_min_resolution_resolves_harmonic_seven(self):
        """10 samples across the harmonic-7 radius L/14 needs 140 per length."""
        settings = AnalysisSettings()
        assert settings.min_search_resolution() == 140
        AnalysisSettings(search_resolution=140)
        with pytest.raises(InvalidConfigurationError, match="too coarse"):
            AnalysisSettings(search_resolution=139)

    @pytest.mark.parametrize("kwargs", [
        {"display_samples": 1},
        {"min_separation_ratio": 1.0},
        {"min_separation_ratio": -0.1},
        {"falloff_exponent": 0.5},
        {"width_divisor": 0.0},
    ])
    def test_invalid_settings(self, kwargs):
        with pytest.raises(InvalidConfigurationError):
            AnalysisSettings(**kwargs)
