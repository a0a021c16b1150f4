"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                    STRING CONFIG - Validated Input Parameters                ║
║                                                                              ║
║   Single source of truth for:                                                ║
║   • String geometry (scale length, pickup search region)                     ║
║   • Harmonic weights (harmonics 2..7, fixed six-slot mapping)                ║
║   • Analysis tunables (sampling resolution, falloff shape, separation)       ║
║                                                                              ║
║   DESIGN PRINCIPLES:                                                         ║
║   • Immutable dataclasses, validated on construction                         ║
║   • Invalid input raises, the core never clamps silently                     ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional, Sequence, Tuple, Union
import math


# ══════════════════════════════════════════════════════════════════════════════
# CONSTANTS
# ══════════════════════════════════════════════════════════════════════════════

HARMONICS: Tuple[int, ...] = (2, 3, 4, 5, 6, 7)

DEFAULT_STRING_LENGTH_MM = 650.0        # Typical guitar scale length
DEFAULT_HARMONIC_WEIGHTS: Tuple[float, ...] = (0.15, 1.50, 1.50, 1.50, 0.75, 0.75)
DEFAULT_SEARCH_FRACTION = 0.5           # Pickups live in the bridge half

# Slider ranges of the interactive front end
LENGTH_RANGE_MM: Tuple[float, float] = (500.0, 1000.0)
WEIGHT_RANGE: Tuple[float, float] = (0.0, 2.0)

# At least this many search samples across the narrowest falloff radius
MIN_SAMPLES_PER_FALLOFF = 10

WeightsInput = Union[Sequence[float], Mapping[int, float]]


class InvalidConfigurationError(ValueError):
    """Raised when string or analysis parameters cannot be evaluated."""


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"{name} must be finite, got {value}")
    return value


def normalize_weights(weights: WeightsInput) -> Tuple[float, ...]:
    """
    Turn a weight sequence or a {harmonic: weight} mapping into the
    six-slot tuple ordered by harmonic.

    Harmonics missing from a mapping get weight 0.
    """
    if isinstance(weights, Mapping):
        unknown = sorted(h for h in weights if h not in HARMONICS)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown harmonic(s) {unknown}. Valid: {list(HARMONICS)}"
            )
        values = [weights.get(h, 0.0) for h in HARMONICS]
    else:
        values = list(weights)
        if len(values) != len(HARMONICS):
            raise InvalidConfigurationError(
                f"Expected {len(HARMONICS)} harmonic weights (harmonics 2-7), got {len(values)}"
            )

    result = []
    for harmonic, value in zip(HARMONICS, values):
        value = _require_finite(f"weight of harmonic {harmonic}", value)
        if value < 0:
            raise InvalidConfigurationError(
                f"Weight of harmonic {harmonic} must be >= 0, got {value}"
            )
        result.append(value)
    return tuple(result)


# ══════════════════════════════════════════════════════════════════════════════
# STRING CONFIG
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StringConfig:
    """
    Parameters of one placement evaluation.

    All distances are millimetres measured from the bridge end (position 0).
    """
    length: float                          # Vibrating string length [mm]
    search_limit: float                    # Pickups searched in [0, search_limit] [mm]
    harmonic_weights: Tuple[float, ...]    # Weights of harmonics 2..7

    def __post_init__(self):
        length = _require_finite("length", self.length)
        if length <= 0:
            raise InvalidConfigurationError(f"length must be > 0 mm, got {length}")

        search_limit = _require_finite("search_limit", self.search_limit)
        if search_limit <= 0:
            raise InvalidConfigurationError(
                f"search_limit must be > 0 mm, got {search_limit}"
            )
        if search_limit > length:
            raise InvalidConfigurationError(
                f"search_limit {search_limit} mm exceeds string length {length} mm"
            )

        # Frozen: go through object.__setattr__ to store normalized values
        object.__setattr__(self, "length", length)
        object.__setattr__(self, "search_limit", search_limit)
        object.__setattr__(self, "harmonic_weights", normalize_weights(self.harmonic_weights))

    @classmethod
    def create(
        cls,
        length: float = DEFAULT_STRING_LENGTH_MM,
        weights: Optional[WeightsInput] = None,
        search_limit: Optional[float] = None,
    ) -> "StringConfig":
        """
        Build a config with the front end's defaults filled in.

        Args:
            length: String length [mm]
            weights: Six weights or {harmonic: weight}; defaults to
                DEFAULT_HARMONIC_WEIGHTS
            search_limit: Search region end [mm]; defaults to half the length

        Returns:
            Validated StringConfig
        """
        if weights is None:
            weights = DEFAULT_HARMONIC_WEIGHTS
        if search_limit is None:
            search_limit = _require_finite("length", length) * DEFAULT_SEARCH_FRACTION
        return cls(length=length, search_limit=search_limit, harmonic_weights=weights)

    def weight(self, harmonic: int) -> float:
        """Weight of a single harmonic (2..7)."""
        if harmonic not in HARMONICS:
            raise InvalidConfigurationError(
                f"Unknown harmonic {harmonic}. Valid: {list(HARMONICS)}"
            )
        return self.harmonic_weights[HARMONICS.index(harmonic)]

    def weights_by_harmonic(self) -> Dict[int, float]:
        return dict(zip(HARMONICS, self.harmonic_weights))

    @property
    def active_harmonics(self) -> Tuple[int, ...]:
        """Harmonics with a strictly positive weight."""
        return tuple(h for h, w in zip(HARMONICS, self.harmonic_weights) if w > 0)

    def with_changes(self, **changes) -> "StringConfig":
        """Return a re-validated copy with some fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, object]:
        return {
            "length_mm": self.length,
            "search_limit_mm": self.search_limit,
            "harmonic_weights": {str(h): w for h, w in self.weights_by_harmonic().items()},
        }


# ══════════════════════════════════════════════════════════════════════════════
# ANALYSIS SETTINGS
# ══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class AnalysisSettings:
    """
    Tunables of the field model and the peak search.

    The falloff radius of harmonic h is length / (width_divisor * h), so the
    narrowest radius belongs to harmonic 7. search_resolution counts samples
    per full string length.
    """
    search_resolution: int = 1000
    display_samples: int = 1000
    min_separation_ratio: float = 0.1     # Pickups at least 10% of length apart
    falloff_exponent: float = 2.0         # Squared cosine
    width_divisor: float = 2.0            # Radius = length / (2h)

    def __post_init__(self):
        if self.width_divisor <= 0 or not math.isfinite(self.width_divisor):
            raise InvalidConfigurationError(
                f"width_divisor must be > 0, got {self.width_divisor}"
            )
        if self.search_resolution < self.min_search_resolution():
            raise InvalidConfigurationError(
                f"search_resolution {self.search_resolution} too coarse: need at least "
                f"{self.min_search_resolution()} samples per string length to put "
                f"{MIN_SAMPLES_PER_FALLOFF} samples across the harmonic-{HARMONICS[-1]} falloff"
            )
        if self.display_samples < 2:
            raise InvalidConfigurationError(
                f"display_samples must be >= 2, got {self.display_samples}"
            )
        if not 0.0 <= self.min_separation_ratio < 1.0:
            raise InvalidConfigurationError(
                f"min_separation_ratio must be in [0, 1), got {self.min_separation_ratio}"
            )
        if not self.falloff_exponent >= 1.0 or not math.isfinite(self.falloff_exponent):
            raise InvalidConfigurationError(
                f"falloff_exponent must be >= 1, got {self.falloff_exponent}"
            )

    def min_search_resolution(self) -> int:
        """Smallest search_resolution resolving the harmonic-7 falloff."""
        return math.ceil(MIN_SAMPLES_PER_FALLOFF * self.width_divisor * HARMONICS[-1])

    def falloff_width(self, length: float, harmonic: int) -> float:
        return length / (self.width_divisor * harmonic)

    def min_separation(self, length: float) -> float:
        return self.min_separation_ratio * length


DEFAULT_SETTINGS = AnalysisSettings()
