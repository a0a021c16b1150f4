"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                 HARMONIC FIELD - Anti-Node Intensity Along a String          ║
║                                                                              ║
║   For harmonic n the string is split into n equal segments; the interior     ║
║   segment boundaries are taken as the anti-nodes:                            ║
║       p_k = L · k / n        k = 1 .. n-1                                    ║
║                                                                              ║
║   Each anti-node contributes a clamped cosine lobe of radius w = L/(2n):     ║
║       c(x) = weight · cos(π/2 · |x - p| / w) ^ e      for |x - p| < w        ║
║       c(x) = 0                                       otherwise               ║
║                                                                              ║
║   The intensity field is the sum of all lobes of all weighted harmonics.     ║
║   It is a closed-form proxy, not a wave-equation solution.                   ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

import numpy as np
from dataclasses import dataclass
from typing import Dict, List, Optional, Union
import logging

from .string_config import (
    HARMONICS, AnalysisSettings, DEFAULT_SETTINGS,
    InvalidConfigurationError, StringConfig,
)

logger = logging.getLogger(__name__)

ArrayLike = Union[float, np.ndarray, List[float]]


@dataclass(frozen=True)
class AntiNode:
    """Vibration maximum of one harmonic mode."""
    harmonic: int      # Harmonic order n
    index: int         # k in 1..n-1
    position: float    # Distance from bridge [mm]


@dataclass
class SampledCurve:
    """Intensity sampled on a position grid, ready for plotting."""
    positions: np.ndarray             # [mm]
    intensities: np.ndarray           # Same shape as positions
    harmonic: Optional[int] = None    # None = combined field

    def __len__(self) -> int:
        return len(self.positions)

    @property
    def peak_value(self) -> float:
        if len(self.intensities) == 0:
            return 0.0
        return float(np.max(self.intensities))

    @property
    def peak_position(self) -> float:
        """Position of the first global maximum."""
        if len(self.intensities) == 0:
            return 0.0
        return float(self.positions[int(np.argmax(self.intensities))])

    def as_pairs(self) -> List[tuple]:
        return [(float(x), float(v)) for x, v in zip(self.positions, self.intensities)]


# ══════════════════════════════════════════════════════════════════════════════
# ANTI-NODES & FALLOFF
# ══════════════════════════════════════════════════════════════════════════════

def anti_nodes_for_harmonic(length: float, harmonic: int) -> np.ndarray:
    """
    Anti-node positions of one harmonic.

    Args:
        length: String length [mm]
        harmonic: Harmonic order n >= 1

    Returns:
        Array of n-1 positions strictly inside (0, length)
    """
    if length <= 0:
        raise InvalidConfigurationError(f"length must be > 0 mm, got {length}")
    if harmonic < 1:
        raise InvalidConfigurationError(f"harmonic must be >= 1, got {harmonic}")
    k = np.arange(1, harmonic, dtype=float)
    return length * k / harmonic


def falloff_width(length: float, harmonic: int, divisor: float = 2.0) -> float:
    """Radius of an anti-node's influence; shrinks with harmonic order."""
    return length / (divisor * harmonic)


def cosine_falloff(distance: ArrayLike, width: float, exponent: float = 2.0) -> np.ndarray:
    """
    Clamped cosine lobe: 1 at distance 0, 0 at and beyond `width`.

    Never negative, so overlapping lobes only add energy.
    """
    d = np.abs(np.asarray(distance, dtype=float))
    normalized = np.minimum(d / width, 1.0)
    lobe = np.cos(normalized * np.pi / 2) ** exponent
    # cos(π/2) is ~6e-17, not 0
    return np.where(d < width, lobe, 0.0)


# ══════════════════════════════════════════════════════════════════════════════
# FIELD BUILDER
# ══════════════════════════════════════════════════════════════════════════════

class HarmonicFieldBuilder:
    """
    Builds the weighted harmonic intensity field of one string.

    Holds only its inputs; every call recomputes from them, so two builders
    made from equal configs return identical arrays.
    """

    def __init__(self, config: StringConfig, settings: AnalysisSettings = DEFAULT_SETTINGS):
        self.config = config
        self.settings = settings

    def anti_nodes(self, harmonic: Optional[int] = None) -> List[AntiNode]:
        """Anti-nodes of one harmonic, or of all harmonics 2..7."""
        harmonics = HARMONICS if harmonic is None else (harmonic,)
        nodes = []
        for h in harmonics:
            for k, position in enumerate(anti_nodes_for_harmonic(self.config.length, h), start=1):
                nodes.append(AntiNode(harmonic=h, index=k, position=float(position)))
        return nodes

    def harmonic_intensity(self, x: ArrayLike, harmonic: int) -> np.ndarray:
        """Field restricted to a single harmonic (weight included)."""
        weight = self.config.weight(harmonic)
        x = np.asarray(x, dtype=float)
        if weight == 0:
            return np.zeros_like(x)

        width = self.settings.falloff_width(self.config.length, harmonic)
        total = np.zeros_like(x)
        for p in anti_nodes_for_harmonic(self.config.length, harmonic):
            total = total + cosine_falloff(x - p, width, self.settings.falloff_exponent)
        return weight * total

    def intensity(self, x: ArrayLike) -> np.ndarray:
        """Combined intensity at one or many positions [mm]."""
        x = np.asarray(x, dtype=float)
        total = np.zeros_like(x)
        for h in self.config.active_harmonics:
            total = total + self.harmonic_intensity(x, h)
        return total

    __call__ = intensity

    def display_positions(self) -> np.ndarray:
        """Evenly spaced grid over [0, length], both ends included."""
        n = self.settings.display_samples
        return np.arange(n + 1) * self.config.length / n

    def sample(self, positions: Optional[np.ndarray] = None) -> SampledCurve:
        """Sample the combined field, on the display grid by default."""
        if positions is None:
            positions = self.display_positions()
        positions = np.asarray(positions, dtype=float)
        curve = SampledCurve(positions=positions, intensities=self.intensity(positions))
        logger.debug(
            f"Sampled field: {len(curve)} points, "
            f"{len(self.config.active_harmonics)} active harmonics, peak {curve.peak_value:.3f}"
        )
        return curve

    def sample_per_harmonic(self, positions: Optional[np.ndarray] = None) -> Dict[int, SampledCurve]:
        """One curve per harmonic 2..7, zero curves for unweighted harmonics."""
        if positions is None:
            positions = self.display_positions()
        positions = np.asarray(positions, dtype=float)
        return {
            h: SampledCurve(
                positions=positions.copy(),
                intensities=self.harmonic_intensity(positions, h),
                harmonic=h,
            )
            for h in HARMONICS
        }
