"""
Peak Locator - bridge and neck pickup candidates from the intensity field.

Policy ("1st and 2nd peaks"):
- Sample the field on a fixed grid over [0, search_limit]
- Collect local maxima with positive intensity
- First pick = strongest maximum
- Second pick = strongest remaining maximum at least min_separation away
  (falls back to the runner-up, or the first pick itself, when none is)
- The pick nearer the bridge (position 0) is the bridge pickup
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Sequence
import logging

from .string_config import AnalysisSettings, DEFAULT_SETTINGS, StringConfig
from .harmonic_field import HarmonicFieldBuilder, SampledCurve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeakCandidate:
    """Local maximum of the sampled field."""
    position: float     # [mm from bridge]
    intensity: float


@dataclass(frozen=True)
class PickupPosition:
    """A chosen pickup location."""
    position_mm: float
    percentage: float   # Of string length
    intensity: float

    @classmethod
    def from_candidate(cls, candidate: PeakCandidate, length: float) -> "PickupPosition":
        return cls(
            position_mm=candidate.position,
            percentage=candidate.position / length * 100.0,
            intensity=candidate.intensity,
        )

    def to_dict(self) -> dict:
        return {
            "position_mm": self.position_mm,
            "percentage": self.percentage,
            "intensity": self.intensity,
        }


@dataclass(frozen=True)
class PeakSelection:
    """Both picks in selection order plus the bridge/neck assignment."""
    first: PeakCandidate
    second: PeakCandidate
    bridge: PickupPosition
    neck: PickupPosition
    separated: bool           # False when the separation fallback was used
    n_candidates: int


NO_PEAK = PeakCandidate(position=0.0, intensity=0.0)


# ══════════════════════════════════════════════════════════════════════════════
# SAMPLING & MAXIMA
# ══════════════════════════════════════════════════════════════════════════════

def search_positions(config: StringConfig, settings: AnalysisSettings = DEFAULT_SETTINGS) -> np.ndarray:
    """
    Search grid x_k = k·L/N for every x_k <= search_limit.

    The grid does not depend on search_limit, so a larger limit only
    appends samples.
    """
    n = settings.search_resolution
    last = int(np.floor(config.search_limit / config.length * n + 1e-9))
    positions = np.arange(last + 1) * config.length / n
    return positions[positions <= config.search_limit]


def find_local_maxima(positions: Sequence[float], values: Sequence[float]) -> List[PeakCandidate]:
    """
    Local maxima of a sampled curve, in position order.

    A sample is a maximum when it is >= each existing neighbour and > 0.
    Adjacent maxima form a flat top and are reported once, at the middle
    sample of the run.
    """
    x = np.asarray(positions, dtype=float)
    v = np.asarray(values, dtype=float)
    n = len(v)
    if n == 0:
        return []

    is_max = v > 0
    if n > 1:
        is_max[1:] &= v[1:] >= v[:-1]
        is_max[:-1] &= v[:-1] >= v[1:]

    candidates = []
    i = 0
    while i < n:
        if not is_max[i]:
            i += 1
            continue
        j = i
        while j + 1 < n and is_max[j + 1]:
            j += 1
        mid = (i + j) // 2
        candidates.append(PeakCandidate(position=float(x[mid]), intensity=float(v[mid])))
        i = j + 1
    return candidates


def select_peaks(candidates: Sequence[PeakCandidate], min_separation: float):
    """
    Pick the first and second peak.

    Returns:
        (first, second, separated) - separated is False when no candidate
        was far enough from the first pick
    """
    if not candidates:
        return NO_PEAK, NO_PEAK, False

    ranked = sorted(candidates, key=lambda c: (-c.intensity, c.position))
    first = ranked[0]
    for candidate in ranked[1:]:
        if abs(candidate.position - first.position) >= min_separation:
            return first, candidate, True

    second = ranked[1] if len(ranked) > 1 else first
    return first, second, False


def assign_bridge_neck(first: PeakCandidate, second: PeakCandidate):
    """Nearer-to-bridge pick first; equal positions keep selection order."""
    if second.position < first.position:
        return second, first
    return first, second


# ══════════════════════════════════════════════════════════════════════════════
# LOCATOR
# ══════════════════════════════════════════════════════════════════════════════

class PeakLocator:
    """Finds bridge and neck pickup positions in the search region."""

    def __init__(self, settings: AnalysisSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def sample(self, config: StringConfig, field: HarmonicFieldBuilder) -> SampledCurve:
        """Field sampled on the search grid."""
        return field.sample(search_positions(config, self.settings))

    def locate(self, config: StringConfig, field: HarmonicFieldBuilder) -> PeakSelection:
        curve = self.sample(config, field)
        candidates = find_local_maxima(curve.positions, curve.intensities)
        min_separation = self.settings.min_separation(config.length)
        first, second, separated = select_peaks(candidates, min_separation)

        if not candidates:
            logger.debug("Flat zero field in search region, pickups default to 0 mm")
        elif not separated and len(candidates) > 1:
            logger.warning(
                f"No peak at least {min_separation:.1f} mm from {first.position:.1f} mm "
                f"among {len(candidates)} candidates, using runner-up at {second.position:.1f} mm"
            )
        else:
            logger.debug(
                f"{len(candidates)} candidates, first {first.position:.2f} mm "
                f"({first.intensity:.3f}), second {second.position:.2f} mm ({second.intensity:.3f})"
            )

        bridge, neck = assign_bridge_neck(first, second)
        return PeakSelection(
            first=first,
            second=second,
            bridge=PickupPosition.from_candidate(bridge, config.length),
            neck=PickupPosition.from_candidate(neck, config.length),
            separated=separated,
            n_candidates=len(candidates),
        )
