"""
Harmonic Pickups - pickup placement from string harmonic anti-nodes.

    from harmonic_pickups import StringConfig, compute_positions

    result = compute_positions(StringConfig.create(length=648.0))
    result.bridge.position_mm, result.neck.position_mm
"""

from .core import (
    HARMONICS,
    DEFAULT_SETTINGS,
    AnalysisSettings,
    InvalidConfigurationError,
    StringConfig,
    HarmonicFieldBuilder,
    PeakLocator,
    PlacementResult,
    compute_positions,
)
from .heatmap_colors import HEATMAP_COLORS, intensity_to_rgb

__version__ = "0.1.0"

__all__ = [
    'HARMONICS',
    'DEFAULT_SETTINGS',
    'AnalysisSettings',
    'InvalidConfigurationError',
    'StringConfig',
    'HarmonicFieldBuilder',
    'PeakLocator',
    'PlacementResult',
    'compute_positions',
    'HEATMAP_COLORS',
    'intensity_to_rgb',
]
