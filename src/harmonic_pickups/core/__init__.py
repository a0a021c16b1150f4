"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                 CORE - Harmonic Field & Pickup Peak Search                   ║
║                                                                              ║
║   • StringConfig / AnalysisSettings: validated inputs                        ║
║   • HarmonicFieldBuilder: anti-nodes and cosine-falloff intensity field      ║
║   • PeakLocator: 1st/2nd peak policy, bridge/neck assignment                 ║
║   • compute_positions: pure entry point for front ends                       ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from .string_config import (
    HARMONICS,
    DEFAULT_STRING_LENGTH_MM,
    DEFAULT_HARMONIC_WEIGHTS,
    DEFAULT_SEARCH_FRACTION,
    DEFAULT_SETTINGS,
    AnalysisSettings,
    InvalidConfigurationError,
    StringConfig,
)
from .harmonic_field import (
    AntiNode,
    HarmonicFieldBuilder,
    SampledCurve,
    anti_nodes_for_harmonic,
    cosine_falloff,
    falloff_width,
)
from .peak_locator import (
    PeakCandidate,
    PeakLocator,
    PeakSelection,
    PickupPosition,
    find_local_maxima,
    search_positions,
    select_peaks,
)
from .placement import PlacementResult, compute_positions

__all__ = [
    # Configuration
    'HARMONICS',
    'DEFAULT_STRING_LENGTH_MM',
    'DEFAULT_HARMONIC_WEIGHTS',
    'DEFAULT_SEARCH_FRACTION',
    'DEFAULT_SETTINGS',
    'AnalysisSettings',
    'InvalidConfigurationError',
    'StringConfig',
    # Field
    'AntiNode',
    'HarmonicFieldBuilder',
    'SampledCurve',
    'anti_nodes_for_harmonic',
    'cosine_falloff',
    'falloff_width',
    # Peaks
    'PeakCandidate',
    'PeakLocator',
    'PeakSelection',
    'PickupPosition',
    'find_local_maxima',
    'search_positions',
    'select_peaks',
    # Entry point
    'PlacementResult',
    'compute_positions',
]
