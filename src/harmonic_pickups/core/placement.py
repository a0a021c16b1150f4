"""
Pickup placement - single entry point for the presentation layer.

compute_positions() is a pure function of its arguments: the front end
calls it again on every parameter edit and replaces everything it drew.
"""

from dataclasses import dataclass
from typing import Any, Dict, List
import logging

from .string_config import AnalysisSettings, DEFAULT_SETTINGS, StringConfig
from .harmonic_field import AntiNode, HarmonicFieldBuilder, SampledCurve
from .peak_locator import PeakLocator, PeakSelection, PickupPosition

logger = logging.getLogger(__name__)


@dataclass
class PlacementResult:
    """Everything a front end needs to display one evaluation."""
    config: StringConfig
    curve: SampledCurve                       # Combined field over [0, length]
    harmonic_curves: Dict[int, SampledCurve]  # Same, one per harmonic
    anti_nodes: List[AntiNode]
    selection: PeakSelection

    @property
    def bridge(self) -> PickupPosition:
        return self.selection.bridge

    @property
    def neck(self) -> PickupPosition:
        return self.selection.neck

    def to_dict(self, include_curves: bool = False) -> Dict[str, Any]:
        """JSON-serialisable summary."""
        data = {
            "config": self.config.to_dict(),
            "bridge": self.bridge.to_dict(),
            "neck": self.neck.to_dict(),
            "separated": self.selection.separated,
            "n_candidates": self.selection.n_candidates,
        }
        if include_curves:
            data["curve"] = {
                "positions_mm": self.curve.positions.tolist(),
                "intensities": self.curve.intensities.tolist(),
            }
            data["harmonic_curves"] = {
                str(h): c.intensities.tolist() for h, c in self.harmonic_curves.items()
            }
        return data


def compute_positions(
    config: StringConfig,
    settings: AnalysisSettings = DEFAULT_SETTINGS,
) -> PlacementResult:
    """
    Build the harmonic field and locate bridge and neck pickups.

    Args:
        config: Validated string parameters
        settings: Sampling and falloff tunables

    Returns:
        PlacementResult with curves for display and both pickup positions
    """
    field = HarmonicFieldBuilder(config, settings)
    selection = PeakLocator(settings).locate(config, field)

    result = PlacementResult(
        config=config,
        curve=field.sample(),
        harmonic_curves=field.sample_per_harmonic(),
        anti_nodes=field.anti_nodes(),
        selection=selection,
    )
    logger.info(
        f"L={config.length:.1f}mm limit={config.search_limit:.1f}mm: "
        f"bridge {result.bridge.position_mm:.2f}mm ({result.bridge.percentage:.1f}%), "
        f"neck {result.neck.position_mm:.2f}mm ({result.neck.percentage:.1f}%)"
    )
    return result
