"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                  RENDER - Heat Map & Anti-Node Figure                        ║
║                                                                              ║
║   Layout (top to bottom):                                                    ║
║   • Heat map strip of the combined field (anti-node proximity)               ║
║   • One row per harmonic 2..7 with its anti-nodes as dots                    ║
║   • Vertical Bridge / Neck pickup lines across both                          ║
║   X axis runs from the bridge (0 mm) to the nut (string length).             ║
╚══════════════════════════════════════════════════════════════════════════════╝
"""

from pathlib import Path
from typing import Union
import logging

import numpy as np
from matplotlib.figure import Figure

from .core.string_config import HARMONICS
from .core.placement import PlacementResult
from .heatmap_colors import intensity_to_rgb, normalise_intensity

logger = logging.getLogger(__name__)

BACKGROUND = '#141414'
ANTI_NODE_COLOR = '#A6CFA1'
BRIDGE_COLOR = '#B57EDC'
NECK_COLOR = '#B266FF'
STRING_COLOR = 'gray'


def render_placement(result: PlacementResult, figsize=(10, 4)) -> Figure:
    """
    Draw one placement evaluation.

    Built on a bare Figure (no pyplot state), so it works headless and
    never opens a window.
    """
    length = result.config.length
    fig = Figure(figsize=figsize, facecolor=BACKGROUND)
    heat_ax, rows_ax = fig.subplots(
        2, 1, sharex=True, gridspec_kw={'height_ratios': [1, 2]}
    )

    # Heat map strip
    rgb = intensity_to_rgb(normalise_intensity(result.curve.intensities))
    heat_ax.imshow(
        rgb[None, :, :],
        aspect='auto',
        extent=(0, length, 0, 1),
        interpolation='nearest',
    )
    heat_ax.set_yticks([])
    heat_ax.set_title('Heat Map (Anti-Node Proximity)', color='white', loc='left', fontsize=10)

    # Harmonic rows
    rows_ax.set_facecolor(BACKGROUND)
    for row, harmonic in enumerate(HARMONICS):
        y = len(HARMONICS) - row
        rows_ax.hlines(y, 0, length, color=STRING_COLOR, linewidth=1.5)
        xs = [node.position for node in result.anti_nodes if node.harmonic == harmonic]
        rows_ax.scatter(xs, np.full(len(xs), y), s=25, color=ANTI_NODE_COLOR, zorder=3)
    rows_ax.set_yticks(range(len(HARMONICS), 0, -1))
    rows_ax.set_yticklabels([f'H{h}' for h in HARMONICS], color='white')
    rows_ax.set_ylim(0.5, len(HARMONICS) + 0.5)

    # Pickup markers
    for label, pickup, color in (
        ('Bridge', result.bridge, BRIDGE_COLOR),
        ('Neck', result.neck, NECK_COLOR),
    ):
        for ax in (heat_ax, rows_ax):
            ax.axvline(pickup.position_mm, color=color, linewidth=2)
        heat_ax.text(
            pickup.position_mm, 1.05, label,
            color=color, ha='center', va='bottom',
            transform=heat_ax.get_xaxis_transform(), fontsize=9,
        )

    rows_ax.set_xlim(0, length)
    rows_ax.set_xticks([0, length])
    rows_ax.set_xticklabels(['Bridge', 'Nut'], color='white')
    for ax in (heat_ax, rows_ax):
        for spine in ax.spines.values():
            spine.set_visible(False)
        ax.tick_params(colors='white', length=0)

    fig.tight_layout()
    return fig


def save_placement_figure(
    result: PlacementResult,
    path: Union[str, Path],
    dpi: int = 150,
) -> Path:
    """Render and write the figure; format follows the file extension."""
    path = Path(path)
    fig = render_placement(result)
    fig.savefig(path, dpi=dpi, facecolor=fig.get_facecolor())
    logger.info(f"Placement figure saved to {path}")
    return path
