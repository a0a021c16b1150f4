"""
Heat-map colour gradient.

Normalised intensity [0, 1] is mapped onto evenly spaced colour stops
(black → blue → cyan → green → yellow → red → white). Interpolation happens
in Oklab space so the perceived brightness rises smoothly between stops.

Oklab reference: Björn Ottosson (2020), "A perceptual color space for
image processing".
"""

import numpy as np
from typing import Sequence, Tuple

HEATMAP_COLORS: Tuple[int, ...] = (
    0x000000, 0x0000FF, 0x00FFFF, 0x00FF00, 0xFFFF00, 0xFF0000, 0xFFFFFF,
)

# Linear sRGB -> LMS
_M1 = np.array([
    [0.4122214708, 0.5363325363, 0.0514459929],
    [0.2119034982, 0.6806995451, 0.1073969566],
    [0.0883024619, 0.2817188376, 0.6299787005],
])
# Cube-root LMS -> Lab
_M2 = np.array([
    [0.2104542553, 0.7936177850, -0.0040720468],
    [1.9779984951, -2.4285922050, 0.4505937099],
    [0.0259040371, 0.7827717662, -0.8086757660],
])
_M1_INV = np.array([
    [4.0767416621, -3.3077115913, 0.2309699292],
    [-1.2684380046, 2.6097574011, -0.3413193965],
    [-0.0041960863, -0.7034186147, 1.7076147010],
])
_M2_INV = np.array([
    [1.0, 0.3963377774, 0.2158037573],
    [1.0, -0.1055613458, -0.0638541728],
    [1.0, -0.0894841775, -1.2914855480],
])


def hex_to_rgb(hex_color: int) -> np.ndarray:
    """0xRRGGBB -> float RGB in [0, 1]."""
    return np.array([
        (hex_color >> 16) & 0xFF,
        (hex_color >> 8) & 0xFF,
        hex_color & 0xFF,
    ], dtype=float) / 255.0


def _srgb_to_linear(c: np.ndarray) -> np.ndarray:
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)


def _linear_to_srgb(c: np.ndarray) -> np.ndarray:
    c = np.clip(c, 0.0, 1.0)
    return np.where(c <= 0.0031308, 12.92 * c, 1.055 * c ** (1 / 2.4) - 0.055)


def srgb_to_oklab(rgb: np.ndarray) -> np.ndarray:
    """Float sRGB (..., 3) -> Oklab (..., 3)."""
    lms = _srgb_to_linear(np.asarray(rgb, dtype=float)) @ _M1.T
    return np.cbrt(lms) @ _M2.T


def oklab_to_srgb(lab: np.ndarray) -> np.ndarray:
    """Oklab (..., 3) -> float sRGB (..., 3), clipped to gamut."""
    lms = (np.asarray(lab, dtype=float) @ _M2_INV.T) ** 3
    return np.clip(_linear_to_srgb(lms @ _M1_INV.T), 0.0, 1.0)


def normalise_intensity(values: Sequence[float]) -> np.ndarray:
    """Scale so the maximum becomes 1; an all-zero curve stays zero."""
    v = np.asarray(values, dtype=float)
    peak = float(np.max(v)) if v.size else 0.0
    if peak <= 0:
        return np.zeros_like(v)
    return v / peak


def intensity_to_rgb(values, stops: Sequence[int] = HEATMAP_COLORS) -> np.ndarray:
    """
    Map normalised intensity to colours.

    Args:
        values: Scalar or array, clamped to [0, 1]
        stops: 0xRRGGBB colour stops, evenly spaced over [0, 1]

    Returns:
        Float RGB array of shape values.shape + (3,)
    """
    heat = np.clip(np.asarray(values, dtype=float), 0.0, 1.0)
    n_stops = len(stops)
    if n_stops == 0:
        return np.zeros(heat.shape + (3,))
    if n_stops == 1:
        return np.broadcast_to(hex_to_rgb(stops[0]), heat.shape + (3,)).copy()

    lab_stops = srgb_to_oklab(np.stack([hex_to_rgb(s) for s in stops]))
    segment_size = 1.0 / (n_stops - 1)
    lower = np.minimum(np.floor(heat / segment_size).astype(int), n_stops - 2)
    t = np.clip((heat - lower * segment_size) / segment_size, 0.0, 1.0)[..., None]

    lab = lab_stops[lower] * (1 - t) + lab_stops[lower + 1] * t
    return oklab_to_srgb(lab)
