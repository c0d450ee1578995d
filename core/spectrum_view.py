"""
core/spectrum_view.py

Turn a (shifted) complex spectrum into an 8-bit grayscale RGBA image.

Output keeps the padded spectrum size; it is not cropped back to the image
size the way filtered channels are.
"""

from dataclasses import dataclass
import numpy as np

from .errors import DegenerateSpectrumError


@dataclass(frozen=True)
class SpectrumImage:
    """RGBA pixels of shape (height, width, 4), uint8."""
    pixels: np.ndarray
    width: int
    height: int

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()


def magnitude_spectrum(F: np.ndarray) -> np.ndarray:
    """log(1 + |F|)."""
    return np.log1p(np.abs(F))


def _normalize_to_uint8(values: np.ndarray) -> np.ndarray:
    vmax = float(values.max()) if values.size else 0.0
    if vmax == 0.0:
        raise DegenerateSpectrumError("Spectrum has zero maximum magnitude.")
    scaled = np.floor(values / vmax * 255.0)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def visualize_spectrum(shifted: np.ndarray) -> SpectrumImage:
    """
    Map a shifted spectrum to grayscale (v, v, v, 255) pixels with
    v = floor(log1p|F| / max(log1p|F|) * 255), so the maximum is always 255.
    An empty spectrum (maximum 0) gives an all-zero buffer.
    """
    if shifted.ndim != 2:
        raise ValueError("visualize_spectrum expects a 2D spectrum.")
    H, W = shifted.shape
    try:
        gray = _normalize_to_uint8(magnitude_spectrum(shifted))
    except DegenerateSpectrumError:
        return SpectrumImage(np.zeros((H, W, 4), dtype=np.uint8), W, H)

    pixels = np.empty((H, W, 4), dtype=np.uint8)
    pixels[..., 0] = gray
    pixels[..., 1] = gray
    pixels[..., 2] = gray
    pixels[..., 3] = 255
    return SpectrumImage(pixels, W, H)
