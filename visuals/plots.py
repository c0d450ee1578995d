"""
visuals/plots.py

Export utilities for spectra, the low-pass mask and before/after comparisons.

APIs:
- save_spectrum_image(spectrum_image, out_path)
- plot_magnitude_spectrum(F, out_path=None, is_shifted=False)
- plot_mask(shape, cutoff, out_path=None)
- compare_and_save(original, filtered, original_spectrum=None, filtered_spectrum=None, out_path=None, cutoff=None)

Notes:
- Spectrum and mask images are written as raw PNGs with Pillow; only the
  comparison figure uses matplotlib.
- If out_path is None, functions return the in-memory result (array,
  SpectrumImage or matplotlib Figure) instead of writing a file.
"""

from typing import Optional, Tuple
import os
import numpy as np
import matplotlib.pyplot as plt
from PIL import Image

from core.fft_engine import fft_shift
from core.filters import centered_lowpass_mask
from core.spectrum_view import SpectrumImage, visualize_spectrum


# Helper to ensure outdir exists
def _ensure_outdir(out_path: Optional[str]):
    if out_path is None:
        return None
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    return out_path


def save_spectrum_image(spectrum_image: SpectrumImage, out_path: str) -> str:
    """Write a SpectrumImage as an RGBA PNG at its padded size."""
    _ensure_outdir(out_path)
    Image.fromarray(spectrum_image.pixels).save(out_path)
    return out_path


def plot_magnitude_spectrum(
    F: np.ndarray,
    out_path: Optional[str] = None,
    is_shifted: bool = False,
):
    """
    Visualize a spectrum. An unshifted spectrum (default) is centered first.
    Returns out_path when a file was written, otherwise the SpectrumImage.
    """
    F_disp = F if is_shifted else fft_shift(F)
    image = visualize_spectrum(F_disp)
    if out_path is not None:
        return save_spectrum_image(image, out_path)
    return image


def plot_mask(
    shape: Tuple[int, int],
    cutoff: float,
    out_path: Optional[str] = None,
):
    """
    Render the ideal low-pass mask for a padded spectrum shape, centered like a
    shifted spectrum: white inside the cutoff, black outside.
    """
    mask = centered_lowpass_mask(shape, cutoff)
    img_arr = (mask * 255.0).astype(np.uint8)
    if out_path is not None:
        _ensure_outdir(out_path)
        Image.fromarray(img_arr).save(out_path)
        return out_path
    return img_arr


def _show(ax, arr, title):
    if arr.ndim == 2:
        ax.imshow(arr, cmap="gray", interpolation="nearest", vmin=0, vmax=255)
    else:
        ax.imshow(arr.astype(np.uint8), interpolation="nearest")
    ax.set_title(title)
    ax.axis("off")


def compare_and_save(
    original: np.ndarray,
    filtered: np.ndarray,
    original_spectrum: Optional[SpectrumImage] = None,
    filtered_spectrum: Optional[SpectrumImage] = None,
    out_path: Optional[str] = None,
    cutoff: Optional[float] = None,
):
    """
    Original | Filtered on the top row and, when given, the two spectra below.
    """
    with_spectra = original_spectrum is not None and filtered_spectrum is not None
    rows = 2 if with_spectra else 1
    fig, axs = plt.subplots(rows, 2, figsize=(12, 6 * rows), squeeze=False)

    filtered_title = "Low-pass Filtered" if cutoff is None else f"Low-pass Filtered (cutoff={cutoff:g})"
    _show(axs[0][0], original, "Original")
    _show(axs[0][1], filtered, filtered_title)
    if with_spectra:
        _show(axs[1][0], original_spectrum.pixels, "Original Spectrum")
        _show(axs[1][1], filtered_spectrum.pixels, "Filtered Spectrum")

    if out_path:
        _ensure_outdir(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight", pad_inches=0.05)
        plt.close(fig)
        return out_path
    return fig
