import math
import numpy as np
from typing import Tuple

from .fft_engine import fft_shift


def _check_cutoff(cutoff: float) -> float:
    cutoff = float(cutoff)
    if not math.isfinite(cutoff) or cutoff < 0:
        raise ValueError("Cutoff frequency must be a non-negative finite number.")
    return cutoff


# --- Wrapped frequency coordinates ---
def wrapped_offsets(n: int) -> np.ndarray:
    """
    Signed frequency offset for each index of an axis of length n:
    i for i < n/2, otherwise i - n.
    """
    i = np.arange(n, dtype=np.float64)
    return np.where(i < n / 2.0, i, i - n)


def wrapped_distance_grid(shape: Tuple[int, int]) -> np.ndarray:
    """
    Euclidean distance D[u,v] from DC, measured in wrapped coordinates of the
    unshifted spectrum layout.
    """
    M, N = shape
    du = wrapped_offsets(M).reshape(M, 1)
    dv = wrapped_offsets(N).reshape(1, N)
    return np.hypot(du, dv)


def max_wrapped_distance(shape: Tuple[int, int]) -> float:
    """Largest distance any cell of `shape` can have; a cutoff at or above it keeps everything."""
    return float(wrapped_distance_grid(shape).max())


# --- Ideal circular low-pass ---
def ideal_lowpass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """Boolean mask over the unshifted layout: True where distance <= cutoff."""
    cutoff = _check_cutoff(cutoff)
    return wrapped_distance_grid(shape) <= cutoff


def centered_lowpass_mask(shape: Tuple[int, int], cutoff: float) -> np.ndarray:
    """
    The same mask laid out with DC at the center, for display next to a shifted
    spectrum. Not meant to be multiplied with anything.
    """
    return fft_shift(ideal_lowpass_mask(shape, cutoff)).astype(float)


def apply_lowpass_filter(spectrum: np.ndarray, cutoff: float, *, in_place: bool = False) -> np.ndarray:
    """
    Zero every cell of an unshifted spectrum whose wrapped distance from DC
    exceeds `cutoff`.

    By default a new array is returned and `spectrum` is left untouched.
    With in_place=True the caller's array is masked and returned; use it only
    when the unfiltered spectrum is not needed again.
    """
    if spectrum.ndim != 2:
        raise ValueError("apply_lowpass_filter expects a 2D spectrum.")
    keep = ideal_lowpass_mask(spectrum.shape, cutoff)
    if in_place:
        spectrum[~keep] = 0
        return spectrum
    return np.where(keep, spectrum, 0).astype(spectrum.dtype)
