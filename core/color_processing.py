"""
core/color_processing.py

Per-channel low-pass pipeline for RGB and grayscale images.

For every color channel:
  1) zero-pad to power-of-two dimensions
  2) 2D FFT
  3) ideal circular low-pass on the unshifted spectrum
  4) 2D inverse FFT
  5) crop back to the original size, keep the real part, clamp to [0, 255]
The three clamped channels are interleaved with a constant alpha of 255.

A separate luminance pipeline (0.299 R + 0.587 G + 0.114 B) produces the
"before" and "after" spectrum images: it is shifted and visualized once
straight after the FFT and once after filtering.

API:
- process_color_channels(channels, width, height, cutoff, ...) -> FilterResult
- process_color_rgb(image_rgb, cutoff, ...) -> FilterResult
- process_grayscale(image, cutoff, ...) -> FilterResult

Channels are independent, so parallel=True runs them on a thread pool. A
threading.Event passed as cancel_event is checked before each channel starts;
once set, the whole request fails with PipelineCancelledError.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import threading
import warnings
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np

from .config import IMAG_TOLERANCE, LUMINANCE_WEIGHTS, FilterParameters
from .errors import DimensionMismatchError, PipelineCancelledError
from .fft_engine import crop, fft2d, fft_shift, ifft2d
from .filters import apply_lowpass_filter
from .spectrum_view import SpectrumImage, visualize_spectrum

CHANNEL_NAMES = ("R", "G", "B")


@dataclass
class FilterResult:
    filtered_channels: List[np.ndarray]
    filtered_image: np.ndarray
    original_spectrum: SpectrumImage
    filtered_spectrum: SpectrumImage
    width: int
    height: int
    cutoff_frequency: float
    intermediates: Dict[str, Dict[str, np.ndarray]] = field(default_factory=dict)


# --- helpers ---
def luminance(red: np.ndarray, green: np.ndarray, blue: np.ndarray) -> np.ndarray:
    wr, wg, wb = LUMINANCE_WEIGHTS
    return (
        wr * np.asarray(red, dtype=np.float64)
        + wg * np.asarray(green, dtype=np.float64)
        + wb * np.asarray(blue, dtype=np.float64)
    )


def validate_channels(channels: Sequence[Any], width: int, height: int) -> List[np.ndarray]:
    """
    Check that width/height are positive integers and that every channel holds
    exactly width*height samples. Returns the channels as flat float64 arrays.
    """
    if int(width) != width or int(height) != height or width < 1 or height < 1:
        raise DimensionMismatchError(f"Width and height must be positive integers, got {width}x{height}.")
    expected = int(width) * int(height)
    flat = []
    for idx, ch in enumerate(channels):
        arr = np.asarray(ch, dtype=np.float64).ravel()
        if arr.size != expected:
            raise DimensionMismatchError(
                f"Channel {idx} has {arr.size} samples, expected {expected} for {width}x{height}."
            )
        flat.append(arr)
    return flat


def _check_cancel(cancel_event: Optional[threading.Event]):
    if cancel_event is not None and cancel_event.is_set():
        raise PipelineCancelledError("Processing was cancelled.")


def _reconstruct(
    spatial: np.ndarray,
    width: int,
    height: int,
    imag_tol: float,
    suppress_warning: bool,
) -> np.ndarray:
    """Crop the padded inverse-FFT grid, drop the imaginary part, clamp to [0, 255]."""
    region = crop(spatial, width, height)
    imag_max = float(np.max(np.abs(region.imag)))
    if not suppress_warning and imag_max > imag_tol:
        warnings.warn(
            f"Inverse FFT has non-negligible imaginary component (max abs = {imag_max}). "
            "Returning real part but consider checking your frequency-domain input.",
            RuntimeWarning,
        )
    return np.clip(region.real, 0.0, 255.0).ravel()


# --- single channel pipelines ---
def process_channel(
    samples: np.ndarray,
    width: int,
    height: int,
    cutoff: float,
    *,
    imag_tol: float = IMAG_TOLERANCE,
    suppress_warning: bool = True,
    return_intermediates: bool = False,
):
    """
    Low-pass one flat channel and return it as a flat float64 array of
    width*height values in [0, 255].

    With return_intermediates=True returns (output, intermediates) where
    intermediates holds 'F', 'G' (filtered spectrum) and 'spatial' (padded
    inverse FFT before cropping).
    """
    F = fft2d(samples, width, height)
    # the unfiltered spectrum is only needed again when it is reported back
    G = apply_lowpass_filter(F, cutoff, in_place=not return_intermediates)
    spatial = ifft2d(G)
    out = _reconstruct(spatial, width, height, imag_tol, suppress_warning)

    if return_intermediates:
        return out, {"F": F, "G": G, "spatial": spatial}
    return out


def spectrum_pair(samples: np.ndarray, width: int, height: int, cutoff: float) -> Tuple[SpectrumImage, SpectrumImage]:
    """Return (original, filtered) spectrum images of one channel, at padded size."""
    F = fft2d(samples, width, height)
    before = visualize_spectrum(fft_shift(F))
    apply_lowpass_filter(F, cutoff, in_place=True)
    after = visualize_spectrum(fft_shift(F))
    return before, after


def interleave_rgba(channels: Sequence[np.ndarray], width: int, height: int) -> np.ndarray:
    """
    Stack clamped channels into an (height, width, 4) uint8 RGBA image with
    alpha 255. A single channel is repeated into R, G and B.
    """
    if len(channels) == 1:
        channels = [channels[0]] * 3
    if len(channels) != 3:
        raise DimensionMismatchError(f"Expected 1 or 3 channels, got {len(channels)}.")
    out = np.empty((height, width, 4), dtype=np.uint8)
    for idx, ch in enumerate(channels):
        plane = np.clip(np.rint(np.asarray(ch, dtype=np.float64)), 0, 255)
        out[..., idx] = plane.reshape(height, width).astype(np.uint8)
    out[..., 3] = 255
    return out


# --- request level ---
def _run_request(
    color_channels: List[np.ndarray],
    names: Sequence[str],
    lum: np.ndarray,
    width: int,
    height: int,
    cutoff: float,
    *,
    parallel: bool,
    max_workers: Optional[int],
    cancel_event: Optional[threading.Event],
    return_intermediates: bool,
    suppress_warning: bool,
) -> FilterResult:
    cutoff = FilterParameters(cutoff).cutoff_frequency

    def color_job(ch):
        _check_cancel(cancel_event)
        return process_channel(
            ch, width, height, cutoff,
            suppress_warning=suppress_warning,
            return_intermediates=return_intermediates,
        )

    def spectrum_job():
        _check_cancel(cancel_event)
        return spectrum_pair(lum, width, height, cutoff)

    if parallel:
        workers = max_workers or (len(color_channels) + 1)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            spec_future = executor.submit(spectrum_job)
            futures = [executor.submit(color_job, ch) for ch in color_channels]
            try:
                spectra = spec_future.result()
                results = [f.result() for f in futures]
            except BaseException:
                for f in futures:
                    f.cancel()
                raise
    else:
        spectra = spectrum_job()
        results = [color_job(ch) for ch in color_channels]

    intermediates = {}
    if return_intermediates:
        outs = []
        for name, (out, inter) in zip(names, results):
            outs.append(out)
            intermediates[name] = inter
    else:
        outs = list(results)

    return FilterResult(
        filtered_channels=outs,
        filtered_image=interleave_rgba(outs, width, height),
        original_spectrum=spectra[0],
        filtered_spectrum=spectra[1],
        width=int(width),
        height=int(height),
        cutoff_frequency=float(cutoff),
        intermediates=intermediates,
    )


def process_color_channels(
    channels: Sequence[Any],
    width: int,
    height: int,
    cutoff: float,
    *,
    parallel: bool = False,
    max_workers: Optional[int] = None,
    cancel_event: Optional[threading.Event] = None,
    return_intermediates: bool = False,
    suppress_warning: bool = True,
) -> FilterResult:
    """
    Run one filter request over flat R, G, B channels of width*height samples.

    intermediates (when requested) maps 'R','G','B' to that channel's
    intermediates dict from process_channel.
    """
    if len(channels) != 3:
        raise DimensionMismatchError(f"Expected 3 color channels, got {len(channels)}.")
    flat = validate_channels(channels, width, height)
    width, height = int(width), int(height)
    return _run_request(
        flat, CHANNEL_NAMES, luminance(*flat), width, height, cutoff,
        parallel=parallel,
        max_workers=max_workers,
        cancel_event=cancel_event,
        return_intermediates=return_intermediates,
        suppress_warning=suppress_warning,
    )


def process_color_rgb(image_rgb: np.ndarray, cutoff: float, **kwargs) -> FilterResult:
    """Process an HxWx3 RGB image; keyword arguments as in process_color_channels."""
    if image_rgb.ndim != 3 or image_rgb.shape[2] != 3:
        raise ValueError("process_color_rgb expects an HxWx3 RGB image array.")
    height, width = image_rgb.shape[:2]
    channels = [image_rgb[:, :, idx].ravel() for idx in range(3)]
    return process_color_channels(channels, width, height, cutoff, **kwargs)


def process_grayscale(
    image: np.ndarray,
    cutoff: float,
    *,
    parallel: bool = False,
    cancel_event: Optional[threading.Event] = None,
    return_intermediates: bool = False,
    suppress_warning: bool = True,
) -> FilterResult:
    """
    Process a 2D grayscale image. The channel is its own luminance, so the
    spectra come from it directly and the filtered image is gray RGBA.
    """
    if image.ndim != 2:
        raise ValueError("process_grayscale expects a 2D array.")
    height, width = image.shape
    flat = validate_channels([image], width, height)
    return _run_request(
        flat, ("L",), flat[0], width, height, cutoff,
        parallel=parallel,
        max_workers=None,
        cancel_event=cancel_event,
        return_intermediates=return_intermediates,
        suppress_warning=suppress_warning,
    )
