"""
Visual helpers for the Fourier low-pass project.
Provides export utilities used by the GUI and scripts.
"""
from .plots import (
    save_spectrum_image,
    plot_magnitude_spectrum,
    plot_mask,
    compare_and_save,
)
__all__ = [
    "save_spectrum_image",
    "plot_magnitude_spectrum",
    "plot_mask",
    "compare_and_save",
]
