"""
Core package init for the Fourier low-pass project.
Exposes public modules for import in tests, scripts and the GUI.
"""
__all__ = [
    "complex_ops",
    "fft_engine",
    "filters",
    "spectrum_view",
    "color_processing",
    "config",
    "errors",
]
