# io_utils/__init__.py
"""
I/O helpers package for the Fourier low-pass project.
"""
from .image_handler import read_image, split_channels, save_image, encode_png, to_data_url, detect_is_color
from .sample_image import generate_night_sky
from .file_utils import make_result_filename, save_parameters_txt, zip_results

__all__ = [
    "read_image",
    "split_channels",
    "save_image",
    "encode_png",
    "to_data_url",
    "detect_is_color",
    "generate_night_sky",
    "make_result_filename",
    "save_parameters_txt",
    "zip_results",
]
