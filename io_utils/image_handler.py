# io_utils/image_handler.py
"""
Image read/write helpers using Pillow.

Functions:
- read_image(source, max_side) -> (H x W x 3 uint8 array, meta)
- split_channels(rgb) -> (flat channels, width, height)
- save_image(path, array) -> writes image
- encode_png(array) -> PNG bytes
- to_data_url(png_bytes) -> "data:image/png;base64,..."
- detect_is_color(array) -> bool
"""

import base64
import io
import os
from typing import List, Optional, Tuple, Union

import numpy as np
from PIL import Image

from core.color_processing import validate_channels
from core.config import MAX_IMAGE_SIDE

ImageSource = Union[str, os.PathLike, bytes]


def read_image(source: ImageSource, max_side: Optional[int] = MAX_IMAGE_SIDE) -> Tuple[np.ndarray, dict]:
    """
    Read an image from a path or from raw file bytes and return (rgb, meta).
    - The image is always converted to RGB, shape (H, W, 3), uint8.
    - If max_side is set, the image is shrunk to fit inside max_side x max_side
      keeping its aspect ratio; smaller images are never enlarged.
    - Meta contains the original size, the processed size and, for images with
      transparency, 'has_alpha' and the alpha plane in meta['alpha'].
    """
    if isinstance(source, (bytes, bytearray)):
        img = Image.open(io.BytesIO(source))
    else:
        img = Image.open(source)
    img.load()
    original_size = img.size

    has_alpha = img.mode in ("RGBA", "LA") or ("transparency" in img.info)
    img = img.convert("RGBA" if has_alpha else "RGB")

    if max_side is not None and (img.width > max_side or img.height > max_side):
        img.thumbnail((max_side, max_side), Image.Resampling.LANCZOS)

    arr = np.asarray(img)
    meta = {
        "mode": img.mode,
        "original_size": original_size,
        "size": img.size,
        "has_alpha": has_alpha,
    }
    if has_alpha:
        meta["alpha"] = arr[..., 3].copy()
        arr = arr[..., :3]
    return np.ascontiguousarray(arr), meta


def split_channels(rgb: np.ndarray) -> Tuple[List[np.ndarray], int, int]:
    """
    Split an HxWx3 array into three flat row-major float64 channels and check
    them against the image size before they are handed to the core.
    """
    if not detect_is_color(rgb):
        raise ValueError("split_channels expects an HxWx3 array.")
    height, width = rgb.shape[:2]
    channels = [rgb[:, :, idx].ravel() for idx in range(3)]
    return validate_channels(channels, width, height), width, height


def _to_uint8(array: np.ndarray) -> np.ndarray:
    if np.issubdtype(array.dtype, np.floating):
        return np.clip(np.rint(array), 0.0, 255.0).astype(np.uint8)
    return array.astype(np.uint8)


def _to_pil(array: np.ndarray) -> Image.Image:
    # uint8 HxW, HxWx3, HxWx4 map to L, RGB, RGBA
    if not (array.ndim == 2 or (array.ndim == 3 and array.shape[2] in (3, 4))):
        raise ValueError("Expected an HxW, HxWx3 or HxWx4 array.")
    return Image.fromarray(_to_uint8(array))


def save_image(path: str, array: np.ndarray):
    """
    Save an image array to `path`. Accepts HxW (grayscale), HxWx3 (RGB) or
    HxWx4 (RGBA). Floats are rounded and clipped to 0..255.
    """
    d = os.path.dirname(str(path))
    if d:
        os.makedirs(d, exist_ok=True)
    _to_pil(array).save(path)
    return path


def encode_png(array: np.ndarray) -> bytes:
    buf = io.BytesIO()
    _to_pil(array).save(buf, format="PNG")
    return buf.getvalue()


def to_data_url(png_bytes: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")


def detect_is_color(array: np.ndarray) -> bool:
    return array.ndim == 3 and array.shape[2] == 3
