# io_utils/sample_image.py
"""
Synthetic "night sky" test image: small bright stars on a dark background with
broadband noise, which makes the effect of a low-pass cutoff easy to see.
"""

from typing import Optional

import numpy as np
from PIL import Image, ImageDraw

BACKGROUND = (0, 8, 20)  # #000814


def generate_night_sky(
    size: int = 256,
    num_stars: int = 70,
    noise_amplitude: float = 80.0,
    seed: Optional[int] = None,
) -> np.ndarray:
    """
    Return a size x size x 3 uint8 image.
    Stars have brightness 155..255 and radius 0.5..2 px; noise is uniform in
    [-noise_amplitude/2, noise_amplitude/2] and shared across R, G and B.
    """
    if size < 1:
        raise ValueError("size must be a positive integer.")
    rng = np.random.default_rng(seed)

    img = Image.new("RGB", (size, size), BACKGROUND)
    draw = ImageDraw.Draw(img)
    for _ in range(num_stars):
        x, y = rng.uniform(0, size, 2)
        brightness = int(rng.uniform(155, 255))
        radius = rng.uniform(0.5, 2.0)
        draw.ellipse(
            [x - radius, y - radius, x + radius, y + radius],
            fill=(brightness, brightness, brightness),
        )

    arr = np.asarray(img, dtype=np.float64)
    noise = (rng.random((size, size)) - 0.5) * noise_amplitude
    arr = arr + noise[..., None]
    return np.clip(arr, 0, 255).astype(np.uint8)
