import numpy as np
from PIL import Image, ImageTk


def np_to_tkimage(arr, scale: int = 1):
    """Convert a numpy array (H×W, H×W×3 or H×W×4) to a PhotoImage for tkinter."""
    if arr.ndim == 2:
        img = Image.fromarray(np.uint8(arr))
    else:
        img = Image.fromarray(np.uint8(arr[..., :3]))
    if scale > 1:
        img = img.resize((img.width * scale, img.height * scale), Image.Resampling.NEAREST)
    return ImageTk.PhotoImage(img)


def fit_scale(arr, box: int) -> int:
    """Largest integer zoom that keeps arr inside a box x box preview."""
    h, w = arr.shape[:2]
    return max(1, box // max(h, w))
