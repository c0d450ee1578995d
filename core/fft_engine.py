'''
FFT engine.

Functions:
- next_power_of_two / padded_shape: the one padding policy used by every caller
- pad_channel / crop: embed a flat channel into the padded grid and cut it back out
- fft1d / ifft1d: iterative radix-2 Cooley-Tukey transform and its inverse
- fft2d / ifft2d: separable 2D transform (rows then columns, and the reverse)
- fft_shift / ifft_shift: move DC between the array origin and the array center
'''

from functools import lru_cache
from typing import Tuple
import numpy as np

from .complex_ops import (
    ComplexSample,
    as_complex_array,
    complex_add,
    complex_conjugate,
    complex_multiply,
    complex_negate,
    join_complex,
    split_complex,
)
from .errors import InvalidSizeError


# --- padding policy ---
def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n must be a positive integer)."""
    n = int(n)
    if n < 1:
        raise ValueError("Dimension must be a positive integer.")
    return 1 << (n - 1).bit_length()


def padded_shape(width: int, height: int) -> Tuple[int, int]:
    """Return (padded_height, padded_width); each axis is padded independently."""
    return next_power_of_two(height), next_power_of_two(width)


def pad_channel(samples: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Embed a flat row-major channel of width*height samples at the origin of a
    zero grid of padded_shape(width, height).
    """
    flat = np.asarray(samples, dtype=np.float64).ravel()
    if flat.size != width * height:
        raise ValueError(
            f"Channel has {flat.size} samples, expected {width * height} for {width}x{height}."
        )
    ph, pw = padded_shape(width, height)
    grid = np.zeros((ph, pw), dtype=np.float64)
    grid[:height, :width] = flat.reshape(height, width)
    return grid


def crop(grid: np.ndarray, width: int, height: int) -> np.ndarray:
    """Keep only the [0,height) x [0,width) block that holds real image content."""
    return grid[:height, :width]


# --- cached tables ---
@lru_cache(maxsize=None)
def _bit_reversal_permutation(n: int) -> np.ndarray:
    bits = n.bit_length() - 1
    idx = np.arange(n)
    rev = np.zeros(n, dtype=np.intp)
    for _ in range(bits):
        rev = (rev << 1) | (idx & 1)
        idx = idx >> 1
    rev.setflags(write=False)
    return rev


@lru_cache(maxsize=None)
def _twiddles(size: int) -> ComplexSample:
    """W_size^k = exp(-2*pi*i*k/size) for k in [0, size/2)."""
    angle = -2.0 * np.pi * np.arange(size // 2) / size
    re = np.cos(angle)
    im = np.sin(angle)
    re.setflags(write=False)
    im.setflags(write=False)
    return ComplexSample(re, im)


# --- 1D transform ---
def _fft_last_axis(data: ComplexSample) -> ComplexSample:
    """
    Forward transform along the last axis of a ComplexSample of arrays.
    Leading axes are treated as a batch of independent sequences.
    """
    n = data.re.shape[-1]
    if not is_power_of_two(n):
        raise InvalidSizeError(n)
    if n == 1:
        return ComplexSample(data.re.copy(), data.im.copy())

    perm = _bit_reversal_permutation(n)
    re = np.ascontiguousarray(data.re[..., perm])
    im = np.ascontiguousarray(data.im[..., perm])
    batch = re.shape[:-1]

    size = 2
    while size <= n:
        half = size // 2
        blocks_re = re.reshape(batch + (n // size, size))
        blocks_im = im.reshape(batch + (n // size, size))
        even = ComplexSample(blocks_re[..., :half], blocks_im[..., :half])
        odd = ComplexSample(blocks_re[..., half:], blocks_im[..., half:])

        t = complex_multiply(_twiddles(size), odd)
        upper = complex_add(even, t)
        lower = complex_add(even, complex_negate(t))

        blocks_re[..., :half] = upper.re
        blocks_re[..., half:] = lower.re
        blocks_im[..., :half] = upper.im
        blocks_im[..., half:] = lower.im
        size *= 2

    return ComplexSample(re, im)


def _ifft_last_axis(data: ComplexSample) -> ComplexSample:
    n = data.re.shape[-1]
    out = complex_conjugate(_fft_last_axis(complex_conjugate(data)))
    return ComplexSample(out.re / n, out.im / n)


def fft1d(samples) -> np.ndarray:
    """
    Forward DFT of a power-of-two length sequence.
    Raises InvalidSizeError for any other length.
    """
    x = as_complex_array(samples)
    return join_complex(_fft_last_axis(split_complex(x)))


def ifft1d(spectrum) -> np.ndarray:
    """Inverse DFT: conjugate, forward transform, conjugate, scale by 1/N."""
    X = as_complex_array(spectrum)
    return join_complex(_ifft_last_axis(split_complex(X)))


# --- 2D transform ---
def _transform_rows(data: ComplexSample, inverse: bool) -> ComplexSample:
    return _ifft_last_axis(data) if inverse else _fft_last_axis(data)


def _transform_columns(data: ComplexSample, inverse: bool) -> ComplexSample:
    # run full columns as rows of the transpose, then transpose back
    cols = ComplexSample(data.re.T, data.im.T)
    out = _transform_rows(cols, inverse)
    return ComplexSample(np.ascontiguousarray(out.re.T), np.ascontiguousarray(out.im.T))


def fft2d(samples: np.ndarray, width: int, height: int) -> np.ndarray:
    """
    Compute the 2D spectrum of a flat real channel.
    The channel is zero-padded to padded_shape(width, height); the result has
    the padded shape. Rows are transformed first, then columns.
    """
    grid = pad_channel(samples, width, height)
    data = ComplexSample(grid, np.zeros_like(grid))
    data = _transform_rows(data, inverse=False)
    data = _transform_columns(data, inverse=False)
    return join_complex(data)


def ifft2d(spectrum: np.ndarray) -> np.ndarray:
    """
    Inverse 2D transform (columns first, then rows).
    Returns the full padded complex grid; cropping is up to the caller.
    """
    if spectrum.ndim != 2:
        raise ValueError("ifft2d expects a 2D frequency-domain array.")
    data = split_complex(spectrum)
    data = _transform_columns(data, inverse=True)
    data = _transform_rows(data, inverse=True)
    return join_complex(data)


# --- quadrant shift ---
def fft_shift(F: np.ndarray) -> np.ndarray:
    """
    Move DC from [0, 0] to [H//2, W//2]:
    out[i, j] = F[(i + H//2) % H, (j + W//2) % W].
    """
    H, W = F.shape
    return np.roll(F, shift=(-(H // 2), -(W // 2)), axis=(0, 1))


def ifft_shift(Fs: np.ndarray) -> np.ndarray:
    """Exact inverse of fft_shift for any dimensions (center -> origin)."""
    H, W = Fs.shape
    return np.roll(Fs, shift=(H // 2, W // 2), axis=(0, 1))
