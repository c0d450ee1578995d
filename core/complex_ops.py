"""
core/complex_ops.py

Complex arithmetic on (re, im) pairs.

ComplexSample fields may be plain floats or equally shaped float arrays; the
formulas are elementwise, so the same helpers drive both scalar use and the
vectorized butterflies in fft_engine.
"""

from typing import Iterable, List, NamedTuple, Union
import numpy as np


class ComplexSample(NamedTuple):
    re: Union[float, np.ndarray]
    im: Union[float, np.ndarray] = 0.0


def complex_add(a: ComplexSample, b: ComplexSample) -> ComplexSample:
    return ComplexSample(a.re + b.re, a.im + b.im)


def complex_multiply(a: ComplexSample, b: ComplexSample) -> ComplexSample:
    return ComplexSample(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)


def complex_conjugate(a: ComplexSample) -> ComplexSample:
    return ComplexSample(a.re, -a.im)


def complex_negate(a: ComplexSample) -> ComplexSample:
    return ComplexSample(-a.re, -a.im)


def split_complex(arr: np.ndarray) -> ComplexSample:
    """Split a complex array into a ComplexSample of float64 arrays (copies)."""
    arr = np.asarray(arr, dtype=np.complex128)
    return ComplexSample(arr.real.copy(), arr.imag.copy())


def join_complex(sample: ComplexSample) -> np.ndarray:
    """Inverse of split_complex."""
    out = np.empty(np.shape(sample.re), dtype=np.complex128)
    out.real = sample.re
    out.imag = sample.im
    return out


def as_complex_array(samples: Union[np.ndarray, Iterable]) -> np.ndarray:
    """
    Convert samples to a 1D complex128 array.
    Accepts numpy arrays, Python numbers, or ComplexSample values.
    """
    if isinstance(samples, np.ndarray):
        return samples.astype(np.complex128).ravel()
    values = []
    for s in samples:
        if isinstance(s, ComplexSample):
            values.append(complex(float(s.re), float(s.im)))
        else:
            values.append(complex(s))
    return np.asarray(values, dtype=np.complex128)


def to_samples(arr: np.ndarray) -> List[ComplexSample]:
    return [ComplexSample(float(c.real), float(c.imag)) for c in np.asarray(arr).ravel()]
