"""
core/errors.py

Exception types raised by the frequency-domain engine.

All of them derive from FourierFilterError so front-ends can catch the whole
family in one place. Contract violations also subclass ValueError, which keeps
them compatible with callers that only expect the usual argument errors.
"""


class FourierFilterError(Exception):
    """Base class for all engine errors."""


class InvalidSizeError(FourierFilterError, ValueError):
    """A 1D transform was given a sequence whose length is not a power of two."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"FFT size must be a power of 2 (got length {length}).")


class DegenerateSpectrumError(FourierFilterError, ArithmeticError):
    """The spectrum has zero maximum magnitude and cannot be normalized."""


class DimensionMismatchError(FourierFilterError, ValueError):
    """Channel arrays do not agree with the declared width/height."""


class PipelineCancelledError(FourierFilterError):
    """The cancellation signal was set while a request was being processed."""
