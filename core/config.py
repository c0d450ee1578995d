"""
core/config.py

Defaults shared by the pipeline, the GUI and the scripts, plus the
FilterParameters value object.
"""

from dataclasses import dataclass
import math
from typing import Any, Mapping

# cutoff used when a request does not specify one
DEFAULT_CUTOFF_FREQUENCY = 30

# boundary layer resizes images to fit inside this box (never enlarges)
MAX_IMAGE_SIDE = 256

# half-diagonal of a 256x256 padded grid; any larger cutoff is the identity
MAX_CUTOFF_FREQUENCY = 182

LUMINANCE_WEIGHTS = (0.299, 0.587, 0.114)

# largest residual imaginary part tolerated silently after the inverse FFT
IMAG_TOLERANCE = 1e-6

_CUTOFF_KEYS = ("cutoff_frequency", "cutoffFrequency", "cutoffFreq", "cutoff")


@dataclass(frozen=True)
class FilterParameters:
    cutoff_frequency: float = DEFAULT_CUTOFF_FREQUENCY

    def __post_init__(self):
        try:
            value = float(self.cutoff_frequency)
        except (TypeError, ValueError):
            raise ValueError(f"Cutoff frequency must be a number, got {self.cutoff_frequency!r}.")
        if not math.isfinite(value) or value < 0:
            raise ValueError("Cutoff frequency must be a non-negative finite number.")
        object.__setattr__(self, "cutoff_frequency", value)

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "FilterParameters":
        """
        Build parameters from form-style values, e.g. {"cutoffFreq": "42"}.
        Strings are truncated to an integer; missing keys fall back to the default.
        """
        for key in _CUTOFF_KEYS:
            if key in params and params[key] not in (None, ""):
                raw = params[key]
                if isinstance(raw, str):
                    try:
                        raw = int(float(raw.strip()))
                    except (ValueError, OverflowError):
                        raise ValueError(f"Cutoff frequency must be a number, got {params[key]!r}.")
                return cls(cutoff_frequency=raw)
        return cls()
