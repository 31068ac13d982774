"""
Window functions applied to frames before the forward transform and after the
inverse transform. Each window is built for one frame length and its
coefficients are shared by every frame of that length.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import numpy as np
from scipy.signal import get_window

from .types import CoefficientArray, SampleArray


class WindowFunction(ABC):
    """
    Per-sample weighting for frames of a fixed length.
    Subclasses only provide the coefficient formula.
    """
    name = "abstract"

    def __init__(self, frame_size: int) -> None:
        if frame_size <= 0:
            raise ValueError(f"Window length must be positive, got {frame_size}")
        self.frame_size = frame_size
        coefficients = np.asarray(self.compute(frame_size), dtype=np.float64)
        coefficients.setflags(write=False)
        self.coefficients: CoefficientArray = coefficients

    @abstractmethod
    def compute(self, frame_size: int) -> CoefficientArray:
        """Return `frame_size` window coefficients."""

    def apply(self, samples: SampleArray) -> SampleArray:
        """Multiply samples by the window, returning a new array."""
        return np.asarray(samples, dtype=np.float64) * self.coefficients

    def __len__(self) -> int:
        return self.frame_size

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.frame_size})"


class VorbisWindowFunction(WindowFunction):
    """
    The Vorbis power-complementary window. Applied at analysis and synthesis,
    frames at 50% overlap sum to unity.
    """
    name = "vorbis"

    def compute(self, frame_size: int) -> CoefficientArray:
        n = np.arange(frame_size, dtype=np.float64)
        inner = np.sin(np.pi * (n + 0.5) / frame_size)
        return np.sin(0.5 * np.pi * inner ** 2)


class HannWindowFunction(WindowFunction):
    """Periodic Hann window."""
    name = "hann"

    def compute(self, frame_size: int) -> CoefficientArray:
        return get_window("hann", frame_size, fftbins=True)


class RectangularWindowFunction(WindowFunction):
    """Trivial window: every coefficient is 1. Use with overlap 1."""
    name = "rectangular"

    def compute(self, frame_size: int) -> CoefficientArray:
        return get_window("boxcar", frame_size)


WINDOW_FUNCTIONS: dict[str, type[WindowFunction]] = {
    cls.name: cls for cls in (VorbisWindowFunction, HannWindowFunction, RectangularWindowFunction)
}


def get_window_function(name: str) -> type[WindowFunction]:
    """Look up a window class by its registry name."""
    try:
        return WINDOW_FUNCTIONS[name.lower()]
    except KeyError:
        known = ", ".join(sorted(WINDOW_FUNCTIONS))
        raise ValueError(f"Unknown window function '{name}' (known: {known})") from None
