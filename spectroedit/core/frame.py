"""
Spectral frame: one windowed slice of audio held as DCT coefficients.
"""
from __future__ import annotations
import numpy as np
from scipy.fft import dct, idct

from .types import SampleArray
from .window import WindowFunction


class Frame:
    """
    A fixed-length frame of spectral data.

    The time samples are windowed and transformed on construction; the
    spectral coefficients in `data` may be edited in place and the change is
    picked up the next time `as_time_data()` is called.
    """
    __slots__ = ('_data', '_window')

    def __init__(self, time_data: SampleArray, window: WindowFunction) -> None:
        time_data = np.asarray(time_data, dtype=np.float64)
        if time_data.shape != (len(window),):
            raise ValueError(
                f"Frame needs {len(window)} samples, got shape {time_data.shape}"
            )
        self._window = window
        self._data = dct(window.apply(time_data), type=2, norm='ortho')

    @property
    def data(self) -> SampleArray:
        """Spectral coefficients (writable, not a copy)."""
        return self._data

    @property
    def window(self) -> WindowFunction:
        return self._window

    def __len__(self) -> int:
        return len(self._data)

    def get_real(self, i: int) -> float:
        """Return the `i`th spectral coefficient."""
        return float(self._data[i])

    def set_real(self, i: int, value: float) -> None:
        """Overwrite the `i`th spectral coefficient."""
        self._data[i] = value

    def as_time_data(self) -> SampleArray:
        """Inverse transform the current spectral data and re-apply the window."""
        return self._window.apply(idct(self._data, type=2, norm='ortho'))

    def __repr__(self) -> str:
        return f"Frame(length={len(self)}, window={self._window!r})"
