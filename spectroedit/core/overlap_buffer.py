"""
Overlap-add accumulator used to turn a sequence of frames back into a
continuous signal, one sample at a time.
"""
from __future__ import annotations
from typing import Optional
import numpy as np

from .types import CoefficientArray, SampleArray
from .window import WindowFunction


class OverlapBuffer:
    """
    Holds the summed contributions of up to `overlap` frames.

    Each admitted frame starts at the current read position. After `hop`
    samples have been pulled the buffer asks for another frame (real or
    empty) before it can produce more output.
    """
    __slots__ = ('_frame_size', '_overlap', '_hop', '_acc', '_gain', '_pos')

    def __init__(
        self,
        frame_size: int,
        overlap: int,
        window: Optional[WindowFunction] = None
    ) -> None:
        if overlap < 1 or frame_size % overlap:
            raise ValueError(f"Overlap {overlap} must be >= 1 and divide frame size {frame_size}")
        self._frame_size = frame_size
        self._overlap = overlap
        self._hop = frame_size // overlap
        self._acc = np.zeros(frame_size, dtype=np.float64)
        self._gain = self._phase_gain(window)
        self._pos = self._hop  # Empty until the first frame arrives

    def _phase_gain(self, window: Optional[WindowFunction]) -> CoefficientArray:
        """
        Reciprocal of the squared window summed over all frames that overlap
        each hop phase (the window is applied at analysis and at synthesis).
        """
        if window is None:
            return np.ones(self._hop, dtype=np.float64)
        if len(window) != self._frame_size:
            raise ValueError(f"Window length {len(window)} != frame size {self._frame_size}")
        weight = (window.coefficients ** 2).reshape(self._overlap, self._hop).sum(axis=0)
        gain = np.ones(self._hop, dtype=np.float64)
        usable = weight >= 1e-8
        gain[usable] = 1.0 / weight[usable]
        return gain

    @property
    def hop(self) -> int:
        return self._hop

    @property
    def needs_new_frame(self) -> bool:
        """True when the current hop has been fully read."""
        return self._pos >= self._hop

    def _advance(self) -> None:
        hop = self._hop
        self._acc[:-hop] = self._acc[hop:]
        self._acc[-hop:] = 0.0
        self._pos = 0

    def add_frame(self, samples: SampleArray) -> None:
        """Admit one frame of time-domain samples at the read position."""
        samples = np.asarray(samples, dtype=np.float64)
        if samples.shape != (self._frame_size,):
            raise ValueError(f"Expected {self._frame_size} samples, got shape {samples.shape}")
        self._advance()
        self._acc += samples

    def add_empty_frame(self) -> None:
        """Admit a frame of silence, draining one hop of older contributions."""
        self._advance()

    def next(self) -> float:
        """Return the next reconstructed sample."""
        if self.needs_new_frame:
            raise RuntimeError("OverlapBuffer needs a new frame before more samples can be read")
        value = self._acc[self._pos] * self._gain[self._pos]
        self._pos += 1
        return float(value)
