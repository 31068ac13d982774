"""
Pytest configuration and fixtures for SpectroEdit tests.
"""
import io

import pytest
import numpy as np

from spectroedit.core.config import AUDIO_FORMAT


def to_pcm(samples) -> bytes:
    """Encode integer samples as big-endian signed 16-bit PCM."""
    return np.asarray(samples, dtype=np.int64).astype('>i2').tobytes()


def from_pcm(data: bytes) -> np.ndarray:
    """Decode big-endian signed 16-bit PCM into int64 samples."""
    return np.frombuffer(data, dtype='>i2').astype(np.int64)


class ChunkedSource:
    """Forward-only source that returns at most `chunk` bytes per read."""

    def __init__(self, data: bytes, chunk: int = 3):
        self._data = data
        self._pos = 0
        self._chunk = chunk
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if size < 0:
            size = len(self._data)
        n = min(size, self._chunk)
        out = self._data[self._pos:self._pos + n]
        self._pos += len(out)
        return out


class FailingSource:
    """Source whose reads always fail."""

    def read(self, size=-1):
        raise OSError("device unplugged")


@pytest.fixture
def sine_samples() -> np.ndarray:
    """512 samples of a 440 Hz tone as 16-bit integers."""
    t = np.arange(512) / AUDIO_FORMAT.sample_rate
    return np.round(8000 * np.sin(2 * np.pi * 440 * t)).astype(np.int64)


@pytest.fixture
def sine_pcm(sine_samples) -> bytes:
    return to_pcm(sine_samples)


@pytest.fixture
def sine_stream(sine_pcm) -> io.BytesIO:
    return io.BytesIO(sine_pcm)
