"""
Length-bounded PCM stream paired with its audio format.
"""
from __future__ import annotations
import io
import numpy as np

from .config import AudioFormat
from .types import PcmArray


class AudioStream(io.RawIOBase):
    """
    Reads from `source` but ends after `frame_length` sample frames.
    Closing the stream closes the source.
    """

    def __init__(self, source: io.RawIOBase, audio_format: AudioFormat, frame_length: int) -> None:
        super().__init__()
        self._source = source
        self._format = audio_format
        self._frame_length = max(0, frame_length)
        self._limit = self._frame_length * audio_format.frame_size_bytes
        self._position = 0

    @property
    def format(self) -> AudioFormat:
        return self._format

    @property
    def frame_length(self) -> int:
        """Declared length in sample frames."""
        return self._frame_length

    @property
    def remaining_bytes(self) -> int:
        return self._limit - self._position

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        view = memoryview(b).cast('B')
        wanted = min(len(view), self.remaining_bytes)
        if wanted <= 0:
            return 0
        n = self._source.readinto(view[:wanted]) or 0
        self._position += n
        return n

    def to_array(self) -> PcmArray:
        """Drain the rest of the stream into an int16 array (native byte order)."""
        data = self.readall()
        usable = len(data) - len(data) % self._format.frame_size_bytes
        pcm = np.frombuffer(data[:usable], dtype=self._format.numpy_dtype)
        return pcm.astype(np.int16)

    def close(self) -> None:
        if not self.closed:
            try:
                self._source.close()
            finally:
                super().close()
