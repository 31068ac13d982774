"""
Playback synthesizer: a pull-driven PCM byte stream rebuilt from frames by
overlap-add.
"""
from __future__ import annotations
import io
from typing import Optional, Sequence

from .frame import Frame
from .overlap_buffer import OverlapBuffer
from .window import WindowFunction


class PlaybackSynthesizer(io.RawIOBase):
    """
    Raw byte stream of 16-bit big-endian samples reconstructed from `frames`.

    Nothing is computed ahead of the reader: each byte pulled does at most one
    frame admission and one sample pull. Frames are read through the live
    sequence, so in-place edits show up in anything not yet pulled.

    Playback starts at the frame containing `start_sample`; offsets within
    that frame are not honored.
    """

    def __init__(
        self,
        frames: Sequence[Frame],
        frame_size: int,
        overlap: int,
        spectral_scale: float,
        window: Optional[WindowFunction] = None,
        start_sample: int = 0
    ) -> None:
        super().__init__()
        if start_sample < 0:
            raise ValueError(f"Start sample must be non-negative, got {start_sample}")
        self._frames = frames
        self._overlap = overlap
        self._spectral_scale = spectral_scale
        self._overlap_buffer = OverlapBuffer(frame_size, overlap, window)

        self.next_frame = start_sample // frame_size
        self.empty_frame_count = 0
        self._current_sample = 0
        self._current_byte_high = True

    def readable(self) -> bool:
        return True

    @property
    def exhausted(self) -> bool:
        return self.empty_frame_count >= self._overlap

    def read_byte(self) -> int:
        """Return the next output byte, or -1 at end of stream."""
        if not self._current_byte_high:
            # Low byte of a sample already pulled
            self._current_byte_high = True
            return self._current_sample & 0xff

        buffer = self._overlap_buffer
        if buffer.needs_new_frame and not self.exhausted:
            if self.next_frame < len(self._frames):
                frame = self._frames[self.next_frame]
                self.next_frame += 1
                buffer.add_frame(frame.as_time_data())
            else:
                buffer.add_empty_frame()
                self.empty_frame_count += 1

        if self.exhausted:
            return -1
        self._current_sample = int(buffer.next() * self._spectral_scale)
        self._current_byte_high = False
        return (self._current_sample >> 8) & 0xff

    def readinto(self, b) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        view = memoryview(b).cast('B')
        n = 0
        while n < len(view):
            value = self.read_byte()
            if value < 0:
                break
            view[n] = value
            n += 1
        return n
