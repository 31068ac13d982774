"""
Frame decomposition: slices a normalized PCM byte stream into overlapping,
scaled, windowed frames.
"""
from __future__ import annotations
import numpy as np

from .config import AUDIO_FORMAT, AudioFormat
from .frame import Frame
from .types import ByteSource
from .window import WindowFunction
from spectroedit.utils.logger import logger


def read_fully(source: ByteSource, size: int) -> bytes:
    """
    Read `size` bytes from `source`, retrying partial reads.
    Returns fewer bytes only when the source reports end of stream.
    """
    buf = bytearray()
    while len(buf) < size:
        chunk = source.read(size - len(buf))
        if not chunk:
            break
        logger.debug(f"read {len(chunk)} bytes at offset {len(buf)}")
        buf += chunk
    return bytes(buf)


class FrameDecomposer:
    """
    Turns PCM bytes into a list of Frames.

    Consecutive frames start `hop` bytes apart (frame bytes / overlap). The
    bytes shared with the previous frame are kept in a sliding buffer, so the
    source only has to be readable forward.
    """

    def __init__(
        self,
        frame_size: int,
        overlap: int,
        spectral_scale: float,
        window: WindowFunction,
        audio_format: AudioFormat = AUDIO_FORMAT
    ) -> None:
        self.frame_size = frame_size
        self.overlap = overlap
        self.spectral_scale = spectral_scale
        self.window = window
        self.audio_format = audio_format

    @property
    def frame_bytes(self) -> int:
        return self.frame_size * self.audio_format.frame_size_bytes

    @property
    def hop_bytes(self) -> int:
        return self.frame_bytes // self.overlap

    def to_samples(self, buf: bytes) -> np.ndarray:
        """Decode signed 16-bit big-endian PCM and divide by the spectral scale."""
        pcm = np.frombuffer(buf, dtype=self.audio_format.numpy_dtype)
        return pcm.astype(np.float64) / self.spectral_scale

    def decompose(self, source: ByteSource, name: str = "<stream>") -> list[Frame]:
        """
        Read `source` to exhaustion and return its frames.

        A short read at the end is zero-padded and still produces a frame.
        Ingestion stops when a read at a new frame position yields no bytes.
        """
        frame_bytes = self.frame_bytes
        hop_bytes = self.hop_bytes
        frames: list[Frame] = []
        held = bytearray()

        while True:
            chunk = read_fully(source, frame_bytes - len(held))
            if not chunk:
                break
            held += chunk

            buf = bytes(held)
            if len(buf) != frame_bytes:
                # Only expected on the last frame of the input
                logger.warning(f"Only read {len(buf)} of {frame_bytes} bytes at frame {len(frames)}")
                buf = buf.ljust(frame_bytes, b'\x00')

            frames.append(Frame(self.to_samples(buf), self.window))

            skipped = min(hop_bytes, len(held))
            del held[:hop_bytes]
            if skipped != hop_bytes:
                logger.info(f"Skipped {skipped} bytes, but wanted {hop_bytes} at frame {len(frames)}")

        logger.info(
            f"Read {len(frames)} frames from {name} ({len(frames) * frame_bytes} bytes). "
            f"frame_size={self.frame_size} overlap={self.overlap}"
        )
        return frames
