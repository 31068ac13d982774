"""
Clip: an audio clip held as a sequence of overlapping spectral frames.
"""
from __future__ import annotations
import io
import os
import sys
from typing import Iterator

from .audio_io import read_as_mono
from .audio_stream import AudioStream
from .config import AUDIO_FORMAT, CLIP_CONFIG
from .decomposer import FrameDecomposer
from .frame import Frame
from .synthesizer import PlaybackSynthesizer
from .types import ByteSource, WindowFactory
from .window import VorbisWindowFunction, WindowFunction
from spectroedit.utils.logger import logger


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class Clip:
    """
    An audio clip split into equal-size frames of spectral information.

    Frames can be accessed in any order and edited in place; the clip can
    also produce a PCM stream of its current spectral content for playback
    or saving to a WAV file.
    """

    def __init__(
        self,
        name: str,
        source: ByteSource,
        frame_size: int = CLIP_CONFIG.default_frame_size,
        overlap: int = CLIP_CONFIG.default_overlap,
        spectral_scale: float = CLIP_CONFIG.default_spectral_scale,
        window_factory: WindowFactory = VorbisWindowFunction
    ) -> None:
        """
        Build a clip by reading `source` to the end.

        Args:
            name: Clip name (file name or something supplied by the user)
            source: Mono 16 kHz signed 16-bit big-endian PCM bytes
            frame_size: Samples per frame, a power of two
            overlap: Number of frames covering each sample (1 = no overlap).
                At least 2 is needed for click-free output after edits.
            spectral_scale: Divisor applied to samples at ingestion and
                multiplier applied at playback
            window_factory: Builds the window for a frame length

        Raises:
            ValueError: If the framing parameters are invalid
            OSError: If reading `source` fails
        """
        if not _is_power_of_two(frame_size):
            raise ValueError(f"Frame size must be a power of two, got {frame_size}")
        if overlap < 1 or frame_size % overlap:
            raise ValueError(f"Overlap must be >= 1 and divide frame size {frame_size}, got {overlap}")
        if spectral_scale <= 0:
            raise ValueError(f"Spectral scale must be positive, got {spectral_scale}")

        self._name = name
        self._frame_size = frame_size
        self._overlap = overlap
        self._spectral_scale = float(spectral_scale)
        self._window_factory = window_factory
        self._window: WindowFunction = window_factory(frame_size)

        decomposer = FrameDecomposer(frame_size, overlap, self._spectral_scale, self._window)
        self._frames: list[Frame] = decomposer.decompose(source, name)

    @classmethod
    def from_file(
        cls,
        file_path,
        frame_size: int = CLIP_CONFIG.default_frame_size,
        overlap: int = CLIP_CONFIG.default_overlap,
        spectral_scale: float = CLIP_CONFIG.default_spectral_scale,
        window_factory: WindowFactory = VorbisWindowFunction
    ) -> 'Clip':
        """
        Create a clip from an audio file in any format librosa can decode.

        Raises:
            UnsupportedAudioFileError: If the file can't be decoded
            OSError: If the file can't be read
        """
        name = os.path.abspath(os.fspath(file_path))
        with read_as_mono(name, AUDIO_FORMAT) as source:
            return cls(name, source, frame_size, overlap, spectral_scale, window_factory)

    # --- Accessors ---

    @property
    def name(self) -> str:
        return self._name

    @property
    def frame_size(self) -> int:
        """Number of time samples per frame."""
        return self._frame_size

    @property
    def frame_time_samples(self) -> int:
        return self._frame_size

    @property
    def frame_freq_samples(self) -> int:
        """Number of spectral coefficients per frame."""
        return self._frame_size

    @property
    def overlap(self) -> int:
        """
        Number of frames that overlap to produce any given time sample.
        Larger values give better time resolution at a linear cost in
        memory and CPU.
        """
        return self._overlap

    @property
    def spectral_scale(self) -> float:
        """Pinned at construction so ingestion and playback always agree."""
        return self._spectral_scale

    @property
    def window(self) -> WindowFunction:
        return self._window

    @property
    def sampling_rate(self) -> int:
        return AUDIO_FORMAT.sample_rate

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[Frame]:
        return iter(self._frames)

    def get_frame(self, i: int) -> Frame:
        """
        Return the `i`th frame (0-based).
        The frame is the stored one, not a copy: editing it permanently
        changes this clip.
        """
        return self._frames[i]

    # --- Playback ---

    def get_audio(self, start_sample: int = 0, max_length: int = sys.maxsize) -> AudioStream:
        """
        Return the time-domain audio for some or all of this clip.

        Args:
            start_sample: First sample; rounded down to the start of its frame
            max_length: Maximum number of samples in the stream. Values past
                the end of the clip are ignored (no padding is added).

        Returns:
            An AudioStream in AUDIO_FORMAT whose declared length is
            min(max_length, frame_count * frame_size * bytes_per_sample / overlap)
        """
        synthesizer = PlaybackSynthesizer(
            self._frames,
            self._frame_size,
            self._overlap,
            self._spectral_scale,
            self._window,
            start_sample
        )
        clip_length = (
            self.frame_count * self._frame_size * AUDIO_FORMAT.bytes_per_sample // self._overlap
        )
        return AudioStream(synthesizer, AUDIO_FORMAT, min(max_length, clip_length))

    def sub_clip(self, start_frame: int, n_frames: int, new_frame_size: int, new_overlap: int) -> 'Clip':
        """
        Create an independent clip from a range of this clip's frames.

        The range is resynthesized and decomposed again, so the new clip
        shares no data with this one.

        Args:
            start_frame: First frame of this clip in the sub clip
            n_frames: Number of frames of this clip in the sub clip
            new_frame_size: Frame size of the sub clip (power of two); larger
                frames give more frequency resolution
            new_overlap: Overlap of the sub clip; larger values give more time
                resolution
        """
        stream = None
        try:
            stream = io.BufferedReader(
                self.get_audio(start_frame * self._frame_size, n_frames * self._frame_size)
            )
            return Clip(
                f"Part of {self._name}",
                stream,
                new_frame_size,
                new_overlap,
                self._spectral_scale,
                self._window_factory
            )
        except OSError as e:
            raise AssertionError("Unexpected I/O error during clip resampling") from e
        finally:
            if stream is not None:
                try:
                    stream.close()
                except OSError:
                    logger.warning("Failed to close audio stream after creating sub clip", exc_info=True)

    def __repr__(self) -> str:
        return (
            f"Clip('{self._name}', frames={self.frame_count}, "
            f"frame_size={self._frame_size}, overlap={self._overlap})"
        )
