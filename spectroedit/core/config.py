"""
Configuration for SpectroEdit: the clip PCM format, framing defaults
and device playback settings.
"""
from dataclasses import dataclass
from enum import Enum, auto


class PlaybackState(Enum):
    """Playback state enumeration."""
    STOPPED = auto()
    PLAYING = auto()


@dataclass(frozen=True, slots=True)
class AudioFormat:
    """
    PCM format used for both ingestion and resynthesis.
    Input audio is normalized to this format; output is always produced in it.
    """
    sample_rate: int = 16000
    sample_size_bits: int = 16
    channels: int = 1
    signed: bool = True
    big_endian: bool = True

    @property
    def bytes_per_sample(self) -> int:
        return self.sample_size_bits // 8

    @property
    def frame_size_bytes(self) -> int:
        """Bytes per sample frame (one sample per channel)."""
        return self.bytes_per_sample * self.channels

    @property
    def numpy_dtype(self) -> str:
        return ('>' if self.big_endian else '<') + ('i' if self.signed else 'u') + str(self.bytes_per_sample)


@dataclass(frozen=True, slots=True)
class ClipConfig:
    """Clip framing defaults."""
    default_frame_size: int = 2048  # Must be a power of two
    default_overlap: int = 8
    default_spectral_scale: float = 10000.0
    default_window: str = "vorbis"


@dataclass(frozen=True, slots=True)
class PlaybackConfig:
    """Device playback settings."""
    blocksize: int = 4096
    dtype: str = "float32"


# Global config instances (immutable singletons)
AUDIO_FORMAT = AudioFormat()
CLIP_CONFIG = ClipConfig()
PLAYBACK_CONFIG = PlaybackConfig()
