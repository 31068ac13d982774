"""
Audio file glue: normalizes arbitrary audio files into the clip PCM format
and writes resynthesized audio back to disk.
"""
from __future__ import annotations
import io
import os
import numpy as np
import soundfile as sf

from .audio_stream import AudioStream
from .config import AUDIO_FORMAT, AudioFormat
from .types import PcmArray
from spectroedit.utils.logger import logger


class UnsupportedAudioFileError(Exception):
    """Raised when an input file's container or codec can't be decoded."""


def float_to_pcm(samples: np.ndarray, audio_format: AudioFormat = AUDIO_FORMAT) -> bytes:
    """Encode float samples in [-1, 1] as signed 16-bit PCM bytes."""
    scaled = np.clip(np.asarray(samples, dtype=np.float64) * 32768.0, -32768, 32767)
    return scaled.astype(audio_format.numpy_dtype).tobytes()


def pcm_to_float(data: bytes, audio_format: AudioFormat = AUDIO_FORMAT) -> np.ndarray:
    """Decode signed 16-bit PCM bytes into float32 samples in [-1, 1)."""
    usable = len(data) - len(data) % audio_format.frame_size_bytes
    pcm = np.frombuffer(data[:usable], dtype=audio_format.numpy_dtype)
    return (pcm.astype(np.float32) / 32768.0).astype(np.float32)


def read_as_mono(file_path, audio_format: AudioFormat = AUDIO_FORMAT) -> io.BytesIO:
    """
    Decode an audio file, downmix to mono and resample to the clip format.

    Args:
        file_path: Any file librosa can decode
        audio_format: Target PCM format

    Returns:
        A binary stream of big-endian 16-bit samples

    Raises:
        FileNotFoundError: If the file does not exist
        UnsupportedAudioFileError: If the file can't be decoded
    """
    file_path = os.fspath(file_path)
    if not os.path.exists(file_path):
        raise FileNotFoundError(file_path)

    logger.info(f"Loading file: {file_path}")
    try:
        import librosa
        data, _ = librosa.load(file_path, sr=audio_format.sample_rate, mono=True)
    except Exception as e:
        logger.error(f"Failed to decode {file_path}: {e}")
        raise UnsupportedAudioFileError(f"Unsupported audio file: {file_path}") from e

    return io.BytesIO(float_to_pcm(data, audio_format))


def write_wav(stream: AudioStream, file_path) -> int:
    """
    Drain `stream` into a 16-bit PCM WAV file.

    Returns:
        Number of samples written
    """
    pcm: PcmArray = stream.to_array()
    sf.write(
        os.fspath(file_path),
        pcm,
        stream.format.sample_rate,
        subtype='PCM_16'
    )
    logger.info(f"Wrote {len(pcm)} samples to {file_path}")
    return len(pcm)
