"""
Tests for audio file reading and writing.
"""
import io

import pytest
import numpy as np
import soundfile as sf

from conftest import from_pcm, to_pcm
from spectroedit.core.audio_io import (
    UnsupportedAudioFileError,
    float_to_pcm,
    pcm_to_float,
    read_as_mono,
    write_wav
)
from spectroedit.core.audio_stream import AudioStream
from spectroedit.core.clip import Clip
from spectroedit.core.config import AUDIO_FORMAT


class TestPcmConversion:
    """Tests for float/PCM helpers."""

    def test_float_to_pcm(self):
        data = float_to_pcm(np.array([0.0, 0.5, -1.0, 1.0]))
        assert list(from_pcm(data)) == [0, 16384, -32768, 32767]

    def test_pcm_to_float(self):
        samples = pcm_to_float(to_pcm([0, 16384, -32768]))
        assert samples.dtype == np.float32
        assert np.allclose(samples, [0.0, 0.5, -1.0])

    def test_pcm_to_float_ignores_trailing_byte(self):
        assert len(pcm_to_float(to_pcm([1, 2]) + b"\x00")) == 2


class TestReadAsMono:
    """Tests for file normalization."""

    def test_mono_16k_preserved(self, tmp_path, sine_samples):
        path = tmp_path / "tone.wav"
        sf.write(str(path), sine_samples.astype(np.int16), 16000, subtype='PCM_16')
        with read_as_mono(path) as stream:
            out = from_pcm(stream.read())
        assert len(out) == len(sine_samples)
        assert np.max(np.abs(out - sine_samples)) <= 1

    def test_stereo_downmixed_and_resampled(self, tmp_path):
        sr = 32000
        t = np.arange(sr // 2) / sr
        tone = 0.25 * np.sin(2 * np.pi * 220 * t)
        path = tmp_path / "stereo.wav"
        sf.write(str(path), np.column_stack((tone, tone)), sr, subtype='PCM_16')
        with read_as_mono(path) as stream:
            out = from_pcm(stream.read())
        assert abs(len(out) - AUDIO_FORMAT.sample_rate // 2) <= 2
        assert np.max(np.abs(out)) < 0.3 * 32768

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_as_mono(tmp_path / "missing.wav")

    def test_unsupported_file(self, tmp_path):
        path = tmp_path / "garbage.wav"
        path.write_bytes(b"this is not audio" * 10)
        with pytest.raises(UnsupportedAudioFileError):
            read_as_mono(path)

    def test_clip_from_unsupported_file(self, tmp_path):
        path = tmp_path / "garbage.wav"
        path.write_bytes(b"this is not audio" * 10)
        with pytest.raises(UnsupportedAudioFileError):
            Clip.from_file(path)


class TestWriteWav:
    """Tests for writing resynthesized audio."""

    def test_write_clip(self, tmp_path, sine_pcm):
        clip = Clip("sine", io.BytesIO(sine_pcm), frame_size=64, overlap=2)
        path = tmp_path / "out.wav"
        with clip.get_audio() as stream:
            written = write_wav(stream, path)
        data, sr = sf.read(str(path), dtype='int16')
        assert sr == AUDIO_FORMAT.sample_rate
        assert len(data) == written == 512

    def test_write_bounded_stream(self, tmp_path):
        stream = AudioStream(io.BytesIO(to_pcm(np.arange(100))), AUDIO_FORMAT, 10)
        path = tmp_path / "short.wav"
        assert write_wav(stream, path) == 10
        data, _ = sf.read(str(path), dtype='int16')
        assert list(data) == list(range(10))


class TestAudioStream:
    """Tests for the length-bounded stream."""

    def test_bounded_read(self):
        stream = AudioStream(io.BytesIO(bytes(100)), AUDIO_FORMAT, 10)
        assert stream.frame_length == 10
        assert len(stream.read()) == 20
        assert stream.read(4) == b""

    def test_shorter_source(self):
        stream = AudioStream(io.BytesIO(bytes(8)), AUDIO_FORMAT, 10)
        assert len(stream.read()) == 8
        assert stream.remaining_bytes == 12

    def test_to_array(self):
        stream = AudioStream(io.BytesIO(to_pcm([1, -2, 300])), AUDIO_FORMAT, 3)
        arr = stream.to_array()
        assert arr.dtype == np.int16
        assert list(arr) == [1, -2, 300]

    def test_negative_length_is_empty(self):
        stream = AudioStream(io.BytesIO(bytes(8)), AUDIO_FORMAT, -5)
        assert stream.read() == b""

    def test_close_closes_source(self):
        source = io.BytesIO(bytes(8))
        stream = AudioStream(source, AUDIO_FORMAT, 4)
        stream.close()
        assert source.closed
        assert stream.closed
