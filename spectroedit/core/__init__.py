"""
SpectroEdit Core Module

This module contains the core audio processing logic:
- Clip: Spectral clip orchestrator (ingestion, frame access, playback)
- FrameDecomposer: Slices PCM into overlapping windowed frames
- PlaybackSynthesizer: Overlap-add resynthesis as a byte stream
- OverlapBuffer: Overlap-add accumulator
- Frame: One frame of spectral data
- Window functions: Vorbis, Hann, rectangular
- PlaybackController: Audio device playback
"""
from .clip import Clip
from .frame import Frame
from .decomposer import FrameDecomposer
from .synthesizer import PlaybackSynthesizer
from .overlap_buffer import OverlapBuffer
from .audio_stream import AudioStream
from .audio_io import UnsupportedAudioFileError, read_as_mono, write_wav
from .playback import PlaybackController
from .window import (
    WindowFunction,
    VorbisWindowFunction,
    HannWindowFunction,
    RectangularWindowFunction,
    WINDOW_FUNCTIONS,
    get_window_function
)
from .config import (
    AUDIO_FORMAT,
    CLIP_CONFIG,
    PLAYBACK_CONFIG,
    AudioFormat,
    PlaybackState
)

__all__ = [
    # Main classes
    'Clip',
    'Frame',
    'FrameDecomposer',
    'PlaybackSynthesizer',
    'OverlapBuffer',
    'AudioStream',
    'PlaybackController',
    # Windows
    'WindowFunction',
    'VorbisWindowFunction',
    'HannWindowFunction',
    'RectangularWindowFunction',
    'WINDOW_FUNCTIONS',
    'get_window_function',
    # File I/O
    'UnsupportedAudioFileError',
    'read_as_mono',
    'write_wav',
    # Config
    'AUDIO_FORMAT',
    'CLIP_CONFIG',
    'PLAYBACK_CONFIG',
    'AudioFormat',
    'PlaybackState',
]
