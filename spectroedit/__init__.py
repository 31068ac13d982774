"""
SpectroEdit: spectral framing and overlap-add resynthesis of mono audio clips.
"""
from .core import Clip, Frame, AudioStream, UnsupportedAudioFileError

__version__ = "0.1.0"

__all__ = ['Clip', 'Frame', 'AudioStream', 'UnsupportedAudioFileError']
