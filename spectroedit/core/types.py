"""
Type definitions for the SpectroEdit core module.
Provides type aliases and protocols for type safety and better IDE support.
"""
from typing import TYPE_CHECKING, Callable, Optional, Protocol
import numpy as np
from numpy.typing import NDArray

from .config import PlaybackState

if TYPE_CHECKING:
    from .window import WindowFunction

# Sample data types
SampleArray = NDArray[np.float64]    # Shape: (frame_size,)
CoefficientArray = NDArray[np.float64]
PcmArray = NDArray[np.int16]         # Shape: (samples,)

# Builds the window for a given frame length
WindowFactory = Callable[[int], "WindowFunction"]

# Callback types
StateCallback = Callable[[PlaybackState], None]


class ByteSource(Protocol):
    """Forward-only binary source consumed by the frame decomposer."""
    def read(self, size: int = -1, /) -> Optional[bytes]: ...
