"""
Playback controller for SpectroEdit.
Plays a clip's resynthesized PCM stream through sounddevice.
"""
from __future__ import annotations
import logging
import threading
from typing import Optional
import numpy as np

from .audio_io import pcm_to_float
from .audio_stream import AudioStream
from .config import PLAYBACK_CONFIG, PlaybackState
from .types import StateCallback

logger = logging.getLogger("SpectroEdit")


class PlaybackController:
    """
    Streams an AudioStream to the default output device.
    The stream is pulled block by block from sounddevice's callback.
    """
    __slots__ = (
        '_stream', '_output', '_state', '_on_state_changed',
        '_samples_played', '_finished', '_disposed'
    )

    def __init__(
        self,
        stream: AudioStream,
        on_state_changed: Optional[StateCallback] = None
    ) -> None:
        """
        Initialize playback controller.

        Args:
            stream: Audio to play (consumed as it plays)
            on_state_changed: Callback for state changes
        """
        self._stream = stream
        self._output = None
        self._state = PlaybackState.STOPPED
        self._on_state_changed = on_state_changed
        self._samples_played: int = 0
        self._finished = threading.Event()
        self._disposed: bool = False

    @property
    def state(self) -> PlaybackState:
        """Current playback state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def samples_played(self) -> int:
        """Samples handed to the device so far."""
        return self._samples_played

    def _set_state(self, state: PlaybackState) -> None:
        """Update state and notify callback."""
        if self._state != state:
            self._state = state
            if self._on_state_changed and not self._disposed:
                self._on_state_changed(state)

    def fill_block(self, outdata: np.ndarray) -> bool:
        """
        Fill `outdata` (frames x 1, float32) from the stream.

        Returns:
            True if the stream ended within this block
        """
        frames = len(outdata)
        fmt = self._stream.format
        wanted = frames * fmt.frame_size_bytes
        data = bytearray()
        while len(data) < wanted:
            chunk = self._stream.read(wanted - len(data))
            if not chunk:
                break
            data += chunk

        samples = pcm_to_float(bytes(data), fmt)
        n = len(samples)
        outdata.fill(0)
        outdata[:n, 0] = samples
        self._samples_played += n
        return n < frames

    def play(self) -> bool:
        """
        Start audio playback.

        Returns:
            True if playback started successfully
        """
        if self._disposed or self.is_playing:
            return False

        import sounddevice as sd

        def playback_callback(outdata, frames, time, status) -> None:
            """Real-time audio callback."""
            try:
                if status and status.output_underflow:
                    logger.debug("Output underflow")
                if self.fill_block(outdata):
                    raise sd.CallbackStop()
            except sd.CallbackStop:
                raise
            except Exception as e:
                logger.error("Playback callback error: %s", e, exc_info=True)
                raise sd.CallbackStop()

        def on_finished() -> None:
            """Called when stream finishes."""
            self._finished.set()
            if self._disposed:
                return
            if self._state == PlaybackState.PLAYING:
                self._set_state(PlaybackState.STOPPED)

        self._finished.clear()
        self._set_state(PlaybackState.PLAYING)
        try:
            self._output = sd.OutputStream(
                samplerate=self._stream.format.sample_rate,
                channels=self._stream.format.channels,
                dtype=PLAYBACK_CONFIG.dtype,
                blocksize=PLAYBACK_CONFIG.blocksize,
                callback=playback_callback,
                finished_callback=on_finished
            )
            self._output.start()
            logger.info("Playback started")
            return True

        except Exception as e:
            logger.error("Failed to start playback: %s", e, exc_info=True)
            self._set_state(PlaybackState.STOPPED)
            self._finished.set()
            return False

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until playback finishes. Returns False on timeout."""
        return self._finished.wait(timeout)

    def stop(self) -> None:
        """Stop playback."""
        if self._output is not None:
            try:
                self._output.stop()
                self._output.close()
            except Exception as e:
                logger.warning("Error stopping stream: %s", e)
            self._output = None
        self._finished.set()
        self._set_state(PlaybackState.STOPPED)
        logger.info("Playback stopped after %d samples", self._samples_played)

    def cleanup(self) -> None:
        """Stop playback and release the audio stream."""
        self._disposed = True
        self._on_state_changed = None
        self.stop()
        self._stream.close()
