"""
Tests for Frame.
"""
import pytest
import numpy as np

from spectroedit.core.frame import Frame
from spectroedit.core.window import RectangularWindowFunction, VorbisWindowFunction


class TestFrame:
    """Tests for Frame functionality."""

    def test_length(self):
        frame = Frame(np.zeros(32), VorbisWindowFunction(32))
        assert len(frame) == 32
        assert frame.data.shape == (32,)

    def test_time_data_is_doubly_windowed(self):
        window = VorbisWindowFunction(64)
        samples = np.linspace(-1, 1, 64)
        frame = Frame(samples, window)
        assert np.allclose(frame.as_time_data(), samples * window.coefficients ** 2)

    def test_rectangular_round_trip(self):
        samples = np.random.default_rng(0).normal(size=32)
        frame = Frame(samples, RectangularWindowFunction(32))
        assert np.allclose(frame.as_time_data(), samples)

    def test_edit_in_place_changes_time_data(self):
        frame = Frame(np.ones(32), RectangularWindowFunction(32))
        frame.data[:] = 0.0
        assert np.allclose(frame.as_time_data(), 0.0)

    def test_get_set_real(self):
        frame = Frame(np.zeros(16), RectangularWindowFunction(16))
        frame.set_real(3, 1.5)
        assert frame.get_real(3) == 1.5
        assert not np.allclose(frame.as_time_data(), 0.0)

    def test_wrong_length_rejected(self):
        with pytest.raises(ValueError):
            Frame(np.zeros(10), RectangularWindowFunction(16))

