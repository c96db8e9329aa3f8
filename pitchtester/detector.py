"""Common interface shared by the pitch detection algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

DEFAULT_SAMPLE_RATE = 44100.0
DEFAULT_BUFFER_SIZE = 2048


class PitchDetector(ABC):
    """Estimates the fundamental frequency of a fixed-size block of audio."""

    def __init__(self) -> None:
        self.sample_rate: float = DEFAULT_SAMPLE_RATE
        self.buffer_size: int = DEFAULT_BUFFER_SIZE

    def prepare(self, sample_rate: float, buffer_size: int) -> None:
        """Configure the detector for a sample rate and analysis block size."""
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate!r}")
        if buffer_size < 1:
            raise ValueError(f"buffer size must be at least 1, got {buffer_size!r}")
        self.sample_rate = float(sample_rate)
        self.buffer_size = int(buffer_size)

    @abstractmethod
    def detect_pitch(self, samples) -> float:
        """Return the detected frequency in Hz, or 0.0 when no pitch is found."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Algorithm name shown to the user."""

    @property
    def confidence(self) -> float:
        """Confidence of the last detection, from 0.0 to 1.0."""
        return 1.0

    @staticmethod
    def _mono(samples) -> np.ndarray:
        """Return the first channel of ``samples`` as a float array.

        Accepts a one-dimensional block or a ``(channels, samples)`` array.
        """
        signal = np.asarray(samples, dtype=np.float64)
        if signal.ndim == 2:
            if signal.shape[0] == 0:
                return np.zeros(0)
            signal = signal[0]
        if signal.ndim != 1:
            raise ValueError("samples must be a 1-D block or a (channels, samples) array")
        return signal