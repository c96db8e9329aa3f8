"""YIN pitch detection tuned for the bass guitar range."""

from __future__ import annotations

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .detector import PitchDetector


class YinPitchDetector(PitchDetector):
    """Pitch detector based on the cumulative mean normalised difference."""

    MIN_FREQUENCY = 30.0
    MAX_FREQUENCY = 400.0

    def __init__(self, threshold: float = 0.15) -> None:
        super().__init__()
        self.threshold = float(threshold)
        self._confidence = 1.0
        self._difference = np.zeros(0)
        self._cmnd = np.zeros(0)
        self.prepare(self.sample_rate, self.buffer_size)

    def prepare(self, sample_rate: float, buffer_size: int) -> None:
        super().prepare(sample_rate, buffer_size)
        half = self.buffer_size // 2
        self._difference = np.zeros(half)
        self._cmnd = np.zeros(half)

    @property
    def name(self) -> str:
        return "YIN"

    @property
    def confidence(self) -> float:
        return self._confidence

    def detect_pitch(self, samples) -> float:
        signal = self._mono(samples)
        if signal.size != self.buffer_size:
            return 0.0

        self._compute_difference(signal)
        self._compute_cmnd()

        index = self._find_minimum_index()
        if index is None:
            self._confidence = 0.0
            return 0.0

        lag = self._parabolic_interpolation(index)
        frequency = self.sample_rate / lag if lag > 0 else 0.0
        if not self.MIN_FREQUENCY <= frequency <= self.MAX_FREQUENCY:
            self._confidence = 0.0
            return 0.0

        self._confidence = max(0.0, 1.0 - float(self._cmnd[index]) / self.threshold)
        return float(frequency)

    def _compute_difference(self, signal: np.ndarray) -> None:
        half = self._difference.size
        if half == 0:
            return
        frames = sliding_window_view(signal, half)[:half]
        self._difference[:] = np.sum((frames - signal[:half]) ** 2, axis=1)

    def _compute_cmnd(self) -> None:
        half = self._cmnd.size
        if half == 0:
            return
        self._cmnd[0] = 1.0
        running = np.cumsum(self._difference)
        with np.errstate(divide="ignore", invalid="ignore"):
            self._cmnd[1:] = self._difference[1:] / (running[1:] / np.arange(2, half + 1))

    def _find_minimum_index(self) -> int | None:
        cmnd = self._cmnd
        below = np.flatnonzero(cmnd[2:] < self.threshold)
        if below.size == 0:
            return None
        index = int(below[0]) + 2
        while index + 1 < cmnd.size and cmnd[index + 1] < cmnd[index]:
            index += 1
        return index

    def _parabolic_interpolation(self, index: int) -> float:
        if index <= 0 or index >= self._cmnd.size - 1:
            return float(index)
        alpha, beta, gamma = (float(v) for v in self._cmnd[index - 1 : index + 2])
        denominator = alpha - 2.0 * beta + gamma
        if denominator == 0.0:
            return float(index)
        return index + 0.5 * (alpha - gamma) / denominator