"""Block-based audio processor that feeds a pitch detector and collects statistics."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from .detector import PitchDetector
from .fft import FFTPitchDetector
from .statistics import StatisticsManager
from .yin import YinPitchDetector

ANALYSIS_BUFFER_SIZE = 2048
MIN_AMPLITUDE_THRESHOLD = 0.01
DEFAULT_SAMPLE_RATE = 44100.0
DEFAULT_BLOCK_SIZE = 512

_ALGORITHMS: tuple[tuple[str, type[PitchDetector]], ...] = (
    ("YIN", YinPitchDetector),
    ("FFT", FFTPitchDetector),
)


def algorithm_names() -> tuple[str, ...]:
    """Names of the available algorithms, in selection order."""
    return tuple(name for name, _ in _ALGORITHMS)


def create_detector(index: int) -> PitchDetector:
    """Return a new detector for ``index``; unknown indices fall back to YIN."""
    if 0 <= index < len(_ALGORITHMS):
        return _ALGORITHMS[index][1]()
    return YinPitchDetector()


def _first_channel(samples) -> np.ndarray:
    signal = np.asarray(samples, dtype=np.float64)
    if signal.ndim == 2:
        if signal.shape[0] == 0:
            return np.zeros(0)
        signal = signal[0]
    if signal.ndim != 1:
        raise ValueError("samples must be a 1-D block or a (channels, samples) array")
    return signal


class PitchDetectionProcessor:
    """Accumulates incoming audio into analysis windows and runs pitch detection.

    Audio passes through unchanged; only the first channel is analysed.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self.sample_rate = DEFAULT_SAMPLE_RATE
        self.block_size = DEFAULT_BLOCK_SIZE
        self._statistics = StatisticsManager(clock)
        self._detector: PitchDetector = YinPitchDetector()
        self._algorithm_index = 0
        self._buffer: np.ndarray | None = None
        self._fill = 0

    @property
    def statistics(self) -> StatisticsManager:
        return self._statistics

    @property
    def detector(self) -> PitchDetector:
        return self._detector

    @property
    def current_algorithm_index(self) -> int:
        return self._algorithm_index

    def prepare_to_play(self, sample_rate: float, samples_per_block: int) -> None:
        """Allocate the analysis window and reset the statistics."""
        self._detector.prepare(sample_rate, ANALYSIS_BUFFER_SIZE)
        self.sample_rate = float(sample_rate)
        self.block_size = int(samples_per_block)
        self._buffer = np.zeros(ANALYSIS_BUFFER_SIZE)
        self._fill = 0
        self._statistics.reset()

    def release_resources(self) -> None:
        """Drop the analysis window; ``prepare_to_play`` must run again before use."""
        self._buffer = None
        self._fill = 0

    def process_block(self, samples) -> list[float]:
        """Feed a block of audio and return the pitches recorded from it."""
        if self._buffer is None:
            raise RuntimeError("prepare_to_play must be called before process_block")
        signal = _first_channel(samples)
        detections: list[float] = []
        position = 0
        while position < signal.size:
            take = min(ANALYSIS_BUFFER_SIZE - self._fill, signal.size - position)
            self._buffer[self._fill : self._fill + take] = signal[position : position + take]
            self._fill += take
            position += take
            if self._fill >= ANALYSIS_BUFFER_SIZE:
                pitch = self._analyse_window()
                if pitch is not None:
                    detections.append(pitch)
                self._fill = 0
        return detections

    def _analyse_window(self) -> float | None:
        rms = math.sqrt(float(np.mean(self._buffer**2)))
        if rms <= MIN_AMPLITUDE_THRESHOLD:
            return None
        pitch = self._detector.detect_pitch(self._buffer)
        if pitch <= 0.0:
            return None
        self._statistics.add_pitch_measurement(pitch, rms)
        return pitch

    def set_pitch_detection_algorithm(self, index: int) -> None:
        """Switch algorithm by index; statistics are reset on any change."""
        if index == self._algorithm_index:
            return
        self._algorithm_index = index
        self._detector = create_detector(index)
        self._detector.prepare(self.sample_rate, ANALYSIS_BUFFER_SIZE)
        self._statistics.reset()