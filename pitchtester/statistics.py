"""Running statistics over a stream of pitch detections."""

from __future__ import annotations

import math
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

MAX_HISTORY_SIZE = 1000
STABILITY_WINDOW = 50
MIN_VALID_FREQUENCY = 30.0
MAX_VALID_FREQUENCY = 400.0
STABILITY_REFERENCE_HZ = 50.0
AMPLITUDE_REFERENCE = 0.1

_A4_FREQUENCY = 440.0
_A4_MIDI_NOTE = 69
_NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
NO_NOTE = "---"


def is_valid_frequency(frequency: float) -> bool:
    """Return whether ``frequency`` lies in the bass guitar range."""
    return MIN_VALID_FREQUENCY <= frequency <= MAX_VALID_FREQUENCY


def frequency_to_note(frequency: float) -> str:
    """Return the nearest equal-tempered note name with octave, e.g. ``"A2"``."""
    if not is_valid_frequency(frequency):
        return NO_NOTE
    midi = _A4_MIDI_NOTE + 12.0 * math.log2(frequency / _A4_FREQUENCY)
    note_number = math.floor(midi + 0.5)
    octave = note_number // 12 - 1
    return f"{_NOTE_NAMES[note_number % 12]}{octave}"


@dataclass(frozen=True)
class PitchMeasurement:
    """One detection: frequency in Hz (0.0 when invalid), amplitude and time."""

    frequency: float
    amplitude: float
    timestamp: float


class StatisticsManager:
    """Collects pitch measurements and keeps summary statistics up to date.

    ``clock`` returns the current time in seconds; ``response_time`` is
    reported in milliseconds.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.perf_counter
        self._recent: deque[PitchMeasurement] = deque(maxlen=STABILITY_WINDOW)
        self._history: deque[float] = deque(maxlen=MAX_HISTORY_SIZE)
        self.reset()

    def reset(self) -> None:
        """Clear all measurements and statistics."""
        self.current_pitch = 0.0
        self.current_amplitude = 0.0
        self.average_pitch = 0.0
        self.pitch_stability = 0.0
        self.detection_confidence = 0.0
        self.response_time = 0.0
        self.total_detections = 0
        self.valid_detections = 0
        self.last_timestamp = 0.0
        self._recent.clear()
        self._history.clear()

    def add_pitch_measurement(self, frequency: float, amplitude: float) -> None:
        """Record a detected frequency and the signal amplitude it came from."""
        frequency = float(frequency)
        amplitude = float(amplitude)
        self.total_detections += 1
        self.current_pitch = frequency
        self.current_amplitude = amplitude
        now = self._clock()

        if is_valid_frequency(frequency):
            self.valid_detections += 1
            self._recent.append(PitchMeasurement(frequency, amplitude, now))
        else:
            self._recent.append(PitchMeasurement(0.0, amplitude, now))

        self._history.append(frequency)
        self._update_statistics()
        self.last_timestamp = now

    @property
    def pitch_history(self) -> list[float]:
        """Up to the last 1000 detected frequencies, oldest first."""
        return list(self._history)

    @property
    def recent_measurements(self) -> tuple[PitchMeasurement, ...]:
        """Up to the last 50 measurements, oldest first."""
        return tuple(self._recent)

    @property
    def current_note(self) -> str:
        return frequency_to_note(self.current_pitch)

    @property
    def average_note(self) -> str:
        return frequency_to_note(self.average_pitch)

    def _update_statistics(self) -> None:
        if not self._history:
            return
        valid = [pitch for pitch in self._history if is_valid_frequency(pitch)]
        self.average_pitch = sum(valid) / len(valid) if valid else 0.0
        self.pitch_stability = self._pitch_stability()
        self.detection_confidence = self._detection_confidence()
        self.response_time = self._response_time()

    def _pitch_stability(self) -> float:
        if len(self._history) < 2:
            return 0.0
        window = list(self._history)[-STABILITY_WINDOW:]
        valid = [pitch for pitch in window if is_valid_frequency(pitch)]
        if len(valid) < 2:
            return 0.0
        count = len(valid)
        mean = sum(valid) / count
        variance = sum(pitch * pitch for pitch in valid) / count - mean * mean
        std_dev = math.sqrt(max(0.0, variance))
        return max(0.0, 1.0 - std_dev / STABILITY_REFERENCE_HZ)

    def _detection_confidence(self) -> float:
        if self.total_detections == 0:
            return 0.0
        valid_ratio = self.valid_detections / self.total_detections
        amplitude_factor = min(1.0, self.current_amplitude / AMPLITUDE_REFERENCE)
        return valid_ratio * amplitude_factor

    def _response_time(self) -> float:
        if len(self._recent) < 2:
            return 0.0
        gaps = [
            later.timestamp - earlier.timestamp
            for earlier, later in zip(self._recent, list(self._recent)[1:])
            if is_valid_frequency(earlier.frequency) and is_valid_frequency(later.frequency)
        ]
        if not gaps:
            return 0.0
        return sum(gaps) / len(gaps) * 1000.0