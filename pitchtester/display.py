"""Text rendering of pitch detection statistics."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .statistics import StatisticsManager

TITLE = "Pitch Detection Statistics"


class DisplayMode(Enum):
    REAL_TIME = "real-time"
    HISTORY = "history"
    COMPARISON = "comparison"


class Rating(Enum):
    """Quality band of a 0..1 score, valued by its display colour."""

    SUCCESS = "#4CAF50"
    WARNING = "#FF9800"
    ERROR = "#F44336"


def rating_for(value: float) -> Rating:
    """Band a stability or confidence score."""
    if value >= 0.8:
        return Rating.SUCCESS
    if value >= 0.5:
        return Rating.WARNING
    return Rating.ERROR


def format_frequency(frequency: float) -> str:
    if frequency <= 0.0:
        return "--- Hz"
    if frequency < 1000.0:
        return f"{frequency:.1f} Hz"
    return f"{frequency / 1000.0:.2f} kHz"


def format_percentage(value: float) -> str:
    return f"{int(value * 100.0)}%"


def format_time(seconds: float) -> str:
    if seconds <= 0.0:
        return "---"
    if seconds < 0.001:
        return f"{int(seconds * 1_000_000.0)} μs"
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    return f"{seconds:.2f} s"


@dataclass(frozen=True)
class DisplayLine:
    """One line of the display with an optional quality rating."""

    text: str
    rating: Rating | None = None


class StatisticsDisplay:
    """Formats the statistics held by a :class:`StatisticsManager`."""

    def __init__(
        self, manager: StatisticsManager, mode: DisplayMode = DisplayMode.REAL_TIME
    ) -> None:
        self.manager = manager
        self.mode = mode

    def lines(self) -> list[DisplayLine]:
        """Current statistics, one line per value."""
        stats = self.manager
        stability = stats.pitch_stability
        confidence = stats.detection_confidence
        return [
            DisplayLine(f"Current Pitch: {format_frequency(stats.current_pitch)}"),
            DisplayLine(stats.current_note),
            DisplayLine(
                f"Average Pitch: {format_frequency(stats.average_pitch)} ({stats.average_note})"
            ),
            DisplayLine(f"Stability: {format_percentage(stability)}", rating_for(stability)),
            DisplayLine(f"Confidence: {format_percentage(confidence)}", rating_for(confidence)),
            DisplayLine(f"Response Time: {format_time(stats.response_time)}"),
            DisplayLine(f"Detections: {stats.valid_detections}/{stats.total_detections}"),
        ]

    def render(self) -> str:
        """The title, a separator and every line, joined with newlines."""
        body = [line.text for line in self.lines()]
        return "\n".join([TITLE, "-" * len(TITLE), *body])