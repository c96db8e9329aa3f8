"""Command-line front end: analyse a WAV file and print pitch statistics."""

from __future__ import annotations

import argparse
import sys
import wave
from pathlib import Path

import numpy as np

from .display import StatisticsDisplay
from .processor import PitchDetectionProcessor, algorithm_names
from .statistics import StatisticsManager

_HELP = (
    "This tool tests pitch detection algorithms for bass guitar.\n\n"
    "1. Select an algorithm with --algorithm\n"
    "2. Give a recording of your bass guitar as a WAV file\n"
    "3. View the statistics and performance metrics\n"
    "4. Compare different algorithms' performance\n\n"
    "Available Algorithms:\n"
    "• YIN: Robust pitch detection using autocorrelation\n"
    "• FFT: Fast Fourier Transform based detection\n\n"
    "Statistics:\n"
    "• Current Pitch: Last detected frequency\n"
    "• Stability: How consistent the detection is\n"
    "• Confidence: Algorithm's confidence in the detection\n"
    "• Response Time: How quickly the algorithm responds\n"
    "• Detection Count: Total vs valid detections"
)


def help_text() -> str:
    """Explanation of the algorithms and statistics."""
    return _HELP


def read_wav(path) -> tuple[np.ndarray, int]:
    """Read a PCM WAV file as a ``(channels, frames)`` array in [-1, 1) and its rate."""
    with wave.open(str(path), "rb") as wav:
        channels = wav.getnchannels()
        width = wav.getsampwidth()
        rate = wav.getframerate()
        raw = wav.readframes(wav.getnframes())

    if width == 1:
        data = (np.frombuffer(raw, dtype=np.uint8).astype(np.float64) - 128.0) / 128.0
    elif width == 2:
        data = np.frombuffer(raw, dtype="<i2").astype(np.float64) / 32768.0
    elif width == 3:
        triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        values = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
        values = np.where(values & 0x800000, values - 0x1000000, values)
        data = values.astype(np.float64) / 8388608.0
    elif width == 4:
        data = np.frombuffer(raw, dtype="<i4").astype(np.float64) / 2147483648.0
    else:
        raise ValueError(f"unsupported sample width: {width} bytes")

    return data.reshape(-1, channels).T.copy(), rate


def _algorithm_index(algorithm) -> int:
    names = algorithm_names()
    if isinstance(algorithm, str):
        wanted = algorithm.upper()
        for index, name in enumerate(names):
            if name.upper() == wanted:
                return index
        raise ValueError(f"unknown algorithm {algorithm!r}; choose from {', '.join(names)}")
    index = int(algorithm)
    if not 0 <= index < len(names):
        raise ValueError(f"algorithm index out of range: {index}")
    return index


def analyse(
    samples, sample_rate: float, algorithm="YIN", block_size: int = 512
) -> StatisticsManager:
    """Run ``samples`` through the processor in blocks and return the statistics.

    Time is measured in audio time: each block is stamped with its end position.
    """
    if block_size < 1:
        raise ValueError(f"block size must be at least 1, got {block_size}")
    signal = np.asarray(samples, dtype=np.float64)
    if signal.ndim == 2:
        signal = signal[0] if signal.shape[0] else np.zeros(0)
    if signal.ndim != 1:
        raise ValueError("samples must be a 1-D signal or a (channels, samples) array")

    position = 0

    def clock() -> float:
        return position / sample_rate

    processor = PitchDetectionProcessor(clock=clock)
    processor.set_pitch_detection_algorithm(_algorithm_index(algorithm))
    processor.prepare_to_play(sample_rate, block_size)
    for start in range(0, signal.size, block_size):
        block = signal[start : start + block_size]
        position = start + block.size
        processor.process_block(block)
    return processor.statistics


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pitchtester", description="Test pitch detection algorithms on a bass recording."
    )
    parser.add_argument("wav", nargs="?", type=Path, help="PCM WAV file to analyse")
    parser.add_argument(
        "-a", "--algorithm", default="YIN", help=f"one of: {', '.join(algorithm_names())}"
    )
    parser.add_argument("-b", "--block-size", type=int, default=512, help="samples per block")
    parser.add_argument("--list", action="store_true", help="list the algorithms and exit")
    parser.add_argument("--about", action="store_true", help="explain the statistics and exit")
    return parser


def main(argv=None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)

    if args.list:
        print("\n".join(algorithm_names()))
        return 0
    if args.about:
        print(help_text())
        return 0
    if args.wav is None:
        parser.error("a WAV file is required")

    try:
        samples, rate = read_wav(args.wav)
        stats = analyse(samples, rate, args.algorithm, args.block_size)
    except (OSError, EOFError, wave.Error, ValueError) as error:
        print(f"error: {error}", file=sys.stderr)
        return 1

    name = algorithm_names()[_algorithm_index(args.algorithm)]
    print(f"Algorithm: {name}")
    print()
    print(StatisticsDisplay(stats).render())
    return 0


if __name__ == "__main__":
    sys.exit(main())