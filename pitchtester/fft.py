"""Spectral peak pitch detection."""

from __future__ import annotations

import numpy as np

from .detector import PitchDetector


def hann_window(size: int) -> np.ndarray:
    """Return a symmetric Hann window of ``size`` points."""
    if size <= 1:
        return np.ones(max(size, 0))
    return 0.5 - 0.5 * np.cos(2.0 * np.pi * np.arange(size) / (size - 1))


def fft_in_place(real, imag) -> None:
    """Replace ``real`` and ``imag`` with their radix-2 discrete Fourier transform."""
    re = np.array(real, dtype=np.float64)
    im = np.array(imag, dtype=np.float64)
    if re.ndim != 1 or re.shape != im.shape:
        raise ValueError("real and imaginary parts must be 1-D and of equal length")
    n = re.size
    if n == 0 or n & (n - 1):
        raise ValueError(f"transform size must be a power of two, got {n}")

    bits = n.bit_length() - 1
    positions = np.arange(n)
    reversed_positions = np.zeros(n, dtype=np.intp)
    for bit in range(bits):
        reversed_positions |= ((positions >> bit) & 1) << (bits - 1 - bit)
    re = re[reversed_positions]
    im = im[reversed_positions]

    step = 1
    while step < n:
        angle = -np.pi * np.arange(step) / step
        cos_val, sin_val = np.cos(angle), np.sin(angle)
        r = re.reshape(-1, 2, step)
        i = im.reshape(-1, 2, step)
        top_r = r[:, 0, :].copy()
        top_i = i[:, 0, :].copy()
        bottom_r = r[:, 1, :]
        bottom_i = i[:, 1, :]
        temp_r = bottom_r * cos_val - bottom_i * sin_val
        temp_i = bottom_r * sin_val + bottom_i * cos_val
        r[:, 1, :] = top_r - temp_r
        i[:, 1, :] = top_i - temp_i
        r[:, 0, :] = top_r + temp_r
        i[:, 0, :] = top_i + temp_i
        step <<= 1

    real[:] = re
    imag[:] = im


class FFTPitchDetector(PitchDetector):
    """Pitch detector that picks the strongest spectral peak in the bass range."""

    MIN_FREQUENCY = 30.0
    MAX_FREQUENCY = 400.0
    MIN_MAGNITUDE_THRESHOLD = 0.01

    def __init__(self) -> None:
        super().__init__()
        self._confidence = 1.0
        self.fft_size = 2048
        self._window = np.zeros(0)
        self._magnitude = np.zeros(0)
        self.prepare(self.sample_rate, self.buffer_size)

    def prepare(self, sample_rate: float, buffer_size: int) -> None:
        super().prepare(sample_rate, buffer_size)
        size = 1
        while size < self.buffer_size:
            size <<= 1
        self.fft_size = size
        self._window = hann_window(size)
        self._magnitude = np.zeros(size // 2)

    @property
    def name(self) -> str:
        return "FFT"

    @property
    def confidence(self) -> float:
        return self._confidence

    def frequency_to_bin(self, frequency: float) -> float:
        return frequency * self.fft_size / self.sample_rate

    def bin_to_frequency(self, bin_index: float) -> float:
        return bin_index * self.sample_rate / self.fft_size

    def detect_pitch(self, samples) -> float:
        signal = self._mono(samples)
        if signal.size != self.buffer_size:
            return 0.0

        real = np.zeros(self.fft_size)
        real[: self.buffer_size] = signal * self._window[: self.buffer_size]
        imag = np.zeros(self.fft_size)
        fft_in_place(real, imag)
        self._magnitude = np.hypot(real, imag)[: self.fft_size // 2]

        peak = self._find_peak_bin()
        if peak is None:
            self._confidence = 0.0
            return 0.0

        frequency = self.bin_to_frequency(self._parabolic_interpolation(peak))
        if not self.MIN_FREQUENCY <= frequency <= self.MAX_FREQUENCY:
            self._confidence = 0.0
            return 0.0

        strongest = float(self._magnitude.max())
        self._confidence = float(self._magnitude[peak]) / strongest if strongest > 0.0 else 0.0
        return float(frequency)

    def _find_peak_bin(self) -> int | None:
        magnitude = self._magnitude
        min_bin = max(1, int(self.frequency_to_bin(self.MAX_FREQUENCY)))
        max_bin = min(magnitude.size - 2, int(self.frequency_to_bin(self.MIN_FREQUENCY)))
        if min_bin >= max_bin:
            return None

        segment = magnitude[min_bin : max_bin + 1]
        is_peak = (
            (segment > self.MIN_MAGNITUDE_THRESHOLD)
            & (segment > magnitude[min_bin - 1 : max_bin])
            & (segment > magnitude[min_bin + 1 : max_bin + 2])
        )
        if not is_peak.any():
            return None
        return min_bin + int(np.argmax(np.where(is_peak, segment, -np.inf)))

    def _parabolic_interpolation(self, index: int) -> float:
        if index <= 0 or index >= self._magnitude.size - 1:
            return float(index)
        alpha, beta, gamma = (float(v) for v in self._magnitude[index - 1 : index + 2])
        denominator = alpha - 2.0 * beta + gamma
        if denominator == 0.0:
            return float(index)
        return index + 0.5 * (alpha - gamma) / denominator