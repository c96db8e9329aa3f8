"""YIN and FFT pitch detection, running statistics and a text report for bass guitar signals."""

__version__ = "1.0.0"