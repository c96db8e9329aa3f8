import numpy as np
import pytest

from pitchtester.detector import PitchDetector
from pitchtester.fft import FFTPitchDetector
from pitchtester.yin import YinPitchDetector


class SumDetector(PitchDetector):
    @property
    def name(self):
        return "Sum"

    def detect_pitch(self, samples):
        return float(self._mono(samples).sum())


def sine(frequency, size=2048, sample_rate=44100.0, amplitude=0.5):
    t = np.arange(size) / sample_rate
    return amplitude * np.sin(2.0 * np.pi * frequency * t)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        PitchDetector()


def test_defaults_match_source_constants():
    detector = SumDetector()
    PitchDetector.prepare(detector, 48000, 1024)
    PitchDetector.__init__(detector)
    assert detector.sample_rate == 44100.0
    assert detector.buffer_size == 2048


def test_default_confidence_is_one():
    assert PitchDetector.confidence.fget(SumDetector()) == 1.0


def test_prepare_stores_configuration():
    detector = SumDetector()
    PitchDetector.prepare(detector, 48000, 1024)
    assert detector.sample_rate == 48000.0
    assert detector.buffer_size == 1024


@pytest.mark.parametrize("sample_rate, buffer_size", [(0, 1024), (-1.0, 1024), (44100, 0)])
def test_prepare_rejects_invalid_values(sample_rate, buffer_size):
    with pytest.raises(ValueError):
        PitchDetector.prepare(SumDetector(), sample_rate, buffer_size)


def test_two_dimensional_input_uses_first_channel():
    tone = sine(110.0)
    detector = YinPitchDetector()
    stereo = np.vstack([tone, np.zeros(2048)])
    assert detector.detect_pitch(stereo) == detector.detect_pitch(tone)
    assert detector.detect_pitch(stereo) == pytest.approx(110.0, rel=0.02)


def test_three_dimensional_input_rejected():
    with pytest.raises(ValueError):
        YinPitchDetector().detect_pitch(np.zeros((2, 2, 2048)))


def test_name_is_reported():
    assert YinPitchDetector().name == "YIN"
    assert FFTPitchDetector().name == "FFT"