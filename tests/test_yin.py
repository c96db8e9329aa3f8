import numpy as np
import pytest

from pitchtester.yin import YinPitchDetector


def sine(frequency, size=2048, sample_rate=44100.0, amplitude=0.5):
    t = np.arange(size) / sample_rate
    return amplitude * np.sin(2.0 * np.pi * frequency * t)


def test_name_and_default_threshold():
    detector = YinPitchDetector()
    assert detector.name == "YIN"
    assert detector.threshold == pytest.approx(0.15)


def test_confidence_before_detection_is_one():
    assert YinPitchDetector().confidence == 1.0


@pytest.mark.parametrize("frequency", [55.0, 82.41, 110.0, 146.83, 220.0, 330.0])
def test_detects_sine_in_bass_range(frequency):
    detector = YinPitchDetector()
    detector.prepare(44100.0, 2048)
    assert detector.detect_pitch(sine(frequency)) == pytest.approx(frequency, rel=0.02)
    assert 0.8 < detector.confidence <= 1.0


def test_silence_gives_no_pitch():
    detector = YinPitchDetector()
    assert detector.detect_pitch(np.zeros(2048)) == 0.0
    assert detector.confidence == 0.0


def test_wrong_block_length_returns_zero_and_keeps_confidence():
    detector = YinPitchDetector()
    assert detector.detect_pitch(sine(110.0, size=1000)) == 0.0
    assert detector.confidence == 1.0


def test_frequency_above_range_rejected():
    detector = YinPitchDetector()
    assert detector.detect_pitch(sine(600.0)) == 0.0
    assert detector.confidence == 0.0


def test_zero_threshold_never_detects():
    detector = YinPitchDetector(threshold=0.0)
    assert detector.detect_pitch(sine(110.0)) == 0.0
    assert detector.confidence == 0.0


def test_stereo_input_uses_first_channel():
    detector = YinPitchDetector()
    tone = sine(110.0)
    assert detector.detect_pitch(np.vstack([tone, np.zeros(2048)])) == pytest.approx(110.0, rel=0.02)
    assert detector.detect_pitch(np.vstack([np.zeros(2048), tone])) == 0.0


def test_larger_buffer_reaches_lower_notes():
    detector = YinPitchDetector()
    detector.prepare(44100.0, 4096)
    assert detector.detect_pitch(sine(40.0, size=4096)) == pytest.approx(40.0, rel=0.02)


def test_other_sample_rate():
    detector = YinPitchDetector()
    detector.prepare(48000.0, 2048)
    assert detector.detect_pitch(sine(98.0, sample_rate=48000.0)) == pytest.approx(98.0, rel=0.02)


def test_detection_is_repeatable():
    detector = YinPitchDetector()
    block = sine(73.42)
    first = detector.detect_pitch(block)
    second = detector.detect_pitch(block)
    assert first == pytest.approx(73.42, rel=0.02)
    assert second == first


def test_tiny_buffer_gives_no_pitch():
    detector = YinPitchDetector()
    detector.prepare(44100.0, 1)
    assert detector.detect_pitch([0.5]) == 0.0
    assert detector.confidence == 0.0