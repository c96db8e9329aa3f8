import numpy as np
import pytest

from pitchtester.fft import FFTPitchDetector, fft_in_place, hann_window


def sine(frequency, size=2048, sample_rate=44100.0, amplitude=0.5):
    t = np.arange(size) / sample_rate
    return amplitude * np.sin(2.0 * np.pi * frequency * t)


@pytest.mark.parametrize("size", [1, 2, 8, 64, 2048])
def test_fft_matches_numpy(size):
    rng = np.random.default_rng(7)
    data = rng.standard_normal(size) + 1j * rng.standard_normal(size)
    real, imag = data.real.copy(), data.imag.copy()
    fft_in_place(real, imag)
    expected = np.fft.fft(data)
    np.testing.assert_allclose(real, expected.real, atol=1e-9)
    np.testing.assert_allclose(imag, expected.imag, atol=1e-9)


def test_fft_of_impulse_is_flat():
    real = np.zeros(16)
    real[0] = 1.0
    imag = np.zeros(16)
    fft_in_place(real, imag)
    np.testing.assert_allclose(real, np.ones(16), atol=1e-12)
    np.testing.assert_allclose(imag, np.zeros(16), atol=1e-12)


def test_fft_works_on_lists():
    real = [1.0, 0.0, 0.0, 0.0]
    imag = [0.0, 0.0, 0.0, 0.0]
    fft_in_place(real, imag)
    assert real == pytest.approx([1.0, 1.0, 1.0, 1.0])


def test_fft_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        fft_in_place(np.zeros(6), np.zeros(6))


def test_fft_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        fft_in_place(np.zeros(8), np.zeros(4))


def test_hann_window_shape():
    window = hann_window(9)
    assert window[0] == pytest.approx(0.0)
    assert window[-1] == pytest.approx(0.0)
    assert window[4] == pytest.approx(1.0)
    np.testing.assert_allclose(window, window[::-1], atol=1e-12)
    assert np.all((window >= 0.0) & (window <= 1.0))


def test_hann_window_empty():
    assert hann_window(0).size == 0


def test_fft_size_rounds_up_to_power_of_two():
    detector = FFTPitchDetector()
    detector.prepare(44100.0, 1000)
    assert detector.fft_size == 1024
    detector.prepare(44100.0, 2048)
    assert detector.fft_size == 2048


def test_bin_frequency_round_trip():
    detector = FFTPitchDetector()
    detector.prepare(48000.0, 2048)
    for frequency in (30.0, 110.0, 400.0):
        assert detector.bin_to_frequency(detector.frequency_to_bin(frequency)) == pytest.approx(frequency)
    assert detector.bin_to_frequency(detector.fft_size) == pytest.approx(48000.0)


def test_name_and_initial_confidence():
    detector = FFTPitchDetector()
    assert detector.name == "FFT"
    assert detector.confidence == 1.0


@pytest.mark.parametrize("frequency", [55.0, 110.0, 220.0])
def test_bass_search_band_is_empty_so_no_pitch_reported(frequency):
    detector = FFTPitchDetector()
    assert detector.detect_pitch(sine(frequency)) == 0.0
    assert detector.confidence == 0.0


def test_wrong_block_length_keeps_confidence():
    detector = FFTPitchDetector()
    assert detector.detect_pitch(sine(110.0, size=512)) == 0.0
    assert detector.confidence == 1.0


def test_prepare_rejects_invalid_buffer():
    with pytest.raises(ValueError):
        FFTPitchDetector().prepare(44100.0, 0)