# pitchtester

pitchtester is for trying out pitch detection algorithms on bass guitar
signals and comparing how they perform. It contains:

- `pitchtester.yin.YinPitchDetector`: YIN pitch detection, based on the
  cumulative mean normalised difference function. The default threshold is
  0.15.
- `pitchtester.fft.FFTPitchDetector`: takes the strongest spectral peak of a
  Hann-windowed FFT and refines it with parabolic interpolation. The module
  also provides the `fft_in_place` and `hann_window` helpers.
- `pitchtester.statistics.StatisticsManager`: running statistics over the
  detections. It keeps the current and average pitch, the note names,
  stability, detection confidence, response time and detection counts.
- `pitchtester.display.StatisticsDisplay`: renders those statistics as text.
- `pitchtester.processor.PitchDetectionProcessor`: accepts audio in blocks of
  any size and collects them into windows of 2048 samples. A window is passed
  to the selected detector only when its RMS level is above 0.01.
- `pitchtester.cli`: the `pitchtester` command, which analyses a WAV file.

Both detectors report only frequencies from 30 Hz to 400 Hz. When no pitch is
found they return `0.0`, and their `confidence` property then reads `0.0`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
pitchtester recording.wav                 # analyse with YIN
pitchtester recording.wav -a FFT -b 256   # FFT, blocks of 256 samples
pitchtester --list                        # print the algorithm names
pitchtester --about                       # explain the algorithms and statistics
```

The command reads 8-, 16-, 24- and 32-bit PCM WAV files and analyses only the
first channel. Time is measured in audio time rather than wall-clock time, so
the response time shows the spacing between consecutive valid detections
within the recording. Once the analysis is done, the command prints the
algorithm name and the statistics. If the file cannot be read, or the
algorithm is unknown, it prints an error and exits with status 1.

## Library use

Running a detector on a single window of samples:

```python
import numpy as np
from pitchtester.yin import YinPitchDetector
from pitchtester.fft import FFTPitchDetector

sample_rate = 44100.0
t = np.arange(2048) / sample_rate
samples = 0.5 * np.sin(2 * np.pi * 110.0 * t)

yin = YinPitchDetector()
yin.prepare(sample_rate, 2048)
print(yin.detect_pitch(samples), yin.confidence)

fft = FFTPitchDetector()
fft.prepare(sample_rate, 2048)
print(fft.detect_pitch(samples), fft.confidence)
```

A detector returns `0.0` for any block whose length differs from the buffer
size passed to `prepare`.

Note names and formatting:

```python
from pitchtester.statistics import frequency_to_note
from pitchtester.display import format_frequency, format_percentage

frequency_to_note(110.0)   # "A2"
frequency_to_note(10.0)    # "---" (outside the valid range)
format_frequency(110.0)    # "110.0 Hz"
format_percentage(0.85)    # "85%"
```

Passing a stream of blocks through the processor:

```python
import numpy as np
from pitchtester.display import StatisticsDisplay
from pitchtester.processor import PitchDetectionProcessor, algorithm_names

print(algorithm_names())   # ('YIN', 'FFT')

processor = PitchDetectionProcessor()
processor.set_pitch_detection_algorithm(1)   # FFT; statistics are reset
processor.prepare_to_play(44100.0, 512)

t = np.arange(44100) / 44100.0
signal = 0.5 * np.sin(2 * np.pi * 82.4 * t)
for start in range(0, signal.size, 512):
    processor.process_block(signal[start : start + 512])

print(StatisticsDisplay(processor.statistics).render())
```

`process_block` returns the pitches recorded from that block. It raises
`RuntimeError` when called before `prepare_to_play`, or after
`release_resources`. `pitchtester.cli.analyse(samples, sample_rate, algorithm,
block_size)` carries out the same steps for a whole signal and returns the
`StatisticsManager`.

## What it does not do

pitchtester works on recorded audio only: WAV files and sample arrays. It does
not capture live audio from an input device, has no graphical window, and
does not save settings or results anywhere. The statistics are printed as
text.