# eurosim

Python models of a few Eurorack modules and of the front-panel hardware
around them. Each model runs one sample at a time.

## What is inside

- `eurosim.sos`: `SOSCoefficients` holds one section's coefficients: three
  feed-forward taps `b` and two feedback taps `a`. `SOSFilter` is a cascade
  of these second-order IIR sections. It filters plain floats or numpy
  arrays, which are filtered element by element.
- `eurosim.ripples.aafilter`: the elliptic anti-aliasing filters.
  - `select_cascade(sample_rate)` picks the design for the highest supported
    base rate that is not above `sample_rate`. The base rates run from 8 kHz
    to 768 kHz. Lower rates fall back to the 8 kHz design.
  - `AAFilter` holds matched up- and down-sampling filters.
    `oversampling_factor()` returns the factor chosen for the current rate.
- `eurosim.ripples.engine`: `RipplesEngine` models a four-pole OTA ladder
  filter.
  - The model is run oversampled, and the core is integrated with a
    second-order Runge-Kutta step.
  - Its outputs are band-pass, two-pole low-pass, four-pole low-pass and a
    VCA output. `process(frame)` writes them into the `bp2`, `lp2`, `lp4`
    and `lp4vca` fields of a `RipplesFrame` and returns that frame.
  - A tiny amount of random noise from `engine.rng` is added to the input so
    that self-oscillation can start. Outputs are therefore not bit-for-bit
    repeatable unless you reseed `rng`.
  - The building blocks are public: `RCFilter`, `v_to_i_converter`,
    `ota_vca` and `step_rk2`.
- `eurosim.ripples.module`: `RipplesModule` is the filter with its knobs and
  up to 16 voices.
  - The knobs are `res_param`, `freq_param` (log2 Hz) and `fm_param`.
  - `process(audio, res_cv, freq_cv, fm_cv, gain_cv)` takes a sequence of
    channel voltages for each input and returns one `RipplesFrame` per audio
    channel.
  - An input given as `None` or as an empty sequence counts as unpatched.
    A one-element CV sequence is applied to every channel. When `gain_cv` is
    unpatched, the gain falls back to its internal default.
  - `freq_param_to_knob` maps the frequency parameter to a 0..1 knob
    position.
- `eurosim.shades`: `Shades` is a mixer of three cascaded channels. Each
  channel is an attenuator or an attenuverter, set by `ShadesMode`.
  - `process(inputs, connected, sample_time)` takes one voltage per channel.
    A channel given as `None` reads a fixed 5 V.
  - It returns the summed voltage at each patched output and `None`
    elsewhere. An unpatched output passes its sum on to the next channel.
  - `lights` holds the smoothed (positive, negative) brightness of each
    channel.
- `eurosim.streams`: emulations of front-panel hardware.
  - `adc.AdcEmulator` holds raw 16-bit pot and CV readings.
  - `audio_cv_meter.AudioCvMeter` tells audio from CV by zero-crossing rate
    and tracks a smoothed peak.
  - `event_queue.EventQueue` is a bounded queue that drops the oldest event
    when full. It comes with `Event` and `ControlType`. `pull_event` raises
    `LookupError` when the queue is empty.
  - `leds.LedsEmulator` drives two banks of four red/green LEDs, with level
    bars and bipolar CV display.
  - `switches.SwitchesEmulator` debounces three active-low switches over an
    8-sample history.

Indices outside the valid range raise `IndexError`. Invalid sizes, counts,
sample rates and timesteps raise `ValueError`.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Example

```python
from eurosim.ripples.engine import RipplesEngine, RipplesFrame

engine = RipplesEngine(48000.0)
frame = RipplesFrame(res_knob=0.5, freq_knob=0.6, fm_knob=0.0, input=1.0)
engine.process(frame)
print(frame.lp4, frame.bp2)
```

```python
from eurosim.streams.leds import LedsEmulator

leds = LedsEmulator()
leds.paint_cv(0, 20000)
print([leds.intensity_green(i) for i in range(4)])
```

## What it does not do

The package is a library of sample-level models only. It has no command-line
program, no audio input or output, no graphical panel, and no saving or
loading of patches or settings. Feeding samples in and reading them out is
left to the calling code.

## Running the tests

```
pytest
```