"""Procedural audio.

The oscillator parameters are pure functions of (speed ratio, running flag,
elapsed time, sequencer step); main.py only applies them to looping Audio
objects. Waveforms are rendered once with numpy and stored as wav files.
"""
import math
import os
import wave

import numpy as np
from scipy.signal import lfilter

from settings import *


def midi_to_freq(note):
    return 440 * math.pow(2, (note - 69) / 12)


# ---------- Voices ----------
def engine_cutoff(ratio):
    return ENGINE_CUTOFF_BASE + ratio * ENGINE_CUTOFF_SPAN

def engine_voice(ratio, running):
    freq = ENGINE_BASE_FREQ + ratio * ENGINE_FREQ_SPAN
    gain = ENGINE_GAIN_RUNNING + ratio * ENGINE_GAIN_SPAN if running else ENGINE_GAIN_IDLE
    return {'freq': freq, 'gain': gain, 'cutoff': engine_cutoff(ratio)}

def engine_layer_weights(ratio, layers=ENGINE_LAYER_RATIOS):
    """Crossfade weights over the pre-filtered engine loops; they sum to 1."""
    weights = [0.0] * len(layers)
    if ratio <= layers[0]:
        weights[0] = 1.0
        return weights
    if ratio >= layers[-1]:
        weights[-1] = 1.0
        return weights
    for i in range(len(layers) - 1):
        lo, hi = layers[i], layers[i + 1]
        if lo <= ratio <= hi:
            mix = (ratio - lo) / (hi - lo)
            weights[i] = 1.0 - mix
            weights[i + 1] = mix
            break
    return weights

def music_frequency(elapsed):
    return MUSIC_FREQ + math.sin(elapsed * MUSIC_WOBBLE_RATE) * MUSIC_WOBBLE

def pad_vibrato(elapsed):
    return math.sin(2 * math.pi * PAD_LFO_RATE * elapsed) * PAD_LFO_DEPTH


class Sequencer:
    """Arpeggio over a four-chord loop, one step per eighth note."""

    def __init__(self, bpm=SEQ_BPM):
        self.step_time = 60 / bpm / 2
        self.step_index = 0
        self.timer = 0.0

    def reset(self):
        self.step_index = 0
        self.timer = 0.0

    def step(self, dt):
        """Advance the clock; returns how many steps fired."""
        self.timer += dt
        fired = 0
        while self.timer >= self.step_time:
            self.timer -= self.step_time
            self.step_index += 1
            fired += 1
        return fired

    def notes(self, step_index=None):
        i = self.step_index if step_index is None else step_index
        n = len(SEQ_ARP_PATTERN)
        chord = SEQ_CHORD_ROOTS[(i // n) % len(SEQ_CHORD_ROOTS)]
        arp = chord + SEQ_SCALE[SEQ_ARP_PATTERN[i % n]]
        return {'arp': arp, 'bass': chord - 12, 'pad': chord}


def oscillator_params(ratio, running, elapsed, sequencer):
    notes = sequencer.notes()
    return {
        'engine': engine_voice(ratio, running),
        'music':  {'freq': music_frequency(elapsed), 'gain': MUSIC_GAIN},
        'pad':    {'freq': midi_to_freq(notes['pad']) + pad_vibrato(elapsed), 'gain': PAD_GAIN},
        'bass':   {'freq': midi_to_freq(notes['bass']), 'gain': BASS_GAIN},
        'arp':    {'freq': midi_to_freq(notes['arp']), 'gain': ARP_GAIN},
    }

def gain_to_volume(gain):
    return min(1.0, max(0.0, gain * GAIN_TO_VOLUME))


# ---------- Waveforms ----------
def oscillator_wave(shape, freq, seconds=LOOP_SECONDS, sample_rate=SAMPLE_RATE):
    t = np.arange(int(seconds * sample_rate)) / sample_rate
    phase = (t * freq) % 1.0
    if shape == 'sine':
        return np.sin(2 * np.pi * phase)
    if shape == 'square':
        return np.where(phase < 0.5, 1.0, -1.0)
    if shape == 'sawtooth':
        return 2.0 * phase - 1.0
    if shape == 'triangle':
        return 1.0 - 4.0 * np.abs(phase - 0.5)
    raise ValueError(f'unknown waveform: {shape!r}')

def lowpass(samples, cutoff, sample_rate=SAMPLE_RATE):
    # one-pole RC filter, run over the loop twice so the kept pass is settled
    dt = 1.0 / sample_rate
    alpha = dt / (1.0 / (2 * math.pi * cutoff) + dt)
    doubled = np.concatenate([samples, samples])
    out = lfilter([alpha], [1.0, alpha - 1.0], doubled)[len(samples):]
    peak = np.max(np.abs(out))
    return out / peak if peak > 0 else out

def crash_noise(seconds=CRASH_SECONDS, sample_rate=SAMPLE_RATE, rng=None):
    rng = rng or np.random.default_rng()
    n = int(seconds * sample_rate)
    fade = 1.0 - np.arange(n) / n
    return rng.uniform(-1.0, 1.0, n) * fade


def write_wav(path, samples, sample_rate=SAMPLE_RATE):
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype('<i2')
    with wave.open(path, 'wb') as f:
        f.setnchannels(1)
        f.setsampwidth(2)
        f.setframerate(sample_rate)
        f.writeframes(pcm.tobytes())


def render_voice_files(folder=SOUNDS_DIR, sample_rate=SAMPLE_RATE, rng=None):
    """Write every voice loop and the crash into folder; returns name -> path.

    The engine entry is a list, one path per ENGINE_LAYER_RATIOS cutoff.
    """
    os.makedirs(folder, exist_ok=True)
    paths = {}
    engine = oscillator_wave(ENGINE_WAVEFORM, ENGINE_LOOP_FREQ, LOOP_SECONDS, sample_rate)
    paths['engine'] = []
    for i, ratio in enumerate(ENGINE_LAYER_RATIOS):
        path = os.path.join(folder, ENGINE_FILE.format(i))
        write_wav(path, lowpass(engine, engine_cutoff(ratio), sample_rate), sample_rate)
        paths['engine'].append(path)
    for name, (filename, shape, freq) in VOICE_FILES.items():
        samples = oscillator_wave(shape, freq, LOOP_SECONDS, sample_rate)
        path = os.path.join(folder, filename)
        write_wav(path, samples, sample_rate)
        paths[name] = path
    crash_path = os.path.join(folder, CRASH_FILE)
    write_wav(crash_path, crash_noise(CRASH_SECONDS, sample_rate, rng), sample_rate)
    paths['crash'] = crash_path
    return paths
