"""
Waveform synthesis for the band formation view.

A modulation label and a handful of dials (symbol rate, roll-off, carrier,
tone density, SNR) are turned into one real-valued display window:

1. random symbols (`mapping.map_symbols`),
2. zero-stuffed I and Q rails filtered by an RRC kernel,
3. a centered window of the filtered rails,
4. upconversion onto the display carrier,
5. optional narrow "density" tones around the carrier,
6. additive noise calibrated to the requested SNR.

Every random draw comes from one generator in that order, so a fixed seed
reproduces the window bit for bit.
"""

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .config import (
    DEFAULT_SPAN_SYMBOLS,
    DISPLAY_NUM_SAMPLES,
    DISPLAY_SAMPLING_RATE,
    MIN_NUM_SYMBOLS,
    MIN_SAMPLES_PER_SYMBOL,
    MIN_TONE_HALF_BANDWIDTH,
    TONE_AMPLITUDE,
)
from .exceptions import InvalidSynthesisParametersError
from .filtering import fir_filter, rrc_taps
from .impairments import add_gaussian_noise, add_uniform_noise
from .logger import logger
from .mapping import NON_SQUARE_MODES, format_label, map_symbols
from .multirate import expand
from .utils import RandomSource, as_generator

NOISE_MODELS = ("uniform", "gaussian")


@dataclass
class Waveform:
    """
    A real-valued display window with the parameters that produced it.

    Attributes:
        samples: Real samples of the upconverted signal.
        sampling_rate: The sampling rate in Hz.
        symbol_rate: The symbol rate in Baud.
        carrier: Display carrier frequency in Hz.
        rolloff: RRC roll-off factor used for shaping.
        sps: Samples per symbol used for shaping.
        modulation_format: Canonical modulation label (e.g. 'QPSK', '16QAM').
        tone_density: Number of density tones mixed in (0 or 1 means none).
        snr_db: Target SNR of the additive noise, if any.
    """

    samples: np.ndarray
    sampling_rate: float
    symbol_rate: float
    carrier: float = 0.0
    rolloff: float = 0.0
    sps: int = MIN_SAMPLES_PER_SYMBOL
    modulation_format: str = "None"
    tone_density: int = 0
    snr_db: Optional[float] = None

    def __post_init__(self) -> None:
        self.samples = np.asarray(self.samples, dtype=float)
        if self.sampling_rate <= 0:
            raise InvalidSynthesisParametersError(
                f"sampling_rate must be positive, got {self.sampling_rate}"
            )

    def __len__(self) -> int:
        return self.samples.shape[0]

    @property
    def duration(self) -> float:
        """Duration of the window in seconds."""
        return self.samples.shape[0] / self.sampling_rate

    @property
    def time_axis(self) -> np.ndarray:
        """Sample instants in seconds."""
        return np.arange(self.samples.shape[0]) / self.sampling_rate


def samples_per_symbol(sampling_rate: float, symbol_rate: float) -> int:
    """Upsampling factor floor(fs / max(1, Rs)), clamped to at least 2."""
    return max(
        MIN_SAMPLES_PER_SYMBOL, int(math.floor(sampling_rate / max(1.0, symbol_rate)))
    )


def symbols_for_window(num_samples: int, sps: int) -> int:
    """Number of symbols needed to fill a window, never below 64."""
    return max(MIN_NUM_SYMBOLS, int(math.ceil(num_samples / sps)))


def tone_half_bandwidth(symbol_rate: float, rolloff: float) -> float:
    """Half of the band the density tones are spread across."""
    return max(MIN_TONE_HALF_BANDWIDTH, symbol_rate * (1 + rolloff) / 2)


def center_window(samples: np.ndarray, length: int) -> np.ndarray:
    """
    Extract a window of exactly `length` samples around the middle.

    The window starts at floor((len(samples) - length) / 2). Positions that
    fall outside the input are zero.
    """
    samples = np.asarray(samples)
    start = (samples.shape[0] - length) // 2

    idx = np.arange(length) + start
    valid = (idx >= 0) & (idx < samples.shape[0])

    out = np.zeros(length, dtype=samples.dtype)
    out[valid] = samples[idx[valid]]
    return out


def upconvert(
    i_samples: np.ndarray,
    q_samples: np.ndarray,
    carrier: float,
    sampling_rate: float,
) -> np.ndarray:
    """
    Mix the I and Q rails onto a carrier.

    real[n] = I[n] cos(2 pi fc n / fs) - Q[n] sin(2 pi fc n / fs)
    """
    t = np.arange(len(i_samples)) / sampling_rate
    phase = 2 * np.pi * carrier * t
    return i_samples * np.cos(phase) - q_samples * np.sin(phase)


def add_density_tones(
    samples: np.ndarray,
    tone_density: int,
    carrier: float,
    half_bandwidth: float,
    sampling_rate: float,
    rng: RandomSource = None,
) -> np.ndarray:
    """
    Superpose narrow tones to make the spectrum look line-dense.

    `tone_density` sinusoids are placed evenly over
    [carrier - half_bandwidth, carrier + half_bandwidth] (both ends included),
    each with a random phase and amplitude 0.08 / sqrt(tone_density). This is
    visual clutter, not a physical effect. Densities of 0 or 1 add nothing and
    consume no random numbers.

    Returns:
        A new array; the input is not modified.
    """
    samples = np.array(samples, dtype=float)
    if tone_density <= 1:
        return samples

    rng = as_generator(rng)
    t = np.arange(samples.shape[0]) / sampling_rate

    step = 2 * half_bandwidth / max(1, tone_density - 1)
    freqs = carrier - half_bandwidth + np.arange(tone_density) * step
    phases = rng.random(tone_density) * 2 * np.pi
    amp = TONE_AMPLITUDE / np.sqrt(tone_density)

    logger.debug(
        f"Adding {tone_density} density tones from {freqs[0]:.1f} Hz "
        f"to {freqs[-1]:.1f} Hz."
    )
    for f, phase in zip(freqs, phases):
        samples += amp * np.sin(2 * np.pi * f * t + phase)
    return samples


def synthesize(
    modulation: str,
    symbol_rate: float,
    rolloff: float,
    carrier: float,
    tone_density: int,
    snr_db: float,
    sampling_rate: float = DISPLAY_SAMPLING_RATE,
    num_samples: int = DISPLAY_NUM_SAMPLES,
    rng: RandomSource = None,
    span: int = DEFAULT_SPAN_SYMBOLS,
    noise_model: str = "uniform",
    non_square: str = "ring",
) -> Waveform:
    """
    Generate one real-valued display window.

    Args:
        modulation: Modulation label ('BPSK', 'QPSK', '<M>QAM').
        symbol_rate: Symbol rate in Baud.
        rolloff: RRC roll-off factor (0 to 1).
        carrier: Display carrier frequency in Hz.
        tone_density: Number of density tones (values above 1 add tones).
        snr_db: Target SNR of the additive noise in dB.
        sampling_rate: Sampling rate in Hz.
        num_samples: Length of the returned window.
        rng: numpy Generator, integer seed, or None.
        span: RRC span in symbols.
        noise_model: 'uniform' (display noise) or 'gaussian'.
        non_square: Constellation for non-square QAM, 'ring' or 'reference'.

    Returns:
        Waveform with exactly `num_samples` samples.

    Raises:
        InvalidSynthesisParametersError: For a non-positive sampling rate,
            symbol rate or sample count, or a negative tone density.
        UnsupportedFormatError: For unknown modulation labels.
        InvalidFilterParametersError: For roll-off or span out of range.
    """
    if not sampling_rate > 0:
        raise InvalidSynthesisParametersError(
            f"sampling_rate must be positive, got {sampling_rate}"
        )
    if num_samples < 1 or int(num_samples) != num_samples:
        raise InvalidSynthesisParametersError(
            f"num_samples must be a positive integer, got {num_samples}"
        )
    if not symbol_rate > 0:
        raise InvalidSynthesisParametersError(
            f"symbol_rate must be positive, got {symbol_rate}"
        )
    if tone_density < 0 or int(tone_density) != tone_density:
        raise InvalidSynthesisParametersError(
            f"tone_density must be a non-negative integer, got {tone_density}"
        )
    if noise_model not in NOISE_MODELS:
        raise InvalidSynthesisParametersError(
            f"Unknown noise model: {noise_model}. Use one of {NOISE_MODELS}"
        )
    if non_square not in NON_SQUARE_MODES:
        raise InvalidSynthesisParametersError(
            f"Unknown non-square mode: {non_square}. Use one of {NON_SQUARE_MODES}"
        )

    label = format_label(modulation)
    num_samples = int(num_samples)
    tone_density = int(tone_density)

    sps = samples_per_symbol(sampling_rate, symbol_rate)
    num_symbols = symbols_for_window(num_samples, sps)
    h = rrc_taps(sps, rolloff=rolloff, span=span)

    logger.debug(
        f"Synthesizing {label}: sps={sps}, symbols={num_symbols}, "
        f"window={num_samples}, carrier={carrier:.1f} Hz."
    )

    rng = as_generator(rng)
    symbols = map_symbols(label, num_symbols, rng=rng, non_square=non_square)

    # Impulse trains, one per quadrature rail
    i_shaped = fir_filter(expand(symbols.real, sps), h, mode="full")
    q_shaped = fir_filter(expand(symbols.imag, sps), h, mode="full")

    samples = upconvert(
        center_window(i_shaped, num_samples),
        center_window(q_shaped, num_samples),
        carrier,
        sampling_rate,
    )

    if tone_density > 1:
        samples = add_density_tones(
            samples,
            tone_density,
            carrier,
            tone_half_bandwidth(symbol_rate, rolloff),
            sampling_rate,
            rng=rng,
        )

    if noise_model == "gaussian":
        samples = add_gaussian_noise(samples, snr_db, rng=rng)
    else:
        samples = add_uniform_noise(samples, snr_db, rng=rng)

    return Waveform(
        samples=samples,
        sampling_rate=sampling_rate,
        symbol_rate=symbol_rate,
        carrier=carrier,
        rolloff=rolloff,
        sps=sps,
        modulation_format=label,
        tone_density=tone_density,
        snr_db=snr_db,
    )
