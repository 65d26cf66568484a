"""
Spectral analysis of display windows.

The band formation view shows a normalized magnitude spectrum evaluated at a
fixed number of bins between DC and Nyquist. The estimate is a direct
evaluation of the discrete-time Fourier transform at those bin frequencies,
not an FFT: bin frequencies are (b / bins) * fs / 2, which in general do not
coincide with the FFT grid of the window.

Functions
---------
analyze :
    Normalized magnitude spectrum at `bins` frequencies.
bin_frequencies :
    Frequencies in Hz of the analysis bins.
occupied_bandwidth :
    Width in Hz of the above-threshold run containing the peak.
approx_bandwidth :
    Nominal RRC occupied bandwidth Rs * (1 + rolloff).
noise_floor :
    Median magnitude of the bins outside a frequency range.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np

from .config import SPECTRUM_BINS
from .logger import logger
from .waveforms import Waveform

# Bins evaluated per block; bounds the size of the phase matrix.
_BLOCK_BINS = 128


@dataclass
class Spectrum:
    """
    Normalized magnitude spectrum.

    Attributes:
        magnitudes: Bin magnitudes in [0, 1]; the largest equals 1 unless the
            analyzed signal was all zeros.
        frequencies: Bin frequencies in Hz.
        sampling_rate: Sampling rate of the analyzed signal in Hz.
    """

    magnitudes: np.ndarray
    frequencies: np.ndarray
    sampling_rate: float

    def __len__(self) -> int:
        return self.magnitudes.shape[0]

    @property
    def bin_width(self) -> float:
        """Spacing between adjacent bins in Hz."""
        return self.sampling_rate / 2 / self.magnitudes.shape[0]

    @property
    def peak_bin(self) -> int:
        """Index of the largest bin."""
        return int(np.argmax(self.magnitudes))

    @property
    def peak_frequency(self) -> float:
        """Frequency of the largest bin in Hz."""
        return float(self.frequencies[self.peak_bin])


def bin_frequencies(bins: int, sampling_rate: float) -> np.ndarray:
    """Frequencies (b / bins) * fs / 2 for b = 0 .. bins - 1."""
    return np.arange(bins) / bins * (sampling_rate / 2)


def analyze(
    signal: Union[np.ndarray, Waveform],
    bins: int = SPECTRUM_BINS,
    sampling_rate: Optional[float] = None,
) -> Spectrum:
    """
    Estimates the normalized magnitude spectrum of a real signal.

    For each bin b the frequency is f = (b / bins) * fs / 2 and

    re = sum_n x[n] cos(-2 pi f n / fs)
    im = sum_n x[n] sin(-2 pi f n / fs)

    The bin magnitude is sqrt(re^2 + im^2). All bins are divided by the
    largest one; an all-zero signal gives all-zero bins.

    Args:
        signal: Real samples or a `Waveform`.
        bins: Number of bins between DC (inclusive) and Nyquist (exclusive).
        sampling_rate: Sampling rate in Hz. Taken from the `Waveform` when
            omitted; required for raw arrays.

    Returns:
        Spectrum with `bins` magnitudes.

    Raises:
        ValueError: If bins < 1, the sampling rate is missing or not positive,
            or the samples are complex.
    """
    if isinstance(signal, Waveform):
        samples = signal.samples
        if sampling_rate is None:
            sampling_rate = signal.sampling_rate
    else:
        samples = np.asarray(signal)

    if sampling_rate is None:
        raise ValueError("sampling_rate must be provided for raw arrays")
    if not sampling_rate > 0:
        raise ValueError(f"sampling_rate must be positive, got {sampling_rate}")
    if bins < 1 or int(bins) != bins:
        raise ValueError(f"bins must be a positive integer, got {bins}")
    if np.iscomplexobj(samples):
        raise ValueError("analyze expects a real-valued signal")

    bins = int(bins)
    samples = samples.astype(float)
    freqs = bin_frequencies(bins, sampling_rate)
    n = np.arange(samples.shape[0])

    logger.debug(
        f"Evaluating {bins} spectrum bins over {samples.shape[0]} samples."
    )

    mags = np.empty(bins)
    for start in range(0, bins, _BLOCK_BINS):
        stop = min(start + _BLOCK_BINS, bins)
        angle = -2 * np.pi * np.outer(freqs[start:stop], n) / sampling_rate
        re = np.cos(angle) @ samples
        im = np.sin(angle) @ samples
        mags[start:stop] = np.sqrt(re**2 + im**2)

    peak = np.max(mags)
    if peak == 0:
        logger.warning("Analyzed signal is all zeros; spectrum is all zeros.")
        peak = 1.0

    return Spectrum(
        magnitudes=mags / peak, frequencies=freqs, sampling_rate=sampling_rate
    )


def occupied_bandwidth(spectrum: Spectrum, threshold: float = 0.5) -> float:
    """
    Width of the contiguous run of bins above `threshold` around the peak.

    The run grows left and right from the peak bin while magnitudes exceed
    the threshold. Isolated spurs and density tones outside that run do not
    count, and a lone peak above threshold spans one bin width.

    Returns:
        Bandwidth in Hz, 0.0 if the peak does not exceed the threshold.
    """
    mags = spectrum.magnitudes
    peak = spectrum.peak_bin
    if not mags[peak] > threshold:
        return 0.0

    lo = peak
    while lo > 0 and mags[lo - 1] > threshold:
        lo -= 1
    hi = peak
    while hi < mags.shape[0] - 1 and mags[hi + 1] > threshold:
        hi += 1
    return float((hi - lo + 1) * spectrum.bin_width)


def approx_bandwidth(symbol_rate: float, rolloff: float) -> float:
    """Nominal occupied bandwidth Rs * (1 + rolloff) of an RRC-shaped signal."""
    return symbol_rate * (1 + rolloff)


def noise_floor(spectrum: Spectrum, exclude: Tuple[float, float]) -> float:
    """
    Median magnitude of the bins outside a frequency range.

    Args:
        spectrum: Spectrum to inspect.
        exclude: (low, high) range in Hz, typically the main lobe.

    Returns:
        Median magnitude, or 0.0 when every bin lies inside the range.
    """
    low, high = exclude
    outside = (spectrum.frequencies < low) | (spectrum.frequencies > high)
    if not np.any(outside):
        return 0.0
    return float(np.median(spectrum.magnitudes[outside]))
