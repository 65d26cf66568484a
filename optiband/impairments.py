"""
Additive noise calibrated to a target SNR.

Two models are available:
- **Uniform** (`add_uniform_noise`): the display noise of the band formation
  view. Each sample gets (U - 0.5) * sqrt(P_noise) with U ~ U[0, 1). This is a
  crude, non-Gaussian approximation: its actual variance is P_noise / 12, so
  the realized SNR is about 10.8 dB above the requested one.
- **Gaussian** (`add_gaussian_noise`): AWGN whose variance equals P_noise.

Both accept a raw array or a `Waveform` and return the same kind.
"""

import dataclasses
from typing import TYPE_CHECKING, Union

import numpy as np

from .config import ZERO_POWER_FLOOR
from .logger import logger
from .utils import RandomSource, as_generator

if TYPE_CHECKING:
    from .waveforms import Waveform


def _noise_power(samples: np.ndarray, snr_db: float) -> float:
    signal_power = float(np.mean(np.abs(samples) ** 2)) if samples.size else 0.0
    if signal_power == 0:
        logger.warning(
            f"Signal has zero power, calibrating noise against {ZERO_POWER_FLOOR:g}."
        )
        signal_power = ZERO_POWER_FLOOR
    return signal_power / 10 ** (snr_db / 10)


def _unwrap(signal):
    from .waveforms import Waveform

    if isinstance(signal, Waveform):
        return signal.samples, signal
    return np.asarray(signal), None


def _rewrap(samples: np.ndarray, waveform):
    if waveform is None:
        return samples
    return dataclasses.replace(waveform, samples=samples)


def add_uniform_noise(
    signal: Union[np.ndarray, "Waveform"],
    snr_db: float,
    rng: RandomSource = None,
) -> Union[np.ndarray, "Waveform"]:
    """
    Adds uniformly distributed noise scaled for a target SNR.

    Args:
        signal: Real-valued samples or a `Waveform`.
        snr_db: Target signal-to-noise ratio in dB.
        rng: numpy Generator, integer seed, or None.

    Returns:
        The noisy signal. A `Waveform` input yields a new `Waveform`.
    """
    samples, waveform = _unwrap(signal)
    rng = as_generator(rng)

    noise_power = _noise_power(samples, snr_db)
    logger.debug(
        f"Adding uniform noise (SNR target: {snr_db:.2f} dB, "
        f"noise power: {noise_power:.3e})."
    )

    noise = (rng.random(samples.shape) - 0.5) * np.sqrt(noise_power)
    return _rewrap(samples + noise, waveform)


def add_gaussian_noise(
    signal: Union[np.ndarray, "Waveform"],
    snr_db: float,
    rng: RandomSource = None,
) -> Union[np.ndarray, "Waveform"]:
    """
    Adds Additive White Gaussian Noise (AWGN) to achieve a target SNR.

    Args:
        signal: Real or complex samples, or a `Waveform`.
        snr_db: Target signal-to-noise ratio in dB.
        rng: numpy Generator, integer seed, or None.

    Returns:
        The noisy signal. A `Waveform` input yields a new `Waveform`.
    """
    samples, waveform = _unwrap(signal)
    rng = as_generator(rng)

    noise_power = _noise_power(samples, snr_db)
    logger.debug(f"Adding Gaussian noise (SNR target: {snr_db:.2f} dB).")

    if np.iscomplexobj(samples):
        # For complex noise, power is split between real and imag
        noise_std_component = np.sqrt(noise_power / 2)
        noise = rng.normal(0, noise_std_component, samples.shape) + 1j * rng.normal(
            0, noise_std_component, samples.shape
        )
    else:
        noise = rng.normal(0, np.sqrt(noise_power), samples.shape)

    return _rewrap(samples + noise, waveform)
