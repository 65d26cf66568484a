"""
Utility functions.

This module provides general helper functions used across the library:
- Array normalization (unity_gain, unit_energy, max_amplitude, average_power).
- Random generator resolution (as_generator).
- Format SI prefixes (format_si).
"""

from typing import Optional, Union

import numpy as np

from .logger import logger

RandomSource = Union[np.random.Generator, int, None]

# Prefixes for exponents -1 (milli) to 3 (giga) of 1000.
_SI_PREFIXES = ("m", "", "k", "M", "G")


def normalize(x: np.ndarray, mode: str = "unity_gain") -> np.ndarray:
    """
    Normalize array based on the specified mode.

    Args:
        x: Input array.
        mode: Normalization mode.
            'unity_gain': Sum of elements is 1.
            'unit_energy': Sum of squared magnitudes is 1.
            'max_amplitude': Maximum absolute value is 1.
            'average_power': Mean of squared magnitudes is 1.

    Returns:
        Normalized array. An all-zero input (zero normalization factor) is
        returned as zeros instead of raising.
    """
    logger.debug(f"Normalizing array (mode: {mode}).")
    x = np.asarray(x)

    if mode == "unity_gain":
        norm_factor = np.sum(x)
    elif mode == "unit_energy":
        norm_factor = np.sqrt(np.sum(np.abs(x) ** 2))
    elif mode == "max_amplitude":
        norm_factor = np.max(np.abs(x)) if x.size else 0.0
    elif mode == "average_power":
        norm_factor = np.sqrt(np.mean(np.abs(x) ** 2)) if x.size else 0.0
    else:
        raise ValueError(f"Unknown normalization mode: {mode}")

    if norm_factor == 0:
        return np.zeros(x.shape, dtype=np.result_type(x, float))
    return x / norm_factor


def as_generator(rng: RandomSource = None) -> np.random.Generator:
    """
    Resolve a random source into a numpy Generator.

    Args:
        rng: An existing Generator (returned as is), an integer seed, or None
            for fresh OS entropy.

    Returns:
        numpy.random.Generator instance.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def format_si(value: Optional[float], unit: str = "Hz", digits: int = 2) -> str:
    """
    Renders a rate or frequency readout with an SI prefix, e.g. "2.40 kHz".

    Prefixes run from milli to giga; values outside that range keep the
    nearest prefix with a larger or smaller mantissa.
    """
    if value is None:
        return "None"
    if value == 0:
        return f"{0:.{digits}f} {unit}"

    exponent = int(np.floor(np.log10(abs(value)) / 3))
    exponent = min(max(exponent, -1), len(_SI_PREFIXES) - 2)
    return f"{value / 1000.0**exponent:.{digits}f} {_SI_PREFIXES[exponent + 1]}{unit}"
