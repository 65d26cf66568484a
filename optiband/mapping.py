"""
Symbol mapping and constellation generation.

This module turns a modulation label into a stream of random complex symbols.
It supports:
- BPSK and QPSK.
- Square M-QAM (16, 64, ...) normalized to unit average energy.
- Non-square M-QAM (8, 32, ...) through a rough ring placeholder or through
  the fixed reference constellations of the constellation view.
"""

import math
import re
from typing import Tuple

import numpy as np

from .exceptions import UnsupportedFormatError
from .logger import logger
from .utils import RandomSource, as_generator, normalize

# Labels offered by the band formation view.
MODULATION_FORMATS = ("BPSK", "QPSK", "8QAM", "16QAM", "32QAM", "64QAM")

NON_SQUARE_MODES = ("ring", "reference")


def parse_format(modulation: str) -> Tuple[str, int]:
    """
    Split a modulation label into family and order.

    Labels are case-insensitive; spaces, dashes and underscores are ignored,
    so "16-qam" and "16QAM" are the same format.

    Args:
        modulation: Label such as 'BPSK', 'QPSK' or '<M>QAM'.

    Returns:
        Tuple of (family, order) with family 'psk' or 'qam'.

    Raises:
        UnsupportedFormatError: If the label is not recognized. QAM orders must
            be powers of two, at least 4.
    """
    if not isinstance(modulation, str):
        raise UnsupportedFormatError(
            f"Modulation label must be a string, got {type(modulation).__name__}"
        )

    label = re.sub(r"[\s_\-]", "", modulation).upper()

    if label == "BPSK":
        return "psk", 2
    if label == "QPSK":
        return "psk", 4

    match = re.fullmatch(r"(\d+)QAM", label)
    if match:
        order = int(match.group(1))
        if order >= 4 and order & (order - 1) == 0:
            return "qam", order

    raise UnsupportedFormatError(f"Unsupported modulation format: {modulation!r}")


def format_label(modulation: str) -> str:
    """Canonical spelling of a modulation label ('16-qam' -> '16QAM')."""
    family, order = parse_format(modulation)
    if family == "psk":
        return "BPSK" if order == 2 else "QPSK"
    return f"{order}QAM"


def square_qam_levels(order: int) -> np.ndarray:
    """
    PAM levels of one axis of a square QAM grid.

    Args:
        order: Modulation order (must be a perfect square).

    Returns:
        Levels -(sqrt(M)-1), ..., -1, +1, ..., +(sqrt(M)-1) in steps of 2.
    """
    mroot = math.isqrt(order)
    if mroot * mroot != order:
        raise ValueError(f"Order {order} is not a perfect square")
    return np.arange(-(mroot - 1), mroot, 2, dtype=float)


def average_energy(symbols: np.ndarray) -> float:
    """Mean of |s|^2 over a symbol stream (0.0 when empty)."""
    symbols = np.asarray(symbols)
    if symbols.size == 0:
        return 0.0
    return float(np.mean(np.abs(symbols) ** 2))


def map_symbols(
    modulation: str,
    count: int,
    rng: RandomSource = None,
    non_square: str = "ring",
) -> np.ndarray:
    """
    Generate a stream of independent, uniformly drawn random symbols.

    BPSK, QPSK and square QAM streams have unit average energy. Non-square QAM
    orders (8QAM, 32QAM, ...) use a ring placeholder by default: each symbol
    sits at a random angle with radius 1 + floor(U*sqrt(M))/sqrt(M). That is
    not a real cross constellation and its average energy is above 1. Pass
    non_square='reference' to draw from the reference constellation instead,
    rescaled to unit average energy.

    Args:
        modulation: Modulation label ('BPSK', 'QPSK', '<M>QAM').
        count: Number of symbols. Values below 1 give an empty stream.
        rng: numpy Generator, integer seed, or None.
        non_square: 'ring' or 'reference'.

    Returns:
        Complex array of length max(count, 0).

    Raises:
        UnsupportedFormatError: For unknown labels, or for non-square orders
            without a reference table when non_square='reference'.
    """
    family, order = parse_format(modulation)
    if non_square not in NON_SQUARE_MODES:
        raise ValueError(
            f"Unknown non-square mode: {non_square}. Use one of {NON_SQUARE_MODES}"
        )

    if count < 1:
        return np.zeros(0, dtype=complex)

    rng = as_generator(rng)
    logger.debug(f"Mapping {count} random {format_label(modulation)} symbols.")

    if family == "psk":
        i_vals = np.where(rng.random(count) > 0.5, 1.0, -1.0)
        if order == 2:
            return i_vals.astype(complex)
        q_vals = np.where(rng.random(count) > 0.5, 1.0, -1.0)
        return (i_vals + 1j * q_vals) / np.sqrt(2)

    mroot = math.isqrt(order)
    if mroot * mroot == order:
        return _square_qam_symbols(order, count, rng)

    if non_square == "reference":
        points = normalize(
            reference_constellation(format_label(modulation)), "average_power"
        )
        return points[rng.integers(0, len(points), size=count)]

    return _ring_symbols(order, count, rng)


def _square_qam_symbols(
    order: int, count: int, rng: np.random.Generator
) -> np.ndarray:
    levels = square_qam_levels(order)

    # Mean of a^2 + b^2 over the full grid
    energy = 2 * np.mean(levels**2)
    norm = np.sqrt(energy)

    i_vals = levels[rng.integers(0, len(levels), size=count)]
    q_vals = levels[rng.integers(0, len(levels), size=count)]
    return (i_vals + 1j * q_vals) / norm


def _ring_symbols(order: int, count: int, rng: np.random.Generator) -> np.ndarray:
    sqrt_m = np.sqrt(order)
    angle = rng.random(count) * 2 * np.pi
    radius = 1 + np.floor(rng.random(count) * sqrt_m) / sqrt_m
    return radius * np.exp(1j * angle)


# ============================================================================
# REFERENCE CONSTELLATIONS
# ============================================================================
# Fixed point sets drawn by the constellation view. They are scaled to fit a
# [-1, 1] display box, not to unit energy.


def _square_grid(size: int) -> np.ndarray:
    offset = size - 1.0
    levels = (2 * np.arange(size) - offset) / offset
    i_grid, q_grid = np.meshgrid(levels, levels, indexing="ij")
    return (i_grid + 1j * q_grid).ravel()


def reference_constellation(modulation: str) -> np.ndarray:
    """
    Reference constellation points for display.

    Args:
        modulation: One of MODULATION_FORMATS.

    Returns:
        Complex array of constellation points inside the [-1.2, 1.2] box.

    Raises:
        UnsupportedFormatError: If no reference table exists for the label.
    """
    label = format_label(modulation)

    if label == "BPSK":
        return np.array([-1.0, 1.0], dtype=complex)
    if label == "QPSK":
        return np.array([-0.7 + 0.7j, 0.7 + 0.7j, 0.7 - 0.7j, -0.7 - 0.7j])
    if label == "8QAM":
        return np.array(
            [
                0.5 + 0.5j,
                -0.5 + 0.5j,
                -0.5 - 0.5j,
                0.5 - 0.5j,
                1.2 + 0.0j,
                -1.2 + 0.0j,
                0.0 + 1.2j,
                0.0 - 1.2j,
            ]
        )
    if label == "16QAM":
        return _square_grid(4)
    if label == "64QAM":
        return _square_grid(8)
    if label == "32QAM":
        # 6x6 grid with the four corners removed
        full = _square_grid(6)
        corners = (np.abs(full.real) > 0.8) & (np.abs(full.imag) > 0.8)
        return full[~corners]

    raise UnsupportedFormatError(f"No reference constellation for {label}")
