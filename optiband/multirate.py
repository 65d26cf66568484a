import numpy as np


def expand(samples: np.ndarray, factor: int) -> np.ndarray:
    """
    Zero-insertion: Insert (factor-1) zeros between each sample.

    Args:
        samples: Input sample array.
        factor: Expansion factor (samples per symbol).

    Returns:
        Expanded array with zeros inserted (length = len(samples) * factor).
    """
    if factor < 1 or int(factor) != factor:
        raise ValueError(f"Expansion factor must be a positive integer, got {factor}")

    samples = np.asarray(samples)
    factor = int(factor)

    out = np.zeros(samples.shape[0] * factor, dtype=samples.dtype)
    out[::factor] = samples
    return out
