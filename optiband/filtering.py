"""
Pulse-shaping filter design and FIR filtering.

Functions
---------
rrc_taps :
    Root Raised Cosine taps from the closed-form impulse response.
fir_filter :
    Linear (non-circular) convolution of samples with FIR taps.
"""

import numpy as np
import scipy.signal

from .config import DEFAULT_SPAN_SYMBOLS, SINGULARITY_TOL
from .exceptions import InvalidFilterParametersError
from .logger import logger
from .utils import normalize

# ============================================================================
# FILTER DESIGN - TAP GENERATORS
# ============================================================================


def rrc_taps(
    sps: int, rolloff: float = 0.35, span: int = DEFAULT_SPAN_SYMBOLS
) -> np.ndarray:
    """
    Generates Root Raised Cosine (RRC) filter taps.

    The kernel has span * sps + 1 taps centered on the middle one. The two
    removable singularities of the closed-form response, t = 0 and
    |4 * rolloff * t| = 1, are detected with an absolute tolerance and
    replaced by their limits, so no tap is ever NaN or infinite.

    Args:
        sps: Samples per symbol (integer, at least 1).
        rolloff: Roll-off factor (0 to 1).
        span: Filter span in symbols.

    Returns:
        RRC filter taps with unity gain normalization (taps sum to 1).

    Raises:
        InvalidFilterParametersError: If rolloff is outside [0, 1], sps is not
            a positive integer, or span is below 1.
    """
    if not 0.0 <= rolloff <= 1.0:
        raise InvalidFilterParametersError(
            f"Roll-off must be within [0, 1], got {rolloff}"
        )
    if sps < 1 or int(sps) != sps:
        raise InvalidFilterParametersError(
            f"Samples per symbol must be a positive integer, got {sps}"
        )
    if span < 1 or int(span) != span:
        raise InvalidFilterParametersError(
            f"Span must be a positive integer, got {span}"
        )

    sps = int(sps)
    num_taps = int(span) * sps + 1
    logger.debug(f"Designing RRC taps: rolloff={rolloff}, sps={sps}, taps={num_taps}")

    # Tap times in symbol periods, measured from the center tap
    t = (np.arange(num_taps) - (num_taps - 1) / 2) / sps

    h = np.zeros(num_taps)

    # Case 1: t = 0
    idx_0 = np.abs(t) < SINGULARITY_TOL
    h[idx_0] = 1.0 - rolloff + 4 * rolloff / np.pi

    # Case 2: t = +/- 1/(4*rolloff)
    if rolloff > 0:
        idx_singularity = (
            np.abs(np.abs(4 * rolloff * t) - 1) < SINGULARITY_TOL
        ) & ~idx_0
        h[idx_singularity] = (rolloff / np.sqrt(2)) * (
            (1 + 2 / np.pi) * np.sin(np.pi / (4 * rolloff))
            + (1 - 2 / np.pi) * np.cos(np.pi / (4 * rolloff))
        )
    else:
        idx_singularity = np.zeros(num_taps, dtype=bool)

    # Case 3: General case
    idx_general = ~(idx_0 | idx_singularity)
    tg = t[idx_general]

    num = np.sin(np.pi * tg * (1 - rolloff)) + 4 * rolloff * tg * np.cos(
        np.pi * tg * (1 + rolloff)
    )
    den = np.pi * tg * (1 - (4 * rolloff * tg) ** 2)
    h[idx_general] = num / den

    return normalize(h, mode="unity_gain")


# ============================================================================
# FILTERING OPERATIONS
# ============================================================================


def fir_filter(samples: np.ndarray, taps: np.ndarray, mode: str = "full") -> np.ndarray:
    """
    Apply FIR filter via linear convolution.

    Args:
        samples: Input sample array.
        taps: FIR filter taps (impulse response).
        mode: Convolution mode ('full', 'same', 'valid').
            'full': Full convolution (length = len(samples) + len(taps) - 1).
            'same': Output same length as input (centered).
            'valid': Only where sequences fully overlap.

    Returns:
        Filtered samples.
    """
    samples = np.asarray(samples)
    taps = np.asarray(taps)
    if samples.size == 0 or taps.size == 0:
        raise ValueError("fir_filter needs non-empty samples and taps")
    return scipy.signal.convolve(samples, taps, mode=mode, method="auto")
