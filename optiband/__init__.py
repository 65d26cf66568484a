"""
Optiband: signal synthesis and spectral analysis for optical modulation demos.

This package provides tools for:
- Mapping random symbols for BPSK, QPSK and M-QAM formats.
- Designing Root Raised Cosine pulse-shaping filters.
- Synthesizing upconverted display waveforms with tones and calibrated noise.
- Estimating normalized magnitude spectra by direct evaluation.
"""

from . import filtering, impairments, mapping, spectral, waveforms
from .config import SynthesisConfig
from .exceptions import (
    InvalidFilterParametersError,
    InvalidSynthesisParametersError,
    OptibandError,
    UnsupportedFormatError,
)
from .logger import set_log_level
from .mapping import MODULATION_FORMATS, map_symbols
from .pipeline import BandResult, run
from .spectral import Spectrum, analyze
from .waveforms import Waveform, synthesize

__all__ = [
    "BandResult",
    "InvalidFilterParametersError",
    "InvalidSynthesisParametersError",
    "MODULATION_FORMATS",
    "OptibandError",
    "Spectrum",
    "SynthesisConfig",
    "UnsupportedFormatError",
    "Waveform",
    "analyze",
    "filtering",
    "impairments",
    "map_symbols",
    "mapping",
    "run",
    "set_log_level",
    "spectral",
    "synthesize",
    "waveforms",
]
