"""
One pass of the band formation pipeline.

`run` takes a `SynthesisConfig`, synthesizes the display window and analyzes
its spectrum. Each call owns its buffers and touches no module-level state,
so concurrent or repeated calls never interfere; the newest result simply
replaces older ones at the caller.
"""

from dataclasses import dataclass
from typing import Any, Dict

import numpy as np

from .config import PREVIEW_BINS, TIME_WINDOW, SynthesisConfig
from .logger import logger
from .spectral import Spectrum, analyze, approx_bandwidth, occupied_bandwidth
from .utils import RandomSource, as_generator, format_si
from .waveforms import Waveform, synthesize


@dataclass
class BandResult:
    """Waveform and spectrum computed from one parameter set."""

    config: SynthesisConfig
    waveform: Waveform
    spectrum: Spectrum

    def time_window(self, length: int = TIME_WINDOW) -> np.ndarray:
        """First `length` samples, the short time-domain view."""
        return self.waveform.samples[: min(length, len(self.waveform))]

    def preview(self, bins: int = PREVIEW_BINS) -> Spectrum:
        """Lower-resolution spectrum of the same waveform."""
        return analyze(self.waveform, bins=bins)

    def summary(self) -> Dict[str, Any]:
        """Annotations shown next to the plots."""
        cfg = self.config
        return {
            "modulation_format": cfg.modulation_format,
            "symbol_rate": cfg.symbol_rate,
            "rolloff": cfg.rolloff,
            "carrier": cfg.carrier,
            "tone_density": cfg.tone_density,
            "samples_per_symbol": self.waveform.sps,
            "approx_bandwidth": approx_bandwidth(cfg.symbol_rate, cfg.rolloff),
            "occupied_bandwidth": occupied_bandwidth(self.spectrum),
            "peak_frequency": self.spectrum.peak_frequency,
        }


def run(config: SynthesisConfig, rng: RandomSource = None) -> BandResult:
    """
    Synthesize and analyze one display window.

    Args:
        config: Parameter set.
        rng: numpy Generator or integer seed. When None, `config.seed` seeds a
            fresh generator (None there too means OS entropy).

    Returns:
        BandResult holding the config, the waveform and its spectrum.
    """
    rng = as_generator(config.seed if rng is None else rng)

    waveform = synthesize(
        config.modulation_format,
        symbol_rate=config.symbol_rate,
        rolloff=config.rolloff,
        carrier=config.carrier,
        tone_density=config.tone_density,
        snr_db=config.snr_db,
        sampling_rate=config.sampling_rate,
        num_samples=config.num_samples,
        rng=rng,
        span=config.filter_span,
        noise_model=config.noise_model,
        non_square=config.non_square,
    )
    spectrum = analyze(waveform, bins=config.spectrum_bins)

    logger.debug(
        f"{config.modulation_format} at {format_si(config.symbol_rate, 'Bd')}: "
        f"peak at {format_si(spectrum.peak_frequency)}, "
        f"nominal bandwidth {format_si(approx_bandwidth(config.symbol_rate, config.rolloff))}."
    )
    return BandResult(config=config, waveform=waveform, spectrum=spectrum)
