"""Synthesis configuration for optiband.

This module holds the named constants shared by the pipeline stages and the
validated parameter set that drives one run of the band formation demo.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .logger import logger
from .mapping import format_label

# ============================================================================
# Pipeline constants
# ============================================================================

# RRC kernel half-length in symbol periods on each side of the center tap.
DEFAULT_SPAN_SYMBOLS = 8

# Lower clamp for the upsampling factor; one sample per symbol cannot carry a
# shaped pulse.
MIN_SAMPLES_PER_SYMBOL = 2

# Fewest symbols ever synthesized, even when the window needs fewer.
MIN_NUM_SYMBOLS = 64

# Total amplitude budget of the density tones, split as 1/sqrt(density).
TONE_AMPLITUDE = 0.08

# Tones never spread over less than +/- 200 Hz around the carrier.
MIN_TONE_HALF_BANDWIDTH = 200.0

# Absolute tolerance used to detect the removable RRC singularities.
SINGULARITY_TOL = 1e-8

# Signal power assumed for an all-zero signal when calibrating noise.
ZERO_POWER_FLOOR = 1e-9

# Display constants of the band formation view.
DISPLAY_SAMPLING_RATE = 48000.0
DISPLAY_NUM_SAMPLES = 4096
SPECTRUM_BINS = 1024
PREVIEW_BINS = 768
TIME_WINDOW = 1024


class SynthesisConfig(BaseModel):
    """Parameter set for one waveform + spectrum computation.

    Defaults reproduce the initial state of the band formation demo.
    """

    model_config = ConfigDict(extra="forbid")

    # Modulation
    modulation_format: str = Field("QPSK", description="Modulation label")
    non_square: Literal["ring", "reference"] = Field(
        "ring", description="Constellation used for non-square QAM orders"
    )

    # Symbol-Level Parameters
    symbol_rate: float = Field(2000.0, gt=0, description="Symbol rate in Baud")
    rolloff: float = Field(0.2, ge=0, le=1, description="RRC roll-off factor")
    filter_span: int = Field(
        DEFAULT_SPAN_SYMBOLS, ge=1, description="RRC span in symbols"
    )

    # Carrier and clutter
    carrier: float = Field(8000.0, description="Display carrier frequency in Hz")
    tone_density: int = Field(60, ge=0, description="Number of narrow tones")

    # Noise
    snr_db: float = Field(30.0, description="Signal-to-noise ratio in dB")
    noise_model: Literal["uniform", "gaussian"] = Field(
        "uniform", description="Distribution of the additive noise"
    )

    # Display window
    sampling_rate: float = Field(
        DISPLAY_SAMPLING_RATE, gt=0, description="Sampling rate in Hz"
    )
    num_samples: int = Field(DISPLAY_NUM_SAMPLES, ge=1, description="Window length")
    spectrum_bins: int = Field(SPECTRUM_BINS, ge=1, description="Spectrum bins")

    seed: Optional[int] = Field(None, description="Seed for the random source")

    @field_validator("modulation_format")
    @classmethod
    def canonical_format(cls, value: str) -> str:
        """Rejects unknown labels and stores the canonical spelling."""
        return format_label(value)

    @model_validator(mode="after")
    def check_carrier(self) -> "SynthesisConfig":
        """Warns when the carrier cannot be represented at this sampling rate."""
        nyquist = self.sampling_rate / 2
        if abs(self.carrier) >= nyquist:
            logger.warning(
                f"Carrier {self.carrier:.1f} Hz is at or above Nyquist "
                f"({nyquist:.1f} Hz); the spectrum will show an alias."
            )
        return self

    @property
    def samples_per_symbol(self) -> int:
        """Upsampling factor the synthesizer will use."""
        from .waveforms import samples_per_symbol

        return samples_per_symbol(self.sampling_rate, self.symbol_rate)

    @classmethod
    def from_yaml(cls, path: str) -> "SynthesisConfig":
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            SynthesisConfig instance
        """
        import yaml

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def to_yaml(self, path: str):
        """Save configuration to YAML file.

        Args:
            path: Path where YAML file will be saved
        """
        import yaml

        data = self.model_dump()

        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
