"""
Error types raised by the synthesis pipeline.

Every error is a precondition violation detected before any computation
starts. They derive from ValueError so callers that only know about the
builtin still catch them.
"""


class OptibandError(Exception):
    """Base class for all optiband errors."""


class UnsupportedFormatError(OptibandError, ValueError):
    """The modulation label is not one the symbol mapper understands."""


class InvalidFilterParametersError(OptibandError, ValueError):
    """Roll-off, samples-per-symbol or span outside the RRC design domain."""


class InvalidSynthesisParametersError(OptibandError, ValueError):
    """Non-positive rate or sample count passed to the synthesizer."""
