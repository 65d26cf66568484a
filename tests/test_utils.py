import numpy as np
import pytest

from optiband import utils


def test_normalize_unity_gain():
    x = np.array([1.0, 2.0, 3.0, 2.0])
    out = utils.normalize(x, "unity_gain")
    assert np.isclose(np.sum(out), 1.0)


def test_normalize_average_power_complex():
    x = np.array([1 + 1j, -3 + 1j, 2 - 2j])
    out = utils.normalize(x, "average_power")
    assert np.isclose(np.mean(np.abs(out) ** 2), 1.0)


def test_normalize_max_amplitude():
    x = np.array([0.5, -4.0, 2.0])
    out = utils.normalize(x, "max_amplitude")
    assert np.max(np.abs(out)) == 1.0


def test_normalize_zero_input_returns_zeros():
    out = utils.normalize(np.zeros(5), "max_amplitude")
    assert np.all(out == 0)
    assert not np.any(np.isnan(out))


def test_normalize_unknown_mode():
    with pytest.raises(ValueError, match="Unknown normalization mode"):
        utils.normalize(np.ones(3), "peak")


def test_as_generator_passthrough(rng):
    assert utils.as_generator(rng) is rng


def test_as_generator_seed_is_reproducible():
    a = utils.as_generator(7).random(4)
    b = utils.as_generator(7).random(4)
    assert np.array_equal(a, b)


def test_format_si():
    assert utils.format_si(2400.0) == "2.40 kHz"
    assert utils.format_si(48000.0, "Hz") == "48.00 kHz"
    assert utils.format_si(0) == "0.00 Hz"
    assert utils.format_si(None) == "None"


def test_format_si_precision_and_range():
    assert utils.format_si(2000.0, "Bd", digits=0) == "2 kBd"
    assert utils.format_si(-8000.0) == "-8.00 kHz"
    assert utils.format_si(0.25) == "250.00 mHz"
    assert utils.format_si(5e12) == "5000.00 GHz"
