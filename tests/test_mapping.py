"""Tests for symbol mapping and reference constellations."""

import numpy as np
import pytest

from optiband import mapping
from optiband.exceptions import UnsupportedFormatError


class TestParseFormat:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("BPSK", ("psk", 2)),
            ("qpsk", ("psk", 4)),
            ("8QAM", ("qam", 8)),
            ("16-qam", ("qam", 16)),
            ("32 QAM", ("qam", 32)),
            ("64QAM", ("qam", 64)),
            ("256QAM", ("qam", 256)),
        ],
    )
    def test_recognized_labels(self, label, expected):
        assert mapping.parse_format(label) == expected

    @pytest.mark.parametrize("label", ["8PSK", "QAM", "12QAM", "2QAM", "OOK", ""])
    def test_unrecognized_labels(self, label):
        with pytest.raises(UnsupportedFormatError, match="Unsupported modulation"):
            mapping.parse_format(label)

    def test_non_string_label(self):
        with pytest.raises(UnsupportedFormatError):
            mapping.parse_format(16)

    def test_unsupported_format_is_value_error(self):
        with pytest.raises(ValueError):
            mapping.parse_format("FSK")

    def test_format_label_is_canonical(self):
        assert mapping.format_label("16-qam") == "16QAM"
        assert mapping.format_label("bpsk") == "BPSK"

    def test_ui_formats_all_parse(self):
        for label in mapping.MODULATION_FORMATS:
            assert mapping.format_label(label) == label


def test_square_qam_levels():
    assert np.array_equal(mapping.square_qam_levels(16), [-3.0, -1.0, 1.0, 3.0])
    assert len(mapping.square_qam_levels(64)) == 8
    with pytest.raises(ValueError, match="perfect square"):
        mapping.square_qam_levels(32)


class TestMapSymbols:
    @pytest.mark.parametrize("count", [0, -5])
    def test_empty_stream(self, count):
        out = mapping.map_symbols("QPSK", count)
        assert out.shape == (0,)
        assert np.iscomplexobj(out)

    def test_unknown_format_fails_even_when_empty(self):
        with pytest.raises(UnsupportedFormatError):
            mapping.map_symbols("128PSK", 0)

    def test_length(self, rng):
        assert len(mapping.map_symbols("16QAM", 137, rng=rng)) == 137

    def test_bpsk_values(self, rng):
        syms = mapping.map_symbols("BPSK", 1000, rng=rng)
        assert np.all(syms.imag == 0)
        assert set(np.unique(syms.real)) == {-1.0, 1.0}

    def test_qpsk_values(self, rng):
        syms = mapping.map_symbols("QPSK", 1000, rng=rng)
        assert np.allclose(np.abs(syms.real), 1 / np.sqrt(2))
        assert np.allclose(np.abs(syms.imag), 1 / np.sqrt(2))
        assert len(np.unique(syms)) == 4

    def test_16qam_grid(self, rng):
        syms = mapping.map_symbols("16QAM", 5000, rng=rng)
        levels = np.array([-3.0, -1.0, 1.0, 3.0]) / np.sqrt(10)
        assert len(np.unique(syms)) == 16
        assert np.allclose(np.sort(np.unique(syms.real)), levels)
        assert np.allclose(np.sort(np.unique(syms.imag)), levels)

    @pytest.mark.parametrize("label", ["BPSK", "QPSK", "16QAM", "64QAM", "256QAM"])
    def test_unit_average_energy(self, label, rng):
        syms = mapping.map_symbols(label, 20000, rng=rng)
        assert mapping.average_energy(syms) == pytest.approx(1.0, rel=0.05)

    @pytest.mark.parametrize("label", ["8QAM", "32QAM"])
    def test_ring_placeholder(self, label, rng):
        """Non-square orders fall on rings of radius 1 .. 2 and exceed unit energy."""
        syms = mapping.map_symbols(label, 5000, rng=rng)
        radius = np.abs(syms)
        assert np.all(radius >= 1.0 - 1e-12)
        assert np.all(radius < 2.0)
        assert mapping.average_energy(syms) > 1.2

    @pytest.mark.parametrize("label", ["8QAM", "32QAM"])
    def test_reference_mode_unit_energy(self, label, rng):
        syms = mapping.map_symbols(label, 20000, rng=rng, non_square="reference")
        assert mapping.average_energy(syms) == pytest.approx(1.0, rel=0.05)

        order = mapping.parse_format(label)[1]
        assert len(np.unique(np.round(syms, 12))) == order

    def test_reference_mode_without_table(self):
        with pytest.raises(UnsupportedFormatError, match="No reference"):
            mapping.map_symbols("128QAM", 10, rng=0, non_square="reference")

    def test_reference_mode_ignored_for_square(self):
        a = mapping.map_symbols("16QAM", 64, rng=3, non_square="reference")
        b = mapping.map_symbols("16QAM", 64, rng=3)
        assert np.array_equal(a, b)

    def test_unknown_non_square_mode(self):
        with pytest.raises(ValueError, match="non-square mode"):
            mapping.map_symbols("32QAM", 10, non_square="cross")

    def test_seed_reproducible(self):
        a = mapping.map_symbols("64QAM", 256, rng=99)
        b = mapping.map_symbols("64QAM", 256, rng=99)
        assert np.array_equal(a, b)


class TestReferenceConstellation:
    @pytest.mark.parametrize(
        "label, size",
        [("BPSK", 2), ("QPSK", 4), ("8QAM", 8), ("16QAM", 16), ("32QAM", 32), ("64QAM", 64)],
    )
    def test_sizes(self, label, size):
        points = mapping.reference_constellation(label)
        assert len(points) == size
        assert len(np.unique(points)) == size

    def test_square_grid_fits_display_box(self):
        points = mapping.reference_constellation("64QAM")
        assert np.isclose(np.max(np.abs(points.real)), 1.0)
        assert np.isclose(np.max(np.abs(points.imag)), 1.0)

    def test_32qam_is_cross(self):
        points = mapping.reference_constellation("32QAM")
        corners = (np.abs(points.real) > 0.8) & (np.abs(points.imag) > 0.8)
        assert not np.any(corners)
        assert np.isclose(np.max(np.abs(points.real)), 1.0)

    def test_missing_table(self):
        with pytest.raises(UnsupportedFormatError):
            mapping.reference_constellation("256QAM")


def test_average_energy_empty():
    assert mapping.average_energy(np.zeros(0, dtype=complex)) == 0.0
