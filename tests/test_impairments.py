"""Tests for calibrated additive noise."""

import numpy as np
import pytest

from optiband.impairments import add_gaussian_noise, add_uniform_noise
from optiband.waveforms import Waveform


class TestUniformNoise:
    def test_adds_noise(self, rng):
        data = np.ones(1000)
        noisy = add_uniform_noise(data, snr_db=10.0, rng=rng)
        assert not np.allclose(noisy, data)
        assert noisy.shape == data.shape

    def test_bounded_by_half_noise_amplitude(self, rng):
        data = np.ones(5000)
        noise = add_uniform_noise(data, snr_db=20.0, rng=rng) - data
        # Signal power 1, noise power 0.01 -> amplitude bound 0.5 * 0.1
        assert np.max(np.abs(noise)) <= 0.05
        assert np.mean(noise**2) == pytest.approx(0.01 / 12, rel=0.1)

    def test_zero_signal_uses_power_floor(self, rng):
        noisy = add_uniform_noise(np.zeros(100), snr_db=0.0, rng=rng)
        assert np.all(np.isfinite(noisy))
        assert np.max(np.abs(noisy)) <= 0.5 * np.sqrt(1e-9)

    def test_waveform_in_waveform_out(self, rng):
        wf = Waveform(samples=np.ones(64), sampling_rate=48000.0, symbol_rate=2000.0)
        out = add_uniform_noise(wf, snr_db=10.0, rng=rng)
        assert isinstance(out, Waveform)
        assert out is not wf
        assert out.sampling_rate == wf.sampling_rate
        assert np.array_equal(wf.samples, np.ones(64))

    def test_seeded(self):
        a = add_uniform_noise(np.ones(32), 5.0, rng=3)
        b = add_uniform_noise(np.ones(32), 5.0, rng=3)
        assert np.array_equal(a, b)


class TestGaussianNoise:
    def test_noise_power_real(self, rng):
        data = np.ones(20000)
        noise = add_gaussian_noise(data, snr_db=10.0, rng=rng) - data
        assert np.isrealobj(noise)
        assert np.mean(noise**2) == pytest.approx(0.1, rel=0.05)

    def test_noise_power_complex(self, rng):
        data = np.ones(20000, dtype=complex)
        noise = add_gaussian_noise(data, snr_db=10.0, rng=rng) - data
        assert np.iscomplexobj(noise)
        assert np.mean(np.abs(noise) ** 2) == pytest.approx(0.1, rel=0.05)
        assert np.var(noise.real) == pytest.approx(np.var(noise.imag), rel=0.1)

    def test_waveform_in_waveform_out(self, rng):
        wf = Waveform(samples=np.ones(64), sampling_rate=48000.0, symbol_rate=2000.0)
        out = add_gaussian_noise(wf, snr_db=10.0, rng=rng)
        assert isinstance(out, Waveform)
        assert len(out) == 64
