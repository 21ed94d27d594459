"""Tests for the one-pole high-pass filter and its analysis helpers."""
import math

import numpy as np
import pytest

from processing.analysis import energy_loss, frequency_response, generate_tone, signal_energy
from processing.filters import HighPassFilter


# ─── Construction ────────────────────────────────────────────────

class TestHighPassFilterConstruction:
    @pytest.mark.parametrize("sample_rate", [1, 8000, 22050, 44100, 48000, 192000])
    @pytest.mark.parametrize("cutoff", [0.01, 1.0, 20.0, 50.0, 100.0, 1000.0, 20000.0, 96000.0])
    def test_alpha_strictly_between_zero_and_one(self, sample_rate, cutoff) -> None:
        hp = HighPassFilter(sample_rate, cutoff)
        assert 0.0 < hp.alpha < 1.0

    def test_alpha_matches_rc_formula(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        dt = 1.0 / 44100
        rc = 1.0 / (2.0 * math.pi * 100.0)
        assert hp.alpha == rc / (rc + dt)

    def test_alpha_moves_toward_one_as_cutoff_drops(self) -> None:
        alphas = [HighPassFilter(44100, f).alpha for f in (10000.0, 1000.0, 100.0, 10.0, 1.0)]
        assert alphas == sorted(alphas)

    def test_state_starts_at_zero(self) -> None:
        hp = HighPassFilter(48000, 80.0)
        assert hp.prev_input == 0.0
        assert hp.prev_output == 0.0

    @pytest.mark.parametrize("sample_rate", [0, -1, -44100, float("nan"), float("inf")])
    def test_rejects_bad_sample_rate(self, sample_rate) -> None:
        with pytest.raises(ValueError):
            HighPassFilter(sample_rate, 100.0)

    @pytest.mark.parametrize("cutoff", [0, 0.0, -50.0, float("nan"), float("inf")])
    def test_rejects_bad_cutoff(self, cutoff) -> None:
        with pytest.raises(ValueError):
            HighPassFilter(44100, cutoff)

    def test_rejects_cutoff_that_rounds_alpha_to_one(self) -> None:
        with pytest.raises(ValueError):
            HighPassFilter(44100, 1e-30)

    def test_rejects_non_numeric_arguments(self) -> None:
        with pytest.raises(ValueError):
            HighPassFilter("44100", 100.0)

    def test_accepts_numpy_sample_rate(self) -> None:
        hp = HighPassFilter(np.int64(44100), np.float64(100.0))
        assert 0.0 < hp.alpha < 1.0

    def test_coefficients_describe_the_recurrence(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        b, a = hp.coefficients
        assert b == [hp.alpha, -hp.alpha]
        assert a == [1.0, -hp.alpha]


# ─── Processing ──────────────────────────────────────────────────

class TestHighPassFilterProcessing:
    def test_first_sample_is_scaled_by_alpha(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        assert hp.process(1.0) == hp.alpha * 1.0

    def test_process_updates_state(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        out = hp.process(0.25)
        assert hp.prev_input == 0.25
        assert hp.prev_output == out

    def test_constant_input_decays_to_zero(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        out = [hp.process(1.0) for _ in range(10000)]
        assert out[0] > 0.9
        assert abs(out[-1]) < 1e-6

    def test_process_buffer_matches_sequential_process(self) -> None:
        rng = np.random.default_rng(1234)
        samples = rng.uniform(-1.0, 1.0, 5000)

        sequential = HighPassFilter(44100, 100.0)
        expected = [sequential.process(float(x)) for x in samples]

        batch = HighPassFilter(44100, 100.0)
        buffer = samples.copy()
        batch.process_buffer(buffer)

        assert buffer.tolist() == expected
        assert batch.prev_input == sequential.prev_input
        assert batch.prev_output == sequential.prev_output

    def test_process_buffer_on_list(self) -> None:
        values = [0.5, -0.25, 0.125, 1.0, -1.0]
        sequential = HighPassFilter(8000, 200.0)
        expected = [sequential.process(v) for v in values]

        buffer = list(values)
        HighPassFilter(8000, 200.0).process_buffer(buffer)
        assert buffer == expected

    def test_state_carries_across_buffers(self) -> None:
        tone = generate_tone(44100, 300.0, 4000)

        whole = tone.copy()
        HighPassFilter(44100, 100.0).process_buffer(whole)

        chunked = tone.copy()
        hp = HighPassFilter(44100, 100.0)
        hp.process_buffer(chunked[:1234])
        hp.process_buffer(chunked[1234:])

        assert np.array_equal(whole, chunked)

    def test_empty_buffer(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        buffer = []
        hp.process_buffer(buffer)
        assert buffer == []
        assert hp.prev_output == 0.0


# ─── Spectral behaviour ──────────────────────────────────────────

class TestHighPassFilterSpectrum:
    def test_low_frequency_tone_is_attenuated(self) -> None:
        """50 Hz through a 100 Hz cutoff loses more than 80% of its energy."""
        buffer = generate_tone(44100, 50.0, 10000)
        before = buffer.copy()
        HighPassFilter(44100, 100.0).process_buffer(buffer)
        assert energy_loss(before, buffer) > 0.8

    def test_far_below_cutoff_is_strongly_attenuated(self) -> None:
        buffer = generate_tone(44100, 20.0, 10000)
        before = buffer.copy()
        HighPassFilter(44100, 100.0).process_buffer(buffer)
        assert energy_loss(before, buffer) > 0.95

    def test_high_frequency_tone_passes(self) -> None:
        """500 Hz through a 50 Hz cutoff keeps more than 90% of its energy."""
        buffer = generate_tone(44100, 500.0, 10000)
        before = buffer.copy()
        HighPassFilter(44100, 50.0).process_buffer(buffer)
        assert energy_loss(before, buffer) < 0.1

    def test_response_near_minus_three_db_at_cutoff(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        gain = frequency_response(hp, 100.0)[0]
        assert -3.5 < gain < -2.5

    def test_response_shape(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        low, high = frequency_response(hp, [10.0, 20000.0])
        assert low < -15.0
        assert high > -0.1

    def test_response_does_not_touch_state(self) -> None:
        hp = HighPassFilter(44100, 100.0)
        hp.process(0.5)
        state = (hp.prev_input, hp.prev_output)
        frequency_response(hp, [50.0, 500.0])
        assert (hp.prev_input, hp.prev_output) == state


# ─── Analysis helpers ────────────────────────────────────────────

def test_signal_energy() -> None:
    assert signal_energy([1.0, -2.0, 3.0]) == 14.0


def test_energy_loss_of_silence_is_zero() -> None:
    assert energy_loss([0.0, 0.0], [0.0, 0.0]) == 0.0


def test_energy_loss_half() -> None:
    assert energy_loss([1.0, 1.0], [1.0, 0.0]) == pytest.approx(0.5)


def test_generate_tone_starts_at_zero_phase() -> None:
    tone = generate_tone(8000, 1000.0, 8, amplitude=0.5)
    assert tone[0] == 0.0
    assert tone[2] == pytest.approx(0.5)
    assert len(tone) == 8
