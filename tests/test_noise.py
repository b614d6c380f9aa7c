"""Tests for the seeded value noise field."""

import math

import numpy as np
import pytest

from derbysim.simulation.noise import TABLE_SIZE, ValueNoise

SEEDS = [0.0, 0.1, 0.5, 0.9, 0.123456789, -3.7, 42.0, 12345.678]


@pytest.mark.parametrize("seed", SEEDS)
def test_samples_in_unit_interval(seed):
    noise = ValueNoise(seed)
    xs = np.linspace(-600.0, 600.0, 4001)
    values = [noise.sample(x) for x in xs]
    assert min(values) >= 0.0
    assert max(values) < 1.0


@pytest.mark.parametrize("seed", SEEDS)
def test_table_in_unit_interval(seed):
    values = ValueNoise(seed).values
    assert values.shape == (TABLE_SIZE,)
    assert np.all(values >= 0.0)
    assert np.all(values < 1.0)


def test_same_seed_same_field():
    first = ValueNoise(0.5)
    second = ValueNoise(0.5)
    xs = [0.0, 0.1, 3.7, 255.9, 256.0, 1000.25, -12.5]
    assert [first.sample(x) for x in xs] == [second.sample(x) for x in xs]


def test_different_seeds_differ():
    assert not np.array_equal(ValueNoise(0.1).values, ValueNoise(0.9).values)


def test_first_table_entry_follows_lcg():
    # state = 0.5e9; one LCG step, normalized by 2^32
    expected = ((1664525 * 0.5e9 + 1013904223) % 2**32) / 2**32
    assert ValueNoise(0.5).values[0] == expected


def test_integer_points_hit_table_values():
    noise = ValueNoise(0.5)
    for i in range(0, 300):
        assert noise.sample(float(i)) == noise.values[i % TABLE_SIZE]


@pytest.mark.parametrize("x", [1.0, 17.0, 255.0, 256.0, -4.0])
def test_continuous_at_integer_boundaries(x):
    noise = ValueNoise(0.3)
    eps = 1e-9
    assert noise.sample(x - eps) == pytest.approx(noise.sample(x), abs=1e-6)
    assert noise.sample(x + eps) == pytest.approx(noise.sample(x), abs=1e-6)


def test_small_steps_give_small_changes():
    noise = ValueNoise(0.77)
    xs = np.arange(0.0, 50.0, 0.001)
    values = np.array([noise.sample(x) for x in xs])
    # Cosine easing has slope at most pi/2 per unit of x
    assert np.max(np.abs(np.diff(values))) <= math.pi / 2 * 0.001 + 1e-12


def test_periodic_over_table():
    noise = ValueNoise(0.25)
    for x in [0.3, 10.75, 100.5]:
        assert noise.sample(x + TABLE_SIZE) == pytest.approx(noise.sample(x))


def test_negative_coordinates():
    noise = ValueNoise(0.6)
    assert noise.sample(-1.0) == noise.values[TABLE_SIZE - 1]
    assert 0.0 <= noise.sample(-0.5) < 1.0


def test_sample_array_matches_scalar():
    noise = ValueNoise(0.42)
    xs = np.array([-7.3, 0.0, 0.1, 0.5, 1.999, 128.4, 511.0, 1024.6])
    expected = np.array([noise.sample(x) for x in xs])
    np.testing.assert_allclose(noise.sample_array(xs), expected, rtol=0, atol=1e-12)


def test_easing_endpoints():
    assert ValueNoise._smooth(0.0) == 0.0
    assert ValueNoise._smooth(1.0) == pytest.approx(1.0)
    assert ValueNoise._smooth(0.5) == pytest.approx(0.5)
    np.testing.assert_allclose(ValueNoise._smooth(np.array([0.0, 0.5])), [0.0, 0.5], atol=1e-15)
