import math

import numpy as np
import pytest

from curve import Line
from pathway import SandPathway, pathway_values, randomized_factors


@pytest.fixture
def pathway():
    return SandPathway.randomized(np.random.default_rng(7))


def test_randomized_factor_ranges():
    rng = np.random.default_rng(1)
    for _ in range(50):
        factors = randomized_factors(rng)
        assert factors.shape == (12,)
        for group in range(4):
            amplitude, frequency, phase = factors[group * 3:group * 3 + 3]
            assert 2.0 <= amplitude < 5.0
            assert 2.0 <= frequency < 5.0
            assert -math.pi <= phase < math.pi


def test_each_pathway_samples_its_own_factors():
    rng = np.random.default_rng(3)
    first, second = SandPathway.randomized(rng), SandPathway.randomized(rng)
    assert not np.array_equal(first.factors, second.factors)


def test_wrong_factor_count_is_rejected():
    with pytest.raises(ValueError):
        SandPathway([1.0] * 11)


def test_factors_are_read_only(pathway):
    with pytest.raises(ValueError):
        pathway.factors[0] = 1.0


def test_value_is_deterministic(pathway):
    assert pathway.value(0.42) == pathway.value(0.42)


def test_value_matches_formula():
    factors = [2.0, 3.0, 0.5, 4.0, 2.5, -1.0, 3.5, 2.0, 1.0, 2.2, 4.4, -2.0]
    pathway = SandPathway(factors)
    t = 0.37
    expected = (
        math.sin(2.0 * (3.0 * math.pi * t) + 0.5)
        + 1.0 / math.exp(math.sin(4.0 * (2.5 * math.pi * t) - 1.0))
        + math.sin(3.5 * (2.0 * math.pi * t) + 1.0)
        + 1.0 / math.exp(math.sin(2.2 * (4.4 * math.pi * t) - 2.0))
    ) / 4.0
    assert pathway.value(t) == pytest.approx(expected)


def test_vectorized_and_jitted_values_match_scalar(pathway):
    ts = np.linspace(0.0, 1.0, 17)
    scalar = [pathway.value(t) for t in ts]
    assert pathway.values(ts) == pytest.approx(scalar)
    factors = np.tile(pathway.factors, (ts.shape[0], 1))
    assert pathway_values(factors, ts) == pytest.approx(scalar)


def test_jitted_values_use_one_pathway_per_row():
    rng = np.random.default_rng(11)
    pathways = [SandPathway.randomized(rng) for _ in range(5)]
    ts = np.array([0.1, 0.3, 0.5, 0.7, 0.9])
    factors = np.array([p.factors for p in pathways])
    values = pathway_values(factors, ts)
    for i, p in enumerate(pathways):
        assert values[i] == pytest.approx(p.value(ts[i]))


def test_resolve_displaces_along_normal(pathway):
    line = Line((0.0, 50.0), (200.0, 50.0))
    point = pathway.resolve(line, 25.0, 0.5)
    assert point[0] == pytest.approx(100.0)
    assert point[1] == pytest.approx(50.0 + 25.0 * pathway.value(0.5))


def test_to_path_shape_and_endpoints(pathway):
    line = Line((0.0, 0.0), (300.0, 100.0))
    path = pathway.to_path(line, 40.0, steps=250)
    assert path.shape == (251, 2)
    assert path[0] == pytest.approx(pathway.resolve(line, 40.0, 0.0))
    assert path[-1] == pytest.approx(pathway.resolve(line, 40.0, 1.0))
    assert path[125] == pytest.approx(pathway.resolve(line, 40.0, 0.5))


def test_to_path_defaults_to_thousand_steps(pathway):
    path = pathway.to_path(Line((0.0, 0.0), (10.0, 0.0)), 1.0)
    assert len(path) == 1001
