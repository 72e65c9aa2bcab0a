import numpy as np
import pytest

from curve import Line
from sand import PathwaySample, row_curve, sample_rows, sand_on_line


@pytest.fixture
def diagonal():
    return Line((0.0, 0.0), (1280.0, 720.0))


def test_grain_count_follows_curve_length(diagonal):
    grains = sand_on_line(42, diagonal, 0.0)
    expected = int(diagonal.length * 0.1) * 4
    assert grains.positions.shape == (expected, 2)
    assert grains.radii.shape == (expected,)


def test_grain_radii_range(diagonal):
    radii = sand_on_line(42, diagonal, 3.0).radii
    assert np.all((radii >= 2.0) & (radii < 4.0))


def test_grains_stay_near_the_curve(diagonal):
    positions = sand_on_line(42, diagonal, 1.5).positions
    # Signed distance along the normal is jitter (<10) plus sine (<=3).
    offsets = (positions - diagonal.start) @ diagonal.normal(0.0)
    assert np.all(np.abs(offsets) <= 13.0)


def test_same_seed_and_frame_give_identical_grains(diagonal):
    first = sand_on_line(9, diagonal, 2.0, frame=3)
    second = sand_on_line(9, diagonal, 2.0, frame=3)
    assert np.array_equal(first.positions, second.positions)
    assert np.array_equal(first.radii, second.radii)


def test_jitter_rerolls_between_frames(diagonal):
    first = sand_on_line(9, diagonal, 2.0, frame=3)
    second = sand_on_line(9, diagonal, 2.0, frame=4)
    assert not np.array_equal(first.radii, second.radii)


def test_without_frame_only_the_sine_term_moves(diagonal):
    early = sand_on_line(9, diagonal, 0.0)
    late = sand_on_line(9, diagonal, 1.0)
    assert np.array_equal(early.radii, late.radii)
    normal = diagonal.normal(0.0)
    direction = diagonal.direction(0.0)
    # Same positions along the curve, shifted only along the normal.
    assert (early.positions @ direction) == pytest.approx(late.positions @ direction)
    assert not np.allclose(early.positions @ normal, late.positions @ normal)


def test_sine_offset_formula():
    line = Line((0.0, 0.0), (10.0, 0.0))
    time = 0.8
    grains = sand_on_line(1, line, time)
    # One grid position at t = 0; its grains share the sine term.
    rng = np.random.default_rng(1)
    draws = rng.random((1, 4, 3))
    jitter = -10.0 + draws[0, :, 0] * 20.0
    expected = jitter + 3.0 * np.sin(time % 1000.0)
    assert grains.positions[:, 1] == pytest.approx(expected)


def test_short_curve_has_no_grains():
    grains = sand_on_line(1, Line((0.0, 0.0), (5.0, 0.0)), 0.0)
    assert grains.positions.shape == (0, 2)
    assert grains.radii.shape == (0,)


def test_sample_rows_layout():
    rows = sample_rows(1280, 3)
    assert [kind for kind, _ in rows] == ["graph", "graph", "graph", "flow", "particles"]
    x, y, width, height = rows[0][1]
    assert (x, y, width, height) == (20.0, 20.0, 1240.0, 50.0)
    assert rows[1][1][1] == pytest.approx(110.0)
    assert rows[-1][1][3] == 20.0
    last = rows[-1][1]
    assert last[1] + last[3] <= 720


def test_row_curve_runs_along_the_centre():
    curve = row_curve((20.0, 100.0, 1240.0, 50.0))
    assert curve.value(0.0) == pytest.approx([20.0, 125.0])
    assert curve.value(1.0) == pytest.approx([1260.0, 125.0])


@pytest.fixture(scope="module")
def sample():
    return PathwaySample({'particle_count': 1500, 'pathway_count': 3}, np.random.default_rng(21))


def test_period_wraps(sample):
    sample.update(10.0)
    assert sample.period == pytest.approx(0.3)
    sample.update(40.0)
    assert sample.period == pytest.approx(0.2)


def test_regenerate_replaces_only_the_pathways(sample):
    old_pathways = list(sample.pathways)
    particles = list(sample.particles.particles)
    owned = [p.pathway for p in particles]
    factors = sample.particles.factors.copy()

    sample.regenerate_pathways()

    assert len(sample.pathways) == 3
    assert all(new is not old for new in sample.pathways for old in old_pathways)
    assert len(sample.particles.particles) == 1500
    assert all(a is b for a, b in zip(sample.particles.particles, particles))
    assert all(p.pathway is o for p, o in zip(sample.particles.particles, owned))
    assert np.array_equal(sample.particles.factors, factors)
