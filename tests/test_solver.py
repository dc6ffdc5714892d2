import numpy as np
import pytest

from chaosgame.analysis.model import Model
from chaosgame.exceptions import ConfigurationError
from chaosgame.model.geometry_primitives import Point
from chaosgame.model.state import RunConfig
from chaosgame.solvers.solver import Solver


def _config(**kwargs):
    values = dict(degree=3, percent=50.0, width=101, height=101, iterations=2000, seed=2024)
    values.update(kwargs)
    return RunConfig(**values)


class TestModel:

    def test_setup_marks_vertices_only(self):
        model = Model(_config(degree=4, iterations=0))
        assert model.grid.nonzero_count == 4
        assert model.grid.total == 4
        expected = [Point(50, 0), Point(100, 50), Point(50, 100), Point(0, 50)]
        assert list(model.vertices) == expected
        for vertex in expected:
            assert model.grid.count_at(vertex) == 1

    def test_invalid_config_rejected_before_grid_exists(self):
        with pytest.raises(ConfigurationError):
            Model(_config(degree=3, allow_same_vertex=True, no_neighbor_if_repeat=True))

    def test_start_point_inside_grid(self):
        model = Model(_config(width=7, height=3))
        for _ in range(100):
            assert model.grid.contains(model.random_start_point())

    def test_injected_rng_is_used(self):
        rng = np.random.default_rng(0)
        model = Model(_config(), rng=rng)
        assert model.rng is rng
        assert model.selector.rng is rng


class TestSolver:

    def test_zero_iterations_records_only_start_point(self):
        model = Model(_config(degree=4, iterations=0))
        grid = Solver(model).solve()
        assert grid.total == 5

    @pytest.mark.parametrize("kwargs", [
        {},
        {"degree": 5, "allow_same_vertex": True},
        {"degree": 6, "allow_same_vertex": True, "no_neighbor_if_repeat": True},
        {"degree": 4, "include_centroid": True},
    ])
    def test_every_point_recorded_when_inside(self, kwargs):
        config = _config(**kwargs)
        model = Model(config)
        solver = Solver(model)
        grid = solver.solve()
        assert solver.dropped == 0
        assert grid.total == config.iterations + model.number_of_vertices + 1

    def test_sum_equals_in_bounds_increments(self):
        model = Model(_config(percent=180.0, iterations=3000))
        solver = Solver(model)
        grid = solver.solve()
        assert solver.dropped > 0
        assert solver.landed + solver.dropped == 3001
        assert grid.total == solver.landed + model.number_of_vertices

    def test_same_seed_identical_grid(self):
        a = Solver(Model(_config(seed=77))).solve()
        b = Solver(Model(_config(seed=77))).solve()
        np.testing.assert_array_equal(a.counts, b.counts)

    def test_different_seed_different_grid(self):
        a = Solver(Model(_config(seed=1))).solve()
        b = Solver(Model(_config(seed=2))).solve()
        assert not np.array_equal(a.counts, b.counts)

    def test_sierpinski_leaves_center_empty(self):
        config = _config(width=201, height=201, iterations=20000)
        grid = Solver(Model(config)).solve()
        # the central triangle of the gasket is only crossed by the first few jumps
        assert grid.counts[95:106, 95:106].sum() <= 10
        assert grid.total > 20000

    def test_progress_reported_up_to_hundred(self):
        reported = []
        Solver(Model(_config(iterations=500))).solve(progress=reported.append)
        assert reported == list(range(1, 101))

    def test_negative_iterations_rejected(self):
        with pytest.raises(ValueError):
            Solver(Model(_config())).solve(iterations=-3)

    def test_runaway_jumps_do_not_overflow(self):
        model = Model(_config(degree=4, percent=300.0, iterations=3000, seed=1))
        solver = Solver(model)
        grid = solver.solve()
        assert solver.dropped > 0
        assert solver.landed + solver.dropped == 3001
        assert grid.total == solver.landed + model.number_of_vertices
