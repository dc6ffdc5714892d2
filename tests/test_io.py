import numpy as np
import pytest

h5py = pytest.importorskip("h5py")

from chaosgame.analysis.model import Model
from chaosgame.model.io import IOManager
from chaosgame.model.state import RunConfig
from chaosgame.solvers.solver import Solver


def test_save_and_load_run(tmp_path):
    config = RunConfig(degree=6, percent=40.0, width=32, height=24, iterations=800,
                       allow_same_vertex=True, no_neighbor_if_repeat=True, seed=3)
    grid = Solver(Model(config)).solve()
    path = str(tmp_path / "run.h5")

    IOManager.save_run(config, grid.counts, path)
    loaded_config, counts = IOManager.load_run(path)

    assert loaded_config == config
    assert isinstance(loaded_config.allow_same_vertex, bool)
    np.testing.assert_array_equal(counts, grid.counts)


def test_unseeded_run_keeps_none(tmp_path):
    path = str(tmp_path / "run.h5")
    IOManager.save_run(RunConfig(width=4, height=4), np.zeros((4, 4), dtype=np.int64), path)
    config, _ = IOManager.load_run(path)
    assert config.seed is None


def test_not_hdf5(tmp_path):
    path = tmp_path / "run.h5"
    path.write_text("plain text")
    with pytest.raises(ValueError):
        IOManager.load_run(str(path))


def test_hdf5_without_run(tmp_path):
    path = str(tmp_path / "other.h5")
    with h5py.File(path, "w") as f:
        f.create_dataset("something", data=np.arange(3))
    with pytest.raises(ValueError):
        IOManager.load_run(path)
