import json
import os

import pytest

from chaosgame.main import build_parser, config_from_args, main
from chaosgame.model.image import read_ppm


def test_run_writes_image(tmp_path):
    code = main([
        "--degree", "5", "--percent", "50", "--width", "40", "--height", "30",
        "--iterations", "1000", "--seed", "4", "--output-dir", str(tmp_path),
    ])
    assert code == 0
    path = tmp_path / "5_50%40X30_xSV_xNR_xC.ppm"
    _, rgb = read_ppm(str(path))
    assert rgb.shape == (30, 40, 3)


def test_config_file_with_overrides(tmp_path):
    cfg = tmp_path / "run.json"
    cfg.write_text(json.dumps({"degree": 6, "width": 20, "height": 20, "iterations": 10, "include_centroid": True}))
    args = build_parser().parse_args(["--config", str(cfg), "--degree", "7", "--no-centroid"])
    config = config_from_args(args)
    assert config.degree == 7
    assert config.width == 20
    assert not config.include_centroid


def test_invalid_configuration_exit_code(tmp_path):
    code = main([
        "--degree", "3", "--allow-same-vertex", "--no-neighbor-if-repeat",
        "--iterations", "10", "--output-dir", str(tmp_path),
    ])
    assert code == 1
    assert os.listdir(tmp_path) == []


def test_missing_output_dir_exit_code(tmp_path):
    code = main(["--width", "10", "--height", "10", "--iterations", "5",
                 "--output-dir", str(tmp_path / "nope")])
    assert code == 1


def test_ascii_and_h5(tmp_path, capsys):
    pytest.importorskip("h5py")
    h5 = tmp_path / "run.h5"
    code = main([
        "--width", "12", "--height", "12", "--iterations", "200", "--seed", "1",
        "--output-dir", str(tmp_path), "--ascii", "--save-h5", str(h5),
    ])
    assert code == 0
    assert h5.exists()
    assert "A " in capsys.readouterr().out


def test_ask_keep_deletes_on_no(tmp_path, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    code = main(["--width", "10", "--height", "10", "--iterations", "20",
                 "--output-dir", str(tmp_path), "--ask-keep"])
    assert code == 0
    assert os.listdir(tmp_path) == []


def test_mistyped_config_file_exit_code(tmp_path):
    cfg = tmp_path / "run.json"
    cfg.write_text(json.dumps({"degree": "5"}))
    code = main(["--config", str(cfg), "--iterations", "10", "--output-dir", str(tmp_path / "out")])
    assert code == 1


def test_from_h5_rerenders_archived_run(tmp_path):
    pytest.importorskip("h5py")
    first, second = tmp_path / "first", tmp_path / "second"
    first.mkdir()
    second.mkdir()
    h5 = tmp_path / "run.h5"
    assert main([
        "--degree", "6", "--width", "25", "--height", "20", "--iterations", "300", "--seed", "8",
        "--output-dir", str(first), "--save-h5", str(h5),
    ]) == 0

    code = main(["--from-h5", str(h5), "--degree", "3", "--output-dir", str(second)])
    assert code == 0
    name = "6_50%25X20_xSV_xNR_xC.ppm"
    assert os.listdir(second) == [name]
    assert (second / name).read_text() == (first / name).read_text()


def test_from_h5_missing_archive_exit_code(tmp_path):
    pytest.importorskip("h5py")
    code = main(["--from-h5", str(tmp_path / "absent.h5"), "--output-dir", str(tmp_path)])
    assert code == 1
