import json
from pathlib import Path

import pytest

from rollup.io import DataLoader
from rollup.models import DatasetError


def write_json(path, payload):
    path.write_text(json.dumps(payload))
    return str(path)


def test_load_dataset(tmp_path, capsys, dataset):
    path = write_json(tmp_path / "dataset.json", dataset)
    groups = DataLoader.load_dataset(path)

    assert [g.id for g in groups] == ["g1", "g2"]
    assert [i.value for i in groups[0].children] == [300.0, 700.0]
    assert "Loaded 2 groups and 4 items" in capsys.readouterr().out


def test_load_dataset_rejects_bad_shape(tmp_path):
    path = write_json(tmp_path / "dataset.json", {"groups": []})
    with pytest.raises(DatasetError):
        DataLoader.load_dataset(path)


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DataLoader.load_dataset(str(tmp_path / "missing.json"))


def test_load_edits_missing_file_means_no_edits(tmp_path):
    assert DataLoader.load_edits(str(tmp_path / "edits.json")) == []


def test_load_edits(tmp_path):
    edits = [
        {"id": "a", "input": "10", "mode": "percent"},
        {"row": 0, "input": "500", "mode": "value"},
    ]
    path = write_json(tmp_path / "edits.json", edits)
    assert DataLoader.load_edits(path) == edits


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "a"},
        ["not an object"],
        [{"input": "10", "mode": "value"}],
        [{"id": "a", "input": "10", "mode": "sideways"}],
        [{"id": "a", "input": "10"}],
    ],
)
def test_load_edits_rejects_malformed_scripts(tmp_path, payload):
    path = write_json(tmp_path / "edits.json", payload)
    with pytest.raises(DatasetError):
        DataLoader.load_edits(path)


def test_sample_dataset_loads():
    path = Path(__file__).resolve().parent.parent / "data" / "dataset.json"
    groups = DataLoader.load_dataset(str(path))
    assert [g.id for g in groups] == ["electronics", "furniture"]
