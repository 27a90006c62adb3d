from pathlib import Path

import joblib
import pandas as pd
import pytest

from conftest import PROBES
from resolutionai.errors import ModelCorruptError, ModelNotFoundError
from resolutionai.schemas import ModelSchema
from resolutionai.store import exists, load, save


def _sample_frame() -> pd.DataFrame:
    return pd.DataFrame([{"title": title, "description": description} for title, description in PROBES])


def test_round_trip_predicts_identically(trained_model, tmp_path: Path):
    path = tmp_path / "Models" / "model.joblib"

    save(trained_model, ModelSchema(), path)
    loaded, schema = load(path)

    samples = _sample_frame()
    assert loaded.predict_labels(samples) == trained_model.predict_labels(samples)
    assert (loaded.predict_proba(samples) == trained_model.predict_proba(samples)).all()
    assert loaded.labels == trained_model.labels
    assert loaded.metadata == trained_model.metadata
    assert schema == ModelSchema()
    assert schema.input_columns == ("id", "applied_resolution", "title", "description")


def test_save_overwrites_and_leaves_no_temp_files(trained_model, tmp_path: Path):
    store_dir = tmp_path / "store"
    store_dir.mkdir()
    path = store_dir / "model.joblib"
    path.write_bytes(b"old artifact")

    save(trained_model, ModelSchema(), path)

    assert exists(path)
    assert load(path)[0].labels == trained_model.labels
    assert [item.name for item in store_dir.iterdir()] == ["model.joblib"]


def test_missing_artifact_raises(tmp_path: Path):
    path = tmp_path / "model.joblib"

    assert not exists(path)
    with pytest.raises(ModelNotFoundError):
        load(path)


def test_garbage_artifact_raises(tmp_path: Path):
    path = tmp_path / "model.joblib"
    path.write_bytes(b"this is not a model")

    with pytest.raises(ModelCorruptError):
        load(path)


def test_truncated_artifact_raises(trained_model, tmp_path: Path):
    path = tmp_path / "model.joblib"
    save(trained_model, ModelSchema(), path)
    data = path.read_bytes()
    path.write_bytes(data[: len(data) // 2])

    with pytest.raises(ModelCorruptError):
        load(path)


def test_other_format_version_raises(trained_model, tmp_path: Path):
    path = tmp_path / "model.joblib"
    joblib.dump({"format_version": 99, "model": trained_model, "schema": ModelSchema()}, path)

    with pytest.raises(ModelCorruptError, match="format version"):
        load(path)


def test_foreign_payload_raises(tmp_path: Path):
    path = tmp_path / "model.joblib"
    joblib.dump(["not", "a", "mapping"], path)

    with pytest.raises(ModelCorruptError, match="layout"):
        load(path)


def test_mismatched_bindings_raise(trained_model, tmp_path: Path):
    path = tmp_path / "model.joblib"
    schema = ModelSchema(text_columns=("summary", "body"))
    joblib.dump({"format_version": 1, "model": trained_model, "schema": schema}, path)

    with pytest.raises(ModelCorruptError, match="text_columns"):
        load(path)


def test_directory_in_place_of_artifact_raises(tmp_path: Path):
    path = tmp_path / "model.joblib"
    path.mkdir()

    assert exists(path)
    with pytest.raises(ModelCorruptError):
        load(path)
