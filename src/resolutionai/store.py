# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import os
import pickle
import tempfile
import zlib
from pathlib import Path

import joblib

from .errors import ModelCorruptError, ModelNotFoundError
from .schemas import FORMAT_VERSION, ModelSchema
from .training.trainer import TrainedModel

# Failures joblib/pickle raise on a truncated, foreign or unreadable file.
_LOAD_ERRORS = (
    pickle.UnpicklingError,
    EOFError,
    ValueError,
    KeyError,
    IndexError,
    TypeError,
    AttributeError,
    ImportError,
    OSError,
    zlib.error,
)


def exists(path: Path | str) -> bool:
    return Path(path).exists()


def save(model: TrainedModel, schema: ModelSchema, path: Path | str) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    payload = {"format_version": FORMAT_VERSION, "model": model, "schema": schema}
    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        joblib.dump(payload, tmp_path, compress=3)
        os.replace(tmp_path, target)
    finally:
        if tmp_path.exists():
            tmp_path.unlink()
    return target


def load(path: Path | str) -> tuple[TrainedModel, ModelSchema]:
    source = Path(path)
    if not source.exists():
        raise ModelNotFoundError(f"Model artifact not found: {source}")
    try:
        payload = joblib.load(source)
    except _LOAD_ERRORS as exc:
        raise ModelCorruptError(f"Cannot deserialize model artifact {source}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ModelCorruptError(f"Model artifact {source} has an unexpected layout")
    version = payload.get("format_version")
    if version != FORMAT_VERSION:
        raise ModelCorruptError(f"Model artifact {source} has format version {version!r}, expected {FORMAT_VERSION}")
    model = payload.get("model")
    schema = payload.get("schema")
    if not isinstance(model, TrainedModel) or not isinstance(schema, ModelSchema):
        raise ModelCorruptError(f"Model artifact {source} does not contain a trained model and its schema")
    _check_bindings(schema, source)
    return model, schema


def _check_bindings(schema: ModelSchema, source: Path) -> None:
    # The fitted featurizer selects its inputs by these exact column names.
    expected = ModelSchema()
    for name in ("input_columns", "label_column", "text_columns", "output_column"):
        found = getattr(schema, name)
        wanted = getattr(expected, name)
        if found != wanted:
            raise ModelCorruptError(f"Model artifact {source} binds {name}={found!r}, expected {wanted!r}")
