# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..errors import PredictionError
from ..features import top_tokens
from ..schemas import ModelSchema, PredictionRequest, PredictionResult
from ..store import load as load_model
from ..training.trainer import TrainedModel


def _request_frame(request: PredictionRequest, schema: ModelSchema) -> pd.DataFrame:
    row: dict[str, str] = {}
    for name in schema.text_columns:
        value = getattr(request, name, None)
        if not isinstance(value, str):
            raise PredictionError(f"Prediction request field {name!r} must be a string, got {type(value).__name__}")
        row[name] = value
    return pd.DataFrame([row])


def predict(model: TrainedModel, request: PredictionRequest, *, schema: ModelSchema | None = None) -> PredictionResult:
    binding = schema or ModelSchema()
    frame = _request_frame(request, binding)
    probs = model.predict_proba(frame)[0]
    key = int(probs.argmax())
    label = model.vocabulary.decode([key])[0]
    explanations = top_tokens(" ".join(frame.iloc[0].tolist()), max_items=4)
    return PredictionResult(
        predicted_resolution=label,
        score=float(probs[key]),
        explanations=explanations,
        model_version=model.model_version,
    )


class ResolutionPredictor:
    def __init__(self, *, model: TrainedModel, schema: ModelSchema | None = None) -> None:
        self.model = model
        self.schema = schema or ModelSchema()

    @classmethod
    def from_path(cls, model_path: Path) -> "ResolutionPredictor":
        model, schema = load_model(model_path)
        return cls(model=model, schema=schema)

    @property
    def labels(self) -> list[str]:
        return self.model.labels

    def predict(self, *, title: str, description: str) -> PredictionResult:
        return predict(self.model, PredictionRequest(title=title, description=description), schema=self.schema)
