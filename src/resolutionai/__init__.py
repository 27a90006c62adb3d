# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Issue resolution classifier package."""

from .errors import (
    DataSourceError,
    EvaluationError,
    ModelCorruptError,
    ModelNotFoundError,
    PredictionError,
    ResolutionAIError,
    TrainingError,
)
from .inference.predictor import ResolutionPredictor, predict
from .schemas import EvaluationMetrics, ModelSchema, PredictionRequest, PredictionResult, TrainingRecord

__all__ = [
    "TrainingRecord",
    "PredictionRequest",
    "PredictionResult",
    "EvaluationMetrics",
    "ModelSchema",
    "ResolutionPredictor",
    "predict",
    "ResolutionAIError",
    "DataSourceError",
    "TrainingError",
    "EvaluationError",
    "ModelNotFoundError",
    "ModelCorruptError",
    "PredictionError",
]
