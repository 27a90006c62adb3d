# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, recall_score

from ..errors import EvaluationError
from ..schemas import LABEL_COLUMN, EvaluationMetrics
from ..store import load as load_model
from ..training.dataset import load as load_dataset
from ..training.trainer import TrainedModel

PROBABILITY_EPSILON = 1e-15


def _per_class_log_loss(y_true: np.ndarray, losses: np.ndarray, labels: list[str]) -> dict[str, float]:
    out: dict[str, float] = {}
    for key, label in enumerate(labels):
        mask = y_true == key
        if mask.any():
            out[label] = float(losses[mask].mean())
    return out


def evaluate(model: TrainedModel, test_view: pd.DataFrame) -> EvaluationMetrics:
    if LABEL_COLUMN not in test_view.columns:
        raise EvaluationError(f"Test view has no {LABEL_COLUMN} column")
    if test_view.empty:
        raise EvaluationError("Test view is empty")

    unknown = model.vocabulary.unknown(test_view[LABEL_COLUMN])
    if unknown:
        raise EvaluationError(f"Test labels unseen during training: {', '.join(sorted(unknown))}")

    labels = model.labels
    y_true = model.vocabulary.encode(test_view[LABEL_COLUMN])
    probs = model.predict_proba(test_view)
    y_pred = probs.argmax(axis=1)

    true_probs = np.clip(probs[np.arange(len(y_true)), y_true], PROBABILITY_EPSILON, 1.0)
    losses = -np.log(true_probs)
    log_loss = float(losses.mean())
    # Uniform guessing over the training labels scores ln(K).
    baseline = math.log(len(labels))
    present = sorted(set(y_true.tolist()))

    return EvaluationMetrics(
        micro_accuracy=float(accuracy_score(y_true, y_pred)),
        macro_accuracy=float(recall_score(y_true, y_pred, labels=present, average="macro", zero_division=0)),
        log_loss=log_loss,
        log_loss_reduction=float(1.0 - log_loss / baseline),
        rows=int(len(y_true)),
        per_class_log_loss=_per_class_log_loss(y_true, losses, labels),
        labels=list(labels),
        confusion_matrix=confusion_matrix(y_true, y_pred, labels=list(range(len(labels)))).tolist(),
    )


def evaluate_saved_model(*, model_path: Path, test_path: Path, separator: str = "\t") -> EvaluationMetrics:
    model, _schema = load_model(model_path)
    return evaluate(model, load_dataset(test_path, has_header=True, separator=separator))


__all__ = ["evaluate", "evaluate_saved_model"]
