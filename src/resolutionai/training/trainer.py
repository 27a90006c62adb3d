# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.compose import ColumnTransformer
from sklearn.linear_model import LogisticRegression
from sklearn.metrics import accuracy_score

from ..errors import TrainingError
from ..features import FEATURE_COLUMNS, LabelVocabulary, PipelineSpec, text_frame


def _timestamp_key() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _build_classifier(*, seed: int, max_iter: int, regularization: float) -> LogisticRegression:
    # lbfgs fits a multinomial (softmax) model for more than two classes.
    return LogisticRegression(
        C=regularization,
        solver="lbfgs",
        max_iter=max_iter,
        random_state=seed,
    )


@dataclass(slots=True)
class TrainedModel:
    vocabulary: LabelVocabulary
    featurizer: ColumnTransformer
    classifier: LogisticRegression
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def labels(self) -> list[str]:
        return list(self.vocabulary.labels)

    @property
    def model_version(self) -> str:
        return str(self.metadata.get("model_version") or "unknown")

    def transform(self, df: pd.DataFrame) -> Any:
        return self.featurizer.transform(text_frame(df))

    def predict_proba(self, df: pd.DataFrame) -> np.ndarray:
        """Class probabilities, one column per vocabulary key."""
        raw = self.classifier.predict_proba(self.transform(df))
        probs = np.zeros((raw.shape[0], len(self.vocabulary)), dtype=float)
        probs[:, self.classifier.classes_.astype(int)] = raw
        return probs

    def predict_keys(self, df: pd.DataFrame) -> np.ndarray:
        return self.predict_proba(df).argmax(axis=1)

    def predict_labels(self, df: pd.DataFrame) -> list[str]:
        return self.vocabulary.decode(self.predict_keys(df))


def _check_training_view(df: pd.DataFrame, label_column: str) -> None:
    missing = [column for column in [label_column, *FEATURE_COLUMNS] if column not in df.columns]
    if missing:
        raise TrainingError(f"Training view is missing columns: {', '.join(missing)}")
    if df.empty:
        raise TrainingError("Training view is empty")
    distinct = df[label_column].map(lambda value: str(value or "")).nunique()
    if distinct < 2:
        raise TrainingError(f"Training view needs at least 2 distinct labels, found {distinct}")


def fit(
    pipeline: PipelineSpec,
    training_view: pd.DataFrame,
    seed: int = 0,
    *,
    max_iter: int = 1000,
    regularization: float = 1.0,
) -> TrainedModel:
    _check_training_view(training_view, pipeline.label_column)

    vocabulary = LabelVocabulary().fit(training_view[pipeline.label_column])
    y_train = vocabulary.encode(training_view[pipeline.label_column])
    x_text = text_frame(training_view)

    featurizer = clone(pipeline.featurizer)
    x_train = featurizer.fit_transform(x_text)

    classifier = _build_classifier(seed=seed, max_iter=max_iter, regularization=regularization)
    classifier.fit(x_train, y_train)

    # The cached training matrix is reused instead of featurizing the view again.
    train_accuracy: float | None = None
    if pipeline.cache:
        train_accuracy = float(accuracy_score(y_train, classifier.predict(x_train)))

    metadata = {
        "model_version": _timestamp_key(),
        "created_at_utc": datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z"),
        "seed": int(seed),
        "train_rows": int(len(training_view)),
        "labels": list(vocabulary.labels),
        "features": list(FEATURE_COLUMNS),
        "feature_count": int(x_train.shape[1]),
        "train_accuracy": train_accuracy,
    }
    return TrainedModel(vocabulary=vocabulary, featurizer=featurizer, classifier=classifier, metadata=metadata)
