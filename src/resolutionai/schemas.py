# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, field

# Column names of the tabular view, in file order.
RECORD_COLUMNS = ["id", "applied_resolution", "title", "description"]
# Header names expected on disk, in the same order.
SOURCE_HEADER = ["ID", "SolucionAplicada", "Title", "Description"]
LABEL_COLUMN = "applied_resolution"
TEXT_COLUMNS = ["title", "description"]
FORMAT_VERSION = 1


@dataclass(slots=True)
class TrainingRecord:
    id: str
    applied_resolution: str
    title: str
    description: str


@dataclass(slots=True)
class PredictionRequest:
    title: str
    description: str


@dataclass(slots=True)
class PredictionResult:
    predicted_resolution: str
    score: float
    explanations: list[str] = field(default_factory=list)
    model_version: str = "unknown"


@dataclass(slots=True)
class EvaluationMetrics:
    micro_accuracy: float
    macro_accuracy: float
    log_loss: float
    log_loss_reduction: float
    rows: int
    per_class_log_loss: dict[str, float] = field(default_factory=dict)
    labels: list[str] = field(default_factory=list)
    confusion_matrix: list[list[int]] = field(default_factory=list)

    def as_dict(self) -> dict[str, float]:
        return {
            "micro_accuracy": float(self.micro_accuracy),
            "macro_accuracy": float(self.macro_accuracy),
            "log_loss": float(self.log_loss),
            "log_loss_reduction": float(self.log_loss_reduction),
        }

    def to_report(self) -> dict[str, object]:
        return {
            **self.as_dict(),
            "rows": int(self.rows),
            "per_class_log_loss": {key: float(value) for key, value in self.per_class_log_loss.items()},
            "labels": list(self.labels),
            "confusion_matrix": [list(row) for row in self.confusion_matrix],
        }


@dataclass(frozen=True)
class ModelSchema:
    """Input/output column bindings stored next to a trained model."""

    input_columns: tuple[str, ...] = tuple(RECORD_COLUMNS)
    source_header: tuple[str, ...] = tuple(SOURCE_HEADER)
    label_column: str = LABEL_COLUMN
    text_columns: tuple[str, ...] = tuple(TEXT_COLUMNS)
    output_column: str = "predicted_resolution"
    format_version: int = FORMAT_VERSION
