# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations


class ResolutionAIError(RuntimeError):
    """Base class for every failure raised by the package."""


class DataSourceError(ResolutionAIError):
    pass


class TrainingError(ResolutionAIError):
    pass


class EvaluationError(ResolutionAIError):
    pass


class ModelStoreError(ResolutionAIError):
    pass


class ModelNotFoundError(ModelStoreError):
    pass


class ModelCorruptError(ModelStoreError):
    pass


class PredictionError(ResolutionAIError):
    pass
