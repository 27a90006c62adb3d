# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from .env import get_bool_env, get_env, get_float_env, get_int_env

DATA_DIRNAME = "Data"
MODELS_DIRNAME = "Models"
TRAIN_FILENAME = "issues_train.txt"
TEST_FILENAME = "issues_test.txt"
MODEL_FILENAME = "model.joblib"


@dataclass(frozen=True, slots=True)
class AppConfig:
    base_dir: Path
    train_path: Path
    test_path: Path
    model_path: Path
    seed: int = 0
    max_iter: int = 1000
    regularization: float = 1.0
    cache: bool = True
    separator: str = "\t"

    @classmethod
    def for_base_dir(cls, base_dir: Path, **overrides: object) -> "AppConfig":
        root = Path(base_dir).resolve()
        config = cls(
            base_dir=root,
            train_path=root / DATA_DIRNAME / TRAIN_FILENAME,
            test_path=root / DATA_DIRNAME / TEST_FILENAME,
            model_path=root / MODELS_DIRNAME / MODEL_FILENAME,
        )
        return replace(config, **overrides) if overrides else config

    @classmethod
    def from_env(cls, base_dir: Path | None = None) -> "AppConfig":
        root = Path(base_dir or get_env("ISSUES_BASE_DIR", str(Path.cwd())) or Path.cwd())
        config = cls.for_base_dir(root)
        train = get_env("ISSUES_TRAIN_PATH")
        test = get_env("ISSUES_TEST_PATH")
        model = get_env("ISSUES_MODEL_PATH")
        return replace(
            config,
            train_path=resolve_path(config.base_dir, train) if train else config.train_path,
            test_path=resolve_path(config.base_dir, test) if test else config.test_path,
            model_path=resolve_path(config.base_dir, model) if model else config.model_path,
            seed=get_int_env("ISSUES_SEED", config.seed),
            max_iter=max(get_int_env("ISSUES_MAX_ITER", config.max_iter), 1),
            regularization=get_float_env("ISSUES_REGULARIZATION", config.regularization),
            cache=get_bool_env("ISSUES_CACHE_FEATURES", config.cache),
        )


def resolve_path(base_dir: Path, raw: str) -> Path:
    path = Path(raw).expanduser()
    return path if path.is_absolute() else base_dir / path
