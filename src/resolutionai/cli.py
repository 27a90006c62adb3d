# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from .app import run
from .config import AppConfig, resolve_path
from .console import MLConsole
from .errors import ResolutionAIError
from .schemas import PredictionRequest


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train (if no model exists) and query a classifier that suggests the resolution applied to an issue."
    )
    parser.add_argument("--base-dir", default=None, help="Base directory holding Data/ and Models/ (default: ISSUES_BASE_DIR or cwd)")
    parser.add_argument("--train", default=None, help="Training file, tab separated (default: Data/issues_train.txt)")
    parser.add_argument("--test", default=None, help="Test file, tab separated (default: Data/issues_test.txt)")
    parser.add_argument("--model", default=None, help="Model artifact (default: Models/model.joblib)")
    parser.add_argument("--seed", type=int, default=None, help="Seed used by the trainer")
    parser.add_argument("--title", default=None, help="Issue title; skips the prompt together with --description")
    parser.add_argument("--description", default=None, help="Issue description; skips the prompt together with --title")
    parser.add_argument("--no-color", action="store_true", help="Plain text output")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AppConfig:
    config = AppConfig.from_env(Path(args.base_dir) if args.base_dir else None)
    overrides: dict[str, object] = {}
    if args.train:
        overrides["train_path"] = resolve_path(config.base_dir, args.train)
    if args.test:
        overrides["test_path"] = resolve_path(config.base_dir, args.test)
    if args.model:
        overrides["model_path"] = resolve_path(config.base_dir, args.model)
    if args.seed is not None:
        overrides["seed"] = int(args.seed)
    return replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    console = MLConsole(enabled=not args.no_color)
    console.banner()

    request = None
    if args.title is not None and args.description is not None:
        request = PredictionRequest(title=args.title, description=args.description)
    elif args.title is not None or args.description is not None:
        console.warn("--title and --description must be given together, falling back to prompts")

    try:
        run(build_config(args), console, request=request)
    except ResolutionAIError as exc:
        console.error(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
