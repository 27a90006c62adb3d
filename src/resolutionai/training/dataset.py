# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator
from pathlib import Path

import pandas as pd

from ..errors import DataSourceError
from ..schemas import RECORD_COLUMNS, SOURCE_HEADER, TrainingRecord


def _safe_text(value: object) -> str:
    return str(value or "")


def _normalize_header(values: Iterable[object]) -> list[str]:
    return [_safe_text(value).strip().lower() for value in values]


def _read_frame(path: Path, *, separator: str) -> pd.DataFrame:
    try:
        return pd.read_csv(
            path,
            sep=separator,
            header=None,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            encoding="utf-8-sig",
            skip_blank_lines=True,
            engine="python",
        )
    except pd.errors.EmptyDataError as exc:
        raise DataSourceError(f"Data file is empty: {path}") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise DataSourceError(f"Cannot parse data file {path}: {exc}") from exc
    except OSError as exc:
        raise DataSourceError(f"Cannot read data file {path}: {exc}") from exc


def load(path: Path | str, *, has_header: bool = True, separator: str = "\t") -> pd.DataFrame:
    source = Path(path)
    if not source.is_file():
        raise DataSourceError(f"Data file not found: {source}")

    raw = _read_frame(source, separator=separator)
    if raw.shape[1] != len(RECORD_COLUMNS):
        raise DataSourceError(
            f"Expected {len(RECORD_COLUMNS)} columns ({', '.join(SOURCE_HEADER)}) in {source}, found {raw.shape[1]}"
        )

    # The python engine pads short rows with missing values instead of failing.
    short_rows = raw.index[raw.isna().any(axis=1)].tolist()
    if short_rows:
        raise DataSourceError(f"Row {int(short_rows[0]) + 1} of {source} does not have {len(RECORD_COLUMNS)} fields")

    if has_header:
        if raw.empty:
            raise DataSourceError(f"Data file is empty: {source}")
        header = _normalize_header(raw.iloc[0].tolist())
        if header != _normalize_header(SOURCE_HEADER):
            raise DataSourceError(
                f"Unexpected header in {source}: {raw.iloc[0].tolist()} (expected {SOURCE_HEADER})"
            )
        raw = raw.iloc[1:]

    frame = raw.reset_index(drop=True)
    frame.columns = list(RECORD_COLUMNS)
    return frame


def iter_records(df: pd.DataFrame) -> Iterator[TrainingRecord]:
    for item in df.to_dict(orient="records"):
        yield TrainingRecord(
            id=_safe_text(item.get("id")),
            applied_resolution=_safe_text(item.get("applied_resolution")),
            title=_safe_text(item.get("title")),
            description=_safe_text(item.get("description")),
        )


def to_dataframe(rows: Iterable[TrainingRecord]) -> pd.DataFrame:
    data = [
        {
            "id": row.id,
            "applied_resolution": row.applied_resolution,
            "title": row.title,
            "description": row.description,
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=list(RECORD_COLUMNS))
