# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import re
import unicodedata
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.base import BaseEstimator, TransformerMixin, clone
from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.pipeline import FeatureUnion

from .schemas import LABEL_COLUMN, TEXT_COLUMNS

TOKEN_RE = re.compile(r"[a-z0-9à-öø-ÿ_'-]{3,40}", flags=re.IGNORECASE)
SPACES_RE = re.compile(r"\s+")

FEATURE_COLUMNS = list(TEXT_COLUMNS)
WORD_TOKEN_PATTERN = r"(?u)\b\w+\b"


def _safe_text(value: object) -> str:
    return str(value or "")


def normalize_text(text: str) -> str:
    normalized = unicodedata.normalize("NFKC", _safe_text(text)).lower()
    return SPACES_RE.sub(" ", normalized).strip()


def top_tokens(text: str, max_items: int = 5) -> list[str]:
    tokens = [match.group(0) for match in TOKEN_RE.finditer(normalize_text(text))]
    if not tokens:
        return []
    freq = Counter(tokens)
    return [token for token, _count in freq.most_common(max_items)]


class LabelVocabulary:
    """Maps resolution labels to integer keys in first-seen order."""

    def __init__(self) -> None:
        self.labels: list[str] = []
        self._keys: dict[str, int] = {}

    def fit(self, values: Iterable[object]) -> "LabelVocabulary":
        labels: list[str] = []
        keys: dict[str, int] = {}
        for value in values:
            label = _safe_text(value)
            if label not in keys:
                keys[label] = len(labels)
                labels.append(label)
        self.labels = labels
        self._keys = keys
        return self

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, label: object) -> bool:
        return _safe_text(label) in self._keys

    def unknown(self, values: Iterable[object]) -> list[str]:
        missing: dict[str, None] = {}
        for value in values:
            label = _safe_text(value)
            if label not in self._keys:
                missing[label] = None
        return list(missing)

    def encode(self, values: Iterable[object]) -> np.ndarray:
        return np.array([self._keys[_safe_text(value)] for value in values], dtype=np.int64)

    def decode(self, keys: Iterable[int]) -> list[str]:
        return [self.labels[int(key)] for key in keys]


class TextBlock(TransformerMixin, BaseEstimator):
    """One TF-IDF vectorizer that degrades to a single zero column when the text has no token."""

    def __init__(self, vectorizer: TfidfVectorizer | None = None) -> None:
        self.vectorizer = vectorizer

    def fit(self, X, y=None) -> "TextBlock":
        self.vectorizer_ = clone(self.vectorizer) if self.vectorizer is not None else TfidfVectorizer()
        self.empty_ = False
        try:
            self.vectorizer_.fit(X)
        except ValueError as exc:
            if "empty vocabulary" not in str(exc):
                raise
            self.empty_ = True
        return self

    def transform(self, X):
        if self.empty_:
            return sparse.csr_matrix((len(X), 1), dtype=np.float64)
        return self.vectorizer_.transform(X)

    def get_feature_names_out(self, input_features=None) -> np.ndarray:
        if self.empty_:
            return np.array(["empty"], dtype=object)
        return self.vectorizer_.get_feature_names_out()


def build_text_featurizer() -> FeatureUnion:
    return FeatureUnion(
        transformer_list=[
            (
                "word_tfidf",
                TextBlock(
                    TfidfVectorizer(
                        analyzer="word",
                        ngram_range=(1, 2),
                        token_pattern=WORD_TOKEN_PATTERN,
                        lowercase=True,
                        strip_accents="unicode",
                        sublinear_tf=True,
                    )
                ),
            ),
            (
                "char_tfidf",
                TextBlock(
                    TfidfVectorizer(analyzer="char_wb", ngram_range=(3, 5), lowercase=True, strip_accents="unicode", sublinear_tf=True)
                ),
            ),
        ]
    )


def build_featurizer() -> ColumnTransformer:
    # Title block first, description block second.
    return ColumnTransformer(
        transformers=[
            ("TitleFeaturized", build_text_featurizer(), "title"),
            ("DescriptionFeaturized", build_text_featurizer(), "description"),
        ],
        remainder="drop",
        sparse_threshold=1.0,
    )


@dataclass(slots=True)
class PipelineSpec:
    """Unfit label mapping + featurization steps, ready to be handed to the trainer."""

    featurizer: ColumnTransformer = field(default_factory=build_featurizer)
    label_column: str = LABEL_COLUMN
    cache: bool = True


def build_pipeline(*, cache: bool = True) -> PipelineSpec:
    return PipelineSpec(cache=cache)


def text_frame(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    for column in FEATURE_COLUMNS:
        if column not in out.columns:
            out[column] = ""
        out[column] = out[column].map(_safe_text)
    return out[FEATURE_COLUMNS]
