"""
Shared fixtures: small tab separated issue files and a model trained on them.
"""

from pathlib import Path

import pytest

from resolutionai.config import AppConfig
from resolutionai.features import build_pipeline
from resolutionai.training.dataset import load
from resolutionai.training.trainer import fit

HEADER = ["ID", "SolucionAplicada", "Title", "Description"]

EXAMPLE_ROWS = [
    ["1", "FixA", "Login fails", "cannot log in"],
    ["2", "FixB", "Crash on save", "app crashes when saving"],
    ["3", "FixA", "Cannot login", "login button does nothing"],
]

TRAIN_ROWS = EXAMPLE_ROWS + [
    ["4", "FixB", "Crash when saving report", "the app crashes after pressing save"],
    ["5", "FixC", "Invoice total wrong", "the invoice total does not match the items"],
    ["6", "FixC", "Wrong invoice amount", "invoice amount is computed wrong"],
    ["7", "FixA", "Password not accepted", "cannot log in with a valid password"],
]

TEST_ROWS = [
    ["10", "FixA", "Login error", "cannot login at all"],
    ["11", "FixB", "App crashes", "crashes when saving the file"],
    ["12", "FixC", "Invoice wrong", "invoice total is wrong"],
]

PROBES = [
    ("login broken", "can't sign in"),
    ("crash", "saving crashes the app"),
    ("invoice", "amount wrong"),
    ("", ""),
    ("zzzz qqqq", "xylophone"),
]


def write_issues(path: Path, rows, header=HEADER) -> Path:
    lines = []
    if header is not None:
        lines.append("\t".join(header))
    lines.extend("\t".join(row) for row in rows)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def example_file(tmp_path: Path) -> Path:
    return write_issues(tmp_path / "example.txt", EXAMPLE_ROWS)


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Base directory laid out as Data/ + Models/ with train and test files."""
    config = AppConfig.for_base_dir(tmp_path)
    write_issues(config.train_path, TRAIN_ROWS)
    write_issues(config.test_path, TEST_ROWS)
    return config


@pytest.fixture
def trained_model(app_config: AppConfig):
    return fit(build_pipeline(), load(app_config.train_path), seed=0)
