#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
from pathlib import Path

from resolutionai.console import MLConsole
from resolutionai.evaluation.evaluate import evaluate_saved_model


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Re-score a saved model against a tab separated test file.")
    parser.add_argument("--model", default="Models/model.joblib", help="Model artifact (joblib)")
    parser.add_argument("--test", default="Data/issues_test.txt", help="Test file with ID, SolucionAplicada, Title, Description")
    parser.add_argument("--output", default="Models/metrics.json", help="JSON report output")
    parser.add_argument("--no-color", action="store_true", help="Plain text output")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    console = MLConsole(enabled=not args.no_color)
    output_path = Path(args.output)

    metrics = evaluate_saved_model(model_path=Path(args.model), test_path=Path(args.test))
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(metrics.to_report(), ensure_ascii=False, indent=2) + "\n", encoding="utf-8")

    console.metrics_table(metrics.as_dict(), title=f"Test metrics ({metrics.rows} rows)")
    for label, value in sorted(metrics.per_class_log_loss.items()):
        console.info(f"log_loss[{label}]={value:.4f}")
    console.success(f"report: {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
