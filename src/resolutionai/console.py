# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .schemas import PredictionResult

ASCII_BANNER = r"""
 ___ ____ ____ _   _ _____   __  __ _
|_ _/ ___/ ___| | | | ____| |  \/  | |
 | |\___ \___ \ | | |  _|   | |\/| | |
 | | ___) |__) | |_| | |___  | |  | | |___
|___|____/____/ \___/|_____| |_|  |_|_____|
"""


@dataclass
class MLConsole:
    enabled: bool = True
    input_fn: Callable[[str], str] = field(default=input, repr=False)

    def __post_init__(self) -> None:
        self._console = Console(color_system="auto", soft_wrap=True) if self.enabled else None

    def banner(self) -> None:
        if self._console:
            self._console.print(Panel.fit(ASCII_BANNER.strip("\n"), title="Issue resolution ML", border_style="cyan"))
            return
        print(ASCII_BANNER)

    def info(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold cyan]INFO[/bold cyan] {escape(text)}", highlight=False)
        else:
            print(f"[INFO] {text}")

    def warn(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold yellow]WARN[/bold yellow] {escape(text)}", highlight=False)
        else:
            print(f"[WARN] {text}")

    def error(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold red]ERROR[/bold red] {escape(text)}", highlight=False)
        else:
            print(f"[ERROR] {text}")

    def success(self, text: str) -> None:
        if self._console:
            self._console.print(f"[bold green]OK[/bold green] {escape(text)}", highlight=False)
        else:
            print(f"[OK] {text}")

    def metrics_table(self, metrics: dict[str, float], *, title: str) -> None:
        if self._console:
            table = Table(title=title, show_lines=True)
            table.add_column("Metric", style="bold")
            table.add_column("Value", justify="right")
            for key in sorted(metrics.keys()):
                table.add_row(key, f"{float(metrics[key]):.4f}")
            self._console.print(table)
            return

        print(title)
        for key in sorted(metrics.keys()):
            print(f"- {key}: {float(metrics[key]):.4f}")

    def prediction(self, result: PredictionResult, *, title: str, description: str, heading: str = "Prediction") -> None:
        if self._console:
            table = Table(title=heading, show_header=False, show_lines=True)
            table.add_column("Field", style="bold")
            table.add_column("Value")
            table.add_row("resolution", escape(result.predicted_resolution))
            table.add_row("score", f"{result.score:.4f}")
            table.add_row("title", escape(title))
            table.add_row("description", escape(description))
            if result.explanations:
                table.add_row("tokens", escape(", ".join(result.explanations)))
            table.add_row("model", result.model_version)
            self._console.print(table)
            return

        print(f"{heading}: {result.predicted_resolution} (score={result.score:.4f})")
        print(f"- title: {title}")
        print(f"- description: {description}")
        if result.explanations:
            print(f"- tokens: {', '.join(result.explanations)}")
        print(f"- model: {result.model_version}")

    def prompt(self, text: str) -> str:
        if self._console:
            self._console.print(text, markup=False, highlight=False)
        else:
            print(text)
        try:
            return self.input_fn("")
        except EOFError:
            # Closed stdin reads as an empty line.
            return ""
