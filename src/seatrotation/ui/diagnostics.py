from __future__ import annotations

import numpy as np
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.models import BestResult
from ..core.scoring import PairingSummary, pairing_distribution, summarize

__all__ = ["DiagnosticsReporter"]


def _matrix_grid(matrix: np.ndarray) -> Text:
    size = matrix.shape[0]
    lines = ["   " + "".join(f" {idx:2d}" for idx in range(size))]
    for row_idx in range(size):
        cells = "".join("  -" if col == row_idx else f"{int(matrix[row_idx, col]):3d}" for col in range(size))
        lines.append(f" {row_idx:2d}{cells}")
    return Text("\n".join(lines))


class DiagnosticsReporter:
    """Writes the end-of-search report to stderr."""

    def __init__(self, *, no_color: bool = False, console: Console | None = None) -> None:
        if console is not None:
            self.console = console
        elif no_color:
            self.console = Console(stderr=True, color_system=None)
        else:
            self.console = Console(stderr=True)

    def summary_for(self, result: BestResult) -> PairingSummary:
        size = result.matrix.shape[0]
        upper = np.triu_indices(size, k=1)
        return summarize(pairing_distribution(result.matrix[upper].tolist()))

    def report(self, result: BestResult, target_rounds: int | None = None) -> PairingSummary | None:
        if result.is_empty or result.matrix is None:
            self.console.print("[bold red]No complete round was found before the search stopped.[/]")
            return None
        summary = self.summary_for(result)
        reached = f"{result.rounds_completed}"
        if target_rounds is not None:
            reached += f" / {target_rounds}"
        self.console.print(Panel(f"Best Results: {reached} rounds", border_style="bold cyan", expand=False))
        self.console.print(_matrix_grid(result.matrix))
        self.console.print()

        table = Table(title="Distribution", box=box.SIMPLE_HEAVY, header_style="bold blue")
        table.add_column("Repeats", justify="right", style="cyan")
        table.add_column("Pairs", justify="right")
        for repeats, pairs in summary.distribution.items():
            table.add_row(str(repeats), str(pairs))
        self.console.print(table)
        self.console.print(f"Standard Deviation: {summary.deviation:.3f}")
        return summary
