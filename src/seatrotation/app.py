from __future__ import annotations

import logging
from collections.abc import Sequence

from .core.models import BestResult, SearchConfig
from .data.roster_loader import load_session, resolve_names
from .search.supervisor import Supervisor
from .ui.diagnostics import DiagnosticsReporter
from .ui.renderers import render_session, write_output

__all__ = ["run_reformat", "run_search"]

logger = logging.getLogger(__name__)


def run_reformat(
    input_path: str,
    *,
    names: Sequence[str] | None = None,
    fmt: str = "list",
    output: str | None = None,
) -> None:
    """Re-render a stored JSON session without searching."""

    document = load_session(input_path)
    resolved = resolve_names(names, document.participants)
    write_output(render_session(document.to_session(), resolved, fmt), output)


def run_search(
    config: SearchConfig,
    *,
    names: Sequence[str] | None = None,
    fmt: str = "list",
    output: str | None = None,
    duration: float | None = None,
    no_color: bool = False,
    reporter: DiagnosticsReporter | None = None,
) -> BestResult:
    """Search until terminated, report diagnostics, then write the best session."""

    resolved = resolve_names(names, config.participants)
    best = Supervisor(config).run(duration)
    reporter = reporter or DiagnosticsReporter(no_color=no_color)
    reporter.report(best, config.rounds)
    if best.is_empty:
        logger.warning("Search stopped before any round was completed; nothing written")
        return best
    write_output(render_session(best.rounds, resolved, fmt), output)
    return best
