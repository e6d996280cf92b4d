from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import ConfigurationError
from .schemas import SessionDocument

__all__ = ["default_names", "load_names", "load_session", "resolve_names"]


def _read_text(path: Path, what: str) -> str:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"cannot read {what} '{path}': {exc}") from exc


def load_names(path: str | Path) -> list[str]:
    """Participant names, one per line. Blank lines are ignored."""

    path = Path(path)
    names = [line.strip() for line in _read_text(path, "names file").splitlines()]
    names = [name for name in names if name]
    if not names:
        raise ConfigurationError(f"names file '{path}' contains no names")
    return names


def load_session(path: str | Path) -> SessionDocument:
    path = Path(path)
    raw = _read_text(path, "session file")
    try:
        return SessionDocument.model_validate_json(raw)
    except ValidationError as exc:
        detail = exc.errors()[0].get("msg", str(exc)) if exc.errors() else str(exc)
        raise ConfigurationError(f"invalid session file '{path}': {detail}") from exc


def default_names(count: int) -> list[str]:
    return [str(idx + 1) for idx in range(count)]


def resolve_names(names: Sequence[str] | None, participants: int) -> list[str]:
    """Names for ``participants`` indices, numbering them from 1 when none are given."""

    if names is None:
        return default_names(participants)
    if len(names) < participants:
        raise ConfigurationError(f"{participants} participants but only {len(names)} names were supplied")
    return list(names)
