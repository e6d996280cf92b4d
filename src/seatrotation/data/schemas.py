from __future__ import annotations

from pydantic import RootModel, model_validator

from ..core.models import Session, as_session

__all__ = ["SessionDocument"]


class SessionDocument(RootModel[list[list[list[int]]]]):
    """Stored session: rounds of groups of participant indices.

    Every round must seat each participant ``0 .. N-1`` exactly once, with N
    taken from the first round.
    """

    @model_validator(mode="after")
    def _check_rounds(self) -> SessionDocument:
        rounds = self.root
        if not rounds:
            raise ValueError("session contains no rounds")
        expected: set[int] | None = None
        for number, groups in enumerate(rounds, 1):
            if not groups or any(not group for group in groups):
                raise ValueError(f"round {number} contains an empty group")
            seated = [member for group in groups for member in group]
            if len(set(seated)) != len(seated):
                raise ValueError(f"round {number} seats a participant more than once")
            if expected is None:
                expected = set(range(len(seated)))
            if set(seated) != expected:
                raise ValueError(f"round {number} does not seat participants 0..{len(expected) - 1} exactly once")
        return self

    @property
    def participants(self) -> int:
        return sum(len(group) for group in self.root[0])

    def to_session(self) -> Session:
        return as_session(self.root)
