"""Per-requirement candidate selection."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator, Mapping, Sequence

from .ranking import TeamMember


class SelectionState:
    """Mapping of requirement or slot id to the chosen team member.

    Each key is either unfilled (absent) or filled with exactly one member.
    Assignments always replace the previous entry for a key.
    """

    def __init__(self) -> None:
        self._chosen: dict[str, TeamMember] = {}

    def reset_from(self, ranked: Mapping[str, Sequence[TeamMember]]) -> None:
        """Discard every entry and auto-pick the top match of each list."""
        self._chosen = {
            key: replace(members[0], selected=True)
            for key, members in ranked.items()
            if members
        }

    def select(self, key: str, member: TeamMember) -> TeamMember:
        chosen = replace(member, selected=True)
        self._chosen[key] = chosen
        return chosen

    def deselect(self, key: str) -> TeamMember | None:
        return self._chosen.pop(key, None)

    def get(self, key: str) -> TeamMember | None:
        return self._chosen.get(key)

    def keys(self) -> list[str]:
        return list(self._chosen)

    def members(self) -> list[TeamMember]:
        return list(self._chosen.values())

    def items(self) -> list[tuple[str, TeamMember]]:
        return list(self._chosen.items())

    def clear(self) -> None:
        self._chosen = {}

    def __contains__(self, key: object) -> bool:
        return key in self._chosen

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._chosen))

    def __len__(self) -> int:
        return len(self._chosen)
