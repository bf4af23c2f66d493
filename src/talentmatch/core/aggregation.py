"""Team-level roll-up over the current selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

from .ranking import TeamMember
from .scorers import round_half_up
from .selection import SelectionState

ConfidenceLevel = Literal["high", "medium", "low"]


@dataclass
class AggregationConfig:
    high_threshold: float = 70.0
    medium_threshold: float = 50.0


@dataclass(frozen=True, slots=True)
class TeamSummary:
    total_cost: float
    avg_match_score: int
    fill_ratio: float
    confidence: ConfidenceLevel
    selected_count: int
    requirement_count: int
    estimated_margin: float

    def as_dict(self) -> dict[str, object]:
        return {
            "total_cost": self.total_cost,
            "avg_match_score": self.avg_match_score,
            "fill_ratio": self.fill_ratio,
            "confidence": self.confidence,
            "selected_count": self.selected_count,
            "requirement_count": self.requirement_count,
            "estimated_margin": self.estimated_margin,
        }


class TeamAggregator:
    """Derive cost, average score, fill ratio and confidence from a selection.

    Nothing is cached; call :meth:`aggregate` after every selection change.
    """

    def __init__(self, *, config: AggregationConfig | None = None) -> None:
        self._config = config or AggregationConfig()

    def aggregate(
        self,
        selection: SelectionState | Iterable[TeamMember],
        requirement_count: int | None = None,
    ) -> TeamSummary:
        members = selection.members() if isinstance(selection, SelectionState) else list(selection)
        count = len(members)
        if requirement_count is None:
            requirement_count = count

        avg_score = round_half_up(sum(m.match_score for m in members) / count) if count else 0

        return TeamSummary(
            total_cost=sum(m.total_cost for m in members),
            avg_match_score=avg_score,
            fill_ratio=count / requirement_count if requirement_count else 0.0,
            confidence=self.confidence(avg_score),
            selected_count=count,
            requirement_count=requirement_count,
            estimated_margin=sum(
                m.resource.pricing.platform_margin * m.billable_days for m in members
            ),
        )

    def confidence(self, score: float) -> ConfidenceLevel:
        if score >= self._config.high_threshold:
            return "high"
        if score >= self._config.medium_threshold:
            return "medium"
        return "low"


def aggregate(
    selection: SelectionState | Iterable[TeamMember],
    requirement_count: int | None = None,
) -> TeamSummary:
    return TeamAggregator().aggregate(selection, requirement_count)
