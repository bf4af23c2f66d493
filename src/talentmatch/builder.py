"""Interactive team building sessions.

Two workflows share the same selection and roll-up mechanics:

* :class:`TeamBuilderSession` walks a proposal through upload, requirement
  editing and role-mode suggestions.
* :class:`ManualTeamBuilder` ranks the pool against hand-picked skill slots.

Processing steps await a single artificial delay and then update state in
one step. A step that is already running rejects re-entry.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from pathlib import PurePath
from typing import Any, Iterator, Literal, Sequence

import structlog
from pydantic import ValidationError

from .access import Capability, SessionContext
from .core import RankingEngine, SelectionState, TeamAggregator, TeamMember, TeamSummary
from .fixtures import stub_extracted_requirements
from .schemas import Proposal, Resource, RoleRequirement, SkillSlot

Step = Literal["upload", "requirements", "suggestions"]

STUB_PROJECT_START = date(2025, 3, 1)
STUB_PROJECT_END = date(2025, 8, 31)


class BuilderError(ValueError):
    """Raised when a builder operation is not valid in the current state."""


class BuilderBusyError(BuilderError):
    """Raised when a processing step is started while another is running."""


@dataclass
class BuilderConfig:
    upload_delay: float = 2.0
    generation_delay: float = 1.5


class _RankedSelection:
    """Suggestions per key plus the selection made from them."""

    def __init__(
        self,
        pool: Sequence[Resource],
        *,
        engine: RankingEngine,
        aggregator: TeamAggregator | None = None,
        config: BuilderConfig | None = None,
    ) -> None:
        self._pool = list(pool)
        self._engine = engine
        self._aggregator = aggregator or TeamAggregator()
        self._config = config or BuilderConfig()
        self._suggestions: dict[str, list[TeamMember]] = {}
        self._busy = False
        self.selection = SelectionState()
        self._logger = structlog.get_logger(__name__)

    @property
    def pool(self) -> list[Resource]:
        return list(self._pool)

    @property
    def is_processing(self) -> bool:
        return self._busy

    def suggestions_for(self, key: str) -> list[TeamMember]:
        return list(self._suggestions.get(key, []))

    def select(self, key: str, resource_id: str) -> TeamMember:
        """Pick one of the displayed candidates for ``key``."""
        if key not in self._suggestions:
            raise BuilderError(f"No suggestions for {key!r}")
        member = next(
            (item for item in self._suggestions[key] if item.resource_id == resource_id),
            None,
        )
        if member is None:
            raise BuilderError(f"Resource {resource_id!r} is not suggested for {key!r}")
        chosen = self.selection.select(key, member)
        self._logger.info(
            "builder.selected",
            key=key,
            resource_id=resource_id,
            match_score=chosen.match_score,
        )
        return chosen

    def deselect(self, key: str) -> None:
        self.selection.deselect(key)

    def summary(self) -> TeamSummary:
        return self._aggregator.aggregate(self.selection, self._demand_count())

    def _demand_count(self) -> int:
        raise NotImplementedError

    def _rank_all(self, demand: Sequence[RoleRequirement | SkillSlot]) -> dict[str, list[TeamMember]]:
        ranked = {item.id: self._engine.rank(self._pool, item) for item in demand}
        self._suggestions = ranked
        self.selection.reset_from(ranked)
        return ranked

    def _forget(self, key: str) -> None:
        self._suggestions.pop(key, None)
        self.selection.deselect(key)

    def _discard_ranking(self) -> None:
        self._suggestions = {}
        self.selection.clear()

    @contextmanager
    def _processing(self, action: str) -> Iterator[None]:
        if self._busy:
            raise BuilderBusyError(f"Cannot start {action!r}: another step is still processing")
        self._busy = True
        try:
            yield
        finally:
            self._busy = False


class TeamBuilderSession(_RankedSelection):
    """Proposal-driven team builder using role-mode matching."""

    def __init__(
        self,
        pool: Sequence[Resource],
        *,
        engine: RankingEngine,
        aggregator: TeamAggregator | None = None,
        config: BuilderConfig | None = None,
        session: SessionContext | None = None,
    ) -> None:
        super().__init__(pool, engine=engine, aggregator=aggregator, config=config)
        self._session = session
        self.step: Step = "upload"
        self.proposal_title = ""
        self.proposal_client = ""
        self.proposal_description = ""
        self.requirements: list[RoleRequirement] = []

    async def upload_document(self, filename: str) -> list[RoleRequirement]:
        """Simulate parsing an uploaded proposal or terms of reference.

        The extraction is a fixed stub; only the file name is used, as the
        proposal title.
        """
        if self._session is not None:
            self._session.require(Capability.UPLOAD_PROPOSALS)
        with self._processing("upload"):
            await asyncio.sleep(self._config.upload_delay)
            extracted = stub_extracted_requirements(STUB_PROJECT_START, STUB_PROJECT_END)
            self.proposal_title = PurePath(filename).stem
            self.requirements = extracted
            self._discard_ranking()
            self.step = "requirements"

        self._logger.info(
            "builder.document_processed",
            filename=filename,
            requirements=len(extracted),
        )
        return list(extracted)

    def start_manual(self, title: str, client: str = "", description: str = "") -> None:
        if not title.strip():
            raise BuilderError("A proposal title is required")
        self.proposal_title = title
        self.proposal_client = client
        self.proposal_description = description
        self.step = "requirements"

    def load_proposal(self, proposal: Proposal) -> None:
        self.proposal_title = proposal.title
        self.proposal_client = proposal.client
        self.proposal_description = proposal.description
        self.requirements = [item.model_copy(deep=True) for item in proposal.extracted_requirements]
        self._discard_ranking()
        self.step = "requirements"

    def add_requirement(self, **fields: Any) -> RoleRequirement:
        requirement = RoleRequirement(**fields)
        self.requirements.append(requirement)
        return requirement

    def update_requirement(self, requirement_id: str, **updates: Any) -> RoleRequirement:
        index = self._requirement_index(requirement_id)
        current = self.requirements[index]
        payload = {**current.model_dump(), **updates, "id": current.id}
        try:
            updated = RoleRequirement.model_validate(payload)
        except ValidationError as exc:
            raise BuilderError(f"Invalid update for {requirement_id!r}: {exc}") from exc
        self.requirements[index] = updated
        return updated

    def remove_requirement(self, requirement_id: str) -> None:
        index = self._requirement_index(requirement_id)
        del self.requirements[index]
        self._forget(requirement_id)

    @property
    def can_generate(self) -> bool:
        return (
            bool(self.requirements)
            and all(item.role_name.strip() for item in self.requirements)
            and not self._busy
        )

    async def generate_suggestions(self) -> dict[str, list[TeamMember]]:
        """Rank the pool for every requirement and auto-pick each top match.

        Any earlier manual picks are discarded.
        """
        if not self.requirements:
            raise BuilderError("Add at least one role before generating suggestions")
        unnamed = [item.id for item in self.requirements if not item.role_name.strip()]
        if unnamed:
            raise BuilderError(f"Roles without a name: {', '.join(unnamed)}")

        with self._processing("generate_suggestions"):
            await asyncio.sleep(self._config.generation_delay)
            ranked = self._rank_all(self.requirements)
            self.step = "suggestions"

        summary = self.summary()
        self._logger.info(
            "builder.suggestions_generated",
            proposal=self.proposal_title,
            requirements=len(self.requirements),
            avg_match_score=summary.avg_match_score,
            confidence=summary.confidence,
        )
        return ranked

    def edit_requirements(self) -> None:
        self.step = "requirements"

    def team(self) -> list[tuple[RoleRequirement, TeamMember]]:
        """Selected members paired with their requirement, in requirement order."""
        return [
            (requirement, member)
            for requirement in self.requirements
            if (member := self.selection.get(requirement.id)) is not None
        ]

    def _demand_count(self) -> int:
        return len(self.requirements)

    def _requirement_index(self, requirement_id: str) -> int:
        for index, requirement in enumerate(self.requirements):
            if requirement.id == requirement_id:
                return index
        raise BuilderError(f"Unknown requirement {requirement_id!r}")


class ManualTeamBuilder(_RankedSelection):
    """Skill/level picker ranking the pool per slot."""

    def __init__(
        self,
        pool: Sequence[Resource],
        *,
        engine: RankingEngine,
        aggregator: TeamAggregator | None = None,
        config: BuilderConfig | None = None,
    ) -> None:
        super().__init__(pool, engine=engine, aggregator=aggregator, config=config)
        self.slots: list[SkillSlot] = []

    def add_slot(self, skill_name: str, level: int = 3, quantity: int = 1) -> SkillSlot:
        if not skill_name.strip():
            raise BuilderError("A skill name is required")
        slot = SkillSlot(skill_name=skill_name.strip(), level=level, quantity=quantity)
        self.slots.append(slot)
        return slot

    def update_slot(self, slot_id: str, **updates: Any) -> SkillSlot:
        index = self._slot_index(slot_id)
        payload = {**self.slots[index].model_dump(), **updates, "id": slot_id}
        try:
            updated = SkillSlot.model_validate(payload)
        except ValidationError as exc:
            raise BuilderError(f"Invalid update for {slot_id!r}: {exc}") from exc
        self.slots[index] = updated
        return updated

    def remove_slot(self, slot_id: str) -> None:
        del self.slots[self._slot_index(slot_id)]
        self._forget(slot_id)

    async def generate(self) -> dict[str, list[TeamMember]]:
        if not self.slots:
            raise BuilderError("Add at least one skill slot before generating suggestions")

        with self._processing("generate"):
            await asyncio.sleep(self._config.generation_delay)
            ranked = self._rank_all(self.slots)

        empty = [slot.id for slot in self.slots if not ranked[slot.id]]
        self._logger.info(
            "builder.slots_ranked",
            slots=len(self.slots),
            unmatched_slots=empty,
        )
        return ranked

    def unmatched_slots(self) -> list[SkillSlot]:
        """Slots whose ranking came back empty ("no strong matches")."""
        return [
            slot
            for slot in self.slots
            if slot.id in self._suggestions and not self._suggestions[slot.id]
        ]

    def _demand_count(self) -> int:
        return len(self.slots)

    def _slot_index(self, slot_id: str) -> int:
        for index, slot in enumerate(self.slots):
            if slot.id == slot_id:
                return index
        raise BuilderError(f"Unknown slot {slot_id!r}")
