"""File-driven team building: load pool and demand, rank, select, report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal, Sequence

import pendulum
import structlog
from pydantic import ValidationError

from . import __version__
from .access import PricingField, SessionContext, visible_pricing
from .core import RankingEngine, SelectionState, TeamAggregator, TeamMember, TeamSummary
from .schemas import Resource, RoleRequirement, SkillSlot

Mode = Literal["role", "slot"]


class ResourceLoadError(ValueError):
    """Raised when resource loading encounters invalid records."""

    def __init__(self, errors: list[str], partial: list[Resource]):
        super().__init__("Resource loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Resource loading failed: {self.errors}"


class ResourceLoader:
    """Load a talent pool from JSON lines, one resource per line."""

    def load(self, path: Path) -> list[Resource]:
        resources: list[Resource] = []
        errors: list[str] = []
        seen: set[str] = set()
        with path.open("r", encoding="utf-8") as handle:
            for idx, line in enumerate(handle, start=1):
                raw = line.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw)
                except json.JSONDecodeError as exc:
                    errors.append(f"line {idx}: invalid JSON ({exc})")
                    continue
                try:
                    resource = Resource.model_validate(record)
                except ValidationError as exc:
                    errors.append(f"line {idx}: {exc.error_count()} validation error(s): {exc.errors()[0]['msg']}")
                    continue
                if resource.id in seen:
                    errors.append(f"line {idx}: duplicate resource id '{resource.id}'")
                    continue
                seen.add(resource.id)
                resources.append(resource)
        if errors:
            raise ResourceLoadError(errors, resources)
        return resources


class DemandLoader:
    """Load role requirements or skill slots from a JSON document.

    Accepts ``{"requirements": [...]}`` for role mode and ``{"slots": [...]}``
    for slot mode; a bare list is read according to ``mode``.
    """

    def load(self, path: Path, mode: Mode) -> list[RoleRequirement] | list[SkillSlot]:
        with path.open("r", encoding="utf-8") as handle:
            try:
                data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Invalid demand JSON: {exc}") from exc

        key = "requirements" if mode == "role" else "slots"
        items = data.get(key) if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValueError(f"Demand document must contain a '{key}' list")
        if mode == "role":
            return [RoleRequirement.model_validate(item) for item in items]
        return [SkillSlot.model_validate(item) for item in items]


class OutputWriter:
    """Persist team build reports."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )


class TeamBuildPipeline:
    """Rank every requirement, auto-pick top matches and report the team."""

    def __init__(
        self,
        *,
        role_engine: RankingEngine,
        slot_engine: RankingEngine,
        aggregator: TeamAggregator,
        resource_loader: ResourceLoader | None = None,
        demand_loader: DemandLoader | None = None,
        writer: OutputWriter | None = None,
    ) -> None:
        self._engines: dict[str, RankingEngine] = {"role": role_engine, "slot": slot_engine}
        self._aggregator = aggregator
        self._resources = resource_loader or ResourceLoader()
        self._demand = demand_loader or DemandLoader()
        self._writer = writer or OutputWriter()
        self._logger = structlog.get_logger(__name__)

    def run(
        self,
        *,
        resources_path: Path,
        demand_path: Path,
        output_path: Path,
        mode: Mode = "role",
        session: SessionContext | None = None,
    ) -> dict[str, Any]:
        session = session or SessionContext.anonymous()
        load_errors: list[str] = []
        try:
            pool = self._resources.load(resources_path)
        except ResourceLoadError as exc:
            pool = exc.partial
            load_errors.extend(exc.errors)
            self._logger.warning("resources.partial_load", errors=exc.errors)

        demand = self._demand.load(demand_path, mode)
        report = self.build(pool, demand, mode=mode, session=session)
        report["metadata"]["errors"] = load_errors

        self._writer.write(output_path, report)
        return report

    def build(
        self,
        pool: Sequence[Resource],
        demand: Sequence[RoleRequirement | SkillSlot],
        *,
        mode: Mode = "role",
        session: SessionContext | None = None,
    ) -> dict[str, Any]:
        session = session or SessionContext.anonymous()
        engine = self._engines[mode]

        ranked = {item.id: engine.rank(pool, item) for item in demand}
        selection = SelectionState()
        selection.reset_from(ranked)
        summary = self._aggregator.aggregate(selection, len(demand))

        for item in demand:
            chosen = selection.get(item.id)
            self._logger.info(
                "team.assignment",
                mode=mode,
                requirement_id=item.id,
                label=item.label,
                candidates=len(ranked[item.id]),
                resource_id=chosen.resource_id if chosen else None,
                match_score=chosen.match_score if chosen else None,
            )

        return {
            "metadata": {
                "mode": mode,
                "viewer_role": session.role.value,
                "resource_count": len(pool),
                "requirement_count": len(demand),
                "timestamp": pendulum.now().to_iso8601_string(),
                "app_version": __version__,
            },
            "requirements": [
                {
                    "id": item.id,
                    "label": item.label,
                    "suggestions": [serialize_member(m, session) for m in ranked[item.id]],
                    "selected": (
                        serialize_member(selection.get(item.id), session)
                        if item.id in selection
                        else None
                    ),
                }
                for item in demand
            ],
            "summary": serialize_summary(summary, session),
        }


def serialize_member(member: TeamMember, session: SessionContext) -> dict[str, Any]:
    """Member payload with pricing reduced to what the viewer may see."""
    payload = member.as_dict()
    if not session.can_view_pricing(PricingField.TOTAL):
        for key in ("daily_rate", "total_cost"):
            payload.pop(key, None)
    payload["pricing"] = visible_pricing(member.resource.pricing, session)
    return payload


def serialize_summary(summary: TeamSummary, session: SessionContext) -> dict[str, Any]:
    payload = summary.as_dict()
    if not session.can_view_pricing(PricingField.TOTAL):
        payload.pop("total_cost", None)
    if not session.can_view_pricing(PricingField.MARGIN):
        payload.pop("estimated_margin", None)
    return payload
