from __future__ import annotations

import json
from pathlib import Path

import pytest

from talentmatch.access import UserRole, session_for_role
from talentmatch.core import TeamAggregator, role_ranking_engine, slot_ranking_engine
from talentmatch.pipeline import DemandLoader, ResourceLoader, ResourceLoadError, TeamBuildPipeline
from talentmatch.schemas import RoleRequirement, SkillSlot


def resource_record(resource_id: str, **overrides) -> dict:
    record = {
        "id": resource_id,
        "full_name": f"Person {resource_id}",
        "tier": 1,
        "skills": [{"name": "Python", "proficiency": 4, "years_experience": 6}],
        "weekly_availability": 40,
        "pricing": {
            "individual_daily_rate": 500,
            "organization_release_fee": 75,
            "platform_margin": 200,
            "total_billable_rate": 775,
        },
    }
    record.update(overrides)
    return record


def write_jsonl(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def test_loader_reads_valid_records(tmp_path: Path):
    path = write_jsonl(
        tmp_path / "pool.jsonl",
        [json.dumps(resource_record("R-1")), "", json.dumps(resource_record("R-2", tier=3))],
    )

    resources = ResourceLoader().load(path)

    assert [resource.id for resource in resources] == ["R-1", "R-2"]
    assert resources[1].tier == 3


def test_loader_collects_errors_and_keeps_partial_pool(tmp_path: Path):
    path = write_jsonl(
        tmp_path / "pool.jsonl",
        [
            json.dumps(resource_record("R-1")),
            "{not json",
            json.dumps(resource_record("R-2", tier=7)),
            json.dumps(resource_record("R-1")),
        ],
    )

    with pytest.raises(ResourceLoadError) as excinfo:
        ResourceLoader().load(path)

    errors = excinfo.value.errors
    assert len(errors) == 3
    assert errors[0].startswith("line 2: invalid JSON")
    assert errors[1].startswith("line 3:")
    assert "duplicate resource id 'R-1'" in errors[2]
    assert [resource.id for resource in excinfo.value.partial] == ["R-1"]


def test_demand_loader_reads_both_modes(tmp_path: Path):
    roles = tmp_path / "roles.json"
    roles.write_text(
        json.dumps({"requirements": [{"id": "REQ-1", "role_name": "Analyst", "required_skills": "Python, SQL"}]}),
        encoding="utf-8",
    )
    slots = tmp_path / "slots.json"
    slots.write_text(json.dumps([{"id": "S-1", "skill_name": "Python", "level": 2}]), encoding="utf-8")

    requirements = DemandLoader().load(roles, "role")
    skill_slots = DemandLoader().load(slots, "slot")

    assert isinstance(requirements[0], RoleRequirement)
    assert requirements[0].required_skills == ["Python", "SQL"]
    assert isinstance(skill_slots[0], SkillSlot)
    assert skill_slots[0].label == "Python (Advanced)"


def test_demand_loader_rejects_missing_list(tmp_path: Path):
    path = tmp_path / "roles.json"
    path.write_text(json.dumps({"slots": []}), encoding="utf-8")

    with pytest.raises(ValueError, match="'requirements' list"):
        DemandLoader().load(path, "role")


def build_pipeline() -> TeamBuildPipeline:
    return TeamBuildPipeline(
        role_engine=role_ranking_engine(),
        slot_engine=slot_ranking_engine(),
        aggregator=TeamAggregator(),
    )


def test_pipeline_report_hides_pricing_for_professional(make_resource):
    pool = [make_resource("R-1", skills=[("Python", 4, 6)], rate=775.0, margin=200.0)]
    demand = [RoleRequirement(id="REQ-1", role_name="Analyst", required_skills=["Python"], effort_days=10)]

    admin = build_pipeline().build(pool, demand, session=session_for_role(UserRole.ADMIN))
    professional = build_pipeline().build(pool, demand, session=session_for_role(UserRole.PROFESSIONAL))

    admin_member = admin["requirements"][0]["selected"]
    assert admin_member["total_cost"] == 7750.0
    assert admin["summary"]["estimated_margin"] == 2000.0

    member = professional["requirements"][0]["selected"]
    assert "total_cost" not in member
    assert "daily_rate" not in member
    assert member["pricing"] == {"individual_daily_rate": 575.0, "currency": "USD"}
    assert "total_cost" not in professional["summary"]
    assert "estimated_margin" not in professional["summary"]
    assert professional["metadata"]["viewer_role"] == "professional"


def test_pipeline_run_tolerates_partial_pool(tmp_path: Path):
    resources = write_jsonl(
        tmp_path / "pool.jsonl",
        [json.dumps(resource_record("R-1", tier=3, weekly_availability=20)), "{broken"],
    )
    demand = tmp_path / "slots.json"
    demand.write_text(
        json.dumps({"slots": [{"id": "S-1", "skill_name": "Python"}, {"id": "S-2", "skill_name": "Rust"}]}),
        encoding="utf-8",
    )
    output = tmp_path / "out" / "team.json"

    report = build_pipeline().run(
        resources_path=resources,
        demand_path=demand,
        output_path=output,
        mode="slot",
    )

    assert output.exists()
    assert json.loads(output.read_text(encoding="utf-8"))["metadata"]["mode"] == "slot"
    assert len(report["metadata"]["errors"]) == 1
    by_id = {item["id"]: item for item in report["requirements"]}
    assert by_id["S-1"]["selected"]["resource_id"] == "R-1"
    assert by_id["S-1"]["selected"]["billable_days"] == 30
    assert by_id["S-2"]["selected"] is None
    assert report["summary"]["fill_ratio"] == 0.5
