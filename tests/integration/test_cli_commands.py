from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from talentmatch.cli import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


def resource(resource_id: str, skills: list[dict], *, tier: int = 1, hours: int = 40) -> dict:
    return {
        "id": resource_id,
        "full_name": f"Person {resource_id}",
        "organization": "GVTS",
        "tier": tier,
        "skills": skills,
        "manager_feedback": [{"id": f"fb-{resource_id}", "rating": 5}],
        "weekly_availability": hours,
        "pricing": {
            "individual_daily_rate": 600,
            "organization_release_fee": 90,
            "platform_margin": 240,
            "total_billable_rate": 930,
        },
    }


@pytest.fixture
def resources_path(tmp_path: Path) -> Path:
    pool = [
        resource("R-001", [{"name": "Python", "proficiency": 5, "years_experience": 10}]),
        resource("R-002", [{"name": "Research", "proficiency": 3, "years_experience": 4}], tier=3, hours=20),
    ]
    path = tmp_path / "pool.jsonl"
    path.write_text("\n".join(json.dumps(item) for item in pool), encoding="utf-8")
    return path


def test_build_writes_team_report(tmp_path: Path, runner: CliRunner, resources_path: Path) -> None:
    requirements_path = tmp_path / "requirements.json"
    output_path = tmp_path / "team.json"
    write_json(
        requirements_path,
        {
            "requirements": [
                {
                    "id": "REQ-001",
                    "role_name": "Data Analyst",
                    "required_skills": ["Python"],
                    "experience_level": "expert",
                    "effort_days": 10,
                }
            ]
        },
    )

    result = runner.invoke(
        app,
        [
            "build",
            "--resources",
            str(resources_path),
            "--requirements",
            str(requirements_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    assert "Filled 1/1 requirements (avg score 97, high confidence)" in result.stdout

    report = json.loads(output_path.read_text(encoding="utf-8"))
    selected = report["requirements"][0]["selected"]
    assert selected["resource_id"] == "R-001"
    assert selected["match_score"] == 97
    assert selected["total_cost"] == 9300
    assert report["summary"]["estimated_margin"] == 2400
    assert report["metadata"]["viewer_role"] == "gvts_admin"


def test_build_slot_mode_hides_pricing_for_professional(
    tmp_path: Path, runner: CliRunner, resources_path: Path
) -> None:
    slots_path = tmp_path / "slots.json"
    output_path = tmp_path / "team.json"
    write_json(slots_path, {"slots": [{"id": "S-1", "skill_name": "Python", "level": 2}]})

    result = runner.invoke(
        app,
        [
            "build",
            "--resources",
            str(resources_path),
            "--requirements",
            str(slots_path),
            "--output",
            str(output_path),
            "--mode",
            "slot",
            "--role",
            "professional",
        ],
    )

    assert result.exit_code == 0, result.stdout
    report = json.loads(output_path.read_text(encoding="utf-8"))
    selected = report["requirements"][0]["selected"]
    assert selected["match_score"] == 95
    assert "total_cost" not in selected
    assert selected["pricing"] == {"individual_daily_rate": 600, "currency": "USD"}
    assert "total_cost" not in report["summary"]


def test_build_rejects_unknown_mode(tmp_path: Path, runner: CliRunner, resources_path: Path) -> None:
    requirements_path = tmp_path / "requirements.json"
    write_json(requirements_path, {"requirements": []})

    result = runner.invoke(
        app,
        [
            "build",
            "--resources",
            str(resources_path),
            "--requirements",
            str(requirements_path),
            "--output",
            str(tmp_path / "team.json"),
            "--mode",
            "auto",
        ],
    )

    assert result.exit_code != 0


def test_build_applies_yaml_config(tmp_path: Path, runner: CliRunner, resources_path: Path) -> None:
    slots_path = tmp_path / "slots.json"
    config_path = tmp_path / "config.yaml"
    output_path = tmp_path / "team.json"
    write_json(slots_path, {"slots": [{"id": "S-1", "skill_name": "Research", "level": 3}]})
    config_path.write_text("ranking:\n  slot_min_score: 90\n", encoding="utf-8")

    result = runner.invoke(
        app,
        [
            "build",
            "--resources",
            str(resources_path),
            "--requirements",
            str(slots_path),
            "--output",
            str(output_path),
            "--mode",
            "slot",
            "--config",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.stdout
    report = json.loads(output_path.read_text(encoding="utf-8"))
    assert report["requirements"][0]["selected"] is None
    assert report["summary"]["fill_ratio"] == 0.0


def test_demo_staffs_stored_proposal(tmp_path: Path, runner: CliRunner) -> None:
    output_path = tmp_path / "demo.json"

    result = runner.invoke(
        app,
        ["demo", "--output", str(output_path), "--size", "15", "--seed", "42", "--role", "manager"],
    )

    assert result.exit_code == 0, result.stdout
    report = json.loads(output_path.read_text(encoding="utf-8"))
    assert report["metadata"]["proposal_id"] == "prop-1"
    assert report["metadata"]["viewer_role"] == "vgg_manager"
    assert [entry["requirement_id"] for entry in report["team"]] == ["req-1", "req-2", "req-3"]
    assert all("total_cost" not in entry for entry in report["team"])
    assert "estimated_margin" not in report["summary"]
    assert report["summary"]["requirement_count"] == 3


def test_demo_rejects_unknown_proposal(tmp_path: Path, runner: CliRunner) -> None:
    result = runner.invoke(app, ["demo", "--output", str(tmp_path / "demo.json"), "--proposal", "prop-9"])

    assert result.exit_code != 0


def test_demo_rejects_unknown_scorer_setting(tmp_path: Path, runner: CliRunner) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("scorers:\n  role:\n    bogus: 1\n", encoding="utf-8")

    result = runner.invoke(
        app,
        ["demo", "--output", str(tmp_path / "demo.json"), "--config", str(config_path)],
    )

    assert result.exit_code == 2
    assert not isinstance(result.exception, TypeError)
    assert not (tmp_path / "demo.json").exists()
