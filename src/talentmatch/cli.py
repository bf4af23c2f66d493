"""Typer CLI entrypoint for team matching."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import pendulum
import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .access import UserRole, session_for_role
from .builder import TeamBuilderSession
from .container import create_container
from .fixtures import demo_proposals, generate_pool
from .logging import configure_logging
from .pipeline import OutputWriter, serialize_member, serialize_summary
from .schemas.config import load_config

app = typer.Typer(help="Talent pool team matching CLI.")

_ROLE_ALIASES = {
    "admin": UserRole.ADMIN,
    "manager": UserRole.MANAGER,
    "professional": UserRole.PROFESSIONAL,
    "guest": UserRole.GUEST,
}


def _load_settings(config: Path | None) -> dict[str, Any]:
    if not config:
        return {}
    with config.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise typer.BadParameter("Config file must be a YAML object", param_hint="config")
    try:
        return load_config(loaded).to_settings()
    except ValidationError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _resolve_role(role: str) -> UserRole:
    try:
        return _ROLE_ALIASES[role.lower()]
    except KeyError as exc:
        raise typer.BadParameter(
            f"Unknown role {role!r}; choose from {', '.join(_ROLE_ALIASES)}",
            param_hint="role",
        ) from exc


@app.command()
def build(
    resources: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Resource pool JSONL path."),
    requirements: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Requirements or slots JSON path."),
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    mode: str = typer.Option("role", help="Matching mode: 'role' or 'slot'."),
    role: str = typer.Option("admin", help="Viewer role used to gate pricing fields."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Rank the pool for each requirement and write the auto-picked team."""
    if mode not in ("role", "slot"):
        raise typer.BadParameter("Mode must be 'role' or 'slot'", param_hint="mode")
    viewer = session_for_role(_resolve_role(role))
    settings = _load_settings(config)

    configure_logging(log_level)

    container = create_container(settings=settings)
    pipeline = container.pipeline()
    report = pipeline.run(
        resources_path=resources,
        demand_path=requirements,
        output_path=output,
        mode=mode,  # type: ignore[arg-type]
        session=viewer,
    )
    summary = report["summary"]
    typer.echo(
        f"Filled {summary['selected_count']}/{summary['requirement_count']} requirements "
        f"(avg score {summary['avg_match_score']}, {summary['confidence']} confidence). "
        f"Results saved to {output}."
    )


@app.command()
def demo(
    output: Path = typer.Option(..., dir_okay=False, resolve_path=True, help="Output JSON path."),
    proposal: str = typer.Option("prop-1", help="Stored proposal id to staff."),
    size: int = typer.Option(55, min=1, help="Synthetic pool size."),
    seed: Optional[int] = typer.Option(None, help="Random seed for the synthetic pool."),
    role: str = typer.Option("admin", help="Viewer role used to gate pricing fields."),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: str = typer.Option("INFO", help="Log level for structured logging."),
) -> None:
    """Generate a synthetic pool and staff a stored proposal with it."""
    viewer = session_for_role(_resolve_role(role))
    settings = _load_settings(config)
    settings.setdefault("builder", {}).update({"upload_delay": 0.0, "generation_delay": 0.0})

    configure_logging(log_level, fmt="console")

    proposals = {item.id: item for item in demo_proposals()}
    if proposal not in proposals:
        raise typer.BadParameter(
            f"Unknown proposal {proposal!r}; choose from {', '.join(proposals)}",
            param_hint="proposal",
        )

    container = create_container(settings=settings)
    session: TeamBuilderSession = container.team_builder(pool=generate_pool(size, seed=seed), session=viewer)
    session.load_proposal(proposals[proposal])
    asyncio.run(session.generate_suggestions())

    report = {
        "metadata": {
            "proposal_id": proposal,
            "proposal_title": session.proposal_title,
            "seed": seed,
            "resource_count": size,
            "viewer_role": viewer.role.value,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        },
        "team": [
            {"requirement_id": requirement.id, **serialize_member(member, viewer)}
            for requirement, member in session.team()
        ],
        "summary": serialize_summary(session.summary(), viewer),
    }
    OutputWriter().write(output, report)
    typer.echo(f"Staffed {len(report['team'])} roles for '{session.proposal_title}'. Results saved to {output}.")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
