"""Dependency injection container for the matching engine."""

from __future__ import annotations

from typing import Any

from dependency_injector import containers, providers

from .builder import BuilderConfig, ManualTeamBuilder, TeamBuilderSession
from .core import (
    AggregationConfig,
    RankingEngine,
    RoleMatchConfig,
    RoleMatchScorer,
    SkillSlotConfig,
    SkillSlotScorer,
    TeamAggregator,
)
from .core.ranking import DEFAULT_SLOT_MIN_SCORE, DEFAULT_SLOT_PLACEHOLDER_DAYS, DEFAULT_TOP_N
from .pipeline import TeamBuildPipeline


class TalentMatchContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration(
        default={
            "ranking": {
                "top_n": DEFAULT_TOP_N,
                "slot_min_score": DEFAULT_SLOT_MIN_SCORE,
                "slot_placeholder_days": DEFAULT_SLOT_PLACEHOLDER_DAYS,
            }
        }
    )

    role_scorer = providers.Singleton(RoleMatchScorer)
    slot_scorer = providers.Singleton(SkillSlotScorer)

    role_engine = providers.Singleton(
        RankingEngine,
        scorer=role_scorer,
        top_n=config.ranking.top_n,
    )

    slot_engine = providers.Singleton(
        RankingEngine,
        scorer=slot_scorer,
        top_n=config.ranking.top_n,
        min_score=config.ranking.slot_min_score,
        placeholder_days=config.ranking.slot_placeholder_days,
    )

    aggregator = providers.Singleton(TeamAggregator)

    builder_config = providers.Singleton(BuilderConfig)

    team_builder = providers.Factory(
        TeamBuilderSession,
        engine=role_engine,
        aggregator=aggregator,
        config=builder_config,
    )

    manual_builder = providers.Factory(
        ManualTeamBuilder,
        engine=slot_engine,
        aggregator=aggregator,
        config=builder_config,
    )

    pipeline = providers.Factory(
        TeamBuildPipeline,
        role_engine=role_engine,
        slot_engine=slot_engine,
        aggregator=aggregator,
    )


def create_container(*, settings: dict[str, Any] | None = None) -> TalentMatchContainer:
    """Instantiate container with optional overrides."""

    container = TalentMatchContainer()

    if not settings:
        return container

    if settings.get("ranking"):
        container.config.from_dict({"ranking": settings["ranking"]})

    scorer_settings = settings.get("scorers", {})

    if "role" in scorer_settings:
        role_config = RoleMatchConfig(**scorer_settings["role"])
        container.role_scorer.override(providers.Singleton(RoleMatchScorer, config=role_config))

    if "slot" in scorer_settings:
        slot_config = SkillSlotConfig(**scorer_settings["slot"])
        container.slot_scorer.override(providers.Singleton(SkillSlotScorer, config=slot_config))

    if settings.get("aggregation"):
        aggregation_config = AggregationConfig(**settings["aggregation"])
        container.aggregator.override(
            providers.Singleton(TeamAggregator, config=aggregation_config)
        )

    if settings.get("builder"):
        container.builder_config.override(
            providers.Singleton(BuilderConfig, **settings["builder"])
        )

    return container
