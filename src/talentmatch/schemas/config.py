"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from dataclasses import fields
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..core.scorers import RoleMatchConfig, SkillSlotConfig


class RankingSettings(BaseModel):
    top_n: int | None = Field(default=None, ge=1)
    slot_min_score: float | None = None
    slot_placeholder_days: int | None = Field(default=None, ge=0)


class AggregationSettings(BaseModel):
    high_threshold: float | None = None
    medium_threshold: float | None = None


class ScorerSettings(BaseModel):
    role: dict[str, Any] | None = None
    slot: dict[str, Any] | None = None

    @field_validator("role")
    @classmethod
    def _known_role_keys(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        return _check_keys(value, RoleMatchConfig)

    @field_validator("slot")
    @classmethod
    def _known_slot_keys(cls, value: dict[str, Any] | None) -> dict[str, Any] | None:
        return _check_keys(value, SkillSlotConfig)


def _check_keys(value: dict[str, Any] | None, config_cls: type) -> dict[str, Any] | None:
    if value is None:
        return value
    allowed = {item.name for item in fields(config_cls)}
    unknown = sorted(set(value) - allowed)
    if unknown:
        raise ValueError(f"Unknown {config_cls.__name__} keys: {', '.join(unknown)}")
    return value


class BuilderSettings(BaseModel):
    upload_delay: float | None = Field(default=None, ge=0)
    generation_delay: float | None = Field(default=None, ge=0)


class AppConfig(BaseModel):
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    scorers: ScorerSettings = Field(default_factory=ScorerSettings)
    builder: BuilderSettings = Field(default_factory=BuilderSettings)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        for section in ("ranking", "aggregation", "builder"):
            values = getattr(self, section).model_dump(exclude_none=True)
            if values:
                settings[section] = values
        scorer_settings = self.scorers.model_dump(exclude_none=True)
        if scorer_settings:
            settings["scorers"] = scorer_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
