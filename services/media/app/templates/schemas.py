"""
MediaConvert templates — Pydantic V2 schemas.

Field aliases match the CloudFormation resource properties and the
MediaConvert API shapes, so payloads can be validated and dumped as-is.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ── Base ─────────────────────────────────────────────────────────────────────

class _Base(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
    )


# ── Configuration ────────────────────────────────────────────────────────────

class TemplateConfig(_Base):
    """Per-invocation input, taken from the custom resource properties."""
    model_config = ConfigDict(extra="ignore")

    stack_name: str = Field(alias="StackName", min_length=1, max_length=128)
    endpoint: str = Field(default="", alias="EndPoint")
    enable_media_package: bool = Field(default=False, alias="EnableMediaPackage")


# ── Catalog definitions ──────────────────────────────────────────────────────

class _Definition(_Base):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(alias="Name", min_length=1)
    description: str = Field(alias="Description")
    category: str = Field(alias="Category")
    settings: dict[str, Any] = Field(alias="Settings")

    def to_request(self) -> dict[str, Any]:
        """Keyword arguments for the matching MediaConvert create call."""
        return self.model_dump(by_alias=True)


class PresetDefinition(_Definition):
    """Payload for CreatePreset."""


class TemplateDefinition(_Definition):
    """Payload for CreateJobTemplate."""

    @property
    def preset_names(self) -> list[str]:
        return [
            output["Preset"]
            for group in self.settings.get("OutputGroups", [])
            for output in group.get("Outputs", [])
            if "Preset" in output
        ]


class CatalogItem(_Base):
    """A job template together with the preset it references."""
    preset: PresetDefinition
    template: TemplateDefinition


# ── Remote catalog ───────────────────────────────────────────────────────────

class CatalogEntry(_Base):
    """A job template as reported by ListJobTemplates."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(alias="Name")
