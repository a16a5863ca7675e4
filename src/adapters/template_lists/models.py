"""Modelos para listas de plantillas (data-driven).

Formato:
    {"groups": [{"name": "primary", "templates": ["https://.../{12NC}.pdf"]}]}
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from core.domain.models import TemplateGroup


class TemplateGroupsFile(BaseModel):
    groups: list[TemplateGroup] = Field(..., min_length=1)

    @field_validator("groups")
    @classmethod
    def _unique_names(cls, groups: list[TemplateGroup]) -> list[TemplateGroup]:
        seen: set[str] = set()
        for group in groups:
            if group.name in seen:
                raise ValueError(f"duplicated template group: {group.name!r}")
            seen.add(group.name)
        return groups
