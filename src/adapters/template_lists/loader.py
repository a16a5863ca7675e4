"""Carga de grupos de plantillas desde JSON.

Permite apuntar a otras generaciones de la API sin tocar código
(`--templates` o `SPECSHEET_TEMPLATES_PATH`).
"""

from __future__ import annotations

import json
from pathlib import Path

from adapters.template_lists.models import TemplateGroupsFile
from core.config import AppSettings
from core.domain.models import TemplateGroup
from core.templates import DEFAULT_TEMPLATE_GROUPS


def load_template_groups(path: Path) -> list[TemplateGroup]:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return TemplateGroupsFile.model_validate(data).groups


def resolve_template_groups(
    settings: AppSettings,
    *,
    path: Path | None = None,
) -> list[TemplateGroup]:
    """Grupos efectivos: `path` explícito > `settings.templates_path` > fábrica."""

    path = path or settings.templates_path
    if path is None:
        return list(DEFAULT_TEMPLATE_GROUPS)
    return load_template_groups(path)
