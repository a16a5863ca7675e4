from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from adapters.template_lists import load_template_groups, resolve_template_groups
from core.domain.models import PLACEHOLDER, TemplateGroup
from core.templates import DEFAULT_TEMPLATE_GROUPS


def test_default_groups_are_primary_then_secondary() -> None:
    assert [group.name for group in DEFAULT_TEMPLATE_GROUPS] == ["primary", "secondary"]
    for group in DEFAULT_TEMPLATE_GROUPS:
        assert group.templates
        assert all(PLACEHOLDER in template for template in group.templates)


def test_expand_replaces_every_placeholder() -> None:
    group = TemplateGroup(name="g", templates=("https://x.test/{12NC}/leaflet_{12NC}.pdf",))

    assert group.expand("911401510832") == ["https://x.test/911401510832/leaflet_911401510832.pdf"]


def test_template_without_placeholder_is_rejected() -> None:
    with pytest.raises(ValidationError):
        TemplateGroup(name="g", templates=("https://x.test/static.pdf",))


def test_empty_group_is_rejected() -> None:
    with pytest.raises(ValidationError):
        TemplateGroup(name="g", templates=())


def _write(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "templates.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_template_groups_keeps_order(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "groups": [
                {"name": "v6", "templates": ["https://b.test/{12NC}", "https://c.test/{12NC}"]},
                {"name": "v5", "templates": ["https://a.test/{12NC}"]},
            ]
        },
    )

    groups = load_template_groups(path)

    assert [group.name for group in groups] == ["v6", "v5"]
    assert groups[0].templates == ("https://b.test/{12NC}", "https://c.test/{12NC}")


def test_duplicate_group_names_are_rejected(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        {
            "groups": [
                {"name": "primary", "templates": ["https://a.test/{12NC}"]},
                {"name": "primary", "templates": ["https://b.test/{12NC}"]},
            ]
        },
    )

    with pytest.raises(ValidationError):
        load_template_groups(path)


def test_resolve_template_groups_precedence(settings, tmp_path: Path) -> None:
    from_settings = _write(tmp_path, {"groups": [{"name": "settings", "templates": ["https://s.test/{12NC}"]}]})
    explicit = tmp_path / "explicit.json"
    explicit.write_text(
        json.dumps({"groups": [{"name": "explicit", "templates": ["https://e.test/{12NC}"]}]}),
        encoding="utf-8",
    )

    assert resolve_template_groups(settings) == list(DEFAULT_TEMPLATE_GROUPS)

    configured = settings.model_copy(update={"templates_path": from_settings})
    assert [g.name for g in resolve_template_groups(configured)] == ["settings"]
    assert [g.name for g in resolve_template_groups(configured, path=explicit)] == ["explicit"]
