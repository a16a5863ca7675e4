"""Grupos de plantillas de URL de fábrica.

Orden de precedencia: `primary` (assets generación 1) antes que `secondary`
(generación 2). Son datos estáticos; el resolver los recibe como parámetro,
así que tests y usuarios pueden sustituirlos sin tocar el algoritmo.
"""

from __future__ import annotations

from core.domain.models import TemplateGroup

PRIMARY_TEMPLATES: tuple[str, ...] = (
    "https://www.assets.signify.com/is/content/PhilipsLighting/fp{12NC}-pss-global",
    "https://www.lighting.philips.com/api/assets/v1/file/Signify/content/"
    "{12NC}_EU.en_AA.PROF.FP/Localized_commercial_leaflet_{12NC}_en_AA.pdf",
)

SECONDARY_TEMPLATES: tuple[str, ...] = (
    "https://www.assets.signify.com/is/content/Signify/fp{12NC}-pss-global",
    "https://www.lighting.philips.com/api/assets/v1/file/PhilipsLighting/content/"
    "{12NC}_EU.en_AA.PROF.FP/Localized_commercial_leaflet_{12NC}_en_AA.pdf",
)

DEFAULT_TEMPLATE_GROUPS: tuple[TemplateGroup, ...] = (
    TemplateGroup(name="primary", templates=PRIMARY_TEMPLATES),
    TemplateGroup(name="secondary", templates=SECONDARY_TEMPLATES),
)
