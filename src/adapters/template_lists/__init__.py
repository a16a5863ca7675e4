from adapters.template_lists.loader import load_template_groups, resolve_template_groups
from adapters.template_lists.models import TemplateGroupsFile

__all__ = [
    "TemplateGroupsFile",
    "load_template_groups",
    "resolve_template_groups",
]
