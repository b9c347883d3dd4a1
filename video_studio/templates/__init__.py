"""
Template package: render templates and their image placeholders.
"""

from .registry import (
    ImageSlot,
    TemplateSpec,
    DEFAULT_IMAGE_SLOTS,
    get_template_specs,
    get_template_spec,
    resolve_template,
)

__all__ = ["ImageSlot", "TemplateSpec", "DEFAULT_IMAGE_SLOTS", "get_template_specs", "get_template_spec", "resolve_template"]
