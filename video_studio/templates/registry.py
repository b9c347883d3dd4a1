"""
Render template registry.

Each template fixes the ordered image placeholders the blueprint's image
prompts are bound to.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from ..config import DEFAULT_TEMPLATE_ID, IMAGE_HEIGHT, IMAGE_WIDTH


@dataclass(frozen=True)
class ImageSlot:
    prompt_key: str  # key the text model is asked to produce
    placeholder: str  # template modification key, e.g. "Photo-1.source"


DEFAULT_IMAGE_SLOTS: Tuple[ImageSlot, ...] = (
    ImageSlot("photo_1_prompt", "Photo-1.source"),
    ImageSlot("photo_2_prompt", "Photo-2.source"),
    ImageSlot("photo_3_prompt", "Photo-3.source"),
    ImageSlot("photo_4_prompt", "Photo-4.source"),
    ImageSlot("photo_5_prompt", "Photo-5.source"),
    ImageSlot("agent_photo_prompt", "Picture.source"),
)


@dataclass(frozen=True)
class TemplateSpec:
    key: str
    label: str
    template_id: str
    image_slots: Tuple[ImageSlot, ...]
    image_width: int
    image_height: int

    @property
    def prompt_keys(self) -> List[str]:
        return [slot.prompt_key for slot in self.image_slots]

    @property
    def placeholders(self) -> List[str]:
        return [slot.placeholder for slot in self.image_slots]


def get_template_specs() -> List[TemplateSpec]:
    """Return supported render templates in display order."""
    return [
        TemplateSpec(
            key="default",
            label="Narrated slideshow (6 photos)",
            template_id=DEFAULT_TEMPLATE_ID,
            image_slots=DEFAULT_IMAGE_SLOTS,
            image_width=IMAGE_WIDTH,
            image_height=IMAGE_HEIGHT,
        ),
    ]


def get_template_spec(key: str) -> TemplateSpec:
    """Lookup a template by key."""
    for spec in get_template_specs():
        if spec.key == key:
            return spec
    raise KeyError(f"Unknown template key: {key}")


def resolve_template(config) -> TemplateSpec:
    """Template selected by a StudioConfig, with its template id override applied."""
    spec = get_template_spec(config.template_key)
    if config.template_id and config.template_id != spec.template_id:
        spec = replace(spec, template_id=config.template_id)
    return spec
