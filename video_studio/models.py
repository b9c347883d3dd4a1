"""
Data models passed between pipeline steps.

Blueprint comes from the text model, PreviewData is what the user confirms,
RenderJob is the render service's answer to a submission.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class Blueprint:
    """Narration fields plus the ordered image prompts for one video."""

    text_modifications: Dict[str, Any]
    # (key, prompt) pairs in the order the model returned them
    image_prompts: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def prompt_keys(self) -> List[str]:
        return [key for key, _ in self.image_prompts]

    @property
    def prompt_texts(self) -> List[str]:
        return [text for _, text in self.image_prompts]

    @classmethod
    def from_dict(cls, data: dict) -> "Blueprint":
        return cls(
            text_modifications=dict(data["text_modifications"]),
            image_prompts=[(str(k), v) for k, v in data["image_prompts"].items()],
        )

    def to_dict(self) -> dict:
        return {
            "text_modifications": self.text_modifications,
            "image_prompts": dict(self.image_prompts),
        }


@dataclass
class PreviewData:
    """Narration fields and generated image URLs shown before rendering."""

    text_modifications: Dict[str, Any]
    generated_images: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "text_modifications": self.text_modifications,
            "generated_images": list(self.generated_images),
        }


@dataclass
class RenderJob:
    """One element of the render endpoint's response."""

    id: Optional[str] = None
    status: Optional[str] = None
    url: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RenderJob":
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            url=data.get("url"),
            message=data.get("message") or data.get("error_message"),
        )
