"""
Blueprint Requester - asks Gemini for the narration and image prompts of a video.
"""

from __future__ import annotations
import json
from typing import List, Optional

import httpx
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from .config import BLUEPRINT_PROMPT_TEMPLATE, StudioConfig
from .errors import BlueprintError, BlueprintParseError, ConfigurationError, ResponseShapeError
from .gemini_client import get_genai_client, get_model_name, get_thinking_config
from .models import Blueprint
from .templates import DEFAULT_IMAGE_SLOTS, TemplateSpec
from .utils import get_logger, strip_code_fences

logger = get_logger("blueprint")


def build_blueprint_prompt(prompt_text: str, template: Optional[TemplateSpec] = None) -> str:
    """Embed the user's request in the fixed instruction template."""
    slots = template.image_slots if template is not None else DEFAULT_IMAGE_SLOTS
    key_list = ", ".join(f'"{slot.prompt_key}"' for slot in slots)
    return BLUEPRINT_PROMPT_TEMPLATE.format(prompt=prompt_text, key_list=key_list)


def _response_text(response) -> str:
    try:
        text = response.candidates[0].content.parts[0].text
    except (AttributeError, IndexError, KeyError, TypeError) as exc:
        raise ResponseShapeError(f"Unexpected Gemini response shape: {exc}") from exc
    if text is None:
        raise ResponseShapeError("Gemini response has no text part")
    return text


def parse_blueprint(text: str) -> Blueprint:
    """
    Parse the model's answer into a Blueprint.

    Code fences are stripped first. The number of image prompts is not
    enforced here; see check_blueprint.

    Raises:
        BlueprintParseError: cleaned text is not valid JSON
        ResponseShapeError: JSON lacks the two expected objects
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise BlueprintParseError(f"Could not parse blueprint JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ResponseShapeError("Blueprint is not a JSON object")
    for key in ("text_modifications", "image_prompts"):
        if not isinstance(data.get(key), dict):
            raise ResponseShapeError(f"Blueprint is missing the '{key}' object")

    return Blueprint.from_dict(data)


def check_blueprint(blueprint: Blueprint, template: Optional[TemplateSpec] = None) -> List[str]:
    """
    List the ways a blueprint deviates from a template's image slots.

    The pipeline does not reject such blueprints; this is for diagnostics.
    """
    slots = template.image_slots if template is not None else DEFAULT_IMAGE_SLOTS
    problems = []
    expected = [slot.prompt_key for slot in slots]
    if len(blueprint.image_prompts) != len(expected):
        problems.append(f"expected {len(expected)} image prompts, got {len(blueprint.image_prompts)}")
    if blueprint.prompt_keys != expected:
        problems.append(f"image prompt keys {blueprint.prompt_keys} differ from {expected}")
    for key, text in blueprint.image_prompts:
        if not isinstance(text, str) or not text.strip():
            problems.append(f"image prompt '{key}' is empty or not a string")
    return problems


def create_video_blueprint(
    prompt_text: str,
    config: StudioConfig,
    client=None,
    template: Optional[TemplateSpec] = None,
) -> Blueprint:
    """
    Ask Gemini for a video blueprint for ``prompt_text``.

    Returns:
        Blueprint with text_modifications and ordered image prompts.
    """
    logger.info(f"🤖 Creating blueprint for prompt: {prompt_text!r}")
    client = client or get_genai_client(config)
    if client is None:
        raise ConfigurationError("GEMINI_API_KEY is not set")

    try:
        response = client.models.generate_content(
            model=get_model_name(config),
            contents=build_blueprint_prompt(prompt_text, template),
            config=genai_types.GenerateContentConfig(
                thinking_config=get_thinking_config(config),
            ),
        )
    except genai_errors.APIError as exc:
        status_text = exc.status or str(exc.code)
        raise BlueprintError(
            f"Gemini text generation failed: {status_text}",
            status_code=exc.code,
            body=exc.message,
        ) from exc
    except httpx.HTTPError as exc:
        raise BlueprintError(f"Gemini text generation failed: {exc}") from exc

    blueprint = parse_blueprint(_response_text(response))
    for problem in check_blueprint(blueprint, template):
        logger.warning(f"Blueprint deviates from template: {problem}")
    logger.info(f"Blueprint received ({len(blueprint.image_prompts)} image prompts)")
    return blueprint
