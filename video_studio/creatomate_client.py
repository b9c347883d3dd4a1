"""
Creatomate API Client - generate images and submit template renders.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from .config import StudioConfig
from .errors import ConfigurationError, ImageGenerationError, RenderError, ResponseShapeError
from .models import PreviewData, RenderJob
from .task_queue import SequentialTaskQueue
from .templates import TemplateSpec, resolve_template
from .utils import get_logger

logger = get_logger("creatomate")

RENDER_FALLBACK_MESSAGE = "Creatomate API error"


def _require_key(config: StudioConfig) -> None:
    if not config.creatomate_api_key:
        raise ConfigurationError("CREATOMATE_API_KEY is not set")


def _first_item(data: Any, what: str) -> dict:
    try:
        item = data[0]
    except (IndexError, KeyError, TypeError) as exc:
        raise ResponseShapeError(f"Unexpected {what} response: {data!r}") from exc
    if not isinstance(item, dict):
        raise ResponseShapeError(f"Unexpected {what} response: {data!r}")
    return item


def generate_image(image_prompt: str, config: StudioConfig, template: Optional[TemplateSpec] = None) -> str:
    """
    Generate one image for ``image_prompt`` and return its URL.

    Raises:
        ImageGenerationError: non-success response (reason + body in message)
        ResponseShapeError: response lacks ``[0].url``
    """
    _require_key(config)
    template = template or resolve_template(config)
    logger.info(f"🎨 Generating image for prompt: {image_prompt!r}")

    resp = requests.post(
        config.images_url,
        headers=config.creatomate_headers(),
        json={
            "prompt": image_prompt,
            "output_width": template.image_width,
            "output_height": template.image_height,
        },
        timeout=config.request_timeout,
    )
    if not resp.ok:
        raise ImageGenerationError(
            f"AI image generation failed: {resp.reason} - {resp.text}",
            status_code=resp.status_code,
            body=resp.text,
        )

    item = _first_item(resp.json(), "image")
    image_url = item.get("url")
    if not image_url:
        raise ResponseShapeError(f"Image response has no url: {item!r}")
    logger.info(f"✅ Image generated: {image_url}")
    return image_url


def generate_images(
    image_prompts: Sequence[str],
    config: StudioConfig,
    on_progress: Optional[Callable[[int, int], None]] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> List[str]:
    """
    Generate one image per prompt, strictly in order, pausing after each.

    The first failure stops the loop; nothing generated so far is returned.
    """
    template = resolve_template(config)
    queue = SequentialTaskQueue(
        delay_seconds=config.image_pacing_seconds,
        maxsize=len(image_prompts),
        sleep=sleep,
    )
    for index, prompt in enumerate(image_prompts, start=1):
        queue.add(f"image {index}", lambda prompt=prompt: generate_image(prompt, config, template))

    def _on_start(index: int, total: int, label: str) -> None:
        if on_progress is not None:
            on_progress(index, total)

    return queue.run(on_start=_on_start)


def build_modifications(preview: PreviewData, template: TemplateSpec) -> Dict[str, Any]:
    """
    Merge narration fields with the image placeholders.

    Images bind positionally to the template's slots. Missing positions are
    sent as null; extra images are ignored.
    """
    images = list(preview.generated_images)
    slots = template.image_slots
    if len(images) != len(slots):
        logger.warning(f"Preview has {len(images)} images for {len(slots)} template slots")

    image_modifications = {
        slot.placeholder: images[index] if index < len(images) else None
        for index, slot in enumerate(slots)
    }
    return {**preview.text_modifications, **image_modifications}


def build_render_payload(preview: PreviewData, template: TemplateSpec) -> dict:
    return {
        "template_id": template.template_id,
        "modifications": build_modifications(preview, template),
    }


def _render_error_message(data: Any) -> str:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0].get("message") or RENDER_FALLBACK_MESSAGE
    if isinstance(data, dict):
        return data.get("message") or RENDER_FALLBACK_MESSAGE
    return RENDER_FALLBACK_MESSAGE


def submit_render(preview: PreviewData, config: StudioConfig) -> RenderJob:
    """
    Submit the preview to the render endpoint.

    Returns the first render job of the response; its ``url`` is where the
    video will be once rendering finishes.
    """
    _require_key(config)
    template = resolve_template(config)
    payload = build_render_payload(preview, template)
    logger.info(f"🚀 Submitting render for template {template.template_id}")

    resp = requests.post(
        config.renders_url,
        headers=config.creatomate_headers(),
        json=payload,
        timeout=config.request_timeout,
    )
    try:
        data = resp.json()
    except ValueError:
        data = None

    if not resp.ok:
        raise RenderError(_render_error_message(data), status_code=resp.status_code, body=resp.text)

    job = RenderJob.from_dict(_first_item(data, "render"))
    logger.info(f"✅ Render submitted (id={job.id}, status={job.status})")
    return job


def get_render(render_id: str, config: StudioConfig) -> RenderJob:
    """Look up a render job once. Not polled automatically."""
    _require_key(config)
    resp = requests.get(
        f"{config.renders_url}/{render_id}",
        headers=config.creatomate_headers(),
        timeout=config.request_timeout,
    )
    try:
        data = resp.json()
    except ValueError:
        data = None

    if not resp.ok:
        raise RenderError(_render_error_message(data), status_code=resp.status_code, body=resp.text)
    if not isinstance(data, dict):
        raise ResponseShapeError(f"Unexpected render status response: {data!r}")
    return RenderJob.from_dict(data)
