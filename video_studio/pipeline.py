"""
Studio pipeline: prompt -> blueprint -> images -> preview -> render.

The ``run_*`` functions are what the UI calls: they drive the status
reporter and turn any failure into an error status instead of raising.
"""

from __future__ import annotations

import time
from typing import Callable, MutableMapping, Optional, Sequence

import requests

from .blueprint import create_video_blueprint
from .config import StudioConfig
from .creatomate_client import generate_images, get_render, submit_render
from .errors import EmptyPromptError, ResponseShapeError, StudioError
from .models import Blueprint, PreviewData, RenderJob
from .status import FINAL_URL_KEY, PREVIEW_KEY, RENDER_JOB_KEY, Stage, StatusReporter
from .templates import resolve_template
from .utils import get_logger

logger = get_logger("pipeline")

# Failures that end a step with an error status.
STEP_ERRORS = (StudioError, requests.RequestException)


def check_config(config: StudioConfig, reporter: StatusReporter) -> bool:
    """Surface missing API keys as status text. Never raises."""
    missing = config.missing_keys()
    if not missing:
        return True
    names = " and ".join(missing)
    verb = "is" if len(missing) == 1 else "are"
    reporter.warn(f"Error: {names} {verb} not set in the environment")
    return False


def assemble_preview(
    blueprint: Blueprint,
    generated_images: Sequence[str],
    state: MutableMapping,
) -> PreviewData:
    """Combine narration and images; replaces the previous preview and final URL."""
    preview = PreviewData(
        text_modifications=blueprint.text_modifications,
        generated_images=list(generated_images),
    )
    state[PREVIEW_KEY] = preview
    state[FINAL_URL_KEY] = None
    state[RENDER_JOB_KEY] = None
    return preview


def generate_preview(
    prompt_text: str,
    config: StudioConfig,
    reporter: StatusReporter,
    client=None,
    sleep: Callable[[float], None] = time.sleep,
) -> PreviewData:
    """
    Blueprint + sequential image generation. Raises on the first failure.
    """
    if not prompt_text or not prompt_text.strip():
        raise EmptyPromptError("Prompt must not be empty")

    state = reporter.state
    state[PREVIEW_KEY] = None
    state[FINAL_URL_KEY] = None
    state[RENDER_JOB_KEY] = None

    reporter.start("Step 1/2: AI is writing the script...", Stage.GENERATING_BLUEPRINT)
    template = resolve_template(config)
    blueprint = create_video_blueprint(prompt_text, config, client=client, template=template)

    reporter.update(
        "Step 2/2: AI is generating images one by one... (this may take 1-2 minutes)",
        Stage.GENERATING_IMAGES,
    )

    def _on_progress(index: int, total: int) -> None:
        reporter.update(f"Step 2/2: AI is generating image {index}/{total}...", Stage.GENERATING_IMAGES)

    images = generate_images(blueprint.prompt_texts, config, on_progress=_on_progress, sleep=sleep)

    preview = assemble_preview(blueprint, images, state)
    reporter.finish("Preview ready! Review the content and start the video.", Stage.PREVIEW_READY)
    return preview


def create_video(
    config: StudioConfig,
    reporter: StatusReporter,
    sleep: Callable[[float], None] = time.sleep,
) -> RenderJob:
    """
    Submit the current preview and wait a fixed delay before publishing the URL.

    The render job is not polled; after ``config.render_wait_seconds`` the URL
    from the submission response is treated as the finished video.
    """
    state = reporter.state
    preview = state.get(PREVIEW_KEY)
    if preview is None:
        raise StudioError("No preview data available")

    reporter.start("Sending data to the video engine for rendering...", Stage.SUBMITTING)
    job = submit_render(preview, config)
    state[RENDER_JOB_KEY] = job
    if not job.url:
        raise ResponseShapeError(f"Render response has no url (id={job.id})")

    reporter.update("Video is rendering, please wait...", Stage.RENDERING)
    sleep(config.render_wait_seconds)

    state[FINAL_URL_KEY] = job.url
    reporter.finish("Video complete!", Stage.DONE)
    return job


def refresh_render(config: StudioConfig, reporter: StatusReporter) -> Optional[RenderJob]:
    """Look up the last submitted render once and report its status."""
    job = reporter.state.get(RENDER_JOB_KEY)
    if job is None or not job.id:
        reporter.update("No render has been submitted yet.")
        return None
    try:
        current = get_render(job.id, config)
    except STEP_ERRORS as exc:
        reporter.fail(exc)
        return None
    reporter.state[RENDER_JOB_KEY] = current
    if current.url:
        reporter.state[FINAL_URL_KEY] = current.url
    message = f"Render status: {current.status or 'unknown'}"
    if current.message:
        message = f"{message} ({current.message})"
    reporter.update(message)
    return current


def run_preview(prompt_text: str, config: StudioConfig, reporter: StatusReporter, **kwargs) -> Optional[PreviewData]:
    try:
        return generate_preview(prompt_text, config, reporter, **kwargs)
    except STEP_ERRORS as exc:
        reporter.fail(exc)
        return None


def run_create_video(config: StudioConfig, reporter: StatusReporter, **kwargs) -> Optional[RenderJob]:
    try:
        return create_video(config, reporter, **kwargs)
    except STEP_ERRORS as exc:
        reporter.fail(exc)
        return None
