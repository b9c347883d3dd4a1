"""
Status/progress reporting for the studio UI.

The reporter writes into a mutable mapping (``st.session_state`` in the app,
a plain dict in tests) so the status line survives Streamlit reruns.
"""

from __future__ import annotations

from enum import Enum
from typing import MutableMapping, Optional

from .config import PLACEHOLDER_PROGRESS
from .utils import format_error, get_logger

logger = get_logger("status")

STATUS_KEY = "status"
LOADING_KEY = "is_loading"
STAGE_KEY = "stage"
PREVIEW_KEY = "preview"
FINAL_URL_KEY = "final_video_url"
RENDER_JOB_KEY = "render_job"


class Stage(str, Enum):
    IDLE = "idle"
    GENERATING_BLUEPRINT = "generating_blueprint"
    GENERATING_IMAGES = "generating_images"
    PREVIEW_READY = "preview_ready"
    SUBMITTING = "submitting"
    RENDERING = "rendering"
    DONE = "done"
    ERROR = "error"


DEFAULT_STATE = {
    STATUS_KEY: "",
    LOADING_KEY: False,
    STAGE_KEY: Stage.IDLE,
    PREVIEW_KEY: None,
    FINAL_URL_KEY: None,
    RENDER_JOB_KEY: None,
}


def init_state(state: MutableMapping) -> MutableMapping:
    """Fill in any missing UI state keys."""
    for key, value in DEFAULT_STATE.items():
        if key not in state:
            state[key] = value
    return state


class StatusReporter:
    """Single status string + loading flag, updated at each step transition."""

    def __init__(self, state: Optional[MutableMapping] = None, writer=None):
        self.state = init_state(state if state is not None else {})
        self.writer = writer

    @property
    def status(self) -> str:
        return self.state[STATUS_KEY]

    @property
    def is_loading(self) -> bool:
        return bool(self.state[LOADING_KEY])

    @property
    def stage(self) -> Stage:
        return self.state[STAGE_KEY]

    @property
    def progress(self) -> Optional[int]:
        """Fixed placeholder shown while loading, None otherwise."""
        return PLACEHOLDER_PROGRESS if self.is_loading else None

    def update(self, message: str, stage: Optional[Stage] = None) -> None:
        self.state[STATUS_KEY] = message
        if stage is not None:
            self.state[STAGE_KEY] = stage
        logger.info(message)
        if self.writer is not None:
            self.writer.write(message)

    def start(self, message: str, stage: Stage) -> None:
        self.state[LOADING_KEY] = True
        self.update(message, stage)

    def finish(self, message: str, stage: Stage) -> None:
        self.update(message, stage)
        self.state[LOADING_KEY] = False

    def fail(self, exc: BaseException) -> None:
        """Write the error into the status line and return to idle."""
        logger.error(f"Step failed: {exc}")
        self.state[STATUS_KEY] = format_error(exc)
        self.state[STAGE_KEY] = Stage.ERROR
        self.state[LOADING_KEY] = False
        if self.writer is not None:
            self.writer.write(f"❌ {self.state[STATUS_KEY]}")

    def warn(self, message: str) -> None:
        """Set a non-fatal status message (e.g. configuration problems)."""
        logger.error(message)
        self.state[STATUS_KEY] = message
