"""
Configuration, constants, and data models for AI Video Studio.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from .utils import get_logger

logger = get_logger("config")

# ---------- Endpoints ----------
CREATOMATE_IMAGES_URL = "https://creatomate.com/api/v1/images"
CREATOMATE_RENDERS_URL = "https://api.creatomate.com/v1/renders"

# ---------- Defaults ----------
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPLATE_ID = "006ce3c2-c215-4f2b-b38b-3ed184336793"
IMAGE_WIDTH = 800
IMAGE_HEIGHT = 600
DEFAULT_IMAGE_PACING_SECONDS = 1.0
DEFAULT_RENDER_WAIT_SECONDS = 8.0

# Shown while loading; no real progress is computed.
PLACEHOLDER_PROGRESS = 33

GEMINI_KEY_VARS = ("GEMINI_API_KEY", "GOOGLE_GENAI_API_KEY", "VITE_GEMINI_API_KEY")
CREATOMATE_KEY_VARS = ("CREATOMATE_API_KEY", "VITE_CREATOMATE_API_KEY")


BLUEPRINT_PROMPT_TEMPLATE = """
You are a professional video producer. Your task is to produce a JSON object, based on the user's request, that will be used for further processing.
User request: "{prompt}"
You must produce a JSON object with two parts: a "text_modifications" object and an "image_prompts" object.

1.  **"text_modifications" object**: contains all text information, such as narration, titles and timestamps.
2.  **"image_prompts" object**: contains 6 keys ({key_list}). Each value must be a **detailed English description for AI image generation**. The descriptions should be concrete and visual so they produce high-quality images, and must match the topic of the user's request. For example, for a video about the history of cars: "A historical black and white photograph of the 1886 Benz Patent-Motorwagen, the world's first automobile, displayed in a vintage setting".

Important: output only the raw JSON object, do not wrap it in markdown.
"""


def _first_env(environ: Mapping[str, str], names) -> str:
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return ""


def _float_env(environ: Mapping[str, str], name: str, default: Optional[float]) -> Optional[float]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default
    if value < 0:
        logger.warning(f"Ignoring negative {name}={raw!r}, using {default}")
        return default
    return value


def _int_env(environ: Mapping[str, str], name: str) -> Optional[int]:
    raw = (environ.get(name) or "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}")
        return None


# ---------- Data Models ----------
@dataclass
class StudioConfig:
    """Settings injected into the requesters; built once at app start."""
    gemini_api_key: str = ""
    creatomate_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    think_budget: Optional[int] = None
    template_key: str = "default"
    template_id: str = DEFAULT_TEMPLATE_ID
    image_pacing_seconds: float = DEFAULT_IMAGE_PACING_SECONDS
    render_wait_seconds: float = DEFAULT_RENDER_WAIT_SECONDS
    request_timeout: Optional[float] = None
    images_url: str = CREATOMATE_IMAGES_URL
    renders_url: str = CREATOMATE_RENDERS_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StudioConfig":
        """Read settings from the environment (or a given mapping)."""
        env = os.environ if environ is None else environ
        return cls(
            gemini_api_key=_first_env(env, GEMINI_KEY_VARS),
            creatomate_api_key=_first_env(env, CREATOMATE_KEY_VARS),
            gemini_model=(env.get("GEMINI_MODEL") or "").strip() or DEFAULT_GEMINI_MODEL,
            think_budget=_int_env(env, "GEMINI_THINK_BUDGET"),
            template_id=(env.get("CREATOMATE_TEMPLATE_ID") or "").strip() or DEFAULT_TEMPLATE_ID,
            image_pacing_seconds=_float_env(env, "IMAGE_PACING_SECONDS", DEFAULT_IMAGE_PACING_SECONDS),
            render_wait_seconds=_float_env(env, "RENDER_WAIT_SECONDS", DEFAULT_RENDER_WAIT_SECONDS),
            request_timeout=_float_env(env, "HTTP_TIMEOUT_SECONDS", None),
        )

    def missing_keys(self) -> List[str]:
        """Names of the API keys that are not set."""
        missing = []
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if not self.creatomate_api_key:
            missing.append("CREATOMATE_API_KEY")
        return missing

    def creatomate_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.creatomate_api_key}",
            "Content-Type": "application/json",
        }


def load_config(environ: Optional[Mapping[str, str]] = None) -> StudioConfig:
    """
    Build the studio configuration.

    Loads a ``.env`` file first when reading the real process environment.
    """
    if environ is None:
        load_dotenv()
    config = StudioConfig.from_env(environ)
    missing = config.missing_keys()
    if missing:
        logger.error(f"Missing API keys: {', '.join(missing)}")
    return config
