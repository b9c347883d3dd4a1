"""
Utility functions for AI Video Studio.
"""

from __future__ import annotations
import logging
import sys

_LOGGER_ROOT = "video_studio"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the ``video_studio`` namespace.

    The first call attaches a single stream handler to the package root
    logger so Streamlit reruns do not duplicate output.
    """
    global _configured
    root = logging.getLogger(_LOGGER_ROOT)
    if not _configured:
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
            )
            root.addHandler(handler)
        root.setLevel(logging.INFO)
        _configured = True
    return logging.getLogger(f"{_LOGGER_ROOT}.{name}")


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code-fence markers from model output.

    Every ```json and ``` marker is dropped, wherever it appears.
    """
    if not text:
        return ""
    return text.replace("```json", "").replace("```", "").strip()


def format_error(exc: BaseException) -> str:
    """User-facing status text for a failed step."""
    message = str(exc).strip() or exc.__class__.__name__
    return f"Error: {message}"
