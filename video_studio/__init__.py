"""
AI Video Studio - Modular Components

This package contains the core modules for the AI Video Studio:
- config: Configuration, constants, and the StudioConfig model
- utils: Helper functions (logging, code-fence stripping)
- gemini_client: Gemini API client initialization
- blueprint: Blueprint Requester (script + image prompts from Gemini)
- creatomate_client: Creatomate API client (image generation and render submission)
- pipeline: Preview and render orchestration with status reporting
"""

__version__ = "0.1.0"

# Lazy imports to avoid circular dependencies and hot-reload issues
__all__ = [
    # Config
    "StudioConfig",
    "load_config",
    # Models
    "Blueprint",
    "PreviewData",
    "RenderJob",
    # Status
    "Stage",
    "StatusReporter",
    # Requesters
    "create_video_blueprint",
    "generate_image",
    "generate_images",
    "submit_render",
    # Pipeline
    "check_config",
    "run_preview",
    "run_create_video",
    "refresh_render",
]


def __getattr__(name):
    """Lazy import to avoid circular dependencies and streamlit hot-reload issues."""
    if name in __all__:
        if name in ("StudioConfig", "load_config"):
            from .config import StudioConfig, load_config
            return locals()[name]
        elif name in ("Blueprint", "PreviewData", "RenderJob"):
            from .models import Blueprint, PreviewData, RenderJob
            return locals()[name]
        elif name in ("Stage", "StatusReporter"):
            from .status import Stage, StatusReporter
            return locals()[name]
        elif name == "create_video_blueprint":
            from .blueprint import create_video_blueprint
            return create_video_blueprint
        elif name in ("generate_image", "generate_images", "submit_render"):
            from .creatomate_client import generate_image, generate_images, submit_render
            return locals()[name]
        elif name in ("check_config", "run_preview", "run_create_video", "refresh_render"):
            from .pipeline import check_config, run_preview, run_create_video, refresh_render
            return locals()[name]
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
