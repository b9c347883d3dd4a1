"""
Gemini API client initialization and configuration.
"""

from __future__ import annotations
from typing import Optional

from google import genai
from google.genai import types as genai_types

from .config import StudioConfig


def get_genai_client(config: StudioConfig) -> Optional[genai.Client]:
    """
    Initialize and return Gemini API client.

    Returns:
        genai.Client instance or None if API key not available
    """
    if not config.gemini_api_key:
        return None
    return genai.Client(api_key=config.gemini_api_key)


def get_thinking_config(config: StudioConfig) -> Optional[genai_types.ThinkingConfig]:
    """
    Get thinking configuration from the configured budget.

    Returns:
        ThinkingConfig instance or None if not configured
    """
    if config.think_budget is None:
        return None
    return genai_types.ThinkingConfig(thinking_budget=config.think_budget)


def get_model_name(config: StudioConfig) -> str:
    """Gemini model used for blueprint generation."""
    return config.gemini_model
