"""
Unit tests for the Blueprint Requester (Gemini text generation + parsing).
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path
from types import SimpleNamespace

import httpx
from google.genai import errors as genai_errors

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from video_studio.blueprint import (  # noqa: E402
    build_blueprint_prompt,
    check_blueprint,
    create_video_blueprint,
    parse_blueprint,
)
from video_studio.config import StudioConfig  # noqa: E402
from video_studio.errors import (  # noqa: E402
    BlueprintError,
    BlueprintParseError,
    ConfigurationError,
    ResponseShapeError,
)
from video_studio.templates import get_template_spec  # noqa: E402

FENCED = (
    '```json {"text_modifications":{"title":"T"},"image_prompts":'
    '{"a":"p1","b":"p2","c":"p3","d":"p4","e":"p5","f":"p6"}} ```'
)

SIX_PROMPTS = (
    '{"text_modifications": {"Voiceover": "Cars changed the world.", "Duration": 30},'
    ' "image_prompts": {"photo_1_prompt": "p1", "photo_2_prompt": "p2", "photo_3_prompt": "p3",'
    ' "photo_4_prompt": "p4", "photo_5_prompt": "p5", "agent_photo_prompt": "p6"}}'
)


def _response(text):
    part = SimpleNamespace(text=text)
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeModels:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.exc is not None:
            raise self.exc
        return self.response


class FakeClient:
    def __init__(self, response=None, exc=None):
        self.models = FakeModels(response, exc)


class TestParseBlueprint(unittest.TestCase):

    def test_fenced_json_is_stripped_and_parsed(self):
        blueprint = parse_blueprint(FENCED)
        self.assertEqual(blueprint.text_modifications["title"], "T")
        self.assertEqual(len(blueprint.image_prompts), 6)

    def test_key_order_is_preserved(self):
        blueprint = parse_blueprint(FENCED)
        self.assertEqual(blueprint.prompt_keys, ["a", "b", "c", "d", "e", "f"])
        self.assertEqual(blueprint.prompt_texts, ["p1", "p2", "p3", "p4", "p5", "p6"])

    def test_invalid_json_raises_parse_error(self):
        with self.assertRaises(BlueprintParseError):
            parse_blueprint("```json\nSure! Here is your video plan.\n```")

    def test_missing_image_prompts_raises_shape_error(self):
        with self.assertRaises(ResponseShapeError):
            parse_blueprint('{"text_modifications": {"title": "T"}}')

    def test_non_object_raises_shape_error(self):
        with self.assertRaises(ResponseShapeError):
            parse_blueprint('["not", "an", "object"]')

    def test_fewer_prompts_are_not_rejected(self):
        blueprint = parse_blueprint('{"text_modifications": {}, "image_prompts": {"a": "p1"}}')
        self.assertEqual(len(blueprint.image_prompts), 1)


class TestCheckBlueprint(unittest.TestCase):

    def test_matching_blueprint_has_no_problems(self):
        self.assertEqual(check_blueprint(parse_blueprint(SIX_PROMPTS)), [])

    def test_wrong_keys_and_count_reported(self):
        blueprint = parse_blueprint('{"text_modifications": {}, "image_prompts": {"a": " "}}')
        problems = check_blueprint(blueprint, get_template_spec("default"))
        self.assertEqual(len(problems), 3)


class TestCreateVideoBlueprint(unittest.TestCase):

    def setUp(self):
        self.config = StudioConfig(gemini_api_key="g-key", creatomate_api_key="c-key")

    def test_prompt_embeds_request_and_slot_keys(self):
        text = build_blueprint_prompt("history of cars")
        self.assertIn('"history of cars"', text)
        self.assertIn('"photo_1_prompt"', text)
        self.assertIn('"agent_photo_prompt"', text)

    def test_successful_call(self):
        client = FakeClient(_response(FENCED))
        blueprint = create_video_blueprint("history of cars", self.config, client=client)
        self.assertEqual(blueprint.text_modifications, {"title": "T"})
        self.assertEqual(len(client.models.calls), 1)
        call = client.models.calls[0]
        self.assertEqual(call["model"], self.config.gemini_model)
        self.assertIn("history of cars", call["contents"])

    def test_http_error_carries_status_text(self):
        exc = genai_errors.ClientError(
            400,
            {"error": {"code": 400, "message": "API key not valid.", "status": "INVALID_ARGUMENT"}},
        )
        with self.assertRaises(BlueprintError) as ctx:
            create_video_blueprint("x", self.config, client=FakeClient(exc=exc))
        self.assertIn("INVALID_ARGUMENT", str(ctx.exception))
        self.assertEqual(ctx.exception.status_code, 400)

    def test_transport_error_becomes_blueprint_error(self):
        exc = httpx.ReadTimeout("timed out")
        with self.assertRaises(BlueprintError) as ctx:
            create_video_blueprint("x", self.config, client=FakeClient(exc=exc))
        self.assertEqual(str(ctx.exception), "Gemini text generation failed: timed out")
        self.assertIsNone(ctx.exception.status_code)

    def test_missing_candidates_is_shape_error(self):
        client = FakeClient(SimpleNamespace(candidates=[]))
        with self.assertRaises(ResponseShapeError):
            create_video_blueprint("x", self.config, client=client)

    def test_missing_key_without_client(self):
        with self.assertRaises(ConfigurationError):
            create_video_blueprint("x", StudioConfig())


if __name__ == "__main__":
    unittest.main()
