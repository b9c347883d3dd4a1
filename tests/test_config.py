"""
Unit tests for configuration loading, templates and the sequential task queue.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from video_studio.config import (  # noqa: E402
    DEFAULT_GEMINI_MODEL,
    DEFAULT_TEMPLATE_ID,
    StudioConfig,
    load_config,
)
from video_studio.task_queue import QueueFullError, SequentialTaskQueue  # noqa: E402
from video_studio.templates import get_template_spec, resolve_template  # noqa: E402


class TestStudioConfig(unittest.TestCase):

    def test_defaults_from_empty_environment(self):
        config = StudioConfig.from_env({})
        self.assertEqual(config.gemini_model, DEFAULT_GEMINI_MODEL)
        self.assertEqual(config.template_id, DEFAULT_TEMPLATE_ID)
        self.assertEqual(config.image_pacing_seconds, 1.0)
        self.assertEqual(config.render_wait_seconds, 8.0)
        self.assertIsNone(config.request_timeout)
        self.assertIsNone(config.think_budget)
        self.assertEqual(config.missing_keys(), ["GEMINI_API_KEY", "CREATOMATE_API_KEY"])

    def test_key_fallback_names(self):
        config = StudioConfig.from_env({
            "GOOGLE_GENAI_API_KEY": "g2",
            "VITE_CREATOMATE_API_KEY": "c2",
        })
        self.assertEqual(config.gemini_api_key, "g2")
        self.assertEqual(config.creatomate_api_key, "c2")
        self.assertEqual(config.missing_keys(), [])

    def test_primary_key_wins(self):
        config = StudioConfig.from_env({"GEMINI_API_KEY": "g1", "GOOGLE_GENAI_API_KEY": "g2"})
        self.assertEqual(config.gemini_api_key, "g1")

    def test_numeric_settings(self):
        config = StudioConfig.from_env({
            "IMAGE_PACING_SECONDS": "0.5",
            "RENDER_WAIT_SECONDS": "bogus",
            "HTTP_TIMEOUT_SECONDS": "30",
            "GEMINI_THINK_BUDGET": "1024",
        })
        self.assertEqual(config.image_pacing_seconds, 0.5)
        self.assertEqual(config.render_wait_seconds, 8.0)
        self.assertEqual(config.request_timeout, 30.0)
        self.assertEqual(config.think_budget, 1024)

    def test_load_config_with_mapping_does_not_raise_on_missing_keys(self):
        config = load_config({})
        self.assertEqual(len(config.missing_keys()), 2)

    def test_bearer_header(self):
        headers = StudioConfig(creatomate_api_key="abc").creatomate_headers()
        self.assertEqual(headers["Authorization"], "Bearer abc")


class TestTemplates(unittest.TestCase):

    def test_default_template_has_six_ordered_slots(self):
        spec = get_template_spec("default")
        self.assertEqual(
            spec.placeholders,
            ["Photo-1.source", "Photo-2.source", "Photo-3.source",
             "Photo-4.source", "Photo-5.source", "Picture.source"],
        )
        self.assertEqual(spec.prompt_keys[-1], "agent_photo_prompt")
        self.assertEqual((spec.image_width, spec.image_height), (800, 600))

    def test_unknown_template(self):
        with self.assertRaises(KeyError):
            get_template_spec("nope")

    def test_template_id_override(self):
        spec = resolve_template(StudioConfig(template_id="custom"))
        self.assertEqual(spec.template_id, "custom")
        self.assertEqual(get_template_spec("default").template_id, DEFAULT_TEMPLATE_ID)


class TestSequentialTaskQueue(unittest.TestCase):

    def test_runs_in_order_with_delay_after_each(self):
        events = []
        queue = SequentialTaskQueue(delay_seconds=2.0, sleep=lambda s: events.append(("sleep", s)))
        for name in ("a", "b", "c"):
            queue.add(name, lambda name=name: events.append(("run", name)) or name)
        results = queue.run(on_start=lambda i, n, label: events.append(("start", i, n)))
        self.assertEqual(results, ["a", "b", "c"])
        self.assertEqual(events[:3], [("start", 1, 3), ("run", "a"), ("sleep", 2.0)])
        self.assertEqual(events.count(("sleep", 2.0)), 3)

    def test_failure_stops_queue(self):
        ran = []

        def boom():
            raise RuntimeError("boom")

        queue = SequentialTaskQueue(delay_seconds=0, sleep=lambda s: None)
        queue.add("ok", lambda: ran.append("ok"))
        queue.add("boom", boom)
        queue.add("never", lambda: ran.append("never"))
        with self.assertRaises(RuntimeError):
            queue.run()
        self.assertEqual(ran, ["ok"])

    def test_failed_run_is_not_replayed(self):
        ran = []

        def boom():
            raise RuntimeError("boom")

        queue = SequentialTaskQueue(delay_seconds=0, sleep=lambda s: None)
        queue.add("ok", lambda: ran.append("ok"))
        queue.add("boom", boom)
        with self.assertRaises(RuntimeError):
            queue.run()
        self.assertEqual(len(queue), 0)
        self.assertEqual(queue.run(), [])
        self.assertEqual(ran, ["ok"])

    def test_bounded(self):
        queue = SequentialTaskQueue(maxsize=1)
        queue.add("one", lambda: 1)
        with self.assertRaises(QueueFullError):
            queue.add("two", lambda: 2)


if __name__ == "__main__":
    unittest.main()
