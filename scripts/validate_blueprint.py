#!/usr/bin/env python3
"""
Validate that a saved blueprint JSON matches the render template's image slots.

Accepts raw model output, so markdown code fences are allowed.
"""

from __future__ import annotations

import sys
from pathlib import Path

from video_studio.blueprint import check_blueprint, parse_blueprint
from video_studio.errors import StudioError
from video_studio.templates import get_template_spec


def _fail(msg: str) -> int:
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        return _fail("Usage: validate_blueprint.py BLUEPRINT.json [TEMPLATE_KEY]")
    bp_path = Path(argv[1])
    if not bp_path.exists():
        return _fail(f"Blueprint not found: {bp_path}")

    try:
        template = get_template_spec(argv[2] if len(argv) > 2 else "default")
    except KeyError as exc:
        return _fail(str(exc))

    try:
        blueprint = parse_blueprint(bp_path.read_text(encoding="utf-8"))
    except StudioError as exc:
        return _fail(f"Failed to parse blueprint: {bp_path} ({exc})")

    problems = check_blueprint(blueprint, template)
    if problems:
        return _fail("Blueprint does not match template:\n- " + "\n- ".join(problems))

    print(f"OK: blueprint matches template '{template.key}': {bp_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
