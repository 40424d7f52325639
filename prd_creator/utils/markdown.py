"""Markdown helpers — seed template frontmatter and placeholder substitution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import yaml

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse optional YAML frontmatter from a seed template.

    Returns (metadata_dict, body_after_frontmatter).
    """
    match = re.match(r"^---\s*\n(.*?)\n---\s*\n?(.*)", content, re.DOTALL)
    if not match:
        return {}, content

    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}

    return meta, match.group(2)


def bullet_list(items: list[str] | None, bullet: str = "-") -> str:
    return "\n".join(f"{bullet} {item}" for item in items or [])


def substitute_placeholders(content: str, values: Mapping[str, str]) -> str:
    """Replace every ``{{TOKEN}}`` found in ``values``; leave unknown tokens verbatim."""

    def _replace(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _PLACEHOLDER_RE.sub(_replace, content)
