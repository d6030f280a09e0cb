"""Split and join YAML frontmatter blocks.

The codec knows nothing about rule schemas: it turns ``---`` delimited YAML plus a
markdown body into ``(metadata, content)`` and back. The body is never touched.
"""

from __future__ import annotations

from typing import Any, Mapping

import yaml

from agent_sync.constants import FRONTMATTER_MARKER
from agent_sync.errors import ParseError


def _is_marker(line: str) -> bool:
    return line.rstrip("\r\n").rstrip() == FRONTMATTER_MARKER


def split_frontmatter(
    text: str, source: str | None = None
) -> tuple[dict[str, Any], str]:
    lines = text.splitlines(keepends=True)
    if not lines or not _is_marker(lines[0]):
        raise ParseError("missing opening frontmatter marker '---'", source)

    for index in range(1, len(lines)):
        if not _is_marker(lines[index]):
            continue
        block = "".join(lines[1:index])
        content = "".join(lines[index + 1 :])
        return _load_metadata(block, source), content

    raise ParseError("missing closing frontmatter marker '---'", source)


def _load_metadata(block: str, source: str | None) -> dict[str, Any]:
    try:
        loaded = yaml.safe_load(block)
    except yaml.YAMLError as exc:
        raise ParseError(f"invalid YAML frontmatter ({exc})", source) from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ParseError("frontmatter must be a mapping", source)
    return loaded


def join_frontmatter(metadata: Mapping[str, Any], content: str) -> str:
    parts = [FRONTMATTER_MARKER, "\n"]
    if metadata:
        parts.append(
            yaml.safe_dump(
                dict(metadata),
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        )
    parts.append(FRONTMATTER_MARKER)
    parts.append("\n")
    parts.append(content)
    return "".join(parts)
