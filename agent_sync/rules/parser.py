"""Map frontmatter to canonical and tool rule documents, and back."""

from __future__ import annotations

from typing import Any, Callable

from agent_sync.constants import TARGET_ALL
from agent_sync.errors import ParseError
from agent_sync.rules.frontmatter import join_frontmatter, split_frontmatter
from agent_sync.rules.models import (
    CanonicalRule,
    CopilotRule,
    CopilotSettings,
    CursorRule,
    CursorSettings,
    ToolRule,
    ToolSettings,
    WindsurfRule,
    WindsurfSettings,
    WindsurfTrigger,
    normalize_globs,
)
from agent_sync.schema import CANONICAL_RULE_SCHEMA, first_schema_error, tool_rule_schema
from agent_sync.tools import Tool, parse_tool

CANONICAL_KEYS: tuple[str, ...] = ("targets", "description", "globs") + tuple(
    tool.value for tool in Tool
)


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _validate(schema_name: str, metadata: dict[str, Any], source: str | None) -> None:
    detail = first_schema_error(schema_name, metadata)
    if detail is not None:
        raise ParseError(f"invalid frontmatter ({detail})", source)


def _parse_targets(value: Any) -> tuple[str, ...]:
    if value is None:
        return (TARGET_ALL,)
    items = [value] if isinstance(value, str) else list(value)
    targets: list[str] = []
    for item in items:
        normalized = str(item).strip().lower()
        if normalized != TARGET_ALL:
            normalized = parse_tool(normalized).value
        if normalized not in targets:
            targets.append(normalized)
    return tuple(targets)


def _parse_cursor_block(block: dict[str, Any], source: str | None) -> CursorSettings:
    return CursorSettings(
        always_apply=bool(block.get("alwaysApply", False)),
        description=_text(block.get("description")),
        globs=normalize_globs(block.get("globs")),
    )


def _parse_windsurf_block(
    block: dict[str, Any], source: str | None
) -> WindsurfSettings:
    trigger = block.get("trigger", WindsurfTrigger.MODEL_DECISION.value)
    return WindsurfSettings(
        trigger=WindsurfTrigger(trigger),
        description=_text(block.get("description")),
        globs=normalize_globs(block.get("globs")),
    )


def _parse_copilot_block(block: dict[str, Any], source: str | None) -> CopilotSettings:
    apply_to = normalize_globs(block.get("applyTo"))
    if apply_to is None:
        raise ParseError("copilot.applyTo must not be empty", source)
    return CopilotSettings(apply_to=apply_to)


_BLOCK_PARSERS: dict[Tool, Callable[[dict[str, Any], str | None], ToolSettings]] = {
    Tool.CURSOR: _parse_cursor_block,
    Tool.WINDSURF: _parse_windsurf_block,
    Tool.COPILOT: _parse_copilot_block,
}


def parse_canonical_rule(
    name: str, text: str, source: str | None = None
) -> CanonicalRule:
    metadata, content = split_frontmatter(text, source)
    _validate(CANONICAL_RULE_SCHEMA, metadata, source)

    settings: dict[Tool, ToolSettings] = {}
    for tool in Tool:
        block = metadata.get(tool.value)
        if block is None:
            continue
        settings[tool] = _BLOCK_PARSERS[tool](block, source)

    return CanonicalRule(
        name=name,
        content=content,
        targets=_parse_targets(metadata.get("targets")),
        description=_text(metadata.get("description")),
        globs=normalize_globs(metadata.get("globs")),
        settings=settings,
        extra={
            key: value for key, value in metadata.items() if key not in CANONICAL_KEYS
        },
    )


def _block_frontmatter(block: ToolSettings) -> dict[str, Any]:
    fm: dict[str, Any] = {}
    if isinstance(block, CursorSettings):
        fm["alwaysApply"] = block.always_apply
    elif isinstance(block, WindsurfSettings):
        fm["trigger"] = block.trigger.value
    else:
        fm["applyTo"] = block.apply_to
        return fm
    if block.description is not None:
        fm["description"] = block.description
    if block.globs is not None:
        fm["globs"] = block.globs
    return fm


def canonical_rule_frontmatter(rule: CanonicalRule) -> dict[str, Any]:
    fm: dict[str, Any] = {"targets": list(rule.targets)}
    if rule.description is not None:
        fm["description"] = rule.description
    if rule.globs is not None:
        fm["globs"] = rule.globs
    for tool in Tool:
        block = rule.settings_for(tool)
        if block is not None:
            fm[tool.value] = _block_frontmatter(block)
    for key, value in rule.extra.items():
        fm.setdefault(key, value)
    return fm


def serialize_canonical_rule(rule: CanonicalRule) -> str:
    return join_frontmatter(canonical_rule_frontmatter(rule), rule.content)


def parse_tool_rule(
    tool: Tool | str, name: str, text: str, source: str | None = None
) -> ToolRule:
    tool = parse_tool(tool)
    metadata, content = split_frontmatter(text, source)
    _validate(tool_rule_schema(tool.value), metadata, source)

    description = _text(metadata.get("description"))
    if tool == Tool.CURSOR:
        return CursorRule(
            name=name,
            content=content,
            always_apply=bool(metadata.get("alwaysApply", False)),
            description=description,
            globs=normalize_globs(metadata.get("globs")),
        )
    if tool == Tool.WINDSURF:
        trigger = metadata.get("trigger")
        return WindsurfRule(
            name=name,
            content=content,
            trigger=WindsurfTrigger(trigger) if trigger is not None else None,
            description=description,
            globs=normalize_globs(metadata.get("globs")),
        )
    return CopilotRule(
        name=name,
        content=content,
        description=description,
        apply_to=normalize_globs(metadata.get("applyTo")),
    )


def tool_rule_frontmatter(rule: ToolRule) -> dict[str, Any]:
    fm: dict[str, Any] = {}
    if isinstance(rule, CursorRule):
        if rule.description is not None:
            fm["description"] = rule.description
        if rule.globs is not None:
            fm["globs"] = rule.globs
        fm["alwaysApply"] = rule.always_apply
    elif isinstance(rule, WindsurfRule):
        if rule.trigger is not None:
            fm["trigger"] = rule.trigger.value
        if rule.description is not None:
            fm["description"] = rule.description
        if rule.globs is not None:
            fm["globs"] = rule.globs
    else:
        if rule.description is not None:
            fm["description"] = rule.description
        if rule.apply_to is not None:
            fm["applyTo"] = rule.apply_to
    return fm


def serialize_tool_rule(rule: ToolRule) -> str:
    return join_frontmatter(tool_rule_frontmatter(rule), rule.content)
