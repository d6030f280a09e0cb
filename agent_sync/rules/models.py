"""Rule data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar, Iterable, Mapping, Union

from agent_sync.constants import TARGET_ALL, UNIVERSAL_GLOBS
from agent_sync.tools import Tool

_GLOB_SEPARATOR_RE = re.compile(r"[,\s]+")


class ApplyMode(str, Enum):
    ALWAYS = "always"
    INTELLIGENT = "intelligent"
    GLOB = "glob"
    MANUAL = "manual"


class WindsurfTrigger(str, Enum):
    MANUAL = "manual"
    ALWAYS_ON = "always_on"
    MODEL_DECISION = "model_decision"
    GLOB = "glob"


def normalize_globs(value: str | Iterable[str] | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, str):
        raw = [value]
    else:
        raw = [str(item) for item in value]
    patterns: list[str] = []
    for item in raw:
        patterns.extend(part for part in _GLOB_SEPARATOR_RE.split(item) if part)
    return ",".join(patterns) if patterns else None


def is_universal_glob(value: str | None) -> bool:
    if value is None:
        return True
    parts = [part for part in _GLOB_SEPARATOR_RE.split(value) if part]
    return all(part in UNIVERSAL_GLOBS for part in parts)


@dataclass(frozen=True)
class CursorSettings:
    tool: ClassVar[Tool] = Tool.CURSOR

    always_apply: bool = False
    description: str | None = None
    globs: str | None = None


@dataclass(frozen=True)
class WindsurfSettings:
    tool: ClassVar[Tool] = Tool.WINDSURF

    trigger: WindsurfTrigger = WindsurfTrigger.MODEL_DECISION
    description: str | None = None
    globs: str | None = None


@dataclass(frozen=True)
class CopilotSettings:
    tool: ClassVar[Tool] = Tool.COPILOT

    apply_to: str

    def __post_init__(self) -> None:
        if not self.apply_to or not self.apply_to.strip():
            raise ValueError("copilot applyTo must not be empty")


ToolSettings = Union[CursorSettings, WindsurfSettings, CopilotSettings]


@dataclass(frozen=True)
class CanonicalRule:
    name: str
    content: str
    targets: tuple[str, ...] = (TARGET_ALL,)
    description: str | None = None
    globs: str | None = None
    settings: Mapping[Tool, ToolSettings] = field(default_factory=dict)
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for tool, block in self.settings.items():
            if block.tool != tool:
                raise ValueError(
                    f"{type(block).__name__} cannot be stored under '{tool.value}'"
                )

    def targets_tool(self, tool: Tool) -> bool:
        return TARGET_ALL in self.targets or tool.value in self.targets

    def settings_for(self, tool: Tool) -> ToolSettings | None:
        return self.settings.get(tool)

    def with_settings(self, tool: Tool, block: ToolSettings | None) -> CanonicalRule:
        settings = {key: value for key, value in self.settings.items() if key != tool}
        if block is not None:
            settings[tool] = block
        ordered = {key: settings[key] for key in Tool if key in settings}
        return replace(self, settings=ordered)


@dataclass(frozen=True)
class CursorRule:
    tool: ClassVar[Tool] = Tool.CURSOR

    name: str
    content: str
    always_apply: bool = False
    description: str | None = None
    globs: str | None = None


@dataclass(frozen=True)
class WindsurfRule:
    tool: ClassVar[Tool] = Tool.WINDSURF

    name: str
    content: str
    trigger: WindsurfTrigger | None = None
    description: str | None = None
    globs: str | None = None


@dataclass(frozen=True)
class CopilotRule:
    tool: ClassVar[Tool] = Tool.COPILOT

    name: str
    content: str
    description: str | None = None
    apply_to: str | None = None


ToolRule = Union[CursorRule, WindsurfRule, CopilotRule]
