import difflib
from dataclasses import dataclass
from enum import Enum

from agent_sync.errors import InvalidToolError


class Tool(str, Enum):
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    COPILOT = "copilot"


@dataclass(frozen=True)
class ToolMetadata:
    tool: Tool
    label: str
    rules_dir: str
    rule_suffix: str


TOOL_CATALOG: dict[Tool, ToolMetadata] = {
    Tool.CURSOR: ToolMetadata(
        tool=Tool.CURSOR,
        label="Cursor",
        rules_dir=".cursor/rules",
        rule_suffix=".mdc",
    ),
    Tool.WINDSURF: ToolMetadata(
        tool=Tool.WINDSURF,
        label="Windsurf",
        rules_dir=".windsurf/rules",
        rule_suffix=".md",
    ),
    Tool.COPILOT: ToolMetadata(
        tool=Tool.COPILOT,
        label="GitHub Copilot",
        rules_dir=".github/instructions",
        rule_suffix=".instructions.md",
    ),
}

# Fallback order when a rule has no block for the tool being exported.
TOOL_PRIORITY: tuple[Tool, ...] = (Tool.CURSOR, Tool.WINDSURF, Tool.COPILOT)

DEFAULT_TOOLS: tuple[Tool, ...] = (Tool.CURSOR, Tool.COPILOT, Tool.WINDSURF)


def tool_values() -> list[str]:
    return [tool.value for tool in Tool]


def parse_tool(value: "Tool | str") -> Tool:
    if isinstance(value, Tool):
        return value
    normalized = str(value).strip().lower()
    try:
        return Tool(normalized)
    except ValueError:
        matches = difflib.get_close_matches(normalized, tool_values(), n=1)
        raise InvalidToolError(str(value), matches[0] if matches else None) from None


def tool_metadata(tool: Tool | str) -> ToolMetadata:
    return TOOL_CATALOG[parse_tool(tool)]


def tool_label(tool: Tool | str) -> str:
    return tool_metadata(tool).label
