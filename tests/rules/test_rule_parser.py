"""Tests for canonical and tool rule parsing."""

import pytest

from agent_sync.errors import InvalidToolError, ParseError
from agent_sync.rules.models import (
    CanonicalRule,
    CopilotRule,
    CopilotSettings,
    CursorRule,
    CursorSettings,
    WindsurfRule,
    WindsurfSettings,
    WindsurfTrigger,
)
from agent_sync.rules.parser import (
    parse_canonical_rule,
    parse_tool_rule,
    serialize_canonical_rule,
    serialize_tool_rule,
)
from agent_sync.tools import Tool


def test_parse_canonical_with_all_blocks() -> None:
    text = (
        "---\n"
        "targets: [cursor, windsurf]\n"
        "description: Python standards\n"
        "globs: '**/*.py, tests/**'\n"
        "cursor:\n"
        "  alwaysApply: false\n"
        "  globs: '**/*.py'\n"
        "windsurf:\n"
        "  trigger: glob\n"
        "copilot:\n"
        "  applyTo: '**/*.py'\n"
        "---\n"
        "\nUse type hints.\n"
    )
    rule = parse_canonical_rule("python", text)
    assert rule.name == "python"
    assert rule.targets == ("cursor", "windsurf")
    assert rule.description == "Python standards"
    assert rule.globs == "**/*.py,tests/**"
    assert rule.settings == {
        Tool.CURSOR: CursorSettings(always_apply=False, globs="**/*.py"),
        Tool.WINDSURF: WindsurfSettings(trigger=WindsurfTrigger.GLOB),
        Tool.COPILOT: CopilotSettings(apply_to="**/*.py"),
    }
    assert rule.content == "\nUse type hints.\n"


def test_parse_canonical_defaults() -> None:
    rule = parse_canonical_rule("plain", "---\n---\nBody\n")
    assert rule.targets == ("*",)
    assert rule.description is None
    assert rule.globs is None
    assert rule.settings == {}
    assert rule.extra == {}


def test_parse_canonical_accepts_glob_list_and_single_target() -> None:
    rule = parse_canonical_rule(
        "web", "---\ntargets: copilot\nglobs:\n  - '*.ts'\n  - '*.tsx'\n---\nBody"
    )
    assert rule.targets == ("copilot",)
    assert rule.globs == "*.ts,*.tsx"


def test_parse_canonical_keeps_unknown_sections() -> None:
    rule = parse_canonical_rule(
        "x", "---\ndescription: d\nclaude:\n  scope: project\nowner: team\n---\nBody"
    )
    assert rule.extra == {"claude": {"scope": "project"}, "owner": "team"}
    text = serialize_canonical_rule(rule)
    assert "claude:\n  scope: project\n" in text
    assert parse_canonical_rule("x", text) == rule


def test_parse_canonical_rejects_unknown_target() -> None:
    with pytest.raises(InvalidToolError, match="cursr"):
        parse_canonical_rule("x", "---\ntargets: [cursr]\n---\nBody")


def test_parse_canonical_rejects_bad_trigger() -> None:
    with pytest.raises(ParseError, match="invalid frontmatter"):
        parse_canonical_rule("x", "---\nwindsurf:\n  trigger: sometimes\n---\nBody")


def test_parse_canonical_rejects_empty_copilot_apply_to() -> None:
    with pytest.raises(ParseError, match="applyTo"):
        parse_canonical_rule("x", "---\ncopilot:\n  applyTo: ''\n---\nBody")


def test_parse_canonical_rejects_wrong_types() -> None:
    with pytest.raises(ParseError, match="alwaysApply"):
        parse_canonical_rule("x", "---\ncursor:\n  alwaysApply: maybe\n---\nBody")


def test_serialize_canonical_omits_absent_fields() -> None:
    rule = CanonicalRule(
        name="core",
        content="Body\n",
        description="core",
        settings={Tool.CURSOR: CursorSettings(always_apply=True)},
    )
    assert serialize_canonical_rule(rule) == (
        "---\n"
        "targets:\n"
        "- '*'\n"
        "description: core\n"
        "cursor:\n"
        "  alwaysApply: true\n"
        "---\n"
        "Body\n"
    )


def test_canonical_round_trip() -> None:
    rule = CanonicalRule(
        name="mixed",
        content="\n# Mixed\n\n- keep   \n",
        targets=("cursor", "copilot"),
        description="Mixed rule",
        globs="src/**/*.py,tests/**",
        settings={
            Tool.CURSOR: CursorSettings(description="Cursor only"),
            Tool.WINDSURF: WindsurfSettings(
                trigger=WindsurfTrigger.MANUAL, globs="docs/**"
            ),
            Tool.COPILOT: CopilotSettings(apply_to="src/**"),
        },
        extra={"x-owner": "platform"},
    )
    assert parse_canonical_rule("mixed", serialize_canonical_rule(rule)) == rule


def test_parse_cursor_rule() -> None:
    rule = parse_tool_rule(
        "cursor",
        "py",
        "---\ndescription: Py\nglobs: '*.py'\nalwaysApply: false\n---\nBody",
    )
    assert rule == CursorRule(
        name="py", content="Body", always_apply=False, description="Py", globs="*.py"
    )


def test_parse_cursor_rule_with_empty_values() -> None:
    rule = parse_tool_rule("cursor", "x", "---\ndescription:\nglobs:\n---\nBody")
    assert rule == CursorRule(name="x", content="Body")


def test_parse_windsurf_rule_without_trigger() -> None:
    rule = parse_tool_rule("windsurf", "x", "---\ndescription: hint\n---\nBody")
    assert rule == WindsurfRule(name="x", content="Body", description="hint")


def test_parse_windsurf_rejects_unknown_trigger() -> None:
    with pytest.raises(ParseError, match="trigger"):
        parse_tool_rule("windsurf", "x", "---\ntrigger: weekly\n---\nBody")


def test_parse_copilot_rule() -> None:
    rule = parse_tool_rule(
        Tool.COPILOT, "ts", "---\napplyTo: '**/*.ts,**/*.tsx'\n---\nBody"
    )
    assert rule == CopilotRule(name="ts", content="Body", apply_to="**/*.ts,**/*.tsx")


def test_parse_copilot_rejects_non_string_description() -> None:
    with pytest.raises(ParseError, match="description"):
        parse_tool_rule("copilot", "x", "---\ndescription: 123\n---\nBody")


def test_parse_tool_rule_unknown_tool() -> None:
    with pytest.raises(InvalidToolError):
        parse_tool_rule("zed", "x", "---\n---\nBody")


def test_serialize_tool_rules() -> None:
    cursor = CursorRule(name="x", content="B", description="d", globs="*.py")
    windsurf = WindsurfRule(name="x", content="B", trigger=WindsurfTrigger.ALWAYS_ON)
    copilot = CopilotRule(name="x", content="B", apply_to="**")
    assert serialize_tool_rule(cursor) == (
        "---\ndescription: d\nglobs: '*.py'\nalwaysApply: false\n---\nB"
    )
    assert serialize_tool_rule(windsurf) == "---\ntrigger: always_on\n---\nB"
    assert serialize_tool_rule(copilot) == "---\napplyTo: '**'\n---\nB"
