"""Tests for folding imported rules into canonical rules."""

import pytest

from agent_sync.rules.merge import merge_imported_rule
from agent_sync.rules.models import (
    ApplyMode,
    CanonicalRule,
    CopilotRule,
    CopilotSettings,
    CursorRule,
    CursorSettings,
    WindsurfRule,
    WindsurfSettings,
    WindsurfTrigger,
)
from agent_sync.rules.translators import create_translator, resolve_intent
from agent_sync.tools import Tool


def _existing() -> CanonicalRule:
    return CanonicalRule(
        name="style",
        content="Canonical body\n",
        targets=("cursor", "windsurf"),
        description="Old description",
        globs="old/**",
        settings={
            Tool.CURSOR: CursorSettings(always_apply=True),
            Tool.WINDSURF: WindsurfSettings(trigger=WindsurfTrigger.MANUAL),
        },
        extra={"owner": "team"},
    )


def _merge(document, existing):
    imported = create_translator(document.tool).import_rule(document)
    return merge_imported_rule(imported, existing, document)


def test_merge_without_existing_returns_import() -> None:
    document = CursorRule(name="new", content="Body")
    imported = create_translator(Tool.CURSOR).import_rule(document)
    result = merge_imported_rule(imported, None, document)
    assert result.rule is imported
    assert result.conflict is None


def test_merge_rewrites_only_source_tool_block() -> None:
    document = WindsurfRule(
        name="style",
        content="Canonical body\n",
        trigger=WindsurfTrigger.GLOB,
        description="New description",
        globs="src/**",
    )
    result = _merge(document, _existing())
    merged = result.rule
    assert result.conflict is None
    assert merged.targets == ("cursor", "windsurf")
    assert merged.extra == {"owner": "team"}
    assert merged.description == "Old description"
    assert merged.globs == "old/**"
    assert merged.settings == {
        Tool.CURSOR: CursorSettings(always_apply=True),
        Tool.WINDSURF: WindsurfSettings(
            trigger=WindsurfTrigger.GLOB,
            description="New description",
            globs="src/**",
        ),
    }
    exported = create_translator(Tool.WINDSURF).export_rule(merged)
    assert exported == document


def test_merge_replaces_shared_fields_the_block_cannot_override() -> None:
    document = CursorRule(name="style", content="Canonical body\n", description="hint")
    merged = _merge(document, _existing()).rule
    assert merged.description == "hint"
    assert merged.globs is None
    assert merged.settings[Tool.CURSOR] == CursorSettings()
    assert create_translator(Tool.CURSOR).export_rule(merged) == document


def test_merge_adds_missing_block() -> None:
    document = CopilotRule(name="style", content="Canonical body\n", apply_to="docs/**")
    merged = _merge(document, _existing()).rule
    assert set(merged.settings) == {Tool.CURSOR, Tool.WINDSURF, Tool.COPILOT}
    assert merged.settings[Tool.COPILOT] == CopilotSettings(apply_to="docs/**")
    assert merged.description == "Old description"


def test_copilot_document_without_description_keeps_it() -> None:
    existing = CanonicalRule(name="hint", content="Body", description="core hint")
    document = CopilotRule(name="hint", content="Body", apply_to="**")
    merged = _merge(document, existing).rule
    assert merged.description == "core hint"
    assert merged.settings == {Tool.COPILOT: CopilotSettings(apply_to="**")}


def test_cursor_document_without_description_becomes_manual() -> None:
    existing = CanonicalRule(name="hint", content="Body", description="core hint")
    document = CursorRule(name="hint", content="Body")
    merged = _merge(document, existing).rule
    assert merged.description is None
    assert resolve_intent(merged, Tool.CURSOR).mode == ApplyMode.MANUAL


def test_merge_keeps_canonical_content_and_reports_conflict() -> None:
    document = CursorRule(name="style", content="Canonical body \n", always_apply=True)
    result = _merge(document, _existing())
    assert result.rule == _existing()
    assert result.rule.content == "Canonical body\n"
    assert result.conflict is not None
    assert result.conflict.tool == Tool.CURSOR
    assert "kept canonical content" in result.conflict.message


UNEDITED_EXPORTS = [
    (
        CanonicalRule(
            name="py",
            content="Body\n",
            description="core",
            globs="src/**",
            settings={
                Tool.CURSOR: CursorSettings(description="cursor hint"),
            },
        ),
        Tool.CURSOR,
    ),
    (
        CanonicalRule(
            name="py",
            content="Body\n",
            description="Py",
            globs="src/**",
            settings={Tool.CURSOR: CursorSettings()},
        ),
        Tool.CURSOR,
    ),
    (
        CanonicalRule(name="hint", content="Body\n", description="core hint"),
        Tool.COPILOT,
    ),
    (
        CanonicalRule(
            name="py",
            content="Body\n",
            description="Py",
            settings={Tool.COPILOT: CopilotSettings(apply_to="src/**")},
        ),
        Tool.COPILOT,
    ),
    (
        CanonicalRule(
            name="ws",
            content="Body\n",
            description="shared",
            settings={
                Tool.WINDSURF: WindsurfSettings(
                    trigger=WindsurfTrigger.GLOB,
                    description="windsurf only",
                    globs="app/**",
                )
            },
        ),
        Tool.WINDSURF,
    ),
    (_existing(), Tool.CURSOR),
    (_existing(), Tool.WINDSURF),
]


@pytest.mark.parametrize(("rule", "tool"), UNEDITED_EXPORTS)
def test_merging_unedited_export_keeps_rule(rule: CanonicalRule, tool: Tool) -> None:
    document = create_translator(tool).export_rule(rule)
    result = _merge(document, rule)
    assert result.rule == rule
    assert result.conflict is None
