"""Fold a rule imported from one tool into the existing canonical rule."""

from __future__ import annotations

from dataclasses import dataclass, replace

from agent_sync.errors import UnrepresentableModeError
from agent_sync.rules.models import ApplyMode, CanonicalRule, ToolRule
from agent_sync.rules.parser import tool_rule_frontmatter
from agent_sync.rules.translators import (
    IRuleTranslator,
    RuleIntent,
    create_translator,
    resolve_intent,
)
from agent_sync.tools import Tool


@dataclass(frozen=True)
class ContentConflict:
    name: str
    tool: Tool

    @property
    def message(self) -> str:
        return (
            f"{self.tool.value} content differs from canonical content; "
            "kept canonical content"
        )


@dataclass(frozen=True)
class MergeResult:
    rule: CanonicalRule
    conflict: ContentConflict | None = None


def _reproduces(
    translator: IRuleTranslator, existing: CanonicalRule, document: ToolRule
) -> bool:
    try:
        exported = translator.export_rule(existing)
    except UnrepresentableModeError:
        return False
    return tool_rule_frontmatter(exported) == tool_rule_frontmatter(document)


def _target_intent(
    imported: CanonicalRule, existing: CanonicalRule, tool: Tool
) -> RuleIntent:
    intent = resolve_intent(imported, tool)
    # A description missing from the document only matters when it makes the
    # rule manual; otherwise the existing one stays.
    if intent.description is None and intent.mode != ApplyMode.MANUAL:
        kept = resolve_intent(existing, tool).description
        intent = replace(intent, description=kept)
    return intent


def merge_imported_rule(
    imported: CanonicalRule, existing: CanonicalRule | None, document: ToolRule
) -> MergeResult:
    """Merge ``imported`` (translated from ``document``) into ``existing``.

    Targets, extra keys and the blocks of other tools are kept. The source
    tool's behaviour is taken from the document: when the existing rule
    already exports to an equivalent document nothing changes. Otherwise only
    the source tool's block is rewritten, and the shared description and
    globs are replaced only when a block cannot express the imported values
    on its own. Content always stays canonical.
    """
    if existing is None:
        return MergeResult(rule=imported)

    tool = document.tool
    conflict = None
    if imported.content != existing.content:
        conflict = ContentConflict(name=existing.name, tool=tool)

    translator = create_translator(tool)
    if _reproduces(translator, existing, document):
        return MergeResult(rule=existing, conflict=conflict)

    target = _target_intent(imported, existing, tool)
    if resolve_intent(existing, tool) == target:
        return MergeResult(rule=existing, conflict=conflict)

    block = translator.settings_for_intent(target, existing)
    merged = existing.with_settings(tool, block)
    if resolve_intent(merged, tool) != target:
        shared = replace(existing, description=target.description, globs=target.globs)
        merged = shared.with_settings(
            tool, translator.settings_for_intent(target, shared)
        )
    return MergeResult(rule=merged, conflict=conflict)
