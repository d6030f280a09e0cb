"""Per-tool rule translators.

Every tool expresses the same four application modes with its own frontmatter.
``MODE_TABLE`` is the single place where a mode is mapped onto each schema; the
translators only read from it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from agent_sync.constants import COPILOT_DEFAULT_APPLY_TO
from agent_sync.errors import UnrepresentableModeError
from agent_sync.rules.models import (
    ApplyMode,
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
    is_universal_glob,
    normalize_globs,
)
from agent_sync.tools import TOOL_PRIORITY, Tool, parse_tool


class CopilotApplyTo(str, Enum):
    UNIVERSAL = "universal"
    OMITTED = "omitted"
    GLOBS = "globs"
    UNREPRESENTABLE = "unrepresentable"


@dataclass(frozen=True)
class ModeRow:
    always_apply: bool
    trigger: WindsurfTrigger
    apply_to: CopilotApplyTo


MODE_TABLE: dict[ApplyMode, ModeRow] = {
    ApplyMode.ALWAYS: ModeRow(
        always_apply=True,
        trigger=WindsurfTrigger.ALWAYS_ON,
        apply_to=CopilotApplyTo.UNIVERSAL,
    ),
    ApplyMode.INTELLIGENT: ModeRow(
        always_apply=False,
        trigger=WindsurfTrigger.MODEL_DECISION,
        apply_to=CopilotApplyTo.OMITTED,
    ),
    ApplyMode.GLOB: ModeRow(
        always_apply=False,
        trigger=WindsurfTrigger.GLOB,
        apply_to=CopilotApplyTo.GLOBS,
    ),
    ApplyMode.MANUAL: ModeRow(
        always_apply=False,
        trigger=WindsurfTrigger.MANUAL,
        apply_to=CopilotApplyTo.UNREPRESENTABLE,
    ),
}

MODE_BY_TRIGGER: dict[WindsurfTrigger, ApplyMode] = {
    row.trigger: mode for mode, row in MODE_TABLE.items()
}


@dataclass(frozen=True)
class RuleIntent:
    mode: ApplyMode
    description: str | None = None
    globs: str | None = None


def _specific_globs(*candidates: str | None) -> str | None:
    for candidate in candidates:
        if candidate is not None and not is_universal_glob(candidate):
            return normalize_globs(candidate)
    return None


def _glob_intent(globs: str | None, description: str | None) -> RuleIntent:
    # A glob rule without a usable pattern matches every file.
    if globs is None:
        return RuleIntent(ApplyMode.ALWAYS, description=description)
    return RuleIntent(ApplyMode.GLOB, description=description, globs=globs)


def _override(value: str | None, shared: str | None) -> str | None:
    # Blocks only carry values the shared fields do not already say.
    return None if value == shared else value


def classify(
    *, always: bool, globs: str | None, description: str | None
) -> RuleIntent:
    """Shared precedence: always, then globs, then description, then manual."""
    if always:
        return RuleIntent(ApplyMode.ALWAYS, description=description)
    specific = _specific_globs(globs)
    if specific is not None:
        return RuleIntent(ApplyMode.GLOB, description=description, globs=specific)
    if description is not None:
        return RuleIntent(ApplyMode.INTELLIGENT, description=description)
    return RuleIntent(ApplyMode.MANUAL)


class IRuleTranslator(ABC):
    tool: Tool

    @abstractmethod
    def intent_from_settings(
        self, rule: CanonicalRule, block: ToolSettings
    ) -> RuleIntent:
        """Read the intent expressed by this tool's block of ``rule``."""

    @abstractmethod
    def default_intent(self, rule: CanonicalRule) -> RuleIntent:
        """Intent for a rule that carries no tool block at all."""

    @abstractmethod
    def render(self, rule: CanonicalRule, intent: RuleIntent) -> ToolRule:
        """Build this tool's document for ``intent``."""

    @abstractmethod
    def import_rule(self, rule: ToolRule) -> CanonicalRule:
        """Translate a tool document into a canonical rule."""

    @abstractmethod
    def settings_for_intent(
        self, intent: RuleIntent, rule: CanonicalRule
    ) -> ToolSettings:
        """Block that makes ``rule`` express ``intent`` for this tool.

        Values the shared fields of ``rule`` already provide are left out of
        the block. Callers must check the result with ``resolve_intent`` when
        the shared fields cannot express the intent on their own.
        """

    def export_rule(self, rule: CanonicalRule) -> ToolRule:
        return self.render(rule, resolve_intent(rule, self.tool))

    def _check_source(self, rule: ToolRule) -> None:
        if rule.tool != self.tool:
            raise TypeError(
                f"{type(self).__name__} cannot import {type(rule).__name__}"
            )

    def _check_settings(self, block: ToolSettings) -> None:
        if block.tool != self.tool:
            raise TypeError(
                f"{type(self).__name__} cannot read {type(block).__name__}"
            )


class CursorRuleTranslator(IRuleTranslator):
    tool = Tool.CURSOR

    def intent_from_settings(
        self, rule: CanonicalRule, block: ToolSettings
    ) -> RuleIntent:
        self._check_settings(block)
        description = block.description or rule.description
        return classify(
            always=block.always_apply,
            globs=_specific_globs(block.globs, rule.globs),
            description=description,
        )

    def default_intent(self, rule: CanonicalRule) -> RuleIntent:
        return classify(always=False, globs=rule.globs, description=rule.description)

    def render(self, rule: CanonicalRule, intent: RuleIntent) -> CursorRule:
        row = MODE_TABLE[intent.mode]
        return CursorRule(
            name=rule.name,
            content=rule.content,
            always_apply=row.always_apply,
            description=None if intent.mode == ApplyMode.MANUAL else intent.description,
            globs=intent.globs if intent.mode == ApplyMode.GLOB else None,
        )

    def import_rule(self, rule: ToolRule) -> CanonicalRule:
        self._check_source(rule)
        intent = classify(
            always=rule.always_apply, globs=rule.globs, description=rule.description
        )
        return CanonicalRule(
            name=rule.name,
            content=rule.content,
            description=rule.description,
            globs=intent.globs,
            settings={
                Tool.CURSOR: CursorSettings(
                    always_apply=rule.always_apply, globs=rule.globs
                )
            },
        )

    def settings_for_intent(
        self, intent: RuleIntent, rule: CanonicalRule
    ) -> CursorSettings:
        return CursorSettings(
            always_apply=MODE_TABLE[intent.mode].always_apply,
            description=_override(intent.description, rule.description),
            globs=_override(intent.globs, _specific_globs(rule.globs)),
        )


class WindsurfRuleTranslator(IRuleTranslator):
    tool = Tool.WINDSURF

    def intent_from_settings(
        self, rule: CanonicalRule, block: ToolSettings
    ) -> RuleIntent:
        self._check_settings(block)
        description = block.description or rule.description
        mode = MODE_BY_TRIGGER[block.trigger]
        if mode == ApplyMode.GLOB:
            return _glob_intent(_specific_globs(block.globs, rule.globs), description)
        return RuleIntent(mode, description=description)

    def default_intent(self, rule: CanonicalRule) -> RuleIntent:
        return classify(always=False, globs=rule.globs, description=rule.description)

    def render(self, rule: CanonicalRule, intent: RuleIntent) -> WindsurfRule:
        row = MODE_TABLE[intent.mode]
        return WindsurfRule(
            name=rule.name,
            content=rule.content,
            trigger=row.trigger,
            description=intent.description,
            globs=intent.globs if intent.mode == ApplyMode.GLOB else None,
        )

    def import_rule(self, rule: ToolRule) -> CanonicalRule:
        self._check_source(rule)
        if rule.trigger is None:
            intent = classify(
                always=False, globs=rule.globs, description=rule.description
            )
        elif MODE_BY_TRIGGER[rule.trigger] == ApplyMode.GLOB:
            intent = _glob_intent(_specific_globs(rule.globs), rule.description)
        else:
            intent = RuleIntent(MODE_BY_TRIGGER[rule.trigger])
        trigger = rule.trigger or MODE_TABLE[intent.mode].trigger
        return CanonicalRule(
            name=rule.name,
            content=rule.content,
            description=rule.description,
            globs=intent.globs if intent.mode == ApplyMode.GLOB else None,
            settings={
                Tool.WINDSURF: WindsurfSettings(trigger=trigger, globs=rule.globs)
            },
        )

    def settings_for_intent(
        self, intent: RuleIntent, rule: CanonicalRule
    ) -> WindsurfSettings:
        return WindsurfSettings(
            trigger=MODE_TABLE[intent.mode].trigger,
            description=_override(intent.description, rule.description),
            globs=_override(intent.globs, _specific_globs(rule.globs)),
        )


class CopilotRuleTranslator(IRuleTranslator):
    tool = Tool.COPILOT

    def intent_from_settings(
        self, rule: CanonicalRule, block: ToolSettings
    ) -> RuleIntent:
        self._check_settings(block)
        if is_universal_glob(block.apply_to):
            return RuleIntent(ApplyMode.ALWAYS, description=rule.description)
        return RuleIntent(
            ApplyMode.GLOB,
            description=rule.description,
            globs=normalize_globs(block.apply_to),
        )

    def default_intent(self, rule: CanonicalRule) -> RuleIntent:
        intent = classify(always=False, globs=rule.globs, description=rule.description)
        # Copilot has no manual state; its documented default applies everywhere.
        if intent.mode == ApplyMode.MANUAL:
            return RuleIntent(ApplyMode.ALWAYS)
        return intent

    def render(self, rule: CanonicalRule, intent: RuleIntent) -> CopilotRule:
        row = MODE_TABLE[intent.mode]
        if row.apply_to == CopilotApplyTo.UNREPRESENTABLE:
            raise UnrepresentableModeError(self.tool.value, intent.mode.value)
        if row.apply_to == CopilotApplyTo.UNIVERSAL:
            apply_to: str | None = COPILOT_DEFAULT_APPLY_TO
        elif row.apply_to == CopilotApplyTo.GLOBS:
            apply_to = intent.globs
        else:
            apply_to = None
        return CopilotRule(
            name=rule.name,
            content=rule.content,
            description=intent.description,
            apply_to=apply_to,
        )

    def import_rule(self, rule: ToolRule) -> CanonicalRule:
        self._check_source(rule)
        globs = _specific_globs(rule.apply_to)
        return CanonicalRule(
            name=rule.name,
            content=rule.content,
            description=rule.description,
            globs=globs,
            settings={
                Tool.COPILOT: CopilotSettings(
                    apply_to=globs or COPILOT_DEFAULT_APPLY_TO
                )
            },
        )

    def settings_for_intent(
        self, intent: RuleIntent, rule: CanonicalRule
    ) -> CopilotSettings:
        # The block cannot hold a description; it always comes from ``rule``.
        if intent.mode == ApplyMode.GLOB and intent.globs is not None:
            return CopilotSettings(apply_to=intent.globs)
        return CopilotSettings(apply_to=COPILOT_DEFAULT_APPLY_TO)


_TRANSLATORS: dict[Tool, type[IRuleTranslator]] = {
    Tool.CURSOR: CursorRuleTranslator,
    Tool.WINDSURF: WindsurfRuleTranslator,
    Tool.COPILOT: CopilotRuleTranslator,
}


def create_translator(tool: Tool | str) -> IRuleTranslator:
    return _TRANSLATORS[parse_tool(tool)]()


def resolve_intent(rule: CanonicalRule, tool: Tool | str) -> RuleIntent:
    """Pick the intent ``rule`` expresses for ``tool``.

    The tool's own block wins; otherwise the first block present in
    ``TOOL_PRIORITY`` speaks for the rule; otherwise the target tool derives the
    intent from the common fields.
    """
    tool = parse_tool(tool)
    own = rule.settings_for(tool)
    if own is not None:
        return create_translator(tool).intent_from_settings(rule, own)
    for other in TOOL_PRIORITY:
        block = rule.settings_for(other)
        if block is not None:
            return create_translator(other).intent_from_settings(rule, block)
    return create_translator(tool).default_intent(rule)
