from __future__ import annotations

from agent_sync.constants import RULE_NAME_ALLOWED_PUNCTUATION
from agent_sync.errors import InvalidRuleNameError
from agent_sync.rules.models import (
    CanonicalRule,
    CursorSettings,
    WindsurfSettings,
    WindsurfTrigger,
)
from agent_sync.tools import Tool


def validate_rule_name(name: str) -> None:
    if not name:
        raise InvalidRuleNameError(name, "name must not be empty")
    if "/" in name or "\\" in name or ".." in name:
        raise InvalidRuleNameError(name, "path separators are not allowed")
    for char in name:
        if not (char.isalnum() or char in RULE_NAME_ALLOWED_PUNCTUATION):
            raise InvalidRuleNameError(
                name, "only letters, digits, '-' and '_' are allowed"
            )


def rule_title(name: str) -> str:
    words = name.replace("_", "-").split("-")
    return " ".join(word.capitalize() for word in words if word)


def create_rule_template(name: str) -> CanonicalRule:
    validate_rule_name(name)
    return CanonicalRule(
        name=name,
        content=f"\n# {rule_title(name)}\n\nDescribe the rule here.\n",
        description=f"{rule_title(name)} guidelines",
        settings={
            Tool.CURSOR: CursorSettings(always_apply=False),
            Tool.WINDSURF: WindsurfSettings(trigger=WindsurfTrigger.MODEL_DECISION),
        },
    )
