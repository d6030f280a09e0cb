"""Filesystem access to the canonical store and the tool rule directories."""

from __future__ import annotations

from pathlib import Path

from agent_sync.constants import CANONICAL_RULE_SUFFIX, CANONICAL_RULES_DIR
from agent_sync.rules.models import CanonicalRule, ToolRule
from agent_sync.rules.parser import parse_canonical_rule, parse_tool_rule
from agent_sync.tools import Tool, tool_metadata
from agent_sync.utils import read_text


class RuleDirectory:
    def __init__(self, rules_dir: Path, suffix: str) -> None:
        self._rules_dir = rules_dir
        self._suffix = suffix

    @property
    def rules_dir(self) -> Path:
        return self._rules_dir

    def exists(self) -> bool:
        return self._rules_dir.is_dir()

    def list_rule_paths(self) -> list[Path]:
        if not self.exists():
            return []
        paths: list[Path] = []
        for child in sorted(self._rules_dir.iterdir()):
            if child.name.startswith(".") or not child.is_file():
                continue
            if not child.name.endswith(self._suffix):
                continue
            if not self.rule_name(child):
                continue
            paths.append(child)
        return paths

    def rule_name(self, path: Path) -> str:
        return path.name[: -len(self._suffix)]

    def path_for(self, name: str) -> Path:
        return self._rules_dir / f"{name}{self._suffix}"

    def read_text(self, path: Path) -> str:
        return read_text(path)


class RulesRepository(RuleDirectory):
    def __init__(self, project_root: Path) -> None:
        super().__init__(project_root / CANONICAL_RULES_DIR, CANONICAL_RULE_SUFFIX)

    def load_rule(self, path: Path) -> CanonicalRule:
        return parse_canonical_rule(
            self.rule_name(path), self.read_text(path), source=str(path)
        )

    def get_rule(self, name: str) -> CanonicalRule | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        return self.load_rule(path)


class ToolRulesRepository(RuleDirectory):
    def __init__(self, base_dir: Path, tool: Tool) -> None:
        metadata = tool_metadata(tool)
        super().__init__(base_dir / metadata.rules_dir, metadata.rule_suffix)
        self.tool = metadata.tool

    def load_rule(self, path: Path) -> ToolRule:
        return parse_tool_rule(
            self.tool, self.rule_name(path), self.read_text(path), source=str(path)
        )
