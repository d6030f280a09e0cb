import logging
from pathlib import Path
from typing import Optional

from agent_sync.config import ProjectConfig
from agent_sync.constants import DEFAULT_BASE_DIR
from agent_sync.errors import (
    MissingRulesDirectoryError,
    ParseError,
    SyncAppError,
    UnrepresentableModeError,
)
from agent_sync.models import (
    Action,
    ActionKind,
    ActionStatus,
    SyncDirection,
    SyncIssue,
    SyncPlan,
)
from agent_sync.rules.frontmatter import split_frontmatter
from agent_sync.rules.merge import merge_imported_rule
from agent_sync.rules.models import CanonicalRule, ToolRule
from agent_sync.rules.parser import (
    serialize_canonical_rule,
    serialize_tool_rule,
    tool_rule_frontmatter,
)
from agent_sync.rules.repository import RulesRepository, ToolRulesRepository
from agent_sync.rules.translators import create_translator
from agent_sync.security import PathValidator, validate_path_within_base
from agent_sync.tools import Tool, parse_tool
from agent_sync.utils import read_text

logger = logging.getLogger(__name__)

# Per-document failures that must not abort the pass.
DOCUMENT_ERRORS = (SyncAppError, OSError, ValueError)


def export_identity(name: str, tool: Tool, base_dir: str = DEFAULT_BASE_DIR) -> str:
    if base_dir in ("", DEFAULT_BASE_DIR):
        return f"{name} ({tool.value})"
    return f"{name} ({tool.value} @ {base_dir})"


class RulesSyncPlanner:
    def __init__(
        self,
        project_root: Path,
        config: ProjectConfig,
        path_validator: Optional[PathValidator] = None,
    ) -> None:
        self.project_root = project_root
        self.config = config
        self.path_validator = path_validator or validate_path_within_base
        self.canonical = RulesRepository(project_root)

    def plan_export(self) -> SyncPlan:
        if not self.canonical.exists():
            raise MissingRulesDirectoryError(self.canonical.rules_dir)

        plan = SyncPlan(direction=SyncDirection.EXPORT)
        rules: list[CanonicalRule] = []
        broken: set[str] = set()
        for path in self.canonical.list_rule_paths():
            name = self.canonical.rule_name(path)
            try:
                rules.append(self.canonical.load_rule(path))
            except DOCUMENT_ERRORS as exc:
                logger.warning("Skipping canonical rule %s: %s", name, exc)
                plan.errors.append(SyncIssue(name, str(exc)))
                broken.add(name)

        for base_dir in self.config.base_dirs:
            for tool in self.config.tools:
                self._plan_tool_export(plan, base_dir, tool, rules, broken)
        return plan

    def _plan_tool_export(
        self,
        plan: SyncPlan,
        base_dir: str,
        tool: Tool,
        rules: list[CanonicalRule],
        protected: set[str],
    ) -> None:
        base_path = self.project_root / base_dir
        target = ToolRulesRepository(base_path, tool)
        translator = create_translator(tool)
        staged = set(protected)

        for rule in rules:
            if not rule.targets_tool(tool):
                continue
            identity = export_identity(rule.name, tool, base_dir)
            try:
                tool_rule = translator.export_rule(rule)
            except UnrepresentableModeError as exc:
                plan.skipped.append(SyncIssue(identity, str(exc)))
                continue
            except DOCUMENT_ERRORS as exc:
                plan.errors.append(SyncIssue(identity, str(exc)))
                staged.add(rule.name)
                continue

            staged.add(rule.name)
            path = target.path_for(rule.name)
            try:
                self.path_validator(self.project_root, path)
                status = self._classify_export(path, tool_rule)
            except DOCUMENT_ERRORS as exc:
                plan.errors.append(SyncIssue(identity, str(exc)))
                continue
            plan.actions.append(
                Action(
                    kind=ActionKind.WRITE_RULE,
                    path=path,
                    status=status,
                    detail=f"export to {tool.value}",
                    identity=identity,
                    payload=serialize_tool_rule(tool_rule),
                    tool=tool.value,
                )
            )

        for path in target.list_rule_paths():
            name = target.rule_name(path)
            if name in staged:
                continue
            identity = export_identity(name, tool, base_dir)
            try:
                self.path_validator(self.project_root, path)
            except DOCUMENT_ERRORS as exc:
                plan.errors.append(SyncIssue(identity, str(exc)))
                continue
            plan.actions.append(
                Action(
                    kind=ActionKind.REMOVE_RULE,
                    path=path,
                    status=ActionStatus.REMOVE,
                    detail="no canonical rule",
                    identity=identity,
                    tool=tool.value,
                )
            )

    @staticmethod
    def _classify_export(path: Path, tool_rule: ToolRule) -> ActionStatus:
        if not path.exists():
            return ActionStatus.CREATE
        try:
            metadata, content = split_frontmatter(read_text(path))
        except ParseError:
            return ActionStatus.UPDATE
        if metadata == tool_rule_frontmatter(tool_rule) and content == tool_rule.content:
            return ActionStatus.NOOP
        return ActionStatus.UPDATE

    def plan_import(self, tool: Tool | str) -> SyncPlan:
        tool = parse_tool(tool)
        source = ToolRulesRepository(self.project_root, tool)
        if not source.exists():
            raise MissingRulesDirectoryError(source.rules_dir)

        plan = SyncPlan(direction=SyncDirection.IMPORT)
        translator = create_translator(tool)
        for path in source.list_rule_paths():
            name = source.rule_name(path)
            try:
                document = source.load_rule(path)
                imported = translator.import_rule(document)
                target = self.canonical.path_for(name)
                self.path_validator(self.project_root, target)
                existing = self.canonical.get_rule(name)
                merged = merge_imported_rule(imported, existing, document)
            except DOCUMENT_ERRORS as exc:
                logger.warning("Skipping %s rule %s: %s", tool.value, name, exc)
                plan.errors.append(SyncIssue(name, str(exc)))
                continue

            if merged.conflict is not None:
                plan.conflicts.append(SyncIssue(name, merged.conflict.message))

            if existing is None:
                status = ActionStatus.CREATE
            elif merged.rule == existing:
                status = ActionStatus.NOOP
            else:
                status = ActionStatus.UPDATE
            plan.actions.append(
                Action(
                    kind=ActionKind.WRITE_RULE,
                    path=target,
                    status=status,
                    detail=f"import from {tool.value}",
                    identity=name,
                    payload=serialize_canonical_rule(merged.rule),
                    tool=tool.value,
                )
            )
        return plan
