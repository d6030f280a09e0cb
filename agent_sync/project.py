import logging
from pathlib import Path

from agent_sync.config import (
    ProjectConfig,
    config_path,
    default_config,
    load_config,
    save_config,
)
from agent_sync.errors import ProjectAlreadyInitializedError, RuleAlreadyExistsError
from agent_sync.rules.parser import serialize_canonical_rule
from agent_sync.rules.repository import RulesRepository, ToolRulesRepository
from agent_sync.rules.templates import create_rule_template
from agent_sync.security import validate_path_within_base
from agent_sync.tools import Tool, tool_metadata
from agent_sync.utils import write_text_atomic

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root
        self.rules = RulesRepository(project_root)

    @property
    def config_path(self) -> Path:
        return config_path(self.project_root)

    def init_project(self, config: ProjectConfig | None = None) -> ProjectConfig:
        if self.config_path.exists():
            raise ProjectAlreadyInitializedError(self.config_path)
        config = config or default_config()
        self.rules.rules_dir.mkdir(parents=True, exist_ok=True)
        save_config(self.project_root, config)
        logger.info("Initialized agentsync project in %s", self.project_root)
        return config

    def detect_tool_rules(self) -> list[dict]:
        rows: list[dict] = []
        for tool in Tool:
            repository = ToolRulesRepository(self.project_root, tool)
            count = len(repository.list_rule_paths())
            if count == 0:
                continue
            metadata = tool_metadata(tool)
            rows.append(
                {
                    "tool": tool.value,
                    "label": metadata.label,
                    "directory": metadata.rules_dir,
                    "count": count,
                }
            )
        return rows

    def add_rule(self, name: str) -> Path:
        load_config(self.project_root)
        rule = create_rule_template(name)
        path = self.rules.path_for(rule.name)
        validate_path_within_base(self.project_root, path)
        if path.exists():
            raise RuleAlreadyExistsError(path)
        write_text_atomic(path, serialize_canonical_rule(rule))
        logger.info("Created rule %s", path)
        return path
