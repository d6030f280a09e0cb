import logging
from pathlib import Path
from typing import Optional

from agent_sync.config import ProjectConfig
from agent_sync.executor import SyncExecutor
from agent_sync.models import SyncIssue, SyncPlan, SyncResult
from agent_sync.planner import RulesSyncPlanner
from agent_sync.security import PathValidator
from agent_sync.tools import Tool

logger = logging.getLogger(__name__)


class RulesSyncService:
    """Entry point for both sync directions.

    ``preview`` runs the same planning as a real pass and stops before the
    executor touches the filesystem, so the reported sets are identical.
    """

    def __init__(
        self,
        project_root: Path,
        config: ProjectConfig,
        path_validator: Optional[PathValidator] = None,
        executor: Optional[SyncExecutor] = None,
    ) -> None:
        self.project_root = project_root
        self.config = config
        self.planner = RulesSyncPlanner(
            project_root=project_root, config=config, path_validator=path_validator
        )
        self.executor = executor or SyncExecutor()

    def export_rules(self, preview: bool = False) -> SyncResult:
        logger.info("Exporting canonical rules to %d tool(s)", len(self.config.tools))
        return self._finish(self.planner.plan_export(), preview)

    def import_rules(self, tool: Tool | str, preview: bool = False) -> SyncResult:
        logger.info("Importing rules from %s", getattr(tool, "value", tool))
        return self._finish(self.planner.plan_import(tool), preview)

    def _finish(self, plan: SyncPlan, preview: bool) -> SyncResult:
        failures: list[SyncIssue] = []
        if not preview:
            applied, failed, failures = self.executor.execute(plan)
            logger.info("Applied %d change(s), %d failed", applied, failed)
        return SyncResult.from_plan(plan, preview=preview, failures=failures)
