import logging
from typing import Optional, Protocol

from agent_sync.models import Action, ActionKind, ActionStatus, SyncIssue, SyncPlan
from agent_sync.utils import write_text_atomic

logger = logging.getLogger(__name__)


class ActionHandler(Protocol):
    def handle(self, action: Action) -> tuple[bool, Optional[str]]: ...


class WriteRuleHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status == ActionStatus.NOOP:
            return False, None
        if not isinstance(action.payload, str):
            return False, f"Missing text payload for write action: {action.path}"
        write_text_atomic(action.path, action.payload)
        return True, None


class RemoveRuleHandler:
    def handle(self, action: Action) -> tuple[bool, Optional[str]]:
        if action.status != ActionStatus.REMOVE:
            return False, None
        if not action.path.exists():
            return False, None
        action.path.unlink()
        return True, None


class SyncExecutor:
    def __init__(self) -> None:
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.WRITE_RULE: WriteRuleHandler(),
            ActionKind.REMOVE_RULE: RemoveRuleHandler(),
        }

    def execute(self, plan: SyncPlan) -> tuple[int, int, list[SyncIssue]]:
        applied = 0
        failed = 0
        failures: list[SyncIssue] = []

        for action in plan.actions:
            try:
                handler = self.handlers.get(action.kind)
                if handler is None:
                    failed += 1
                    failures.append(
                        SyncIssue(
                            action.identity,
                            f"Unknown action kind: {action.kind.value}",
                        )
                    )
                    continue

                changed, failure = handler.handle(action)
                if failure is not None:
                    failed += 1
                    failures.append(SyncIssue(action.identity, failure))
                    continue
                if changed:
                    applied += 1
                    logger.info("%s %s", action.status.value, action.path)
            except OSError as exc:
                failed += 1
                failures.append(
                    SyncIssue(
                        action.identity,
                        f"{action.kind.value} failed for {action.path}: {exc}",
                    )
                )

        return applied, failed, failures
