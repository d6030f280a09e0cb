from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


class ActionKind(str, Enum):
    WRITE_RULE = "write_rule"
    REMOVE_RULE = "remove_rule"


class ActionStatus(str, Enum):
    NOOP = "noop"
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


class SyncDirection(str, Enum):
    EXPORT = "export"
    IMPORT = "import"


@dataclass(frozen=True)
class SyncIssue:
    identity: str
    message: str

    def __str__(self) -> str:
        return f"{self.identity}: {self.message}"

    def as_dict(self) -> dict[str, str]:
        return {"identity": self.identity, "message": self.message}


@dataclass
class Action:
    kind: ActionKind
    path: Path
    status: ActionStatus
    detail: str
    identity: str
    payload: Optional[Any] = None
    tool: Optional[str] = None


@dataclass
class SyncPlan:
    direction: SyncDirection
    actions: list[Action] = field(default_factory=list)
    errors: list[SyncIssue] = field(default_factory=list)
    skipped: list[SyncIssue] = field(default_factory=list)
    conflicts: list[SyncIssue] = field(default_factory=list)

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in ActionStatus}
        for action in self.actions:
            counts[action.status.value] += 1
        counts["actions"] = len(self.actions)
        counts["errors"] = len(self.errors)
        counts["skipped"] = len(self.skipped)
        counts["conflicts"] = len(self.conflicts)
        return counts


_STATUS_BUCKET = {
    ActionStatus.CREATE: "created",
    ActionStatus.UPDATE: "updated",
    ActionStatus.REMOVE: "deleted",
    ActionStatus.NOOP: "unchanged",
}


@dataclass
class SyncResult:
    direction: SyncDirection
    preview: bool = False
    created: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    errors: list[SyncIssue] = field(default_factory=list)
    skipped: list[SyncIssue] = field(default_factory=list)
    conflicts: list[SyncIssue] = field(default_factory=list)

    @classmethod
    def from_plan(
        cls,
        plan: SyncPlan,
        preview: bool = False,
        failures: Optional[list[SyncIssue]] = None,
    ) -> "SyncResult":
        failed = {issue.identity for issue in failures or []}
        result = cls(
            direction=plan.direction,
            preview=preview,
            errors=list(plan.errors),
            skipped=list(plan.skipped),
            conflicts=list(plan.conflicts),
        )
        for action in plan.actions:
            if action.identity in failed:
                continue
            getattr(result, _STATUS_BUCKET[action.status]).append(action.identity)
        result.errors.extend(failures or [])
        return result

    def has_changes(self) -> bool:
        return bool(self.created or self.updated or self.deleted)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def summary(self) -> dict[str, int]:
        return {
            "created": len(self.created),
            "updated": len(self.updated),
            "deleted": len(self.deleted),
            "unchanged": len(self.unchanged),
            "skipped": len(self.skipped),
            "conflicts": len(self.conflicts),
            "errors": len(self.errors),
        }

    def as_dict(self) -> dict[str, Any]:
        return {
            "direction": self.direction.value,
            "preview": self.preview,
            "created": list(self.created),
            "updated": list(self.updated),
            "deleted": list(self.deleted),
            "unchanged": list(self.unchanged),
            "errors": [issue.as_dict() for issue in self.errors],
            "skipped": [issue.as_dict() for issue in self.skipped],
            "conflicts": [issue.as_dict() for issue in self.conflicts],
        }
