from pathlib import Path


class SyncAppError(Exception):
    """Base user-facing application error."""


class SyncFileError(SyncAppError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class MissingConfigFileError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(
            path=path,
            message="Missing required config file (run `agentsync init`)",
        )


class InvalidJsonFormatError(SyncFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(SyncFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class MissingRulesDirectoryError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Rules directory not found")


class ProjectAlreadyInitializedError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Project already initialized")


class RuleAlreadyExistsError(SyncFileError):
    def __init__(self, path: Path) -> None:
        super().__init__(path=path, message="Rule already exists")


class ParseError(SyncAppError):
    def __init__(self, message: str, source: str | None = None) -> None:
        self.message = message
        self.source = source
        text = f"{source}: {message}" if source else message
        super().__init__(text)


class InvalidToolError(SyncAppError):
    def __init__(self, tool: str, suggestion: str | None = None) -> None:
        self.tool = tool
        self.suggestion = suggestion
        message = f"Unknown tool '{tool}'"
        if suggestion:
            message = f"{message}, did you mean '{suggestion}'?"
        super().__init__(message)


class UnrepresentableModeError(SyncAppError):
    def __init__(self, tool: str, mode: str) -> None:
        self.tool = tool
        self.mode = mode
        super().__init__(f"{tool} has no equivalent for '{mode}' rules, not exported")


class PathTraversalError(SyncAppError):
    def __init__(self, base: Path, target: Path) -> None:
        self.base = base
        self.target = target
        super().__init__(f"Path escapes {base}: {target}")


class InvalidRuleNameError(SyncAppError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid rule name '{name}': {reason}")
