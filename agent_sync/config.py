import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from agent_sync.constants import CONFIG_FILENAME, DEFAULT_BASE_DIR
from agent_sync.errors import (
    InvalidConfigSchemaError,
    InvalidJsonFormatError,
    MissingConfigFileError,
    SyncAppError,
)
from agent_sync.schema import CONFIG_SCHEMA, first_schema_error
from agent_sync.security import validate_relative_path
from agent_sync.tools import DEFAULT_TOOLS, Tool, parse_tool
from agent_sync.utils import read_json, write_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectConfig:
    tools: tuple[Tool, ...] = DEFAULT_TOOLS
    base_dirs: tuple[str, ...] = (DEFAULT_BASE_DIR,)

    def as_dict(self) -> dict[str, Any]:
        return {
            "tools": [tool.value for tool in self.tools],
            "baseDirs": list(self.base_dirs),
        }


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_FILENAME


def default_config() -> ProjectConfig:
    return ProjectConfig()


def validate_config(payload: Any, path: Path) -> ProjectConfig:
    if not isinstance(payload, dict):
        raise InvalidConfigSchemaError(path, "must be a JSON object")
    detail = first_schema_error(CONFIG_SCHEMA, payload)
    if detail is not None:
        raise InvalidConfigSchemaError(path, detail)

    tools = tuple(parse_tool(value) for value in payload.get("tools", []))
    if "tools" not in payload:
        tools = DEFAULT_TOOLS

    base_dirs = tuple(payload.get("baseDirs", [DEFAULT_BASE_DIR]))
    for base_dir in base_dirs:
        try:
            validate_relative_path(base_dir)
        except SyncAppError as exc:
            raise InvalidConfigSchemaError(path, f"baseDirs: {exc}") from exc

    return ProjectConfig(tools=tools, base_dirs=base_dirs)


def load_config(project_root: Path) -> ProjectConfig:
    path = config_path(project_root)
    if not path.exists():
        raise MissingConfigFileError(path)
    try:
        payload = read_json(path)
    except json.JSONDecodeError as exc:
        raise InvalidJsonFormatError(path, str(exc)) from exc
    config = validate_config(payload, path)
    logger.info(
        "Loaded %s: tools=%s baseDirs=%s",
        path.name,
        ",".join(tool.value for tool in config.tools) or "-",
        ",".join(config.base_dirs),
    )
    return config


def save_config(project_root: Path, config: ProjectConfig) -> Path:
    path = config_path(project_root)
    write_json(path, config.as_dict())
    return path
