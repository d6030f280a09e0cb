import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

SCHEMAS_DIR = Path(__file__).resolve().parent / "schemas"

CONFIG_SCHEMA = "agentsync.schema.json"
CANONICAL_RULE_SCHEMA = "canonical-rule.schema.json"


def tool_rule_schema(tool_value: str) -> str:
    return f"{tool_value}-rule.schema.json"


def load_schema(name: str) -> dict[str, Any]:
    return json.loads((SCHEMAS_DIR / name).read_text(encoding="utf-8"))


@lru_cache(maxsize=None)
def schema_validator(name: str) -> Draft202012Validator:
    schema = load_schema(name)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


def first_schema_error(name: str, payload: Any) -> str | None:
    error = next(iter(schema_validator(name).iter_errors(payload)), None)
    if error is None:
        return None
    return format_schema_error(error)
