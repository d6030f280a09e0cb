from typing import Final


CONFIG_FILENAME: Final[str] = "agentsync.json"

CANONICAL_RULES_DIR: Final[str] = ".agentsync/rules"
CANONICAL_RULE_SUFFIX: Final[str] = ".md"

FRONTMATTER_MARKER: Final[str] = "---"

TARGET_ALL: Final[str] = "*"
DEFAULT_BASE_DIR: Final[str] = "."

UNIVERSAL_GLOBS: Final[frozenset[str]] = frozenset({"", "**", "**/*"})
COPILOT_DEFAULT_APPLY_TO: Final[str] = "**"

RULE_NAME_ALLOWED_PUNCTUATION: Final[tuple[str, ...]] = ("-", "_")
