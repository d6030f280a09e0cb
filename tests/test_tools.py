import pytest

from agent_sync.errors import InvalidToolError
from agent_sync.tools import TOOL_CATALOG, Tool, parse_tool, tool_label


def test_catalog_covers_every_tool() -> None:
    assert set(TOOL_CATALOG) == set(Tool)


def test_parse_tool_normalizes_case() -> None:
    assert parse_tool(" Cursor ") == Tool.CURSOR
    assert parse_tool(Tool.COPILOT) is Tool.COPILOT


def test_parse_tool_without_close_match() -> None:
    with pytest.raises(InvalidToolError) as excinfo:
        parse_tool("emacs")
    assert excinfo.value.suggestion is None
    assert str(excinfo.value) == "Unknown tool 'emacs'"


def test_tool_label() -> None:
    assert tool_label("copilot") == "GitHub Copilot"
