import pytest

from agent_sync.errors import InvalidRuleNameError
from agent_sync.rules.parser import parse_canonical_rule, serialize_canonical_rule
from agent_sync.rules.templates import create_rule_template, rule_title, validate_rule_name
from agent_sync.rules.translators import create_translator
from agent_sync.tools import Tool


@pytest.mark.parametrize("name", ["style", "python-style", "api_v2", "Rule1"])
def test_valid_rule_names(name: str) -> None:
    validate_rule_name(name)


@pytest.mark.parametrize("name", ["", "a/b", "a\\b", "..", "a..b", "a b", "x.md", "é!"])
def test_invalid_rule_names(name: str) -> None:
    with pytest.raises(InvalidRuleNameError):
        validate_rule_name(name)


def test_rule_title() -> None:
    assert rule_title("python-style_guide") == "Python Style Guide"


def test_template_parses_and_exports_everywhere() -> None:
    rule = create_rule_template("testing")
    parsed = parse_canonical_rule("testing", serialize_canonical_rule(rule))
    assert parsed == rule
    for tool in Tool:
        exported = create_translator(tool).export_rule(parsed)
        assert exported.content == rule.content
