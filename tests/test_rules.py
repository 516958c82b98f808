"""Tests for Rule matching."""

from tilewm.config.rules import DEFAULT_RULES
from tilewm.tiling.rules import Rule, is_floating, is_ignored


def test_empty_class_name_never_matches():
    rule = Rule("", ignore=True)
    assert rule.class_name is None
    assert not rule.matches("")
    assert not is_ignored([rule], "")


def test_match_is_exact():
    rule = Rule("krunner", ignore=True)
    assert rule.matches("krunner")
    assert not rule.matches("Krunner")
    assert not rule.matches("krunner2")


def test_any_matching_rule_applies():
    rules = [
        Rule("firefox"),
        Rule("mpv", floating=True),
        Rule("krunner", ignore=True),
    ]
    assert is_ignored(rules, "krunner")
    assert not is_ignored(rules, "mpv")
    assert is_floating(rules, "mpv")
    assert not is_floating(rules, "firefox")


def test_default_rules_ignore_krunner():
    assert is_ignored(DEFAULT_RULES, "krunner")
