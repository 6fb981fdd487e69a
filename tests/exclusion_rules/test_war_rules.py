"""Tests for the per-file skip decision and rule assembly."""

import pytest

from ringwar.exclusion_rules import (
    CompositeExclusionRules,
    GitIgnoreExclusionRules,
    RegexExclusionRules,
    build_exclusion_rules,
    should_skip,
)


@pytest.mark.parametrize("name", [".#lock", "#lock", "notes.txt~"])
def test_editor_artifacts_always_skipped(tmp_path, name):
    assert should_skip(tmp_path / name, f"WEB-INF/classes/{name}")
    assert should_skip(tmp_path / name, name, RegexExclusionRules())


def test_regular_file_kept_without_rules(tmp_path):
    assert not should_skip(tmp_path / "core.class", "WEB-INF/classes/core.class")


def test_pattern_matched_against_archive_path(tmp_path):
    rules = RegexExclusionRules([r"^WEB-INF/classes/dev/"])
    source = tmp_path / "dev" / "user.clj"

    assert should_skip(source, "WEB-INF/classes/dev/user.clj", rules)
    # The same file mounted at the archive root is not excluded
    assert not should_skip(source, "dev/user.clj", rules)


def test_base_name_checks_use_source_file(tmp_path):
    assert should_skip(tmp_path / "index.html~", "index.html")


def test_build_rules_none_when_unconfigured(make_config):
    assert build_exclusion_rules(make_config()) is None
    assert build_exclusion_rules(make_config(), GitIgnoreExclusionRules()) is None


def test_build_rules_from_war_exclusions(make_config):
    config = make_config(ring={"war-exclusions": [r"\.scss$", "^tmp/"]})
    rules = build_exclusion_rules(config)

    assert isinstance(rules, CompositeExclusionRules)
    assert rules.exclude("css/site.scss")
    assert rules.exclude("tmp/a.txt")
    assert not rules.exclude("css/site.css")


def test_build_rules_with_extra(make_config):
    extra = GitIgnoreExclusionRules()
    extra.add_rule("*.orig")
    rules = build_exclusion_rules(make_config(ring={"war-exclusions": [r"\.scss$"]}), extra)

    assert len(rules.rules) == 2
    assert rules.exclude("a.orig")
    assert rules.exclude("a.scss")

    only_extra = build_exclusion_rules(make_config(), extra)
    assert only_extra.exclude("a.orig")
    assert not only_extra.exclude("a.scss")
