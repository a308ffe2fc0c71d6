"""
Tests for Configuration Resolver — preset templates, overrides and precedence.
"""

import json

import pytest
from pydantic import ValidationError

from rta.core.catalog import RULE_CATALOG
from rta.core.config_resolver import (
    load_config_file,
    preset_template,
    resolve_config,
    resolve_overrides,
)
from rta.core.presets import PRESET_RULES
from rta.models.rule_models import AnalyzerConfig, ConfigOverrides, Preset, Severity

SEVERITY_RANK = {Severity.INFO: 0, Severity.WARNING: 1, Severity.ERROR: 2}


@pytest.mark.parametrize("preset", list(Preset))
def test_resolved_config_is_total(preset):
    config = resolve_config(preset=preset.value)
    assert set(config.rules) == set(RULE_CATALOG)
    for rule_id in RULE_CATALOG:
        assert isinstance(config.is_enabled(rule_id), bool)
        assert config.severity_for(rule_id) is not None


@pytest.mark.parametrize("preset", list(Preset))
def test_presets_cover_every_rule(preset):
    assert set(PRESET_RULES[preset]) == set(RULE_CATALOG)


def test_presets_are_nested_in_coverage_and_strictness():
    minimal = resolve_config(preset="minimal")
    recommended = resolve_config(preset="recommended")
    strict = resolve_config(preset="strict")

    assert set(minimal.enabled_rule_ids()) <= set(recommended.enabled_rule_ids())
    assert set(recommended.enabled_rule_ids()) <= set(strict.enabled_rule_ids())

    for rule_id in minimal.enabled_rule_ids():
        assert SEVERITY_RANK[minimal.severity_for(rule_id)] <= SEVERITY_RANK[recommended.severity_for(rule_id)]
    for rule_id in recommended.enabled_rule_ids():
        assert SEVERITY_RANK[recommended.severity_for(rule_id)] <= SEVERITY_RANK[strict.severity_for(rule_id)]


def test_rule_allow_list_overrides_preset():
    config = resolve_config(preset="minimal", enabled_rules=["react-missing-key"])
    assert config.enabled_rule_ids() == ["react-missing-key"]


def test_rule_allow_list_can_enable_rule_the_preset_disables():
    config = resolve_config(preset="minimal", enabled_rules=["missing-react-memo"])
    assert config.enabled_rule_ids() == ["missing-react-memo"]
    assert config.severity_for("missing-react-memo") == Severity.INFO


def test_category_allow_list_disables_other_categories():
    config = resolve_config(preset="recommended", categories=["accessibility"])
    enabled = config.enabled_rule_ids()
    assert enabled
    assert all(RULE_CATALOG[rule_id].category == "accessibility" for rule_id in enabled)
    assert config.categories["accessibility"] is True
    assert config.categories["performance"] is False


def test_rule_allow_list_beats_category_allow_list():
    config = resolve_config(categories=["accessibility"], enabled_rules=["react-missing-key"])
    assert config.enabled_rule_ids() == ["react-missing-key"]


def test_minimal_preset_disables_performance_category():
    config = resolve_config(preset="minimal")
    assert config.categories["performance"] is False
    assert not config.is_enabled("inline-object-creation")


def test_unknown_preset_falls_back_with_warning():
    config = resolve_config(preset="paranoid")
    assert config.preset == Preset.RECOMMENDED
    assert "Unknown preset 'paranoid', falling back to 'recommended'" in config.warnings


def test_missing_preset_uses_default():
    config = resolve_config()
    assert config.preset == Preset.RECOMMENDED
    assert config.warnings == ()


def test_severity_override_wins_over_preset():
    config = resolve_config(rules={"typescript-any-usage": {"severity": "error"}})
    assert config.severity_for("typescript-any-usage") == Severity.ERROR
    assert config.is_enabled("typescript-any-usage")


def test_severity_only_override_keeps_preset_enablement():
    config = resolve_config(preset="recommended", rules={"missing-react-memo": {"severity": "warning"}})
    assert not config.is_enabled("missing-react-memo")


def test_enabled_override_turns_rule_on_and_off():
    config = resolve_config(
        preset="recommended",
        rules={
            "missing-react-memo": {"enabled": True},
            "react-anonymous-function": {"enabled": False},
        },
    )
    assert config.is_enabled("missing-react-memo")
    assert not config.is_enabled("react-anonymous-function")


def test_options_merge_catalog_preset_and_override():
    assert resolve_config(preset="recommended").options_for("component-too-many-props") == {"maxProps": 10}
    assert resolve_config(preset="strict").options_for("component-too-many-props") == {"maxProps": 8}

    config = resolve_config(
        preset="strict",
        rules={"component-too-many-props": {"options": {"maxProps": 4, "bogus": True}}},
    )
    assert config.options_for("component-too-many-props") == {"maxProps": 4}
    assert "Rule 'component-too-many-props' does not recognize option 'bogus'" in config.warnings


def test_unknown_names_are_reported_not_fatal():
    config = resolve_config(
        categories=["accessibility", "astrology"],
        enabled_rules=["missing-alt-text", "no-such-rule"],
        rules={"ghost-rule": {"enabled": True}},
    )
    assert config.enabled_rule_ids() == ["missing-alt-text"]
    assert "Unknown category 'astrology' ignored" in config.warnings
    assert "Unknown rule 'no-such-rule' ignored" in config.warnings
    assert "Override for unknown rule 'ghost-rule' ignored" in config.warnings


def test_resolved_config_is_immutable():
    config = resolve_config()
    with pytest.raises(ValidationError):
        config.preset = Preset.STRICT


def test_unconfigured_rule_defaults_to_enabled():
    config = AnalyzerConfig()
    assert config.is_enabled("react-missing-key") is True
    assert config.severity_for("react-missing-key", Severity.ERROR) == Severity.ERROR


def test_resolve_overrides_accepts_camel_case_body():
    overrides = ConfigOverrides.model_validate({"preset": "strict", "enabledRules": ["react-missing-key"]})
    config = resolve_overrides(overrides)
    assert config.preset == Preset.STRICT
    assert config.enabled_rule_ids() == ["react-missing-key"]


def test_load_config_file_from_directory(tmp_path):
    (tmp_path / ".rta.json").write_text(
        json.dumps({
            "version": "0.2.0",
            "preset": "minimal",
            "categories": ["accessibility"],
            "ignorePatterns": ["*.test.tsx"],
        }),
        encoding="utf-8",
    )
    overrides = load_config_file(tmp_path)
    assert overrides.preset == "minimal"
    assert overrides.categories == ["accessibility"]
    assert overrides.ignore_patterns == ["*.test.tsx"]


def test_load_config_file_tolerates_missing_and_malformed(tmp_path):
    assert load_config_file(tmp_path) == ConfigOverrides()

    (tmp_path / ".rta.json").write_text("{not json", encoding="utf-8")
    assert load_config_file(tmp_path) == ConfigOverrides()


def test_preset_template_matches_preset_categories():
    minimal = preset_template("minimal")
    assert minimal["preset"] == "minimal"
    assert "performance" not in minimal["categories"]
    assert "*.test.ts" in minimal["ignorePatterns"]

    strict = preset_template("strict")
    assert "best-practices" in strict["categories"]
    assert "*.test.ts" not in strict["ignorePatterns"]
