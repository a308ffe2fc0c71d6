"""
Configuration Resolver — Merges a preset with caller overrides.

Precedence, highest first:
    1. explicit rule allow-list (`enabled_rules`)
    2. explicit category allow-list (`categories`)
    3. per-rule overrides (`rules`)
    4. the preset's per-rule table and category map
    5. the catalog default severity (severity only)

Resolution never fails. Unknown presets, categories, rule ids and option
keys are reported as warnings on the resolved config.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping

from pydantic import ValidationError

from rta.config import settings
from rta.core.catalog import CATEGORIES, RULE_CATALOG
from rta.core.presets import PRESET_CATEGORIES, PRESET_RULES
from rta.models.rule_models import (
    AnalyzerConfig,
    ConfigOverrides,
    OptionValue,
    Preset,
    Rule,
    RuleConfig,
)

logger = logging.getLogger("rta.config")

CONFIG_FILENAME = ".rta.json"


def parse_preset(name: str | Preset | None, warnings: list[str]) -> Preset:
    """Map a preset name to a Preset, falling back to 'recommended'."""
    if isinstance(name, Preset):
        return name
    if not name:
        name = settings.default_preset
    try:
        return Preset(name.strip().lower())
    except ValueError:
        warnings.append(f"Unknown preset '{name}', falling back to 'recommended'")
        return Preset.RECOMMENDED


def resolve_config(
    preset: str | Preset | None = None,
    categories: Iterable[str] | None = None,
    enabled_rules: Iterable[str] | None = None,
    rules: Mapping[str, RuleConfig | dict] | None = None,
) -> AnalyzerConfig:
    """
    Produce the effective configuration for one analysis run.

    Args:
        preset: Preset name (minimal/recommended/strict).
        categories: Category allow-list. Rules outside it are disabled.
        enabled_rules: Rule allow-list. When given, exactly these rules run.
        rules: Per-rule overrides of enabled/severity/options.

    Returns:
        AnalyzerConfig defining enablement and severity for every catalog rule.
    """
    warnings: list[str] = []
    resolved_preset = parse_preset(preset, warnings)

    category_map = dict(PRESET_CATEGORIES[resolved_preset])
    allowed_categories = _known(categories, CATEGORIES, "category", warnings)
    if allowed_categories is not None:
        category_map = {name: name in allowed_categories for name in CATEGORIES}

    allowed_rules = _known(enabled_rules, RULE_CATALOG, "rule", warnings)
    overrides = _coerce_overrides(rules or {}, warnings)

    preset_rules = PRESET_RULES[resolved_preset]
    effective: dict[str, RuleConfig] = {}

    for rule_id, rule in RULE_CATALOG.items():
        base = preset_rules.get(rule_id)
        override = overrides.get(rule_id)

        # Enablement: no entry anywhere means enabled.
        enabled = base.enabled if base is not None else True
        if override is not None and "enabled" in override.model_fields_set:
            enabled = override.enabled
        if not category_map.get(rule.category, True):
            enabled = False
        if allowed_rules is not None:
            enabled = rule_id in allowed_rules

        severity = rule.default_severity
        if base is not None and base.severity is not None:
            severity = base.severity
        if override is not None and override.severity is not None:
            severity = override.severity

        options = _merge_options(
            rule,
            base.options if base is not None else {},
            override.options if override is not None else {},
            warnings,
        )

        effective[rule_id] = RuleConfig(enabled=enabled, severity=severity, options=options)

    for message in warnings:
        logger.warning(message)

    return AnalyzerConfig(
        preset=resolved_preset,
        categories=category_map,
        rules=effective,
        warnings=tuple(warnings),
    )


def resolve_overrides(overrides: ConfigOverrides) -> AnalyzerConfig:
    """Resolve a ConfigOverrides value (CLI flags, API body, or .rta.json)."""
    return resolve_config(
        preset=overrides.preset,
        categories=overrides.categories,
        enabled_rules=overrides.enabled_rules,
        rules=overrides.rules,
    )


def load_config_file(path: str | Path) -> ConfigOverrides:
    """
    Read a `.rta.json` file into ConfigOverrides.

    A missing, unreadable or malformed file yields empty overrides.
    """
    config_path = Path(path)
    if config_path.is_dir():
        config_path = config_path / CONFIG_FILENAME
    if not config_path.is_file():
        return ConfigOverrides()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return ConfigOverrides.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Could not load config from {config_path}, using defaults: {e}")
        return ConfigOverrides()


def preset_template(preset: str | Preset) -> dict:
    """Body of a fresh `.rta.json` for the given preset."""
    resolved = parse_preset(preset, [])
    ignore_patterns = ["node_modules/**", "dist/**", "build/**"]
    if resolved is not Preset.STRICT:
        ignore_patterns += ["*.test.ts", "*.spec.ts"]
    return {
        "version": "0.2.0",
        "preset": resolved.value,
        "categories": [
            name for name, on in PRESET_CATEGORIES[resolved].items() if on
        ],
        "ignorePatterns": ignore_patterns,
    }


# ── helpers ──


def _known(
    names: Iterable[str] | None,
    known: Mapping[str, object],
    kind: str,
    warnings: list[str],
) -> set[str] | None:
    """Normalize an allow-list, dropping names that do not exist."""
    if names is None:
        return None
    result: set[str] = set()
    for raw in names:
        name = raw.strip()
        if not name:
            continue
        if name in known:
            result.add(name)
        else:
            warnings.append(f"Unknown {kind} '{name}' ignored")
    return result


def _coerce_overrides(
    rules: Mapping[str, RuleConfig | dict],
    warnings: list[str],
) -> dict[str, RuleConfig]:
    coerced: dict[str, RuleConfig] = {}
    for rule_id, value in rules.items():
        if rule_id not in RULE_CATALOG:
            warnings.append(f"Override for unknown rule '{rule_id}' ignored")
            continue
        try:
            coerced[rule_id] = (
                value if isinstance(value, RuleConfig) else RuleConfig.model_validate(value)
            )
        except ValidationError as e:
            warnings.append(f"Invalid override for rule '{rule_id}' ignored: {e.error_count()} error(s)")
    return coerced


def _merge_options(
    rule: Rule,
    preset_options: Mapping[str, OptionValue],
    override_options: Mapping[str, OptionValue],
    warnings: list[str],
) -> dict[str, OptionValue]:
    merged = dict(rule.options)
    for source in (preset_options, override_options):
        for key, value in source.items():
            if key not in rule.options:
                warnings.append(f"Rule '{rule.id}' does not recognize option '{key}'")
                continue
            merged[key] = value
    return merged
