"""
Preset Templates — minimal ⊂ recommended ⊂ strict.

Each preset is total over the rule catalog, both in rule coverage and in
severity strictness, so resolution never has to guess.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from rta.models.rule_models import Preset, RuleConfig, Severity

E, W, I = Severity.ERROR, Severity.WARNING, Severity.INFO
OFF = RuleConfig(enabled=False)


def _on(severity: Severity, **options) -> RuleConfig:
    return RuleConfig(enabled=True, severity=severity, options=options)


_ALL_CATEGORIES_ON = {
    "react-hooks": True,
    "performance": True,
    "accessibility": True,
    "type-safety": True,
    "correctness": True,
    "best-practices": True,
}


PRESET_CATEGORIES: Mapping[Preset, Mapping[str, bool]] = MappingProxyType({
    Preset.STRICT: MappingProxyType(dict(_ALL_CATEGORIES_ON)),
    Preset.RECOMMENDED: MappingProxyType(dict(_ALL_CATEGORIES_ON)),
    Preset.MINIMAL: MappingProxyType({
        **_ALL_CATEGORIES_ON,
        "performance": False,
        "best-practices": False,
    }),
})


#                              strict                   recommended               minimal
_TABLE: dict[str, tuple[RuleConfig, RuleConfig, RuleConfig]] = {
    "useEffect-missing-deps":        (_on(E),               _on(W),                _on(W)),
    "useMemo-unnecessary":           (_on(W),               _on(I),                OFF),
    "useCallback-missing-deps":      (_on(E),               _on(W),                OFF),
    "useState-complex-object":       (_on(W, maxLines=8),   _on(I, maxLines=10),   OFF),
    "component-too-many-props":      (_on(E, maxProps=8),   _on(W, maxProps=10),   OFF),
    "inline-object-creation":        (_on(W),               _on(W),                OFF),
    "missing-react-memo":            (_on(I),               OFF,                   OFF),
    "heavy-computation-render":      (_on(W),               _on(W),                OFF),
    "missing-alt-text":              (_on(E),               _on(E),                _on(E)),
    "missing-aria-labels":           (_on(E),               _on(W),                _on(W)),
    "invalid-heading-order":         (_on(E),               _on(W),                OFF),
    "missing-focus-management":      (_on(W),               _on(I),                OFF),
    "react-anonymous-function":      (_on(W),               _on(W),                OFF),
    "react-missing-key":             (_on(E),               _on(E),                _on(E)),
    "typescript-any-usage":          (_on(E),               _on(W),                _on(W)),
    "react-missing-props-interface": (_on(W),               _on(I),                OFF),
}


PRESET_RULES: Mapping[Preset, Mapping[str, RuleConfig]] = MappingProxyType({
    preset: MappingProxyType({rule_id: row[column] for rule_id, row in _TABLE.items()})
    for column, preset in enumerate((Preset.STRICT, Preset.RECOMMENDED, Preset.MINIMAL))
})


PRESET_DESCRIPTIONS: Mapping[Preset, str] = MappingProxyType({
    Preset.MINIMAL: "Critical issues only (errors + key warnings)",
    Preset.RECOMMENDED: "Balanced analysis (default)",
    Preset.STRICT: "Comprehensive analysis with all rules",
})
