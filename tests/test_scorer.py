"""
Tests for Score Aggregator — penalty law, bounds, order independence, breakdowns.
"""

import itertools

import pytest

from rta.core.scorer import (
    build_metrics,
    calculate_health_score,
    group_by_category,
    severity_counts,
    sort_findings,
)
from rta.models.rule_models import Severity

E, W, I = Severity.ERROR, Severity.WARNING, Severity.INFO


def test_empty_list_scores_ten():
    assert calculate_health_score([]) == 10.0


@pytest.mark.parametrize(
    "severities, expected",
    [
        ([E], 8.0),
        ([W], 9.0),
        ([I], 9.5),
        ([E, E, W], 5.0),
        ([E, W], 7.0),
        ([I, I, I], 8.5),
    ],
)
def test_severity_penalty_law(make_finding, severities, expected):
    findings = [make_finding(severity=s) for s in severities]
    assert calculate_health_score(findings) == expected


def test_score_never_goes_below_zero(make_finding):
    findings = [make_finding(severity=E) for _ in range(8)]
    assert calculate_health_score(findings) == 0.0


def test_score_ignores_which_rule_produced_finding(make_finding):
    a = [make_finding(severity=E, rule_id="react-missing-key")]
    b = [make_finding(severity=E, rule_id="missing-alt-text")]
    assert calculate_health_score(a) == calculate_health_score(b)


def test_score_is_order_independent(make_finding):
    findings = [
        make_finding(severity=E, line=1),
        make_finding(severity=W, line=2),
        make_finding(severity=I, line=3),
        make_finding(severity=I, line=4),
    ]
    scores = {calculate_health_score(list(p)) for p in itertools.permutations(findings)}
    assert scores == {6.0}


def test_severity_counts_cover_every_severity(make_finding):
    counts = severity_counts([make_finding(severity=E), make_finding(severity=E)])
    assert counts == {E: 2, W: 0, I: 0}


def test_group_by_category_uses_catalog(make_finding):
    findings = [
        make_finding(rule_id="react-missing-key", severity=E),
        make_finding(rule_id="missing-alt-text", severity=E),
        make_finding(rule_id="typescript-any-usage", severity=W),
    ]
    groups = group_by_category(findings)
    assert sorted(groups) == ["accessibility", "correctness", "type-safety"]
    assert len(groups["correctness"]) == 1


def test_unknown_rule_counts_toward_severity_but_not_categories(make_finding):
    # Asymmetry kept on purpose: unknown rules score but are not grouped.
    findings = [
        make_finding(rule_id="ghost-rule", severity=E),
        make_finding(rule_id="react-missing-key", severity=E),
    ]
    metrics = build_metrics(findings)
    assert metrics.error_count == 2
    assert metrics.overall_health == 6.0
    grouped = [f for group in metrics.rule_breakdown.values() for f in group]
    assert [f.rule_id for f in grouped] == ["react-missing-key"]


def test_sort_findings_by_file_line_column(make_finding):
    findings = [
        make_finding(file="src/b.tsx", line=1, column=1),
        make_finding(file="src/a.tsx", line=3, column=9),
        make_finding(file="src/a.tsx", line=3, column=2),
        make_finding(file="src/a.tsx", line=1, column=5),
    ]
    ordered = [(f.file, f.line, f.column) for f in sort_findings(findings)]
    assert ordered == [
        ("src/a.tsx", 1, 5),
        ("src/a.tsx", 3, 2),
        ("src/a.tsx", 3, 9),
        ("src/b.tsx", 1, 1),
    ]


def test_build_metrics_carries_run_counters(make_finding):
    metrics = build_metrics(
        [make_finding(severity=W)],
        total_files=3,
        analyzed_files=2,
        rules_executed=12,
        analysis_time_ms=4.5,
    )
    assert metrics.total_files == 3
    assert metrics.analyzed_files == 2
    assert metrics.rules_executed == 12
    assert metrics.warning_count == 1
    assert metrics.overall_health == 9.0
