"""이 파일은 .py 테스트 모듈로 기본 룰 카탈로그 로딩과 가중치 정책을 검증합니다."""

from pathlib import Path

import pytest

from contract_inspector.core.catalog import (
    RISK_THRESHOLDS,
    SEVERITY_WEIGHTS,
    RuleCatalog,
    weight_of,
)
from contract_inspector.core.errors import RuleCatalogError
from contract_inspector.core.types import RiskLevel, RuleKind, Severity

EXPECTED_ORDER = [
    "reentrancy-call-value",
    "unchecked-external-call",
    "tx-origin-authorization",
    "legacy-arithmetic-overflow",
    "missing-access-control",
    "unbounded-loop-dos",
    "missing-event-emission",
    "floating-pragma",
    "block-timestamp-dependency",
    "missing-function-visibility",
    "uses-openzeppelin",
    "missing-spdx-license",
    "unsafe-selfdestruct",
    "no-constructor",
]

MINIMAL_RULE = """
version: "test"
rules:
  - id: only-rule
    title: Only
    category: code-quality
    severity: low
    kind: presence
    patterns: ['\\bfoo\\b']
    description: d
    recommendation: r
"""


def test_default_catalog_order(catalog: RuleCatalog) -> None:
    assert [rule.rule_id for rule in catalog.get_rules()] == EXPECTED_ORDER
    assert len(catalog) == len(EXPECTED_ORDER)
    assert catalog.version == "1.0.0"


def test_default_catalog_rule_attributes(catalog: RuleCatalog) -> None:
    rules = {rule.rule_id: rule for rule in catalog.get_rules()}
    rule = rules["unsafe-selfdestruct"]
    assert rule.title == "Use of selfdestruct"
    assert rule.severity == Severity.CRITICAL
    assert rule.tags == ("SWC-106",)

    assert rules["missing-function-visibility"].detector.kind == RuleKind.CUSTOM
    assert rules["missing-spdx-license"].detector.kind == RuleKind.ABSENCE
    assert rules["tx-origin-authorization"].detector.kind == RuleKind.COUNT


def test_weights_and_thresholds(catalog: RuleCatalog) -> None:
    assert [SEVERITY_WEIGHTS[s] for s in Severity.ordered()] == [10, 7, 4, 2, 0]
    assert catalog.weight_of(Severity.HIGH) == 7
    assert weight_of("medium") == 4
    assert RISK_THRESHOLDS[0] == (20, RiskLevel.HIGH)
    assert RISK_THRESHOLDS[-1] == (0, RiskLevel.MINIMAL)


def test_default_catalog_has_unscored_checks(catalog: RuleCatalog) -> None:
    assert [item.name for item in catalog.best_practices] == [
        "OpenZeppelin Import",
        "SPDX License",
        "NatSpec Comments",
        "Events",
    ]
    assert [item.hint_type for item in catalog.gas_hints] == ["Visibility", "Storage"]


def test_duplicate_rule_ids_rejected(catalog: RuleCatalog) -> None:
    rule = catalog.get_rules()[0]
    with pytest.raises(RuleCatalogError):
        RuleCatalog([rule, rule])


def test_from_file_minimal(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text(MINIMAL_RULE, encoding="utf-8")
    loaded = RuleCatalog.from_file(path)
    assert loaded.version == "test"
    assert [rule.rule_id for rule in loaded.get_rules()] == ["only-rule"]
    assert loaded.best_practices == ()


def test_from_file_missing(tmp_path: Path) -> None:
    with pytest.raises(RuleCatalogError):
        RuleCatalog.from_file(tmp_path / "absent.yml")


def test_from_file_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text("rules: [unclosed", encoding="utf-8")
    with pytest.raises(RuleCatalogError):
        RuleCatalog.from_file(path)


def test_from_file_requires_rules(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text("version: '1'\nrules: []\n", encoding="utf-8")
    with pytest.raises(RuleCatalogError):
        RuleCatalog.from_file(path)


def test_from_file_bad_regex(tmp_path: Path) -> None:
    path = tmp_path / "rules.yml"
    path.write_text(MINIMAL_RULE.replace("['\\bfoo\\b']", "['(broken']"), encoding="utf-8")
    with pytest.raises(RuleCatalogError):
        RuleCatalog.from_file(path)
