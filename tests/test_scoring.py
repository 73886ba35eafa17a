"""이 파일은 .py 테스트 모듈로 위험 점수/등급/배포 판정 정책을 검증합니다."""

import pytest

from contract_inspector.core.scoring import (
    DEPLOYMENT_MESSAGES,
    deploy_verdict,
    deployment_recommendation,
    risk_level_for,
    score_findings,
    summarize_severities,
)
from contract_inspector.core.types import Category, DeployVerdict, Finding, RiskLevel, Severity


def _finding(severity: Severity) -> Finding:
    return Finding(
        rule_id=f"rule-{severity.value}",
        severity=severity,
        category=Category.CODE_QUALITY,
        title="t",
        description="d",
        recommendation="r",
    )


@pytest.mark.parametrize(
    "score, expected",
    [
        (0, RiskLevel.MINIMAL),
        (4, RiskLevel.MINIMAL),
        (5, RiskLevel.LOW),
        (9, RiskLevel.LOW),
        (10, RiskLevel.MEDIUM),
        (19, RiskLevel.MEDIUM),
        (20, RiskLevel.HIGH),
        (100, RiskLevel.HIGH),
    ],
)
def test_risk_level_boundaries(score: int, expected: RiskLevel) -> None:
    assert risk_level_for(score) == expected


def test_score_is_sum_of_weights() -> None:
    findings = [_finding(s) for s in (Severity.CRITICAL, Severity.HIGH, Severity.LOW, Severity.INFO)]
    assert score_findings(findings) == 10 + 7 + 2 + 0
    assert score_findings([]) == 0


def test_summary_always_has_all_keys() -> None:
    assert summarize_severities([]) == {"critical": 0, "high": 0, "medium": 0, "low": 0, "info": 0}
    summary = summarize_severities([_finding(Severity.HIGH), _finding(Severity.HIGH)])
    assert list(summary) == ["critical", "high", "medium", "low", "info"]
    assert summary["high"] == 2


def test_deploy_verdicts() -> None:
    critical = summarize_severities([_finding(Severity.CRITICAL), _finding(Severity.HIGH)])
    high = summarize_severities([_finding(Severity.HIGH)])
    medium = summarize_severities([_finding(Severity.MEDIUM)])
    clean = summarize_severities([_finding(Severity.INFO)])

    assert deploy_verdict(critical) == DeployVerdict.BLOCKED
    assert deploy_verdict(high) == DeployVerdict.CAUTION
    assert deploy_verdict(medium) == DeployVerdict.DEPLOYABLE
    assert deploy_verdict(clean) == DeployVerdict.DEPLOYABLE

    assert deployment_recommendation(DeployVerdict.BLOCKED, critical) == DEPLOYMENT_MESSAGES["blocked"]
    assert deployment_recommendation(DeployVerdict.CAUTION, high) == DEPLOYMENT_MESSAGES["caution"]
    assert deployment_recommendation(DeployVerdict.DEPLOYABLE, medium) == DEPLOYMENT_MESSAGES["review"]
    assert deployment_recommendation(DeployVerdict.DEPLOYABLE, clean) == DEPLOYMENT_MESSAGES["safe"]
