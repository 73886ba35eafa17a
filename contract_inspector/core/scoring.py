"""이 파일은 .py 위험 점수 모듈로 결과 목록을 점수/등급/배포 판정으로 축약합니다."""

from __future__ import annotations

from typing import Dict, Iterable

from .catalog import RISK_THRESHOLDS, weight_of
from .types import DeployVerdict, Finding, RiskLevel, Severity

DEPLOYMENT_MESSAGES = {
    "blocked": "DEPLOYMENT NOT RECOMMENDED - Critical vulnerabilities detected. Fix immediately.",
    "caution": "DEPLOY WITH CAUTION - High severity issues detected. Review carefully.",
    "review": "DEPLOYABLE - Medium issues detected. Consider fixing for production.",
    "safe": "SAFE TO DEPLOY - No critical issues detected. Standard best practices followed.",
}


def score_findings(findings: Iterable[Finding]) -> int:
    # info 가중치는 0이므로 정보성 결과는 점수에 영향을 주지 않는다.
    return sum(weight_of(finding.severity) for finding in findings)


def risk_level_for(score: int) -> RiskLevel:
    for threshold, level in RISK_THRESHOLDS:
        if score >= threshold:
            return level
    return RiskLevel.MINIMAL


def summarize_severities(findings: Iterable[Finding]) -> Dict[str, int]:
    # 다섯 개 심각도 키를 항상 포함해 호출자가 누락 키를 확인할 필요가 없게 한다.
    summary: Dict[str, int] = {severity.value: 0 for severity in Severity.ordered()}
    for finding in findings:
        summary[finding.severity.value] += 1
    return summary


def deploy_verdict(summary: Dict[str, int]) -> DeployVerdict:
    if summary.get(Severity.CRITICAL.value, 0) > 0:
        return DeployVerdict.BLOCKED
    if summary.get(Severity.HIGH.value, 0) > 0:
        return DeployVerdict.CAUTION
    return DeployVerdict.DEPLOYABLE


def deployment_recommendation(verdict: DeployVerdict, summary: Dict[str, int]) -> str:
    if verdict == DeployVerdict.BLOCKED:
        return DEPLOYMENT_MESSAGES["blocked"]
    if verdict == DeployVerdict.CAUTION:
        return DEPLOYMENT_MESSAGES["caution"]
    if summary.get(Severity.MEDIUM.value, 0) > 0:
        return DEPLOYMENT_MESSAGES["review"]
    return DEPLOYMENT_MESSAGES["safe"]
