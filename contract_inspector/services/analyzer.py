"""이 파일은 .py 분석기 서비스 모듈로 룰 평가 결과를 Finding으로 집계하고 보고서를 만듭니다."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, List, Optional, TypeVar

from contract_inspector.core.catalog import RuleCatalog
from contract_inspector.core.detectors import match
from contract_inspector.core.errors import InputError, RuleEvaluationError
from contract_inspector.core.scoring import (
    deploy_verdict,
    deployment_recommendation,
    risk_level_for,
    score_findings,
    summarize_severities,
)
from contract_inspector.core.source import mask_source
from contract_inspector.core.taxonomy import TaxonomyIndex
from contract_inspector.core.types import (
    AnalysisReport,
    DeployVerdict,
    Finding,
    GasHint,
    MatchResult,
    PracticeCheck,
    Rule,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ContractAnalyzer:
    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        taxonomy: Optional[TaxonomyIndex] = None,
    ) -> None:
        # 카탈로그와 택소노미는 읽기 전용이므로 여러 분석 호출이 공유해도 된다.
        self.catalog = catalog or RuleCatalog.from_default()
        self.taxonomy = taxonomy or TaxonomyIndex.from_default()

    def analyze(self, source_text: str) -> AnalysisReport:
        # 잘못된 입력은 부분 분석 없이 즉시 실패시킨다.
        if not isinstance(source_text, str):
            raise InputError("Contract code must be a string")
        if not source_text.strip():
            raise InputError("Contract code required")

        view = mask_source(source_text)
        warnings: List[str] = []
        findings: List[Finding] = []

        # 카탈로그 순서대로 평가해 결과 순서를 재현 가능하게 유지한다.
        for rule in self.catalog.get_rules():
            result = self._guarded(rule.rule_id, lambda: match(rule, view), warnings)
            if result is not None and result.matched:
                findings.append(self._to_finding(rule, result))

        practices: List[PracticeCheck] = []
        for practice in self.catalog.best_practices:
            check = self._guarded(practice.name, lambda: practice.evaluate(view), warnings)
            if check is not None:
                practices.append(check)

        hints: List[GasHint] = []
        for hint_rule in self.catalog.gas_hints:
            hint = self._guarded(hint_rule.hint_type, lambda: hint_rule.evaluate(view), warnings)
            if hint is not None:
                hints.append(hint)

        summary = summarize_severities(findings)
        score = score_findings(findings)
        verdict = deploy_verdict(summary)
        return AnalysisReport(
            findings=tuple(findings),
            overall_score=score,
            risk_level=risk_level_for(score),
            safe_to_deploy=verdict != DeployVerdict.BLOCKED,
            deploy_verdict=verdict,
            deployment_recommendation=deployment_recommendation(verdict, summary),
            severity_summary=summary,
            best_practices=tuple(practices),
            gas_optimizations=tuple(hints),
            analyzer_warnings=tuple(warnings),
            catalog_version=self.catalog.version,
        )

    def _guarded(self, label: str, evaluate: Callable[[], T], warnings: List[str]) -> Optional[T]:
        # 개별 룰의 실패는 분석 전체를 중단시키지 않고 내부 경고로만 남긴다.
        try:
            return evaluate()
        except Exception as exc:
            error = RuleEvaluationError(label, exc)
            logger.warning("Skipping rule: %s", error)
            warnings.append(str(error))
            return None

    def _to_finding(self, rule: Rule, result: MatchResult) -> Finding:
        # 룰 정보를 복사하고 SWC 태그는 CWE로 확장한다.
        return Finding(
            rule_id=rule.rule_id,
            severity=rule.severity,
            category=rule.category,
            title=rule.title,
            description=rule.description,
            recommendation=rule.recommendation,
            occurrence_count=max(result.count, 1),
            line_number=result.locations[0] if result.locations else None,
            locations=result.locations,
            tags=tuple(self.taxonomy.expand_tags(rule.tags)),
        )


@lru_cache(maxsize=1)
def default_analyzer() -> ContractAnalyzer:
    return ContractAnalyzer()


def analyze(source_text: str) -> AnalysisReport:
    return default_analyzer().analyze(source_text)
