"""이 파일은 .py 감사 실행 모듈로 분석 실행과 감사 이력 저장을 담당합니다."""

from __future__ import annotations

import hashlib
import logging
import time
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contract_inspector.core.errors import AuditExecutionError
from contract_inspector.core.taxonomy import first_cwe
from contract_inspector.core.types import AnalysisReport
from contract_inspector.db import models

from .analyzer import ContractAnalyzer, default_analyzer

logger = logging.getLogger(__name__)


class AuditExecutor:
    def __init__(self, session: Session, analyzer: Optional[ContractAnalyzer] = None) -> None:
        # API 요청 단위로 생성되며 DB 세션을 사용한다.
        self.session = session
        self.analyzer = analyzer or default_analyzer()

    def run_audit(
        self,
        source_code: str,
        project_ref: Optional[str] = None,
        user_ref: Optional[str] = None,
    ) -> models.SecurityAudit:
        # 1) 분석 실행. 입력 오류는 아무것도 저장하지 않고 그대로 전파한다.
        started = time.perf_counter()
        report = self.analyzer.analyze(source_code)
        duration_ms = int((time.perf_counter() - started) * 1000)

        # 2) 보고서 전체와 이슈 행을 저장한다.
        try:
            audit = self._store_audit(source_code, report, duration_ms, project_ref, user_ref)
            self._store_issues(audit, report)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise AuditExecutionError(f"Failed to store audit: {exc}") from exc

        self.session.refresh(audit)
        logger.info(
            "Stored audit %s: risk=%s score=%d findings=%d",
            audit.id,
            report.risk_level.value,
            report.overall_score,
            len(report.findings),
        )
        return audit

    def _store_audit(
        self,
        source_code: str,
        report: AnalysisReport,
        duration_ms: int,
        project_ref: Optional[str],
        user_ref: Optional[str],
    ) -> models.SecurityAudit:
        audit = models.SecurityAudit(
            project_ref=project_ref,
            user_ref=user_ref,
            source_code=source_code,
            source_sha256=hashlib.sha256(source_code.encode("utf-8")).hexdigest(),
            catalog_version=report.catalog_version,
            overall_risk_score=report.overall_score,
            risk_level=report.risk_level.value,
            safe_to_deploy=report.safe_to_deploy,
            deploy_verdict=report.deploy_verdict.value,
            severity_summary=dict(report.severity_summary),
            report=report.to_dict(),
            audit_duration_ms=duration_ms,
        )
        self.session.add(audit)
        # 이슈 행이 audit.id를 참조하므로 먼저 flush한다.
        self.session.flush()
        return audit

    def _store_issues(self, audit: models.SecurityAudit, report: AnalysisReport) -> List[models.AuditIssue]:
        stored: List[models.AuditIssue] = []
        for finding in report.findings:
            record = models.AuditIssue(
                audit_id=audit.id,
                rule_id=finding.rule_id,
                severity=finding.severity.value,
                category=finding.category.value,
                title=finding.title,
                description=finding.description,
                line_number=finding.line_number,
                occurrence_count=finding.occurrence_count,
                recommendation=finding.recommendation,
                cwe_id=first_cwe(finding.tags),
                tags=list(finding.tags),
            )
            self.session.add(record)
            stored.append(record)
        return stored

    def load_report(self, audit_id: int) -> AnalysisReport:
        audit = self.session.get(models.SecurityAudit, audit_id)
        if audit is None:
            raise KeyError("Audit not found")
        return AnalysisReport.from_dict(audit.report)
