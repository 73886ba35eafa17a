"""이 파일은 .py FastAPI 앱 모듈로 보안 분석 REST 엔드포인트를 제공합니다."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.orm import Session

from contract_inspector.core.catalog import default_catalog, weight_of
from contract_inspector.core.config import API_PREFIX
from contract_inspector.core.errors import AuditExecutionError, InputError
from contract_inspector.db import models
from contract_inspector.db.session import get_session, init_db
from contract_inspector.services.analyzer import default_analyzer
from contract_inspector.services.audit_executor import AuditExecutor
from contract_inspector.services.reporting import DISCLAIMER, generate_report, render_text_report

from .schemas import (
    AnalysisRequest,
    AnalysisResponse,
    AuditIssueResponse,
    AuditResponse,
    ReportCreate,
    ReportResponse,
    RuleResponse,
)

app = FastAPI(title="contract-inspector")


@app.on_event("startup")
def _startup() -> None:
    init_db()


@app.post(f"{API_PREFIX}/analyses", response_model=AnalysisResponse)
def create_analysis(
    payload: AnalysisRequest,
    session: Session = Depends(get_session),
) -> AnalysisResponse:
    code = payload.code or ""
    audit_id = None
    try:
        if payload.persist:
            audit = AuditExecutor(session).run_audit(
                code,
                project_ref=payload.project_ref,
                user_ref=payload.user_ref,
            )
            audit_id = audit.id
            analysis = audit.report
        else:
            analysis = default_analyzer().analyze(code).to_dict()
    except InputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except AuditExecutionError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    return AnalysisResponse(
        success=True,
        audit_id=audit_id,
        analysis=analysis,
        timestamp=datetime.now(timezone.utc),
        disclaimer=DISCLAIMER,
    )


@app.get(f"{API_PREFIX}/rules", response_model=List[RuleResponse])
def list_rules() -> List[RuleResponse]:
    return [
        RuleResponse(
            id=rule.rule_id,
            title=rule.title,
            category=rule.category,
            severity=rule.severity,
            kind=rule.detector.kind,
            weight=weight_of(rule.severity),
            description=rule.description,
            recommendation=rule.recommendation,
            tags=list(rule.tags),
        )
        for rule in default_catalog().get_rules()
    ]


def _get_audit(session: Session, audit_id: int) -> models.SecurityAudit:
    audit = session.get(models.SecurityAudit, audit_id)
    if audit is None:
        raise HTTPException(status_code=404, detail="Audit not found")
    return audit


@app.get(f"{API_PREFIX}/audits/{{audit_id}}", response_model=AuditResponse)
def get_audit(
    audit_id: int,
    session: Session = Depends(get_session),
) -> AuditResponse:
    return AuditResponse.model_validate(_get_audit(session, audit_id))


@app.get(f"{API_PREFIX}/audits/{{audit_id}}/issues", response_model=List[AuditIssueResponse])
def get_audit_issues(
    audit_id: int,
    session: Session = Depends(get_session),
) -> List[AuditIssueResponse]:
    _get_audit(session, audit_id)
    records = (
        session.query(models.AuditIssue)
        .filter(models.AuditIssue.audit_id == audit_id)
        .order_by(models.AuditIssue.id.asc())
        .all()
    )
    return [AuditIssueResponse.model_validate(record) for record in records]


@app.get(f"{API_PREFIX}/audits/{{audit_id}}/text", response_class=PlainTextResponse)
def get_audit_text(
    audit_id: int,
    session: Session = Depends(get_session),
) -> str:
    try:
        report = AuditExecutor(session).load_report(audit_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Audit not found") from exc
    return render_text_report(report)


@app.post(f"{API_PREFIX}/audits/{{audit_id}}/report", response_model=ReportResponse, status_code=201)
def create_report(
    audit_id: int,
    payload: ReportCreate,
    session: Session = Depends(get_session),
) -> ReportResponse:
    try:
        report = generate_report(session, audit_id, payload.format)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except KeyError as exc:
        detail = exc.args[0] if exc.args else "Audit not found"
        raise HTTPException(status_code=404, detail=detail) from exc

    return ReportResponse.model_validate(report)


@app.get(f"{API_PREFIX}/reports/{{report_id}}", response_model=ReportResponse)
def get_report(
    report_id: int,
    session: Session = Depends(get_session),
) -> ReportResponse:
    report = session.get(models.Report, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    return ReportResponse.model_validate(report)


@app.get(f"{API_PREFIX}/reports/{{report_id}}/file")
def download_report_file(
    report_id: int,
    session: Session = Depends(get_session),
) -> FileResponse:
    report = session.get(models.Report, report_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Report not found")
    file_path = Path(report.file_path)
    if not file_path.exists():
        raise HTTPException(status_code=404, detail="Report file not found")
    return FileResponse(path=str(file_path), filename=file_path.name)
