"""이 파일은 .py 리포팅 모듈로 감사 보고서 렌더링과 파일 생성을 제공합니다."""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from contract_inspector.core.storage import ensure_reports_dir
from contract_inspector.core.types import AnalysisReport, Finding, Severity
from contract_inspector.db import models

SUPPORTED_FORMATS = {"json", "csv", "txt"}
DISCLAIMER = "This is an automated analysis. Professional audit recommended for production contracts."


def security_score(report: AnalysisReport) -> int:
    # 스튜디오 패널에서 보여주는 100점 만점 점수이다.
    return max(0, 100 - report.overall_score)


def render_text_report(report: AnalysisReport) -> str:
    """AnalysisReport를 사람이 읽는 감사 보고서 텍스트로 변환한다.

    입출력이 없는 순수 함수이며 같은 보고서에 대해 항상 같은 텍스트를 만든다.
    """
    lines: List[str] = ["=== SMART CONTRACT SECURITY AUDIT REPORT ===", ""]
    lines.append(f"Rule Catalog: {report.catalog_version}")
    lines.append(f"Overall Risk Level: {report.risk_level.value.upper()}")
    lines.append(f"Risk Score: {report.overall_score}")
    lines.append(f"Safe to Deploy: {'YES' if report.safe_to_deploy else 'NO'}")
    lines.append(f"Verdict: {report.deploy_verdict.value.upper()} - {report.deployment_recommendation}")
    summary = " ".join(f"{key}={report.severity_summary.get(key, 0)}" for key in _severity_keys())
    lines.append(f"Severity Summary: {summary}")
    lines.append("")

    vulnerabilities = [item for item in report.findings if item.severity != Severity.INFO]
    if vulnerabilities:
        lines.append("VULNERABILITIES FOUND:")
        number = 1
        for severity in Severity.ordered():
            group = [item for item in vulnerabilities if item.severity == severity]
            if not group:
                continue
            lines.append("")
            lines.append(f"[{severity.value.upper()}]")
            for finding in group:
                lines.extend(_finding_block(number, finding))
                number += 1
        lines.append("")
    else:
        lines.append("No vulnerabilities detected")
        lines.append("")

    notes = [item for item in report.findings if item.severity == Severity.INFO]
    if notes:
        lines.append("INFORMATIONAL:")
        for finding in notes:
            lines.append(f"  - {finding.title}: {finding.description}")
        lines.append("")

    if report.best_practices:
        lines.append("BEST PRACTICES CHECK:")
        for practice in report.best_practices:
            mark = "PASS" if practice.passed else "FAIL"
            lines.append(f"  [{mark}] {practice.name}: {practice.description}")
        lines.append("")

    if report.gas_optimizations:
        lines.append("GAS OPTIMIZATIONS:")
        for index, hint in enumerate(report.gas_optimizations, start=1):
            lines.append(f"  {index}. [{hint.impact}] {hint.hint_type}: {hint.suggestion}")
        lines.append("")

    if report.analyzer_warnings:
        lines.append("ANALYZER WARNINGS:")
        for warning in report.analyzer_warnings:
            lines.append(f"  - {warning}")
        lines.append("")

    lines.append(DISCLAIMER)
    lines.append("=== END OF REPORT ===")
    return "\n".join(lines) + "\n"


def render_markdown_summary(report: AnalysisReport) -> str:
    # 에디터 AI 패널에 표시하던 요약 형식이다.
    issues = "\n\n".join(
        f"- **{item.severity.value}**: {item.title}\n  {item.description}" for item in report.findings
    )
    return (
        "## Security Audit Report\n\n"
        f"**Risk Level:** {report.risk_level.value}\n"
        f"**Score:** {security_score(report)}/100\n\n"
        f"### Issues Found:\n{issues or 'None'}\n"
    )


def _severity_keys() -> List[str]:
    return [severity.value for severity in Severity.ordered()]


def _finding_block(number: int, finding: Finding) -> List[str]:
    block = [
        f"{number}. {finding.title} ({finding.rule_id})",
        f"   Category: {finding.category.value}",
        f"   Description: {finding.description}",
        f"   Recommendation: {finding.recommendation}",
        f"   Occurrences: {finding.occurrence_count}",
    ]
    if finding.locations:
        block.append(f"   Lines: {', '.join(str(line) for line in finding.locations)}")
    if finding.tags:
        block.append(f"   Tags: {', '.join(finding.tags)}")
    return block


def generate_report(
    session: Session,
    audit_id: int,
    report_format: str,
    reports_root: Optional[Path] = None,
) -> models.Report:
    # 지원 여부를 확인하고 형식을 정규화한다.
    normalized = report_format.strip().lower()
    if normalized not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported format: {report_format}")

    audit = session.get(models.SecurityAudit, audit_id)
    if audit is None:
        raise KeyError("Audit not found")

    generated_at = datetime.utcnow()
    report_dir = ensure_reports_dir(audit_id, reports_root)
    file_path = report_dir / f"report.{normalized}"

    # 형식별로 파일을 작성한다.
    if normalized == "json":
        _write_json(file_path, _build_json_payload(audit, generated_at))
    elif normalized == "csv":
        _write_csv(file_path, list(audit.issues))
    else:
        file_path.write_text(render_text_report(AnalysisReport.from_dict(audit.report)), encoding="utf-8")

    # 보고서 메타데이터를 DB에 저장한다.
    report = models.Report(
        audit_id=audit_id,
        format=normalized.upper(),
        file_path=str(file_path),
        generated_at=generated_at,
    )
    session.add(report)
    session.commit()
    session.refresh(report)
    return report


def _build_json_payload(audit: models.SecurityAudit, generated_at: datetime) -> Dict[str, Any]:
    return {
        "audit": {
            "id": audit.id,
            "project_ref": audit.project_ref,
            "user_ref": audit.user_ref,
            "source_sha256": audit.source_sha256,
            "audit_duration_ms": audit.audit_duration_ms,
            "created_at": _format_dt(audit.created_at),
        },
        "analysis": audit.report,
        "disclaimer": DISCLAIMER,
        "generated_at": _format_dt(generated_at),
    }


def _write_json(file_path: Path, payload: Dict[str, Any]) -> None:
    file_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _write_csv(file_path: Path, issues: List[models.AuditIssue]) -> None:
    # CSV 헤더를 고정하고 이슈 데이터를 기록한다.
    fieldnames = [
        "id",
        "audit_id",
        "rule_id",
        "severity",
        "category",
        "title",
        "description",
        "line_number",
        "occurrence_count",
        "recommendation",
        "cwe_id",
        "tags",
    ]
    with file_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        for issue in issues:
            writer.writerow(_issue_to_dict(issue))


def _issue_to_dict(item: models.AuditIssue) -> Dict[str, Any]:
    return {
        "id": item.id,
        "audit_id": item.audit_id,
        "rule_id": item.rule_id,
        "severity": item.severity,
        "category": item.category,
        "title": item.title,
        "description": item.description,
        "line_number": item.line_number,
        "occurrence_count": item.occurrence_count,
        "recommendation": item.recommendation,
        "cwe_id": item.cwe_id,
        "tags": ",".join(item.tags or []),
    }


def _format_dt(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
