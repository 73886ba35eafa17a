"""이 파일은 .py DB 모델 정의 모듈로 SecurityAudit/AuditIssue/Report를 제공합니다."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class SecurityAudit(Base):
    __tablename__ = "security_audits"

    id = Column(Integer, primary_key=True, index=True)
    project_ref = Column(String, nullable=True, index=True)
    user_ref = Column(String, nullable=True, index=True)
    source_code = Column(Text, nullable=False)
    # 동일 소스 재감사 이력을 찾기 위한 SHA-256 값이다.
    source_sha256 = Column(String(64), nullable=False, index=True)
    catalog_version = Column(String, nullable=True)
    overall_risk_score = Column(Integer, nullable=False)
    risk_level = Column(String, nullable=False)
    safe_to_deploy = Column(Boolean, nullable=False)
    deploy_verdict = Column(String, nullable=False)
    severity_summary = Column(JSON, default=dict)
    # 분석 보고서 전체를 그대로 저장한다.
    report = Column(JSON, nullable=False)
    audit_duration_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    issues = relationship("AuditIssue", back_populates="audit", order_by="AuditIssue.id")
    reports = relationship("Report", back_populates="audit")


class AuditIssue(Base):
    __tablename__ = "audit_issues"

    id = Column(Integer, primary_key=True, index=True)
    audit_id = Column(Integer, ForeignKey("security_audits.id"), index=True)
    rule_id = Column(String, index=True, nullable=False)
    severity = Column(String, nullable=False)
    category = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    line_number = Column(Integer, nullable=True)
    occurrence_count = Column(Integer, default=1)
    recommendation = Column(Text)
    cwe_id = Column(String, nullable=True)
    tags = Column(JSON)
    created_at = Column(DateTime, default=datetime.utcnow)

    audit = relationship("SecurityAudit", back_populates="issues")


class Report(Base):
    __tablename__ = "reports"

    id = Column(Integer, primary_key=True)
    audit_id = Column(Integer, ForeignKey("security_audits.id"))
    format = Column(String)
    file_path = Column(String)
    generated_at = Column(DateTime, default=datetime.utcnow)

    audit = relationship("SecurityAudit", back_populates="reports")
