"""이 파일은 .py API 스키마 모듈로 요청/응답 모델을 정의합니다."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from contract_inspector.core.types import Category, DeployVerdict, RiskLevel, RuleKind, Severity


class AnalysisRequest(BaseModel):
    # code가 비어 있으면 엔드포인트에서 400으로 응답하기 위해 선택 필드로 둔다.
    code: Optional[str] = None
    # persist가 True면 감사 이력(security_audits)에 저장한다.
    persist: bool = False
    project_ref: Optional[str] = None
    user_ref: Optional[str] = None


class FindingModel(BaseModel):
    rule_id: str
    severity: Severity
    category: Category
    title: str
    description: str
    recommendation: str
    occurrence_count: int
    line_number: Optional[int] = None
    locations: List[int] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


class PracticeCheckModel(BaseModel):
    name: str
    passed: bool
    description: str


class GasHintModel(BaseModel):
    type: str
    suggestion: str
    impact: str


class AnalysisModel(BaseModel):
    # AnalysisReport.to_dict()와 같은 구조이다.
    catalog_version: str
    risk_level: RiskLevel
    overall_score: int
    safe_to_deploy: bool
    deploy_verdict: DeployVerdict
    deployment_recommendation: str
    severity_summary: Dict[str, int]
    findings: List[FindingModel]
    best_practices: List[PracticeCheckModel] = Field(default_factory=list)
    gas_optimizations: List[GasHintModel] = Field(default_factory=list)
    analyzer_warnings: List[str] = Field(default_factory=list)


class AnalysisResponse(BaseModel):
    success: bool = True
    audit_id: Optional[int] = None
    analysis: AnalysisModel
    timestamp: datetime
    disclaimer: str


class AuditResponse(BaseModel):
    # 저장된 감사 이력 응답 스키마이다.
    id: int
    project_ref: Optional[str] = None
    user_ref: Optional[str] = None
    source_sha256: str
    catalog_version: Optional[str] = None
    overall_risk_score: int
    risk_level: RiskLevel
    safe_to_deploy: bool
    deploy_verdict: DeployVerdict
    severity_summary: Dict[str, int] = Field(default_factory=dict)
    audit_duration_ms: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuditIssueResponse(BaseModel):
    id: int
    audit_id: int
    rule_id: str
    severity: Severity
    category: Category
    title: str
    description: str
    line_number: Optional[int] = None
    occurrence_count: int = 1
    recommendation: Optional[str] = None
    cwe_id: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class RuleResponse(BaseModel):
    id: str
    title: str
    category: Category
    severity: Severity
    kind: RuleKind
    weight: int
    description: str
    recommendation: str
    tags: List[str] = Field(default_factory=list)


class ReportCreate(BaseModel):
    # 보고서 생성 요청 스키마로 형식을 지정한다.
    format: str = "json"


class ReportResponse(BaseModel):
    id: int
    audit_id: int
    format: str
    file_path: str
    generated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
