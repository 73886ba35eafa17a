"""이 파일은 .py 타입 정의 모듈로 룰/결과/분석 보고서 모델을 제공합니다."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    from .detectors import Detector


class Severity(str, Enum):
    # 영향도 순으로 정렬된 심각도이다(critical이 가장 높다).
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"

    @property
    def rank(self) -> int:
        # 값이 작을수록 심각하다.
        return _SEVERITY_ORDER.index(self)

    @classmethod
    def ordered(cls) -> Tuple["Severity", ...]:
        return _SEVERITY_ORDER


_SEVERITY_ORDER = (
    Severity.CRITICAL,
    Severity.HIGH,
    Severity.MEDIUM,
    Severity.LOW,
    Severity.INFO,
)


class Category(str, Enum):
    REENTRANCY = "reentrancy"
    UNCHECKED_CALL = "unchecked-call"
    AUTHORIZATION = "authorization"
    ARITHMETIC = "arithmetic"
    DENIAL_OF_SERVICE = "denial-of-service"
    CODE_QUALITY = "code-quality"
    INFORMATIONAL = "informational"


class RiskLevel(str, Enum):
    MINIMAL = "minimal"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class DeployVerdict(str, Enum):
    # critical이 있으면 차단, high만 있으면 주의, 그 외는 배포 가능이다.
    BLOCKED = "blocked"
    CAUTION = "caution"
    DEPLOYABLE = "deployable"


class RuleKind(str, Enum):
    PRESENCE = "presence"
    ABSENCE = "absence"
    COUNT = "count"
    CUSTOM = "custom"


class Scope(str, Enum):
    # 룰이 매칭할 소스 형태이다(주석/문자열 제거 여부).
    CODE = "code"
    CODE_AND_STRINGS = "code_and_strings"
    RAW = "raw"


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    count: int = 0
    # locations는 1부터 시작하는 라인 번호이며 패턴 기반이라 근사값이다.
    locations: Tuple[int, ...] = ()

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(matched=False)


@dataclass(frozen=True)
class Rule:
    # 카탈로그에 정의된 단일 탐지 룰이며 런타임에 변경되지 않는다.
    rule_id: str
    title: str
    category: Category
    severity: Severity
    detector: "Detector"
    description: str
    recommendation: str
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Finding:
    # 룰의 정보를 복사해 두어 룰이 바뀌어도 과거 결과가 유지된다.
    rule_id: str
    severity: Severity
    category: Category
    title: str
    description: str
    recommendation: str
    occurrence_count: int = 1
    line_number: Optional[int] = None
    locations: Tuple[int, ...] = ()
    tags: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
            "recommendation": self.recommendation,
            "occurrence_count": self.occurrence_count,
            "line_number": self.line_number,
            "locations": list(self.locations),
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            rule_id=str(data["rule_id"]),
            severity=Severity(data["severity"]),
            category=Category(data["category"]),
            title=str(data["title"]),
            description=str(data["description"]),
            recommendation=str(data["recommendation"]),
            occurrence_count=int(data.get("occurrence_count", 1)),
            line_number=data.get("line_number"),
            locations=tuple(data.get("locations") or ()),
            tags=tuple(data.get("tags") or ()),
        )


@dataclass(frozen=True)
class PracticeCheck:
    name: str
    passed: bool
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "passed": self.passed, "description": self.description}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PracticeCheck":
        return cls(name=str(data["name"]), passed=bool(data["passed"]), description=str(data["description"]))


@dataclass(frozen=True)
class GasHint:
    hint_type: str
    suggestion: str
    impact: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.hint_type, "suggestion": self.suggestion, "impact": self.impact}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GasHint":
        return cls(hint_type=str(data["type"]), suggestion=str(data["suggestion"]), impact=str(data["impact"]))


@dataclass(frozen=True)
class AnalysisReport:
    # 한 번의 분석 결과이며 반환 후에는 호출자가 소유한다.
    findings: Tuple[Finding, ...]
    overall_score: int
    risk_level: RiskLevel
    safe_to_deploy: bool
    deploy_verdict: DeployVerdict
    deployment_recommendation: str
    severity_summary: Dict[str, int]
    best_practices: Tuple[PracticeCheck, ...] = ()
    gas_optimizations: Tuple[GasHint, ...] = ()
    # 룰 평가 실패는 결과가 아니라 분석기 내부 경고로만 남긴다.
    analyzer_warnings: Tuple[str, ...] = ()
    catalog_version: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "catalog_version": self.catalog_version,
            "risk_level": self.risk_level.value,
            "overall_score": self.overall_score,
            "safe_to_deploy": self.safe_to_deploy,
            "deploy_verdict": self.deploy_verdict.value,
            "deployment_recommendation": self.deployment_recommendation,
            "severity_summary": dict(self.severity_summary),
            "findings": [item.to_dict() for item in self.findings],
            "best_practices": [item.to_dict() for item in self.best_practices],
            "gas_optimizations": [item.to_dict() for item in self.gas_optimizations],
            "analyzer_warnings": list(self.analyzer_warnings),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisReport":
        # 저장된 보고서(JSON)를 다시 렌더링할 수 있도록 복원한다.
        return cls(
            findings=tuple(Finding.from_dict(item) for item in data.get("findings", [])),
            overall_score=int(data["overall_score"]),
            risk_level=RiskLevel(data["risk_level"]),
            safe_to_deploy=bool(data["safe_to_deploy"]),
            deploy_verdict=DeployVerdict(data["deploy_verdict"]),
            deployment_recommendation=str(data.get("deployment_recommendation", "")),
            severity_summary={str(k): int(v) for k, v in (data.get("severity_summary") or {}).items()},
            best_practices=tuple(PracticeCheck.from_dict(item) for item in data.get("best_practices", [])),
            gas_optimizations=tuple(GasHint.from_dict(item) for item in data.get("gas_optimizations", [])),
            analyzer_warnings=tuple(data.get("analyzer_warnings", [])),
            catalog_version=str(data.get("catalog_version", "")),
        )
