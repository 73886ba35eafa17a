"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .catalog import RISK_THRESHOLDS, SEVERITY_WEIGHTS, RuleCatalog, default_catalog, weight_of
from .config import DEFAULT_MAPPING_FILE, DEFAULT_RULES_FILE
from .errors import AuditExecutionError, InputError, RuleCatalogError, RuleEvaluationError
from .logging import setup_logging
from .source import SourceView, mask_source
from .taxonomy import TaxonomyIndex
from .types import (
    AnalysisReport,
    Category,
    DeployVerdict,
    Finding,
    GasHint,
    MatchResult,
    PracticeCheck,
    RiskLevel,
    Rule,
    RuleKind,
    Scope,
    Severity,
)

__all__ = [
    "AnalysisReport",
    "AuditExecutionError",
    "Category",
    "DEFAULT_MAPPING_FILE",
    "DEFAULT_RULES_FILE",
    "DeployVerdict",
    "Finding",
    "GasHint",
    "InputError",
    "MatchResult",
    "PracticeCheck",
    "RISK_THRESHOLDS",
    "RiskLevel",
    "Rule",
    "RuleCatalog",
    "RuleCatalogError",
    "RuleEvaluationError",
    "RuleKind",
    "SEVERITY_WEIGHTS",
    "Scope",
    "Severity",
    "SourceView",
    "TaxonomyIndex",
    "default_catalog",
    "mask_source",
    "setup_logging",
    "weight_of",
]
