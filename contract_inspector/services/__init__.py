"""이 파일은 .py 서비스 패키지 초기화 모듈로 핵심 서비스를 노출합니다."""

from .analyzer import ContractAnalyzer, analyze
from .audit_executor import AuditExecutor

__all__ = ["AuditExecutor", "ContractAnalyzer", "analyze"]
