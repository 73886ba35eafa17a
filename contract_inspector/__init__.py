"""이 파일은 .py 패키지 초기화 모듈로 Solidity 정적 위험 분석기의 진입 함수를 노출합니다."""

from .services.analyzer import ContractAnalyzer, analyze
from .services.reporting import render_text_report

__version__ = "0.1.0"

__all__ = ["ContractAnalyzer", "analyze", "render_text_report", "__version__"]
