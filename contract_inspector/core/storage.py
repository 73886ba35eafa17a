"""이 파일은 .py 저장 경로 모듈로 감사 보고서 디렉터리를 관리합니다."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .config import REPORTS_DIR


def ensure_reports_dir(audit_id: int, root: Optional[Path] = None) -> Path:
    # 감사 ID별 보고서 저장 경로를 생성하고 반환한다.
    path = Path(root or REPORTS_DIR) / str(audit_id)
    path.mkdir(parents=True, exist_ok=True)
    return path
