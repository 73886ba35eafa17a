"""이 파일은 .py 설정 모듈로 경로와 기본 위치, 환경 변수 기반 설정을 정의합니다."""

import os
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = Path(__file__).resolve().parents[1]
DATA_DIR = PACKAGE_DIR / "data"
MAPPINGS_DIR = DATA_DIR / "mappings"
DEFAULT_MAPPING_FILE = MAPPINGS_DIR / "swc_cwe.yml"
DEFAULT_RULES_FILE = Path(
    os.getenv("CONTRACT_INSPECTOR_RULES", str(DATA_DIR / "rules.yml"))
)
STORAGE_DIR = Path(os.getenv("CONTRACT_INSPECTOR_STORAGE", str(REPO_ROOT / "storage")))
REPORTS_DIR = STORAGE_DIR / "reports"
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{(STORAGE_DIR / 'contract_inspector.db').as_posix()}",
)
API_PREFIX = "/api/v1"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
