"""이 파일은 .py 테스트 설정 모듈로 경로와 공용 픽스처를 초기화합니다."""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from contract_inspector.core.catalog import RuleCatalog  # noqa: E402
from contract_inspector.services.analyzer import ContractAnalyzer  # noqa: E402

SAMPLES_DIR = REPO_ROOT / "samples"


@pytest.fixture(scope="session")
def catalog() -> RuleCatalog:
    return RuleCatalog.from_default()


@pytest.fixture(scope="session")
def analyzer(catalog: RuleCatalog) -> ContractAnalyzer:
    return ContractAnalyzer(catalog=catalog)


@pytest.fixture
def vulnerable_vault() -> str:
    return (SAMPLES_DIR / "VulnerableVault.sol").read_text(encoding="utf-8")


@pytest.fixture
def safe_token() -> str:
    return (SAMPLES_DIR / "SafeToken.sol").read_text(encoding="utf-8")


@pytest.fixture
def db_session():
    # 테스트마다 독립된 인메모리 SQLite DB를 사용한다.
    from sqlalchemy.orm import sessionmaker

    from contract_inspector.db.session import build_engine, init_db

    engine = build_engine("sqlite://")
    init_db(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
