"""이 파일은 .py DB 세션 모듈로 엔진/세션 생성과 감사 이력 스키마 초기화를 담당합니다."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from contract_inspector.core.config import DATABASE_URL
from .base import Base

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str = DATABASE_URL) -> Engine:
    if not url.startswith("sqlite"):
        return create_engine(url)
    connect_args = {"check_same_thread": False}
    if url in _MEMORY_URLS:
        # 인메모리 DB는 연결마다 새로 생기므로 하나의 연결을 공유한다.
        return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
    return create_engine(url, connect_args=connect_args)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(bind: Optional[Engine] = None) -> None:
    target = bind or engine
    # SQLite 파일 DB는 상위 디렉터리가 있어야 생성된다.
    database = target.url.database
    if target.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=target)


def get_session() -> Generator[Session, None, None]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
