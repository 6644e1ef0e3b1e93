"""
pytest 공통 fixture 정의

임시 secrets.yaml, 마이그레이션된 임시 DB, 테스트 사용자
"""

import tempfile
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import Settings
from core.types import Principal
from core.utils.timezone import now_utc_iso


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (development 모드)"""
    secrets_content = f"""# 테스트용 secrets.yaml
mode: development

web:
  secret_key: "test_session_secret_key_xyz"
  session_max_age_sec: 3600

database:
  path: "{(temp_dir / 'event_budget_test.db').as_posix()}"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_production(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성 (production 모드, DB 경로 기본값)"""
    secrets_content = """mode: production

web:
  secret_key: "prod_session_secret_key_xyz"
  cookie_secure: true
"""
    secrets_path = temp_dir / "secrets_prod.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def temp_secrets_file_invalid_mode(temp_dir: Path) -> Path:
    """잘못된 모드의 secrets.yaml 파일 생성"""
    secrets_content = """mode: invalid_mode

web:
  secret_key: "session_secret"
"""
    secrets_path = temp_dir / "secrets_invalid.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest.fixture
def reset_settings():
    """Settings 싱글턴 초기화 (테스트 전후)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest_asyncio.fixture
async def db(temp_dir: Path) -> AsyncIterator[SQLiteAdapter]:
    """마이그레이션이 적용된 임시 DB"""
    adapter = SQLiteAdapter(temp_dir / "test_ledger.db")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


async def _insert_user(db: SQLiteAdapter, username: str) -> Principal:
    """해시 계산 없이 사용자 행을 직접 삽입"""
    cursor = await db.execute(
        "INSERT INTO users (username, password_hash, created_at) VALUES (?, ?, ?)",
        (username, "$2b$04$notarealhashnotarealhashnotarealhashnotarealhash", now_utc_iso()),
    )
    await db.commit()
    return Principal(user_id=cursor.lastrowid, username=username)


@pytest_asyncio.fixture
async def alice(db: SQLiteAdapter) -> Principal:
    """테스트 사용자 alice"""
    return await _insert_user(db, "alice")


@pytest_asyncio.fixture
async def bob(db: SQLiteAdapter) -> Principal:
    """테스트 사용자 bob (alice와 데이터 격리 확인용)"""
    return await _insert_user(db, "bob")


@pytest.fixture
def make_user(db: SQLiteAdapter):
    """임의 이름의 사용자 생성 함수"""

    async def _make(username: str) -> Principal:
        return await _insert_user(db, username)

    return _make
