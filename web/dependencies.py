"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
"""

from typing import AsyncGenerator

from fastapi import Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings
from core.ledger.store import LedgerStore
from core.storage.user_store import UserStore


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db(
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[SQLiteAdapter, None]:
    """요청 단위 DB 연결 반환

    요청이 끝나면 연결을 닫는다.
    """
    async with SQLiteAdapter(settings.db_path) as db:
        yield db


def get_ledger_store(db: SQLiteAdapter = Depends(get_db)) -> LedgerStore:
    """LedgerStore 반환"""
    return LedgerStore(db)


def get_user_store(db: SQLiteAdapter = Depends(get_db)) -> UserStore:
    """UserStore 반환"""
    return UserStore(db)
