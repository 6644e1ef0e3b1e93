"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.ledger.schema import get_schema_version
from web.dependencies import get_app_settings, get_db
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_app_settings),
    db: SQLiteAdapter = Depends(get_db),
) -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, mode, schema_version 정보
    """
    return HealthResponse(
        status="ok",
        mode=settings.mode.value,
        schema_version=await get_schema_version(db),
    )
