"""
FastAPI 애플리케이션

라우터 등록, 예외 처리 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.errors import LedgerError, NotFound, StorageFailure, ValidationError
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import (
    auth,
    events,
    expenses,
    health,
    standalone_income,
    summary,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        version = await init_schema(db)

    logger.info(
        f"Web 시작: mode={settings.mode.value}, schema=v{version}",
        extra={"db_path": str(settings.db_path)},
    )

    yield

    logger.info("Web 종료")


app = FastAPI(
    title="Event Budget API",
    description="이벤트 예산/손익 관리 API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (개발용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# Ledger 예외 → HTTP 응답
# =========================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """입력 검증 실패 → 400"""
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    """리소스 없음 (또는 타인 소유) → 404"""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StorageFailure)
async def storage_failure_handler(request: Request, exc: StorageFailure) -> JSONResponse:
    """저장소 오류 → 500 (원인은 로그에만 기록)"""
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """그 외 Ledger 예외 → 500"""
    logger.error(f"처리되지 않은 Ledger 예외: {exc!r}", extra={"path": request.url.path})
    return JSONResponse(status_code=500, content={"detail": "Internal error"})


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(events.router)
app.include_router(expenses.router)
app.include_router(standalone_income.router)
app.include_router(summary.router)
