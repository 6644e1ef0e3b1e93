"""
Summary 라우트

GET /api/summary - 사용자 전체 이벤트 손익 합계
"""

from fastapi import APIRouter, Depends

from core.ledger.store import LedgerStore
from core.types import Principal
from web.dependencies import get_ledger_store
from web.models.responses import PortfolioSummaryResponse
from web.security import require_principal

router = APIRouter(prefix="/api", tags=["Summary"])


@router.get("/summary", response_model=PortfolioSummaryResponse)
async def get_summary(
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> PortfolioSummaryResponse:
    """전체 이벤트 합계"""
    summary = await store.get_summary(principal)
    return PortfolioSummaryResponse(**summary.to_dict())
