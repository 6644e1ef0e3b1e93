"""
Standalone Income 라우트

지출과 무관한 독립 수입 추가/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from core.ledger.store import LedgerStore
from core.types import Principal
from web.dependencies import get_ledger_store
from web.models.requests import StandaloneIncomeRequest
from web.models.responses import StandaloneIncomeResponse, SuccessResponse
from web.security import require_principal

router = APIRouter(prefix="/api", tags=["Standalone Income"])


@router.post(
    "/events/{event_id}/income-without-expense",
    response_model=StandaloneIncomeResponse,
)
async def add_standalone_income(
    request: StandaloneIncomeRequest,
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> StandaloneIncomeResponse:
    """독립 수입 추가"""
    income = await store.add_standalone_income(principal, event_id, request.model_dump())
    return StandaloneIncomeResponse(**income.to_dict())


@router.delete("/income-without-expense/{income_id}", response_model=SuccessResponse)
async def delete_standalone_income(
    income_id: int = Path(..., description="독립 수입 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> SuccessResponse:
    """독립 수입 삭제"""
    await store.delete_standalone_income(principal, income_id)
    return SuccessResponse()
