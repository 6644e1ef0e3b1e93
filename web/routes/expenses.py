"""
Expense 라우트

지출 추가/수정/삭제 API
"""

from fastapi import APIRouter, Depends, Path

from core.ledger.store import LedgerStore
from core.types import Principal
from web.dependencies import get_ledger_store
from web.models.requests import ExpenseRequest
from web.models.responses import ExpenseResponse, SuccessResponse
from web.security import require_principal

router = APIRouter(prefix="/api", tags=["Expenses"])


@router.post("/events/{event_id}/expenses", response_model=ExpenseResponse)
async def add_expense(
    request: ExpenseRequest,
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> ExpenseResponse:
    """지출 추가"""
    expense = await store.add_expense(principal, event_id, request.model_dump())
    return ExpenseResponse(**expense.to_dict())


@router.put("/expenses/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    request: ExpenseRequest,
    expense_id: int = Path(..., description="지출 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> ExpenseResponse:
    """지출 전체 수정 (판매가 생략 시 판매가 없음으로 변경)"""
    expense = await store.update_expense(principal, expense_id, request.model_dump())
    return ExpenseResponse(**expense.to_dict())


@router.delete("/expenses/{expense_id}", response_model=SuccessResponse)
async def delete_expense(
    expense_id: int = Path(..., description="지출 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> SuccessResponse:
    """지출 삭제"""
    await store.delete_expense(principal, expense_id)
    return SuccessResponse()
