"""
Event 라우트

이벤트 CRUD 및 담당자 관리 API
"""

from fastapi import APIRouter, Depends, Path

from core.ledger.store import LedgerStore
from core.types import Principal
from web.dependencies import get_ledger_store
from web.models.requests import EventNameRequest, ResponsibleRequest
from web.models.responses import (
    EventDetailResponse,
    EventResponse,
    EventSummaryResponse,
    ResponsibleResponse,
    SuccessResponse,
)
from web.security import require_principal

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("", response_model=list[EventSummaryResponse])
async def list_events(
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> list[EventSummaryResponse]:
    """이벤트 목록 조회 (최신순, 합계 포함)"""
    summaries = await store.list_events(principal)
    return [EventSummaryResponse(**s.to_dict()) for s in summaries]


@router.post("", response_model=EventResponse)
async def create_event(
    request: EventNameRequest,
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> EventResponse:
    """이벤트 생성"""
    event = await store.create_event(principal, request.name)
    return EventResponse(**event.to_dict())


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> EventDetailResponse:
    """이벤트 상세 조회 (담당자, 지출, 독립 수입, 합계)"""
    detail = await store.get_event(principal, event_id)
    return EventDetailResponse.model_validate(detail.to_dict())


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    request: EventNameRequest,
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> EventResponse:
    """이벤트 이름 변경"""
    event = await store.update_event(principal, event_id, request.name)
    return EventResponse(**event.to_dict())


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> SuccessResponse:
    """이벤트 삭제 (하위 항목 포함)"""
    await store.delete_event(principal, event_id)
    return SuccessResponse()


# =========================================================================
# 담당자
# =========================================================================


@router.post("/{event_id}/responsibles", response_model=ResponsibleResponse)
async def add_responsible(
    request: ResponsibleRequest,
    event_id: int = Path(..., description="이벤트 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> ResponsibleResponse:
    """담당자 추가"""
    responsible = await store.add_responsible(principal, event_id, request.name)
    return ResponsibleResponse(**responsible.to_dict())


@router.delete(
    "/{event_id}/responsibles/{responsible_id}",
    response_model=SuccessResponse,
)
async def delete_responsible(
    event_id: int = Path(..., description="이벤트 ID"),
    responsible_id: int = Path(..., description="담당자 ID"),
    principal: Principal = Depends(require_principal),
    store: LedgerStore = Depends(get_ledger_store),
) -> SuccessResponse:
    """담당자 삭제"""
    await store.delete_responsible(principal, event_id, responsible_id)
    return SuccessResponse()
