"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    EventNameRequest,
    ExpenseRequest,
    LoginRequest,
    ResponsibleRequest,
    StandaloneIncomeRequest,
)
from web.models.responses import (
    AuthStatusResponse,
    EventDetailResponse,
    EventResponse,
    EventSummaryResponse,
    ExpenseGroupResponse,
    ExpenseResponse,
    HealthResponse,
    LoginResponse,
    PortfolioSummaryResponse,
    ResponsibleResponse,
    StandaloneIncomeResponse,
    SuccessResponse,
    TotalsResponse,
)

__all__ = [
    # Requests
    "LoginRequest",
    "EventNameRequest",
    "ResponsibleRequest",
    "ExpenseRequest",
    "StandaloneIncomeRequest",
    # Responses
    "HealthResponse",
    "SuccessResponse",
    "AuthStatusResponse",
    "LoginResponse",
    "TotalsResponse",
    "EventResponse",
    "EventSummaryResponse",
    "EventDetailResponse",
    "ResponsibleResponse",
    "ExpenseResponse",
    "ExpenseGroupResponse",
    "StandaloneIncomeResponse",
    "PortfolioSummaryResponse",
]
