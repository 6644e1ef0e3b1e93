"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
합계 필드는 저장 값이 아니라 조회 시 계산된 값.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    mode: str = Field(..., description="실행 모드 (development/production)")
    schema_version: int = Field(..., description="적용된 DB 스키마 버전")


class SuccessResponse(BaseModel):
    """삭제 등 단순 성공 응답"""

    success: bool = Field(default=True, description="성공 여부")


class LoginResponse(BaseModel):
    """로그인 응답"""

    success: bool = Field(default=True, description="성공 여부")
    username: str = Field(..., description="로그인 이름")


class AuthStatusResponse(BaseModel):
    """인증 상태 응답"""

    authenticated: bool = Field(..., description="로그인 여부")
    username: str | None = Field(default=None, description="로그인 이름")


class TotalsResponse(BaseModel):
    """손익 합계"""

    total_expenses: float = Field(..., description="지출 합계")
    income_from_expenses: float = Field(..., description="지출 판매 수입")
    income_without_expenses: float = Field(..., description="독립 수입 합계")
    total_income: float = Field(..., description="총 수입")
    profit_loss: float = Field(..., description="손익 (총 수입 - 지출 합계)")


class EventResponse(BaseModel):
    """이벤트 응답"""

    id: int = Field(..., description="이벤트 ID")
    name: str = Field(..., description="이벤트 이름")
    created_at: str = Field(..., description="생성 시각 (UTC ISO 8601)")


class EventSummaryResponse(TotalsResponse):
    """이벤트 목록 항목 (합계 포함)"""

    id: int = Field(..., description="이벤트 ID")
    name: str = Field(..., description="이벤트 이름")
    created_at: str = Field(..., description="생성 시각 (UTC ISO 8601)")
    responsible_count: int = Field(..., description="담당자 수")
    expense_count: int = Field(..., description="지출 항목 수")
    income_count: int = Field(..., description="독립 수입 항목 수")


class ResponsibleResponse(BaseModel):
    """담당자 응답"""

    id: int = Field(..., description="담당자 ID")
    event_id: int = Field(..., description="이벤트 ID")
    name: str = Field(..., description="담당자 이름")


class ExpenseResponse(BaseModel):
    """지출 응답"""

    id: int = Field(..., description="지출 ID")
    event_id: int = Field(..., description="이벤트 ID")
    category: str = Field(..., description="카테고리")
    name: str = Field(..., description="항목 이름")
    quantity: float = Field(..., description="수량")
    cost_per_unit: float = Field(..., description="단가")
    selling_price_per_unit: float | None = Field(
        default=None, description="판매 단가 (없으면 null)"
    )


class StandaloneIncomeResponse(BaseModel):
    """독립 수입 응답"""

    id: int = Field(..., description="수입 ID")
    event_id: int = Field(..., description="이벤트 ID")
    name: str = Field(..., description="수입 이름")
    quantity: float = Field(..., description="수량")
    price_per_unit: float = Field(..., description="단가")


class ExpenseGroupResponse(BaseModel):
    """카테고리별 지출 묶음"""

    category: str = Field(..., description="카테고리")
    expenses: list[ExpenseResponse] = Field(default_factory=list, description="지출 목록")
    total_cost: float = Field(..., description="카테고리 지출 합계")


class EventDetailResponse(BaseModel):
    """이벤트 상세 응답"""

    id: int = Field(..., description="이벤트 ID")
    name: str = Field(..., description="이벤트 이름")
    created_at: str = Field(..., description="생성 시각 (UTC ISO 8601)")
    responsibles: list[ResponsibleResponse] = Field(default_factory=list)
    expenses: list[ExpenseResponse] = Field(default_factory=list)
    standalone_income: list[StandaloneIncomeResponse] = Field(default_factory=list)
    totals: TotalsResponse = Field(..., description="손익 합계")
    expense_groups: list[ExpenseGroupResponse] = Field(
        default_factory=list, description="카테고리 표시 순서대로 묶은 지출"
    )
    income_eligible_expenses: list[ExpenseResponse] = Field(
        default_factory=list, description="판매 수입 입력 대상 지출"
    )


class PortfolioSummaryResponse(TotalsResponse):
    """전체 이벤트 합계 응답"""

    event_count: int = Field(..., description="이벤트 수")
