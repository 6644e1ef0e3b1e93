"""
요청 스키마 (Pydantic)

Web API 요청 본문 정의.
값의 범위/형식 검증은 core.domain.validation에서 수행하므로
필드는 원본 값을 그대로 받는다 (검증 실패는 400으로 응답).
"""

from typing import Any

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """로그인 요청"""

    username: str | None = Field(default=None, description="로그인 이름")
    password: str | None = Field(default=None, description="비밀번호")


class EventNameRequest(BaseModel):
    """이벤트 생성/이름 변경 요청"""

    name: Any = Field(default=None, description="이벤트 이름")

    model_config = {
        "json_schema_extra": {"examples": [{"name": "Sommerfest 2024"}]}
    }


class ResponsibleRequest(BaseModel):
    """담당자 추가 요청"""

    name: Any = Field(default=None, description="담당자 이름")


class ExpenseRequest(BaseModel):
    """지출 추가/수정 요청

    selling_price_per_unit을 생략하거나 null로 보내면 "판매가 없음".
    """

    category: Any = Field(
        default=None,
        description="카테고리 (Beverages, Food, Other, ExpenseWithoutIncome)",
    )
    name: Any = Field(default=None, description="항목 이름")
    quantity: Any = Field(default=None, description="수량 (0 초과)")
    cost_per_unit: Any = Field(default=None, description="단가 (0 이상)")
    selling_price_per_unit: Any = Field(default=None, description="판매 단가 (선택, 0 이상)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category": "Beverages",
                    "name": "Cola",
                    "quantity": 10,
                    "cost_per_unit": 2,
                    "selling_price_per_unit": 5,
                },
                {
                    "category": "ExpenseWithoutIncome",
                    "name": "Deko",
                    "quantity": 1,
                    "cost_per_unit": 30,
                },
            ]
        }
    }


class StandaloneIncomeRequest(BaseModel):
    """독립 수입 추가 요청"""

    name: Any = Field(default=None, description="수입 이름")
    quantity: Any = Field(default=None, description="수량 (0 초과)")
    price_per_unit: Any = Field(default=None, description="단가 (0 초과)")
