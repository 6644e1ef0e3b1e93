"""
입력 검증

클라이언트 페이로드를 파싱/범위 검증하여 쓰기 가능한 값으로 변환.
모든 검증은 DB 쓰기 전에 수행되며 실패 시 ValidationError.

숫자는 JSON 숫자 또는 숫자 문자열 모두 허용.
bool, NaN, 무한대는 거부.
"""

import math
from dataclasses import dataclass
from typing import Any

from core.errors import ValidationError
from core.types import ExpenseCategory

# 항목별 금액(수량 × 단가) 상한. 합계가 유한한 값으로 유지되도록 제한
MAX_LINE_TOTAL = 1e12


@dataclass(frozen=True)
class ExpenseInput:
    """검증된 지출 입력"""

    category: str
    name: str
    quantity: float
    cost_per_unit: float
    selling_price_per_unit: float | None


@dataclass(frozen=True)
class StandaloneIncomeInput:
    """검증된 독립 수입 입력"""

    name: str
    quantity: float
    price_per_unit: float


def validate_name(value: Any, label: str = "Name") -> str:
    """이름 필드 검증

    Args:
        value: 입력 값
        label: 에러 메시지에 사용할 필드 표시명

    Returns:
        앞뒤 공백이 제거된 이름

    Raises:
        ValidationError: 문자열이 아니거나 공백뿐인 경우
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} is required", field="name")
    return value.strip()


def parse_number(value: Any, field: str) -> float:
    """숫자 파싱

    Args:
        value: JSON 숫자 또는 숫자 문자열
        field: 필드명

    Returns:
        float 값

    Raises:
        ValidationError: 숫자로 해석할 수 없거나 유한하지 않은 경우
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid numeric value for {field}", field=field)

    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise ValidationError(f"Invalid numeric value for {field}", field=field) from None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            raise ValidationError(f"Invalid numeric value for {field}", field=field) from None
    else:
        raise ValidationError(f"Invalid numeric value for {field}", field=field)

    if not math.isfinite(number):
        raise ValidationError(f"Invalid numeric value for {field}", field=field)

    return number


def require_positive(value: float, field: str) -> float:
    """0 초과 검증"""
    if value <= 0:
        raise ValidationError(f"{field} must be greater than zero", field=field)
    return value


def require_non_negative(value: float, field: str) -> float:
    """0 이상 검증"""
    if value < 0:
        raise ValidationError(f"{field} must not be negative", field=field)
    return value


def require_line_total(quantity: float, price: float, field: str) -> float:
    """항목 금액 상한 검증

    Raises:
        ValidationError: 수량 × 단가가 MAX_LINE_TOTAL 초과
    """
    total = quantity * price
    if not math.isfinite(total) or total > MAX_LINE_TOTAL:
        raise ValidationError(f"{field} is too large for quantity", field=field)
    return total


def validate_category(value: Any) -> str:
    """카테고리 검증

    Raises:
        ValidationError: 정의된 4개 값이 아닌 경우
    """
    if not isinstance(value, str) or not ExpenseCategory.is_valid(value):
        raise ValidationError(
            f"Invalid category. Valid categories: {ExpenseCategory.all_values()}",
            field="category",
        )
    return value


def validate_expense(payload: dict[str, Any]) -> ExpenseInput:
    """지출 페이로드 검증 (생성/수정 공용)

    selling_price_per_unit이 없거나 None이면 "판매가 없음".
    0은 유효한 판매가로 그대로 저장.

    Args:
        payload: category, name, quantity, cost_per_unit, selling_price_per_unit

    Returns:
        ExpenseInput

    Raises:
        ValidationError: 필수 필드 누락, 범위 위반, 잘못된 카테고리
    """
    required = ("category", "name", "quantity", "cost_per_unit")
    if any(payload.get(key) is None for key in required):
        raise ValidationError("Category, name, quantity, and cost_per_unit are required")

    category = validate_category(payload["category"])
    name = validate_name(payload["name"])
    quantity = require_positive(parse_number(payload["quantity"], "quantity"), "quantity")
    cost = require_non_negative(
        parse_number(payload["cost_per_unit"], "cost_per_unit"), "cost_per_unit"
    )
    require_line_total(quantity, cost, "cost_per_unit")

    selling_price: float | None = None
    raw_selling_price = payload.get("selling_price_per_unit")
    if raw_selling_price is not None:
        selling_price = require_non_negative(
            parse_number(raw_selling_price, "selling_price_per_unit"),
            "selling_price_per_unit",
        )
        require_line_total(quantity, selling_price, "selling_price_per_unit")

    return ExpenseInput(
        category=category,
        name=name,
        quantity=quantity,
        cost_per_unit=cost,
        selling_price_per_unit=selling_price,
    )


def validate_standalone_income(payload: dict[str, Any]) -> StandaloneIncomeInput:
    """독립 수입 페이로드 검증

    Args:
        payload: name, quantity, price_per_unit

    Returns:
        StandaloneIncomeInput

    Raises:
        ValidationError: 필수 필드 누락 또는 0 이하 값
    """
    required = ("name", "quantity", "price_per_unit")
    if any(payload.get(key) is None for key in required):
        raise ValidationError("Name, quantity, and price_per_unit are required")

    name = validate_name(payload["name"])
    quantity = require_positive(parse_number(payload["quantity"], "quantity"), "quantity")
    price = require_positive(
        parse_number(payload["price_per_unit"], "price_per_unit"), "price_per_unit"
    )
    require_line_total(quantity, price, "price_per_unit")

    return StandaloneIncomeInput(name=name, quantity=quantity, price_per_unit=price)
