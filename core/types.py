"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from enum import Enum


class AppMode(str, Enum):
    """실행 모드 (운영 / 개발)"""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class ExpenseCategory(str, Enum):
    """지출 카테고리

    선언 순서가 곧 화면 표시 순서.
    """

    BEVERAGES = "Beverages"
    FOOD = "Food"
    OTHER = "Other"
    EXPENSE_WITHOUT_INCOME = "ExpenseWithoutIncome"

    @classmethod
    def all_values(cls) -> list[str]:
        """표시 순서대로 카테고리 값 목록"""
        return [c.value for c in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """유효한 카테고리 값인지 확인"""
        return value in cls.all_values()


@dataclass(frozen=True)
class Principal:
    """인증된 요청 주체

    세션에서 복원된 사용자 식별자. 모든 Ledger 조회/변경의 소유자 범위.
    """

    user_id: int
    username: str
