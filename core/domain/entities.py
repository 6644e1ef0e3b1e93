"""
Ledger 도메인 엔티티

DB 행과 1:1로 대응하는 불변 데이터 구조.
파생 값(합계, 손익)은 저장하지 않고 core.ledger.aggregator에서 계산.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class User:
    """사용자"""

    id: int
    username: str
    password_hash: str
    created_at: str

    @staticmethod
    def from_row(row: tuple[Any, ...]) -> "User":
        """(id, username, password_hash, created_at) 행에서 생성"""
        return User(
            id=row[0],
            username=row[1],
            password_hash=row[2],
            created_at=row[3],
        )


@dataclass(frozen=True)
class Event:
    """이벤트 (예산 집계의 루트)"""

    id: int
    owner_id: int
    name: str
    created_at: str

    @staticmethod
    def from_row(row: tuple[Any, ...]) -> "Event":
        """(id, owner_id, name, created_at) 행에서 생성"""
        return Event(
            id=row[0],
            owner_id=row[1],
            name=row[2],
            created_at=row[3],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class Responsible:
    """담당자 (금액 영향 없음)"""

    id: int
    event_id: int
    name: str

    @staticmethod
    def from_row(row: tuple[Any, ...]) -> "Responsible":
        """(id, event_id, name) 행에서 생성"""
        return Responsible(id=row[0], event_id=row[1], name=row[2])

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "event_id": self.event_id, "name": self.name}


@dataclass(frozen=True)
class Expense:
    """지출 항목

    selling_price_per_unit이 None이면 판매 수입 없음.
    0.0은 "0원에 판매"로 취급하며 None과 구분.
    """

    id: int
    event_id: int
    category: str
    name: str
    quantity: float
    cost_per_unit: float
    selling_price_per_unit: float | None

    @staticmethod
    def from_row(row: tuple[Any, ...]) -> "Expense":
        """(id, event_id, category, name, quantity, cost_per_unit, selling_price_per_unit) 행에서 생성"""
        return Expense(
            id=row[0],
            event_id=row[1],
            category=row[2],
            name=row[3],
            quantity=float(row[4]),
            cost_per_unit=float(row[5]),
            selling_price_per_unit=float(row[6]) if row[6] is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "category": self.category,
            "name": self.name,
            "quantity": self.quantity,
            "cost_per_unit": self.cost_per_unit,
            "selling_price_per_unit": self.selling_price_per_unit,
        }


@dataclass(frozen=True)
class StandaloneIncome:
    """지출과 무관한 독립 수입"""

    id: int
    event_id: int
    name: str
    quantity: float
    price_per_unit: float

    @staticmethod
    def from_row(row: tuple[Any, ...]) -> "StandaloneIncome":
        """(id, event_id, name, quantity, price_per_unit) 행에서 생성"""
        return StandaloneIncome(
            id=row[0],
            event_id=row[1],
            name=row[2],
            quantity=float(row[3]),
            price_per_unit=float(row[4]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "event_id": self.event_id,
            "name": self.name,
            "quantity": self.quantity,
            "price_per_unit": self.price_per_unit,
        }


# =========================================================================
# 집계 결과 (읽기 전용, 저장하지 않음)
# =========================================================================


@dataclass(frozen=True)
class EventTotals:
    """이벤트 손익 합계"""

    total_expenses: float = 0.0
    income_from_expenses: float = 0.0
    income_without_expenses: float = 0.0

    @property
    def total_income(self) -> float:
        return self.income_from_expenses + self.income_without_expenses

    @property
    def profit_loss(self) -> float:
        return self.total_income - self.total_expenses

    def to_dict(self) -> dict[str, float]:
        return {
            "total_expenses": self.total_expenses,
            "income_from_expenses": self.income_from_expenses,
            "income_without_expenses": self.income_without_expenses,
            "total_income": self.total_income,
            "profit_loss": self.profit_loss,
        }


@dataclass(frozen=True)
class ExpenseGroup:
    """카테고리별 지출 묶음 (화면 표시용)"""

    category: str
    expenses: list[Expense]
    total_cost: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "expenses": [e.to_dict() for e in self.expenses],
            "total_cost": self.total_cost,
        }


@dataclass(frozen=True)
class EventSummary:
    """이벤트 목록 항목"""

    event: Event
    responsible_count: int
    expense_count: int
    income_count: int
    totals: EventTotals

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.event.to_dict(),
            "responsible_count": self.responsible_count,
            "expense_count": self.expense_count,
            "income_count": self.income_count,
            **self.totals.to_dict(),
        }


@dataclass(frozen=True)
class EventDetail:
    """이벤트 상세 (하위 컬렉션 포함, 입력 순서 유지)"""

    event: Event
    responsibles: list[Responsible]
    expenses: list[Expense]
    standalone_income: list[StandaloneIncome]
    totals: EventTotals
    expense_groups: list[ExpenseGroup] = field(default_factory=list)
    income_eligible_expenses: list[Expense] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.event.to_dict(),
            "responsibles": [r.to_dict() for r in self.responsibles],
            "expenses": [e.to_dict() for e in self.expenses],
            "standalone_income": [i.to_dict() for i in self.standalone_income],
            "totals": self.totals.to_dict(),
            "expense_groups": [g.to_dict() for g in self.expense_groups],
            "income_eligible_expenses": [e.to_dict() for e in self.income_eligible_expenses],
        }


@dataclass(frozen=True)
class PortfolioSummary:
    """사용자 전체 이벤트 합계"""

    event_count: int
    totals: EventTotals

    def to_dict(self) -> dict[str, Any]:
        return {
            "event_count": self.event_count,
            **self.totals.to_dict(),
        }
