"""
Ledger 저장소

이벤트, 담당자, 지출, 독립 수입의 소유자 범위 CRUD.
합계는 저장하지 않고 조회 시 core.ledger.aggregator로 계산.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator

import aiosqlite

from core.domain.entities import (
    Event,
    EventDetail,
    EventSummary,
    Expense,
    PortfolioSummary,
    Responsible,
    StandaloneIncome,
)
from core.domain.validation import (
    validate_expense,
    validate_name,
    validate_standalone_income,
)
from core.errors import NotFound, StorageFailure
from core.ledger.aggregator import (
    event_totals,
    group_expenses_by_category,
    income_eligible_expenses,
    summarize_events,
)
from core.ledger.guard import AccessGuard
from core.types import Principal
from core.utils.timezone import now_utc_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

_EXPENSE_COLUMNS = (
    "id, event_id, category, name, quantity, cost_per_unit, selling_price_per_unit"
)
_INCOME_COLUMNS = "id, event_id, name, quantity, price_per_unit"

# 이벤트 삭제 시 자식 테이블 삭제 순서
_EVENT_CHILD_TABLES = ("standalone_income", "expenses", "event_responsibles")


class LedgerStore:
    """Ledger 저장소

    모든 연산은 principal 범위로 제한되며, 자식 행 연산은
    AccessGuard로 소유권을 먼저 확인한다.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db
        self.guard = AccessGuard(db)

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    @asynccontextmanager
    async def _storage(self, operation: str, **context: Any) -> AsyncIterator[None]:
        """sqlite3.Error → StorageFailure 변환"""
        try:
            yield
        except sqlite3.Error as e:
            logger.error(
                f"Storage failure: {operation}: {e}",
                extra={"operation": operation, **context},
            )
            raise StorageFailure(operation) from e

    @asynccontextmanager
    async def _write(self, operation: str, **context: Any) -> AsyncIterator[None]:
        """쓰기 트랜잭션 (실패 시 롤백 후 StorageFailure)

        BEGIN IMMEDIATE로 시작하므로 안에서 수행한 소유권 확인과
        쓰기 사이에 다른 연결이 행을 바꿀 수 없다.
        """
        async with self._storage(operation, **context):
            async with self.db.transaction(immediate=True):
                yield

    async def _insert(self, sql: str, parameters: tuple[Any, ...]) -> int:
        cursor = await self.db.execute(sql, parameters)
        if cursor.lastrowid is None:
            logger.error("INSERT 후 rowid 없음")
            raise StorageFailure("insert row")
        return cursor.lastrowid

    @staticmethod
    def _require_affected(cursor: aiosqlite.Cursor, resource: str) -> None:
        """UPDATE/DELETE 대상 행이 없으면 NotFound"""
        if cursor.rowcount == 0:
            raise NotFound(resource)

    # -------------------------------------------------------------------------
    # 이벤트
    # -------------------------------------------------------------------------

    async def create_event(self, principal: Principal | None, name: Any) -> Event:
        """이벤트 생성

        Args:
            principal: 요청 주체
            name: 이벤트 이름

        Returns:
            생성된 Event

        Raises:
            ValidationError: 이름이 비어 있는 경우
            NotFound: principal이 None인 경우
        """
        owner_id = self.guard.owner_id(principal)
        clean_name = validate_name(name, "Event name")
        created_at = now_utc_iso()

        async with self._write("create event", owner_id=owner_id):
            event_id = await self._insert(
                "INSERT INTO events (owner_id, name, created_at) VALUES (?, ?, ?)",
                (owner_id, clean_name, created_at),
            )

        logger.info(
            f"Event created: {event_id}",
            extra={"event_id": event_id, "owner_id": owner_id},
        )
        return Event(id=event_id, owner_id=owner_id, name=clean_name, created_at=created_at)

    async def list_events(self, principal: Principal | None) -> list[EventSummary]:
        """사용자 이벤트 목록 (최신순)

        생성 시각 내림차순, 같은 시각이면 ID 내림차순.
        각 항목에 하위 항목 수와 합계 포함.
        """
        owner_id = self.guard.owner_id(principal)

        async with self._storage("list events", owner_id=owner_id):
            event_rows = await self.db.fetchall(
                """
                SELECT id, owner_id, name, created_at
                FROM events
                WHERE owner_id = ?
                ORDER BY created_at DESC, id DESC
                """,
                (owner_id,),
            )
            responsible_rows = await self.db.fetchall(
                """
                SELECT r.event_id, COUNT(*)
                FROM event_responsibles r
                JOIN events e ON e.id = r.event_id
                WHERE e.owner_id = ?
                GROUP BY r.event_id
                """,
                (owner_id,),
            )
            expense_rows = await self.db.fetchall(
                """
                SELECT x.id, x.event_id, x.category, x.name,
                       x.quantity, x.cost_per_unit, x.selling_price_per_unit
                FROM expenses x
                JOIN events e ON e.id = x.event_id
                WHERE e.owner_id = ?
                ORDER BY x.id
                """,
                (owner_id,),
            )
            income_rows = await self.db.fetchall(
                """
                SELECT i.id, i.event_id, i.name, i.quantity, i.price_per_unit
                FROM standalone_income i
                JOIN events e ON e.id = i.event_id
                WHERE e.owner_id = ?
                ORDER BY i.id
                """,
                (owner_id,),
            )

        responsible_counts = {row[0]: row[1] for row in responsible_rows}

        expenses_by_event: dict[int, list[Expense]] = {}
        for row in expense_rows:
            expense = Expense.from_row(row)
            expenses_by_event.setdefault(expense.event_id, []).append(expense)

        incomes_by_event: dict[int, list[StandaloneIncome]] = {}
        for row in income_rows:
            income = StandaloneIncome.from_row(row)
            incomes_by_event.setdefault(income.event_id, []).append(income)

        summaries = []
        for row in event_rows:
            event = Event.from_row(row)
            expenses = expenses_by_event.get(event.id, [])
            incomes = incomes_by_event.get(event.id, [])
            summaries.append(
                EventSummary(
                    event=event,
                    responsible_count=responsible_counts.get(event.id, 0),
                    expense_count=len(expenses),
                    income_count=len(incomes),
                    totals=event_totals(expenses, incomes),
                )
            )

        return summaries

    async def get_event(self, principal: Principal | None, event_id: int) -> EventDetail:
        """이벤트 상세 조회

        하위 컬렉션은 입력 순서(ID 오름차순).

        Raises:
            NotFound: 없거나 다른 사용자 소유
        """
        async with self._storage("get event", event_id=event_id):
            event = await self.guard.event(principal, event_id)

            responsible_rows = await self.db.fetchall(
                "SELECT id, event_id, name FROM event_responsibles WHERE event_id = ? ORDER BY id",
                (event_id,),
            )
            expense_rows = await self.db.fetchall(
                f"SELECT {_EXPENSE_COLUMNS} FROM expenses WHERE event_id = ? ORDER BY id",
                (event_id,),
            )
            income_rows = await self.db.fetchall(
                f"SELECT {_INCOME_COLUMNS} FROM standalone_income WHERE event_id = ? ORDER BY id",
                (event_id,),
            )

        responsibles = [Responsible.from_row(r) for r in responsible_rows]
        expenses = [Expense.from_row(r) for r in expense_rows]
        incomes = [StandaloneIncome.from_row(r) for r in income_rows]

        return EventDetail(
            event=event,
            responsibles=responsibles,
            expenses=expenses,
            standalone_income=incomes,
            totals=event_totals(expenses, incomes),
            expense_groups=group_expenses_by_category(expenses),
            income_eligible_expenses=income_eligible_expenses(expenses),
        )

    async def update_event(
        self,
        principal: Principal | None,
        event_id: int,
        name: Any,
    ) -> Event:
        """이벤트 이름 변경 (다른 필드는 변경하지 않음)"""
        clean_name = validate_name(name, "Event name")

        async with self._write("update event", event_id=event_id):
            event = await self.guard.event(principal, event_id)
            cursor = await self.db.execute(
                "UPDATE events SET name = ? WHERE id = ? AND owner_id = ?",
                (clean_name, event_id, event.owner_id),
            )
            self._require_affected(cursor, "Event")

        logger.info(f"Event renamed: {event_id}", extra={"event_id": event_id})
        return Event(
            id=event.id,
            owner_id=event.owner_id,
            name=clean_name,
            created_at=event.created_at,
        )

    async def delete_event(self, principal: Principal | None, event_id: int) -> None:
        """이벤트와 모든 하위 항목 삭제

        하나의 트랜잭션에서 자식 → 이벤트 순으로 삭제.
        중간 실패 시 전부 롤백되고 StorageFailure.

        Raises:
            NotFound: 없거나 다른 사용자 소유
            StorageFailure: 저장소 오류 (부분 삭제 없음)
        """
        async with self._write("delete event", event_id=event_id):
            event = await self.guard.event(principal, event_id)
            for table in _EVENT_CHILD_TABLES:
                await self.db.execute(
                    f"DELETE FROM {table} WHERE event_id = ?",
                    (event_id,),
                )
            cursor = await self.db.execute(
                "DELETE FROM events WHERE id = ? AND owner_id = ?",
                (event_id, event.owner_id),
            )
            self._require_affected(cursor, "Event")

        logger.info(
            f"Event deleted: {event_id}",
            extra={"event_id": event_id, "owner_id": event.owner_id},
        )

    # -------------------------------------------------------------------------
    # 담당자
    # -------------------------------------------------------------------------

    async def add_responsible(
        self,
        principal: Principal | None,
        event_id: int,
        name: Any,
    ) -> Responsible:
        """담당자 추가"""
        clean_name = validate_name(name)

        async with self._write("add responsible", event_id=event_id):
            await self.guard.event(principal, event_id)
            responsible_id = await self._insert(
                "INSERT INTO event_responsibles (event_id, name, created_at) VALUES (?, ?, ?)",
                (event_id, clean_name, now_utc_iso()),
            )

        logger.info(
            f"Responsible added: {responsible_id}",
            extra={"event_id": event_id, "responsible_id": responsible_id},
        )
        return Responsible(id=responsible_id, event_id=event_id, name=clean_name)

    async def delete_responsible(
        self,
        principal: Principal | None,
        event_id: int,
        responsible_id: int,
    ) -> None:
        """담당자 삭제

        Raises:
            NotFound: 없거나, 해당 이벤트 소속이 아니거나, 다른 사용자 소유
        """
        async with self._write("delete responsible", responsible_id=responsible_id):
            await self.guard.responsible(principal, event_id, responsible_id)
            cursor = await self.db.execute(
                "DELETE FROM event_responsibles WHERE id = ? AND event_id = ?",
                (responsible_id, event_id),
            )
            self._require_affected(cursor, "Responsible")

        logger.info(
            f"Responsible deleted: {responsible_id}",
            extra={"event_id": event_id, "responsible_id": responsible_id},
        )

    # -------------------------------------------------------------------------
    # 지출
    # -------------------------------------------------------------------------

    async def add_expense(
        self,
        principal: Principal | None,
        event_id: int,
        payload: dict[str, Any],
    ) -> Expense:
        """지출 추가

        Args:
            principal: 요청 주체
            event_id: 이벤트 ID
            payload: category, name, quantity, cost_per_unit, selling_price_per_unit

        Returns:
            생성된 Expense

        Raises:
            ValidationError: 입력 검증 실패 (아무것도 저장되지 않음)
            NotFound: 이벤트가 없거나 다른 사용자 소유
        """
        data = validate_expense(payload)

        async with self._write("add expense", event_id=event_id):
            await self.guard.event(principal, event_id)
            expense_id = await self._insert(
                """
                INSERT INTO expenses (
                    event_id, category, name, quantity,
                    cost_per_unit, selling_price_per_unit, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event_id,
                    data.category,
                    data.name,
                    data.quantity,
                    data.cost_per_unit,
                    data.selling_price_per_unit,
                    now_utc_iso(),
                ),
            )

        logger.info(
            f"Expense added: {expense_id}",
            extra={"event_id": event_id, "expense_id": expense_id, "category": data.category},
        )
        return Expense(
            id=expense_id,
            event_id=event_id,
            category=data.category,
            name=data.name,
            quantity=data.quantity,
            cost_per_unit=data.cost_per_unit,
            selling_price_per_unit=data.selling_price_per_unit,
        )

    async def update_expense(
        self,
        principal: Principal | None,
        expense_id: int,
        payload: dict[str, Any],
    ) -> Expense:
        """지출 전체 교체

        category, name, quantity, cost_per_unit, selling_price_per_unit 모두 갱신.
        selling_price_per_unit을 생략하면 "판매가 없음"으로 바뀐다.
        """
        data = validate_expense(payload)

        async with self._write("update expense", expense_id=expense_id):
            current = await self.guard.expense(principal, expense_id)
            cursor = await self.db.execute(
                """
                UPDATE expenses
                SET category = ?, name = ?, quantity = ?,
                    cost_per_unit = ?, selling_price_per_unit = ?
                WHERE id = ?
                """,
                (
                    data.category,
                    data.name,
                    data.quantity,
                    data.cost_per_unit,
                    data.selling_price_per_unit,
                    expense_id,
                ),
            )
            self._require_affected(cursor, "Expense")

        logger.info(
            f"Expense updated: {expense_id}",
            extra={"event_id": current.event_id, "expense_id": expense_id},
        )
        return Expense(
            id=expense_id,
            event_id=current.event_id,
            category=data.category,
            name=data.name,
            quantity=data.quantity,
            cost_per_unit=data.cost_per_unit,
            selling_price_per_unit=data.selling_price_per_unit,
        )

    async def delete_expense(self, principal: Principal | None, expense_id: int) -> None:
        """지출 삭제"""
        async with self._write("delete expense", expense_id=expense_id):
            expense = await self.guard.expense(principal, expense_id)
            cursor = await self.db.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            self._require_affected(cursor, "Expense")

        logger.info(
            f"Expense deleted: {expense_id}",
            extra={"event_id": expense.event_id, "expense_id": expense_id},
        )

    # -------------------------------------------------------------------------
    # 독립 수입
    # -------------------------------------------------------------------------

    async def add_standalone_income(
        self,
        principal: Principal | None,
        event_id: int,
        payload: dict[str, Any],
    ) -> StandaloneIncome:
        """독립 수입 추가

        Raises:
            ValidationError: 입력 검증 실패
            NotFound: 이벤트가 없거나 다른 사용자 소유
        """
        data = validate_standalone_income(payload)

        async with self._write("add income", event_id=event_id):
            await self.guard.event(principal, event_id)
            income_id = await self._insert(
                """
                INSERT INTO standalone_income (
                    event_id, name, quantity, price_per_unit, created_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (event_id, data.name, data.quantity, data.price_per_unit, now_utc_iso()),
            )

        logger.info(
            f"Standalone income added: {income_id}",
            extra={"event_id": event_id, "income_id": income_id},
        )
        return StandaloneIncome(
            id=income_id,
            event_id=event_id,
            name=data.name,
            quantity=data.quantity,
            price_per_unit=data.price_per_unit,
        )

    async def delete_standalone_income(
        self,
        principal: Principal | None,
        income_id: int,
    ) -> None:
        """독립 수입 삭제"""
        async with self._write("delete income", income_id=income_id):
            income = await self.guard.standalone_income(principal, income_id)
            cursor = await self.db.execute(
                "DELETE FROM standalone_income WHERE id = ?", (income_id,)
            )
            self._require_affected(cursor, "Income")

        logger.info(
            f"Standalone income deleted: {income_id}",
            extra={"event_id": income.event_id, "income_id": income_id},
        )

    # -------------------------------------------------------------------------
    # 전체 합계
    # -------------------------------------------------------------------------

    async def get_summary(self, principal: Principal | None) -> PortfolioSummary:
        """사용자 전체 이벤트 합계"""
        return summarize_events(await self.list_events(principal))
