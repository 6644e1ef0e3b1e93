"""
소유권 검증

요청된 행이 principal 소유인지 Event 체인을 따라 확인.
행이 없는 경우와 다른 사용자 소유인 경우 모두 같은 NotFound를 발생시켜
존재 여부를 노출하지 않는다.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.domain.entities import Event, Expense, Responsible, StandaloneIncome
from core.errors import NotFound
from core.types import Principal

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


class AccessGuard:
    """소유권 검증기

    모든 조회는 events.owner_id 를 통한 단일 JOIN 쿼리.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    def owner_id(self, principal: Principal | None) -> int:
        """principal의 사용자 ID

        Raises:
            NotFound: principal이 None인 경우 (모든 접근 거부)
        """
        if principal is None:
            raise NotFound("Event")
        return principal.user_id

    async def event(self, principal: Principal | None, event_id: int) -> Event:
        """소유한 이벤트 조회

        Raises:
            NotFound: 없거나 다른 사용자 소유
        """
        owner_id = self.owner_id(principal)
        row = await self.db.fetchone(
            """
            SELECT id, owner_id, name, created_at
            FROM events
            WHERE id = ? AND owner_id = ?
            """,
            (event_id, owner_id),
        )
        if row is None:
            logger.debug(f"Event 접근 거부: event_id={event_id}, owner_id={owner_id}")
            raise NotFound("Event")
        return Event.from_row(row)

    async def responsible(
        self,
        principal: Principal | None,
        event_id: int,
        responsible_id: int,
    ) -> Responsible:
        """소유한 이벤트의 담당자 조회

        Raises:
            NotFound: 없거나, 해당 이벤트 소속이 아니거나, 다른 사용자 소유
        """
        owner_id = self.owner_id(principal)
        row = await self.db.fetchone(
            """
            SELECT r.id, r.event_id, r.name
            FROM event_responsibles r
            JOIN events e ON e.id = r.event_id
            WHERE r.id = ? AND r.event_id = ? AND e.owner_id = ?
            """,
            (responsible_id, event_id, owner_id),
        )
        if row is None:
            raise NotFound("Responsible")
        return Responsible.from_row(row)

    async def expense(self, principal: Principal | None, expense_id: int) -> Expense:
        """소유한 이벤트의 지출 조회

        Raises:
            NotFound: 없거나 다른 사용자 소유
        """
        owner_id = self.owner_id(principal)
        row = await self.db.fetchone(
            """
            SELECT x.id, x.event_id, x.category, x.name,
                   x.quantity, x.cost_per_unit, x.selling_price_per_unit
            FROM expenses x
            JOIN events e ON e.id = x.event_id
            WHERE x.id = ? AND e.owner_id = ?
            """,
            (expense_id, owner_id),
        )
        if row is None:
            raise NotFound("Expense")
        return Expense.from_row(row)

    async def standalone_income(
        self,
        principal: Principal | None,
        income_id: int,
    ) -> StandaloneIncome:
        """소유한 이벤트의 독립 수입 조회

        Raises:
            NotFound: 없거나 다른 사용자 소유
        """
        owner_id = self.owner_id(principal)
        row = await self.db.fetchone(
            """
            SELECT i.id, i.event_id, i.name, i.quantity, i.price_per_unit
            FROM standalone_income i
            JOIN events e ON e.id = i.event_id
            WHERE i.id = ? AND e.owner_id = ?
            """,
            (income_id, owner_id),
        )
        if row is None:
            raise NotFound("Income")
        return StandaloneIncome.from_row(row)
