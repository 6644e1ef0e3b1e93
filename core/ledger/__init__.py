"""
이벤트 예산 Ledger

이벤트별 지출/수입을 기록하고 손익을 계산하는 Ledger.
합계는 저장하지 않고 조회 시점에 계산.

사용 예시:
```python
from core.ledger import LedgerStore

store = LedgerStore(db)

event = await store.create_event(principal, "Sommerfest")
await store.add_expense(principal, event.id, {
    "category": "Beverages",
    "name": "Cola",
    "quantity": 10,
    "cost_per_unit": 2,
    "selling_price_per_unit": 5,
})

detail = await store.get_event(principal, event.id)
detail.totals.profit_loss
```
"""

from core.ledger.guard import AccessGuard
from core.ledger.schema import LATEST_VERSION, MIGRATIONS, Migration
from core.ledger.store import LedgerStore

__all__ = [
    "LedgerStore",
    "AccessGuard",
    "Migration",
    "MIGRATIONS",
    "LATEST_VERSION",
]
