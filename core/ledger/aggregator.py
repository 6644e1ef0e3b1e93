"""
Ledger 집계

이미 로드된 행에 대한 순수 계산. I/O 없음, 부수 효과 없음.

손익 정의:
- 지출 합계 = Σ 수량 × 단가 (판매가 유무와 무관하게 항상 포함)
- 지출 판매 수입 = Σ (판매가 - 단가) × 수량 (판매가 있는 항목만)
- 독립 수입 = Σ 수량 × 단가
- 손익 = (지출 판매 수입 + 독립 수입) - 지출 합계
"""

import logging
from collections.abc import Iterable

from core.domain.entities import (
    EventSummary,
    EventTotals,
    Expense,
    ExpenseGroup,
    PortfolioSummary,
    StandaloneIncome,
)
from core.types import ExpenseCategory

logger = logging.getLogger(__name__)


def expense_total_cost(expense: Expense) -> float:
    """지출 항목 총비용"""
    return expense.quantity * expense.cost_per_unit


def expense_profit(expense: Expense) -> float:
    """지출 항목 판매 수입 (판매가 없으면 0)"""
    if expense.selling_price_per_unit is None:
        return 0.0
    return (expense.selling_price_per_unit - expense.cost_per_unit) * expense.quantity


def income_total(income: StandaloneIncome) -> float:
    """독립 수입 항목 합계"""
    return income.quantity * income.price_per_unit


def event_totals(
    expenses: Iterable[Expense],
    incomes: Iterable[StandaloneIncome],
) -> EventTotals:
    """이벤트 손익 합계 계산

    Args:
        expenses: 이벤트의 모든 지출
        incomes: 이벤트의 모든 독립 수입

    Returns:
        EventTotals (total_income, profit_loss는 파생 속성)
    """
    total_expenses = 0.0
    income_from_expenses = 0.0
    for expense in expenses:
        total_expenses += expense_total_cost(expense)
        income_from_expenses += expense_profit(expense)

    income_without_expenses = sum((income_total(i) for i in incomes), 0.0)

    return EventTotals(
        total_expenses=total_expenses,
        income_from_expenses=income_from_expenses,
        income_without_expenses=income_without_expenses,
    )


def group_expenses_by_category(expenses: Iterable[Expense]) -> list[ExpenseGroup]:
    """카테고리별 지출 묶음

    정의된 카테고리를 고정 순서로 먼저, 그 외 카테고리는 처음 등장한 순서로.
    각 묶음 안의 지출은 입력 순서 유지. 빈 카테고리는 생략.

    쓰기 단계에서 카테고리를 제한하므로 미정의 카테고리는 불변식 위반.
    예외 없이 경고 로그만 남기고 뒤에 붙인다.
    """
    buckets: dict[str, list[Expense]] = {}
    for expense in expenses:
        buckets.setdefault(expense.category, []).append(expense)

    known = ExpenseCategory.all_values()
    ordered = [c for c in known if c in buckets]
    unknown = [c for c in buckets if c not in known]

    if unknown:
        logger.warning(
            "Unrecognized expense categories in ledger rows",
            extra={"categories": unknown},
        )

    return [
        ExpenseGroup(
            category=category,
            expenses=buckets[category],
            total_cost=sum((expense_total_cost(e) for e in buckets[category]), 0.0),
        )
        for category in ordered + unknown
    ]


def income_eligible_expenses(expenses: Iterable[Expense]) -> list[Expense]:
    """판매 수입 입력 대상 지출 (ExpenseWithoutIncome 제외)"""
    excluded = ExpenseCategory.EXPENSE_WITHOUT_INCOME.value
    return [e for e in expenses if e.category != excluded]


def summarize_events(summaries: Iterable[EventSummary]) -> PortfolioSummary:
    """여러 이벤트 합계를 하나로 합산"""
    event_count = 0
    total_expenses = 0.0
    income_from_expenses = 0.0
    income_without_expenses = 0.0

    for summary in summaries:
        event_count += 1
        total_expenses += summary.totals.total_expenses
        income_from_expenses += summary.totals.income_from_expenses
        income_without_expenses += summary.totals.income_without_expenses

    return PortfolioSummary(
        event_count=event_count,
        totals=EventTotals(
            total_expenses=total_expenses,
            income_from_expenses=income_from_expenses,
            income_without_expenses=income_without_expenses,
        ),
    )
