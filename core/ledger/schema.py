"""
Ledger 스키마 마이그레이션

버전 번호가 붙은 마이그레이션을 순서대로 적용.
적용 이력은 schema_version 테이블에 기록되며, 실행 시점의 테이블 형태를
추측하지 않는다. 각 마이그레이션은 하나의 트랜잭션에서 적용된다.

새 마이그레이션은 MIGRATIONS 끝에 다음 버전 번호로 추가할 것.
이미 배포된 마이그레이션은 수정 금지.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.types import ExpenseCategory
from core.utils.timezone import now_utc_iso

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    """스키마 마이그레이션 단계"""

    version: int
    name: str
    statements: tuple[str, ...]


_CATEGORY_CHECK = ", ".join(f"'{c}'" for c in ExpenseCategory.all_values())


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version=1,
        name="initial_schema",
        statements=(
            """
            CREATE TABLE users (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                username         TEXT NOT NULL UNIQUE,
                password_hash    TEXT NOT NULL,
                created_at       TEXT NOT NULL DEFAULT (datetime('now'))
            )
            """,
            """
            CREATE TABLE events (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                owner_id         INTEGER NOT NULL,
                name             TEXT NOT NULL,
                created_at       TEXT NOT NULL DEFAULT (datetime('now')),
                FOREIGN KEY (owner_id) REFERENCES users(id) ON DELETE CASCADE
            )
            """,
            """
            CREATE TABLE event_responsibles (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                event_id         INTEGER NOT NULL,
                name             TEXT NOT NULL,
                created_at       TEXT NOT NULL DEFAULT (datetime('now')),
                FOREIGN KEY (event_id) REFERENCES events(id) ON DELETE CASCADE
            )
            """,
            f"""
            CREATE TABLE expenses (
                id                     INTEGER PRIMARY KEY AUTOINCREMENT,
                event_id               INTEGER NOT NULL,
                category               TEXT NOT NULL CHECK (category IN ({_CATEGORY_CHECK})),
                name                   TEXT NOT NULL,
                quantity               REAL NOT NULL CHECK (quantity > 0),
                cost_per_unit          REAL NOT NULL CHECK (cost_per_unit >= 0),
                selling_price_per_unit REAL CHECK (
                    selling_price_per_unit IS NULL OR selling_price_per_unit >= 0
                ),
                created_at             TEXT NOT NULL DEFAULT (datetime('now')),
                FOREIGN KEY (event_id) REFERENCES events(id) ON DELETE CASCADE
            )
            """,
        ),
    ),
    Migration(
        version=2,
        name="standalone_income",
        statements=(
            """
            CREATE TABLE standalone_income (
                id               INTEGER PRIMARY KEY AUTOINCREMENT,
                event_id         INTEGER NOT NULL,
                name             TEXT NOT NULL,
                quantity         REAL NOT NULL CHECK (quantity > 0),
                price_per_unit   REAL NOT NULL CHECK (price_per_unit > 0),
                created_at       TEXT NOT NULL DEFAULT (datetime('now')),
                FOREIGN KEY (event_id) REFERENCES events(id) ON DELETE CASCADE
            )
            """,
        ),
    ),
    Migration(
        version=3,
        name="ledger_indexes",
        statements=(
            "CREATE INDEX idx_events_owner ON events(owner_id, created_at)",
            "CREATE INDEX idx_event_responsibles_event ON event_responsibles(event_id)",
            "CREATE INDEX idx_expenses_event ON expenses(event_id)",
            "CREATE INDEX idx_standalone_income_event ON standalone_income(event_id)",
        ),
    ),
)

LATEST_VERSION: int = MIGRATIONS[-1].version


async def _ensure_version_table(db: "SQLiteAdapter") -> None:
    """schema_version 테이블 생성"""
    await db.execute("""
        CREATE TABLE IF NOT EXISTS schema_version (
            version          INTEGER PRIMARY KEY,
            name             TEXT NOT NULL,
            applied_at       TEXT NOT NULL
        )
    """)
    await db.commit()


async def get_schema_version(db: "SQLiteAdapter") -> int:
    """현재 적용된 스키마 버전 (미적용이면 0)"""
    if not await db.table_exists("schema_version"):
        return 0
    row = await db.fetchone("SELECT MAX(version) FROM schema_version")
    if row is None or row[0] is None:
        return 0
    return int(row[0])


async def migrate(
    db: "SQLiteAdapter",
    migrations: tuple[Migration, ...] = MIGRATIONS,
) -> list[int]:
    """미적용 마이그레이션을 순서대로 적용

    Args:
        db: 연결된 SQLiteAdapter
        migrations: 적용할 마이그레이션 목록 (버전 오름차순)

    Returns:
        이번 호출에서 적용된 버전 목록

    Raises:
        RuntimeError: DB 버전이 알려진 최신 버전보다 높은 경우
    """
    await _ensure_version_table(db)
    current = await get_schema_version(db)

    known_latest = migrations[-1].version if migrations else 0
    if current > known_latest:
        raise RuntimeError(
            f"DB 스키마 버전({current})이 코드가 아는 최신 버전({known_latest})보다 높습니다"
        )

    applied: list[int] = []
    for migration in migrations:
        if migration.version <= current:
            continue

        async with db.transaction():
            for statement in migration.statements:
                await db.execute(statement)
            await db.execute(
                "INSERT INTO schema_version (version, name, applied_at) VALUES (?, ?, ?)",
                (migration.version, migration.name, now_utc_iso()),
            )

        applied.append(migration.version)
        logger.info(
            f"마이그레이션 적용: v{migration.version} {migration.name}",
            extra={"db_path": str(db.db_path)},
        )

    if not applied:
        logger.debug(f"스키마 최신 상태: v{current}")

    return applied
